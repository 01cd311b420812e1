"""
Client for a self-hosted Presenton deck generator.

Only the happy path is surfaced: any transport error or non-2xx status is
logged and reported as "no deck" so callers can build one locally.
"""

import logging
from typing import Any, Dict, Optional

import httpx

from eureka.config import PRESENTON_GENERATE_PATH, get_presenton_url
from eureka.models import IdeaRecord

logger = logging.getLogger(__name__)


class PresentonClient:
    def __init__(self, base_url: str, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def generate_url(self) -> str:
        return f"{self.base_url}{PRESENTON_GENERATE_PATH}"

    @staticmethod
    def build_payload(idea: IdeaRecord) -> Dict[str, Any]:
        payload = idea.model_dump(by_alias=True, exclude_none=True)
        payload["format"] = "pptx"
        return payload

    async def generate(self, idea: IdeaRecord) -> Optional[bytes]:
        """Return the generated PPTX bytes unchanged, or None on any failure."""
        try:
            async with httpx.AsyncClient(transport=self._transport) as client:
                response = await client.post(self.generate_url, json=self.build_payload(idea))
        except httpx.HTTPError as e:
            logger.warning(f"Presenton request to {self.generate_url} failed: {e}")
            return None

        if not response.is_success:
            logger.warning(f"Presenton returned HTTP {response.status_code} for {self.generate_url}")
            return None
        return response.content


def get_presenton_client() -> Optional[PresentonClient]:
    """Client for PRESENTON_URL, or None when it is not configured."""
    url = get_presenton_url()
    return PresentonClient(url) if url else None
