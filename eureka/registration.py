# Registration endpoint
# Checks the required fields and acknowledges; nothing is stored yet

import logging

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from eureka.models import Registration, describe_validation_error

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registration"])

REQUIRED_FIELDS = [
    "fullName",
    "email",
    "phone",
    "college",
    "department",
    "ideaTitle",
    "ideaSummary",
]


@router.post("/register")
async def register(request: Request):
    """Validate a registration record and acknowledge it."""
    try:
        body = await request.json()
    except ValueError:
        return JSONResponse({"error": "Invalid payload"}, status_code=400)
    if not isinstance(body, dict):
        return JSONResponse({"error": "Invalid payload"}, status_code=400)

    for key in REQUIRED_FIELDS:
        if not body.get(key):
            return JSONResponse({"error": f"{key} missing"}, status_code=400)

    try:
        registration = Registration.model_validate(body)
    except ValidationError as e:
        return JSONResponse({"error": describe_validation_error(e)}, status_code=400)

    # TODO: persist registrations to a database or the organisers' Google Sheet
    logger.info(f"Registration received: {registration.idea_title!r} ({registration.college})")
    return JSONResponse({"ok": True})
