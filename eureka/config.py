# Configuration settings shared across the application
import os
from typing import List, Optional

# Available LLM models
LLM_MODELS = [
    {"id": "gemini-2.0-flash", "name": "Gemini 2.0 Flash (Fast)"},
    {"id": "gemini-1.5-flash", "name": "Gemini 1.5 Flash (Fallback)"},
    {"id": "gemini-2.5-flash-lite", "name": "Gemini 2.5 Flash Lite (Fast + Cheap)"},
    {"id": "gemini-2.5-flash", "name": "Gemini 2.5 Flash"},
]

# Default model, overridable through GEMINI_MODEL
DEFAULT_MODEL = "gemini-2.0-flash"

# Tried in order after the requested model fails
FALLBACK_MODELS = ["gemini-1.5-flash"]

# Default assistant settings
DEFAULT_ASSISTANT_TEMP = 0.6
DEFAULT_TOP_P = 0.95

# Deck branding
DEFAULT_DECK_TITLE = "Eureka Pitch"
DECK_FOOTER = "Eureka — RIT x IIT Bombay"
PPTX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.presentationml.presentation"

# Remote deck generation (Presenton)
PRESENTON_GENERATE_PATH = "/api/generate"


def get_api_key() -> Optional[str]:
    """API key for the Gemini provider, or None when unset."""
    return os.environ.get("GOOGLE_API_KEY") or os.environ.get("GEMINI_API_KEY") or None


def get_requested_model() -> str:
    return os.environ.get("GEMINI_MODEL") or DEFAULT_MODEL


def model_chain() -> List[str]:
    """
    Ordered list of model ids to try for a single assistant reply.
    The requested model comes first; duplicates are dropped.
    """
    chain = [get_requested_model(), *FALLBACK_MODELS]
    return list(dict.fromkeys(chain))


def get_presenton_url() -> Optional[str]:
    """Base URL of the remote deck service without a trailing slash."""
    url = os.environ.get("PRESENTON_URL", "").strip()
    return url.rstrip("/") or None
