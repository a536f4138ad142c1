"""
Configuration for AI Photo Editor

Settings for the relay client (where the relay lives) and the relay
server (model names, API key, limits). Everything is read from the
environment with local-development defaults.
"""

import os
import logging
from typing import List, Optional

logger = logging.getLogger(__name__)


def normalize_base_url(url: str) -> str:
    """Strip a trailing slash so endpoint paths can be appended directly."""
    return url[:-1] if url.endswith("/") else url


# Relay client
API_BASE_URL = normalize_base_url(
    os.getenv("PHOTO_EDITOR_API_BASE_URL", "http://localhost:3000")
)

# No local timeout unless explicitly configured
_timeout = os.getenv("PHOTO_EDITOR_REQUEST_TIMEOUT")
REQUEST_TIMEOUT: Optional[float] = float(_timeout) if _timeout else None

# Models
IMAGE_MODEL = os.getenv("PHOTO_EDITOR_IMAGE_MODEL", "gemini-2.5-flash-image")
TEXT_MODEL = os.getenv("PHOTO_EDITOR_TEXT_MODEL", "gemini-2.5-flash")

# Relay server
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3000"))
MAX_BODY_BYTES = int(float(os.getenv("PHOTO_EDITOR_MAX_BODY_MB", "25")) * 1024 * 1024)


def get_cors_origins() -> List[str]:
    """Allowed CORS origins (comma separated env var, default any)."""
    raw = os.getenv("PHOTO_EDITOR_CORS_ORIGINS", "*")
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


def get_api_key() -> str:
    """
    Get the Gemini API key.

    Priority: GOOGLE_API_KEY env var > API_KEY env var

    Returns:
        API key string

    Raises:
        ValueError: If no key is configured
    """
    api_key = os.getenv("GOOGLE_API_KEY") or os.getenv("API_KEY")
    if not api_key:
        raise ValueError(
            "\n" + "=" * 80 + "\n"
            "GOOGLE_API_KEY not found!\n\n"
            "The relay server needs a Gemini API key:\n\n"
            "1. Get your API key from: https://aistudio.google.com/apikey\n"
            "2. Set the environment variable:\n"
            "   export GOOGLE_API_KEY='your-api-key-here'\n"
            + "=" * 80
        )
    if not os.getenv("GOOGLE_API_KEY"):
        logger.info("Using API key from API_KEY")
    return api_key
