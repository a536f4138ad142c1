"""
Relay Client

Talks to the relay server over JSON/HTTP and turns failures into the
editor error types:
- 400 -> ValidationError
- 403 -> SafetyBlockError (the server message is kept verbatim)
- other non-2xx or malformed bodies -> TransientOrUnknownError
- relay unreachable -> ConnectivityError
"""

import logging
from typing import Any, Dict, Optional

import requests

from .. import config
from ..errors import (
    ConnectivityError,
    ImageDecodeError,
    TransientOrUnknownError,
    error_for_status,
)
from ..schemas import ImageState

logger = logging.getLogger(__name__)

UNEXPECTED_SERVER_ERROR = "Unexpected error from server."


class RelayClient:
    """
    Client for the relay server endpoints.

    Example:
        >>> client = RelayClient("http://localhost:3000")
        >>> edited = client.edit(image, "Convert to black and white")
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[Any] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize the client.

        Args:
            base_url: Relay base URL (default: PHOTO_EDITOR_API_BASE_URL)
            session: HTTP session exposing get/post (default: requests.Session)
            timeout: Per-request timeout in seconds (default: none)
        """
        self.base_url = config.normalize_base_url(base_url or config.API_BASE_URL)
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout if timeout is not None else config.REQUEST_TIMEOUT

    def __repr__(self) -> str:
        return f"RelayClient(base_url={self.base_url!r})"

    def _handle_response(self, response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError:
            data = {}
        if not isinstance(data, dict):
            data = {}

        if not 200 <= response.status_code < 300:
            message = data.get("error") or UNEXPECTED_SERVER_ERROR
            raise error_for_status(response.status_code, message)

        return data

    def _post(self, endpoint: str, body: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        try:
            response = self.session.post(url, json=body or {}, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Request to {endpoint} failed: {e}")
            raise ConnectivityError()

        try:
            return self._handle_response(response)
        except Exception as e:
            logger.error(f"Request to {endpoint} returned an error: {e}")
            raise

    def _require(self, data: Dict[str, Any], key: str, endpoint: str) -> str:
        value = data.get(key)
        if not isinstance(value, str) or not value:
            logger.error(f"Response from {endpoint} has no '{key}'")
            raise TransientOrUnknownError(UNEXPECTED_SERVER_ERROR)
        return value

    # ------------------------------------------------------------------
    # Endpoints
    # ------------------------------------------------------------------

    def health(self) -> bool:
        """Return True when the relay answers /health with status ok."""
        try:
            response = self.session.get(f"{self.base_url}/health", timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning(f"Health check failed: {e}")
            return False
        return self._handle_response(response).get("status") == "ok"

    def edit_image(self, image_base64: str, mime_type: str, prompt: str) -> str:
        """
        Edit an image.

        Args:
            image_base64: Image as raw base64 or data URI
            mime_type: MIME type of the image
            prompt: Editing instruction

        Returns:
            Edited image as a `data:<mime>;base64,<data>` URI
        """
        data = self._post("/api/edit", {
            "imageBase64": image_base64,
            "mimeType": mime_type,
            "prompt": prompt,
        })
        return self._require(data, "imageBase64", "/api/edit")

    def edit(self, image: ImageState, prompt: str) -> ImageState:
        """Edit an ImageState and decode the result."""
        uri = self.edit_image(image.to_data_uri(), image.mime_type, prompt)
        try:
            return ImageState.from_data_uri(uri)
        except ImageDecodeError as e:
            logger.error(f"Could not decode edited image: {e}")
            raise TransientOrUnknownError(UNEXPECTED_SERVER_ERROR)

    def generate_inspiration_prompt(self, theme: str) -> str:
        data = self._post("/api/inspiration", {"theme": theme})
        return self._require(data, "prompt", "/api/inspiration")

    def generate_magic_prompt(self) -> str:
        data = self._post("/api/magic")
        return self._require(data, "prompt", "/api/magic")

    def generate_lut_prompt(self) -> str:
        data = self._post("/api/lut")
        return self._require(data, "prompt", "/api/lut")
