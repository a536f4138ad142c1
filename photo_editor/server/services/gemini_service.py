"""
Gemini Service

Adapts relay requests to the Gemini API:
- image edits: image + instruction in, first image part out (as a data URI)
- text suggestions: meta-prompt in, cleaned single-line text out

Finish reasons are checked on every response. SAFETY maps to
SafetyBlockError; any other abnormal reason is reported as an
interruption.
"""

import base64
import binascii
import logging
import random
from typing import Any, Optional

from google import genai
from google.genai import types

from ... import config
from ...errors import SafetyBlockError, TransientOrUnknownError, ValidationError
from .prompt_ideas import (
    clean_suggestion,
    inspiration_meta_prompt,
    lut_meta_prompt,
    magic_meta_prompt,
)

logger = logging.getLogger(__name__)

SAFETY = "SAFETY"
NORMAL_FINISH_REASONS = {"STOP", "FINISH_REASON_UNSPECIFIED"}
DEFAULT_OUTPUT_MIME = "image/png"


def clean_base64(value: str) -> str:
    """Drop a data URI header, keeping only the base64 payload."""
    return value.split(",", 1)[1] if "," in value else value


def finish_reason_name(reason: Any) -> Optional[str]:
    """Normalize a finish reason (enum or string) to its name."""
    if reason is None:
        return None
    return str(getattr(reason, "value", reason))


class GeminiService:
    """
    Gemini-backed image editing and prompt suggestions.

    Example:
        >>> service = GeminiService()
        >>> uri = service.edit_image(b64, "image/jpeg", "Make it black and white")
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        image_model: str = config.IMAGE_MODEL,
        text_model: str = config.TEXT_MODEL,
        client: Optional[Any] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize service.

        Args:
            api_key: Gemini API key (default: from environment)
            image_model: Model used for image edits
            text_model: Model used for text suggestions
            client: Pre-built genai client (mainly for tests)
            rng: Random source for prompt ideas
        """
        self.image_model = image_model
        self.text_model = text_model
        self.rng = rng or random.Random()

        if client is None:
            client = genai.Client(api_key=api_key or config.get_api_key())
        self.client = client

        logger.info(f"✓ Gemini service ready (image: {image_model}, text: {text_model})")

    # ------------------------------------------------------------------
    # Response checks
    # ------------------------------------------------------------------

    def _first_candidate(self, response):
        candidates = getattr(response, "candidates", None) or []
        return candidates[0] if candidates else None

    def _check_finish_reason(self, candidate, safety_message: str):
        reason = finish_reason_name(getattr(candidate, "finish_reason", None))
        if reason == SAFETY:
            raise SafetyBlockError(safety_message)
        if reason and reason not in NORMAL_FINISH_REASONS:
            raise TransientOrUnknownError(f"Processing interrupted, reason: {reason}")

    # ------------------------------------------------------------------
    # Image editing
    # ------------------------------------------------------------------

    def edit_image(self, image_base64: str, mime_type: str, prompt: str) -> str:
        """
        Edit an image with an instruction.

        Args:
            image_base64: Raw base64 or data URI
            mime_type: MIME type of the input image
            prompt: Editing instruction

        Returns:
            Edited image as `data:<mime>;base64,<data>`

        Raises:
            ValidationError: If the image is not valid base64
            SafetyBlockError: If the model blocked the request
            TransientOrUnknownError: On any other abnormal response
        """
        try:
            image_bytes = base64.b64decode(clean_base64(image_base64), validate=True)
        except (binascii.Error, ValueError):
            raise ValidationError("imageBase64 is not valid base64.")

        logger.info(f"Gemini editing with prompt: {prompt[:100]}...")

        response = self.client.models.generate_content(
            model=self.image_model,
            contents=[
                types.Part.from_bytes(data=image_bytes, mime_type=mime_type),
                prompt,
            ],
            config=types.GenerateContentConfig(
                response_modalities=[types.Modality.IMAGE],
            ),
        )

        candidate = self._first_candidate(response)
        if candidate is None:
            raise TransientOrUnknownError("The AI did not return a valid response.")

        self._check_finish_reason(candidate, "Request blocked for safety reasons.")

        content = getattr(candidate, "content", None)
        for part in (getattr(content, "parts", None) or []):
            inline_data = getattr(part, "inline_data", None)
            if inline_data is not None and inline_data.data:
                data = inline_data.data
                encoded = base64.b64encode(data).decode("utf-8") if isinstance(data, bytes) else data
                output_mime = inline_data.mime_type or DEFAULT_OUTPUT_MIME
                logger.info(f"✓ Gemini returned {output_mime} image")
                return f"data:{output_mime};base64,{encoded}"

        raise TransientOrUnknownError("No image data found in the API response.")

    # ------------------------------------------------------------------
    # Text suggestions
    # ------------------------------------------------------------------

    def _generate_text(self, meta_prompt: str, label: str) -> str:
        response = self.client.models.generate_content(
            model=self.text_model,
            contents=meta_prompt,
        )

        candidate = self._first_candidate(response)
        if candidate is not None and finish_reason_name(getattr(candidate, "finish_reason", None)) == SAFETY:
            raise SafetyBlockError(f"The {label} suggestion was blocked for safety reasons.")

        text = clean_suggestion(getattr(response, "text", None))
        if not text:
            raise TransientOrUnknownError(f"The API response for the {label} suggestion was empty.")

        logger.info(f"Generated {label} suggestion: {text[:80]}")
        return text

    def generate_inspiration_prompt(self, theme: str) -> str:
        return self._generate_text(inspiration_meta_prompt(theme, self.rng), "inspiration")

    def generate_magic_prompt(self) -> str:
        return self._generate_text(magic_meta_prompt(self.rng), "magic")

    def generate_lut_prompt(self) -> str:
        return self._generate_text(lut_meta_prompt(self.rng), "LUT")


# Global service instance
_gemini_service: Optional[GeminiService] = None


def get_gemini_service() -> GeminiService:
    """Get or create global Gemini service instance."""
    global _gemini_service

    if _gemini_service is None:
        _gemini_service = GeminiService()

    return _gemini_service
