"""
Editor State Schemas

Immutable image snapshots and the slider record of pending adjustments.
"""

import base64
import binascii
import logging
import mimetypes
from dataclasses import dataclass
from io import BytesIO
from pathlib import Path
from typing import Dict, Union

from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, ConfigDict, Field

from ..errors import ImageDecodeError

logger = logging.getLogger(__name__)

DATA_URI_PREFIX = "data:"
BASE64_MARKER = ";base64,"


@dataclass(frozen=True)
class ImageState:
    """
    One immutable snapshot of the edited image.

    Equality is by value, so two states holding the same bytes and
    format compare equal.
    """
    data: bytes
    mime_type: str

    def __repr__(self) -> str:
        return f"ImageState(mime_type={self.mime_type!r}, size={len(self.data)})"

    @classmethod
    def from_base64(cls, encoded: str, mime_type: str) -> "ImageState":
        """Decode raw base64 (a data URI prefix, if present, is ignored)."""
        if BASE64_MARKER in encoded:
            encoded = encoded.split(BASE64_MARKER, 1)[1]
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ImageDecodeError(f"Invalid base64 image data: {e}")
        if not data:
            raise ImageDecodeError("Empty image data")
        return cls(data=data, mime_type=mime_type)

    @classmethod
    def from_data_uri(cls, uri: str) -> "ImageState":
        """
        Parse a `data:<mime>;base64,<data>` URI.

        Raises:
            ImageDecodeError: If the URI is not a base64 data URI
        """
        if not uri.startswith(DATA_URI_PREFIX) or BASE64_MARKER not in uri:
            raise ImageDecodeError("Expected a base64 data URI")
        header, encoded = uri[len(DATA_URI_PREFIX):].split(BASE64_MARKER, 1)
        mime_type = header or "application/octet-stream"
        return cls.from_base64(encoded, mime_type)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ImageState":
        """
        Load an image file for upload.

        Pillow validates the bytes and supplies the MIME type; the file
        extension is only a fallback when Pillow has no MIME mapping.
        """
        path = Path(path)
        data = path.read_bytes()

        try:
            with Image.open(BytesIO(data)) as img:
                image_format = img.format
                img.verify()
        except (UnidentifiedImageError, OSError, SyntaxError) as e:
            logger.error(f"Failed to decode {path.name}: {e}")
            raise ImageDecodeError()

        mime_type = Image.MIME.get(image_format) or mimetypes.guess_type(path.name)[0]
        if not mime_type:
            raise ImageDecodeError(f"Unknown image format: {image_format}")

        return cls(data=data, mime_type=mime_type)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("utf-8")

    def to_data_uri(self) -> str:
        return f"{DATA_URI_PREFIX}{self.mime_type}{BASE64_MARKER}{self.to_base64()}"

    def save(self, path: Union[str, Path]) -> Path:
        """Write the encoded bytes unchanged to disk."""
        path = Path(path)
        path.write_bytes(self.data)
        return path


@dataclass(frozen=True)
class SliderSpec:
    """UI metadata for one adjustment slider."""
    name: str
    label: str
    minimum: int
    maximum: int
    default: int
    previewable: bool


SLIDERS: Dict[str, SliderSpec] = {
    "brightness": SliderSpec("brightness", "Brightness", 0, 200, 100, True),
    "contrast": SliderSpec("contrast", "Contrast", 0, 200, 100, True),
    "saturation": SliderSpec("saturation", "Saturation", 0, 200, 100, True),
    "sharpness": SliderSpec("sharpness", "Sharpness", -100, 100, 0, False),
    "sepia": SliderSpec("sepia", "Sepia", 0, 100, 0, True),
    "hue": SliderSpec("hue", "Hue", 0, 360, 0, True),
    "vignette": SliderSpec("vignette", "Vignette", 0, 100, 0, False),
}

PREVIEWABLE_SLIDERS = tuple(name for name, spec in SLIDERS.items() if spec.previewable)
SERVER_ONLY_SLIDERS = tuple(name for name, spec in SLIDERS.items() if not spec.previewable)


class AdjustmentSet(BaseModel):
    """
    The seven-slider record of pending adjustments.

    Defaults are the no-op configuration: a set equal to `AdjustmentSet()`
    means nothing is pending. Brightness, contrast, saturation, sepia and
    hue preview locally; sharpness and vignette only capture intent and
    take effect once sent to the model.
    """
    model_config = ConfigDict(frozen=True)

    brightness: int = Field(default=100, ge=0, le=200, description="Brightness percent, 100 is neutral")
    contrast: int = Field(default=100, ge=0, le=200, description="Contrast percent, 100 is neutral")
    saturation: int = Field(default=100, ge=0, le=200, description="Saturation percent, 100 is neutral")
    sharpness: int = Field(default=0, ge=-100, le=100, description="Sharpness delta (server-only)")
    sepia: int = Field(default=0, ge=0, le=100, description="Sepia percent")
    hue: int = Field(default=0, ge=0, le=360, description="Hue rotation in degrees")
    vignette: int = Field(default=0, ge=0, le=100, description="Vignette strength (server-only)")

    def is_default(self) -> bool:
        return self == AdjustmentSet()

    def with_value(self, name: str, value: int) -> "AdjustmentSet":
        """
        Return a copy with one slider changed.

        Raises:
            ValueError: If the slider name is unknown
            pydantic.ValidationError: If the value is outside the slider range
        """
        if name not in SLIDERS:
            raise ValueError(f"Unknown adjustment '{name}'. Available: {list(SLIDERS.keys())}")
        values = self.model_dump()
        values[name] = value
        return AdjustmentSet(**values)

    def preview_filter(self) -> str:
        """CSS filter chain for the locally previewable sliders."""
        return (
            f"brightness({self.brightness}%) "
            f"contrast({self.contrast}%) "
            f"saturate({self.saturation}%) "
            f"sepia({self.sepia}%) "
            f"hue-rotate({self.hue}deg)"
        )
