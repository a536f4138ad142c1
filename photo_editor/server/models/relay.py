"""
Pydantic Models for the Relay API

Request fields are optional at the schema level so that missing fields
produce the relay's own 400 message instead of a schema error.
"""

from pydantic import BaseModel, Field
from typing import Optional


class EditRequest(BaseModel):
    """Request to edit an image"""
    imageBase64: Optional[str] = Field(default=None, description="Image as base64 or data URI")
    mimeType: Optional[str] = Field(default=None, description="MIME type of the image")
    prompt: Optional[str] = Field(default=None, description="Editing instruction")

    def missing_fields(self) -> bool:
        return not (self.imageBase64 and self.mimeType and self.prompt)


class EditResponse(BaseModel):
    """Edited image as a data URI"""
    imageBase64: str = Field(..., description="data:<mime>;base64,<data>")


class InspirationRequest(BaseModel):
    """Request for a greeting card idea"""
    theme: str = Field(default="", description="Card theme (e.g., 'Birthday')")


class PromptResponse(BaseModel):
    """A generated prompt suggestion"""
    prompt: str


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    """Body of every failed relay response"""
    error: str
