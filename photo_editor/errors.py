"""
Editor Error Types

Shared by the relay client, the relay server and the edit orchestrator.
Each error carries the user-facing message and, where one exists, the
HTTP status it travels with.
"""

from typing import Optional


class EditorError(Exception):
    """Base class for all editor errors."""

    status_code: Optional[int] = None
    default_message = "An unknown error occurred. Please try again."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(EditorError):
    """Required request fields are missing or malformed (HTTP 400)."""

    status_code = 400
    default_message = "imageBase64, mimeType and prompt are required."


class ImageDecodeError(ValidationError):
    """An uploaded file or data URI is not a decodable image."""

    default_message = "Image upload failed. Please try again."


class SafetyBlockError(EditorError):
    """The model refused the request on safety grounds (HTTP 403)."""

    status_code = 403
    default_message = "Request blocked for safety reasons."


class TransientOrUnknownError(EditorError):
    """Network failure, unmapped status or malformed model response (HTTP 500)."""

    status_code = 500
    default_message = "Internal error"


class ConnectivityError(EditorError):
    """The relay server could not be reached."""

    default_message = "Unable to reach the server. Check your connection and try again."


class EditInProgressError(EditorError):
    """Another edit is already in flight."""

    default_message = "An edit is already in progress."


class NoImageError(EditorError):
    """An edit was requested before any image was uploaded."""

    default_message = "No image loaded."


# Errors with a known HTTP status, keyed for response mapping
ERRORS_BY_STATUS = {
    ValidationError.status_code: ValidationError,
    SafetyBlockError.status_code: SafetyBlockError,
}


def error_for_status(status_code: int, message: Optional[str] = None) -> EditorError:
    """
    Build the error matching an HTTP failure status.

    Args:
        status_code: HTTP status of the failed response
        message: Server-supplied message, if any

    Returns:
        EditorError subclass instance (TransientOrUnknownError when unmapped)
    """
    error_class = ERRORS_BY_STATUS.get(status_code, TransientOrUnknownError)
    return error_class(message)
