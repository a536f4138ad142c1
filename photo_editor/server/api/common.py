"""
Shared error mapping for relay endpoints
"""

import logging

from fastapi import HTTPException

from ...errors import EditorError, TransientOrUnknownError
from ..models import ErrorResponse

logger = logging.getLogger(__name__)

# OpenAPI documentation for the {"error": message} bodies
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Missing or invalid fields"},
    403: {"model": ErrorResponse, "description": "Blocked for safety reasons"},
    413: {"model": ErrorResponse, "description": "Request body too large"},
    500: {"model": ErrorResponse, "description": "Model or relay failure"},
}


def http_error(error: Exception, context: str) -> HTTPException:
    """
    Log an endpoint failure and convert it to an HTTPException.

    EditorErrors keep their status (403 for safety blocks, 400 for bad
    input); anything else becomes a 500 with the error text.
    """
    logger.error(f"{context} error: {error}")

    if isinstance(error, EditorError):
        status_code = error.status_code or TransientOrUnknownError.status_code
        return HTTPException(status_code=status_code, detail=error.message)

    return HTTPException(
        status_code=TransientOrUnknownError.status_code,
        detail=str(error) or TransientOrUnknownError.default_message,
    )
