"""
Image Edit API Endpoint
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends, HTTPException
from starlette.concurrency import run_in_threadpool

from ...errors import ValidationError
from ..models import EditRequest, EditResponse
from ..services import GeminiService, get_gemini_service
from .common import ERROR_RESPONSES, http_error

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/edit", response_model=EditResponse, responses=ERROR_RESPONSES)
async def edit_image(
    request: Optional[EditRequest] = None,
    service: GeminiService = Depends(get_gemini_service),
):
    """
    Edit an image with a text instruction.

    Body: {imageBase64, mimeType, prompt} (all required)

    Returns:
        {imageBase64: "data:<mime>;base64,<data>"}
    """
    if request is None or request.missing_fields():
        raise HTTPException(status_code=400, detail=ValidationError.default_message)

    try:
        edited = await run_in_threadpool(
            service.edit_image,
            request.imageBase64,
            request.mimeType,
            request.prompt,
        )
        return EditResponse(imageBase64=edited)

    except Exception as e:
        raise http_error(e, "Edit")
