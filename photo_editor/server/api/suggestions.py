"""
Prompt Suggestion API Endpoints

Text-only helpers used by the editor panels: greeting card ideas,
magic effects and LUT descriptions.
"""

from typing import Optional
import logging

from fastapi import APIRouter, Depends
from starlette.concurrency import run_in_threadpool

from ..models import InspirationRequest, PromptResponse
from ..services import GeminiService, get_gemini_service
from .common import ERROR_RESPONSES, http_error

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/inspiration", response_model=PromptResponse, responses=ERROR_RESPONSES)
async def generate_inspiration(
    request: Optional[InspirationRequest] = None,
    service: GeminiService = Depends(get_gemini_service),
):
    """Generate a greeting card idea for a theme."""
    theme = request.theme if request else ""
    try:
        prompt = await run_in_threadpool(service.generate_inspiration_prompt, theme)
        return PromptResponse(prompt=prompt)
    except Exception as e:
        raise http_error(e, "Inspiration")


@router.post("/magic", response_model=PromptResponse, responses=ERROR_RESPONSES)
async def generate_magic(service: GeminiService = Depends(get_gemini_service)):
    """Generate a magical effect instruction."""
    try:
        prompt = await run_in_threadpool(service.generate_magic_prompt)
        return PromptResponse(prompt=prompt)
    except Exception as e:
        raise http_error(e, "Magic")


@router.post("/lut", response_model=PromptResponse, responses=ERROR_RESPONSES)
async def generate_lut(service: GeminiService = Depends(get_gemini_service)):
    """Generate a color grade description."""
    try:
        prompt = await run_in_threadpool(service.generate_lut_prompt)
        return PromptResponse(prompt=prompt)
    except Exception as e:
        raise http_error(e, "LUT")
