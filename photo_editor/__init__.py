"""
AI Photo Editor: non-destructive editing core and Gemini relay server
"""

__version__ = "0.1.0"

from .schemas import AdjustmentSet, ImageState
from .editing import EditOrchestrator, EditSession, build_adjustment_prompt
from .client import RelayClient

__all__ = [
    "AdjustmentSet",
    "ImageState",
    "EditOrchestrator",
    "EditSession",
    "build_adjustment_prompt",
    "RelayClient",
]
