"""
Editor State Schemas

Data model shared by the editing session, the orchestrator and the
relay client.
"""

from .editor_state import (
    ImageState,
    AdjustmentSet,
    SliderSpec,
    SLIDERS,
    PREVIEWABLE_SLIDERS,
    SERVER_ONLY_SLIDERS,
)

__all__ = [
    "ImageState",
    "AdjustmentSet",
    "SliderSpec",
    "SLIDERS",
    "PREVIEWABLE_SLIDERS",
    "SERVER_ONLY_SLIDERS",
]
