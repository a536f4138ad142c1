"""
Pointer interaction: global input bus and the before/after comparator.
"""

from .events import InputEventBus, PointerEvent, PointerEventType, Subscription
from .comparator import ComparatorController, SurfaceBounds, HIDE_DELAY_SECONDS

__all__ = [
    "InputEventBus",
    "PointerEvent",
    "PointerEventType",
    "Subscription",
    "ComparatorController",
    "SurfaceBounds",
    "HIDE_DELAY_SECONDS",
]
