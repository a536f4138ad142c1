"""
Input Event Bus

Global pointer/touch stream. Interactions subscribe for exactly as long
as they need events and close their subscription when done.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List

logger = logging.getLogger(__name__)


class PointerEventType(str, Enum):
    """Pointer and touch events, unified."""
    MOVE = "move"
    RELEASE = "release"


@dataclass(frozen=True)
class PointerEvent:
    type: PointerEventType
    x: float = 0.0


EventHandler = Callable[[PointerEvent], None]


class Subscription:
    """Handle for one bus subscription. Closing twice is a no-op."""

    def __init__(self, bus: "InputEventBus", handler: EventHandler):
        self._bus = bus
        self._handler = handler
        self.closed = False

    def close(self):
        if self.closed:
            return
        self._bus._remove(self._handler)
        self.closed = True

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class InputEventBus:
    """Delivers pointer events to all live subscriptions."""

    def __init__(self):
        self._handlers: List[EventHandler] = []

    @property
    def subscriber_count(self) -> int:
        return len(self._handlers)

    def subscribe(self, handler: EventHandler) -> Subscription:
        self._handlers.append(handler)
        logger.debug(f"Subscribed. Total subscribers: {len(self._handlers)}")
        return Subscription(self, handler)

    def _remove(self, handler: EventHandler):
        self._handlers.remove(handler)
        logger.debug(f"Unsubscribed. Total subscribers: {len(self._handlers)}")

    def publish(self, event: PointerEvent):
        # Handlers may unsubscribe while being called
        for handler in list(self._handlers):
            handler(event)

    def move(self, x: float):
        self.publish(PointerEvent(PointerEventType.MOVE, x))

    def release(self):
        self.publish(PointerEvent(PointerEventType.RELEASE))
