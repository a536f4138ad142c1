"""
Before/After Comparator Controller

Drag state for the split between the two layers: the edited image shows
left of the split and the original right of it (0 = all original,
100 = all edited).

- press on the surface starts a drag, shows the handle and jumps the split
  to the pointer
- while dragging, moves anywhere on screen update the split; the drag
  listens on the global input bus until release
- release ends the drag and hides the handle after 3 seconds of inactivity
- a new edited image resets the split to 100 (fully edited)
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Optional

from .events import InputEventBus, PointerEvent, PointerEventType, Subscription

logger = logging.getLogger(__name__)

HIDE_DELAY_SECONDS = 3.0
FULLY_EDITED = 100.0

# scheduler(delay_seconds, callback) -> handle with cancel()
Scheduler = Callable[[float, Callable[[], None]], Any]


def thread_timer_scheduler(delay: float, callback: Callable[[], None]) -> threading.Timer:
    """Run callback once after delay on a daemon timer thread."""
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    timer.start()
    return timer


@dataclass(frozen=True)
class SurfaceBounds:
    """Horizontal extent of the comparison surface in pointer coordinates."""
    left: float
    width: float


class ComparatorController:
    """Split position, drag and handle-visibility state for the comparator."""

    def __init__(
        self,
        bus: InputEventBus,
        scheduler: Optional[Scheduler] = None,
        hide_delay: float = HIDE_DELAY_SECONDS,
    ):
        self.bus = bus
        self.scheduler = scheduler or thread_timer_scheduler
        self.hide_delay = hide_delay

        self.split_percent = FULLY_EDITED
        self.dragging = False
        self.handle_visible = False

        self._bounds: Optional[SurfaceBounds] = None
        self._subscription: Optional[Subscription] = None
        self._hide_timer = None
        self._hide_generation = 0
        self._hide_lock = threading.RLock()
        self._edited_image = None

    def __repr__(self) -> str:
        return (
            f"ComparatorController(split={self.split_percent:.1f}, "
            f"dragging={self.dragging}, visible={self.handle_visible})"
        )

    # ------------------------------------------------------------------
    # Hide timer
    # ------------------------------------------------------------------

    def _cancel_hide(self):
        # Bumping the generation also voids a timer that already fired
        # and is waiting on the lock
        with self._hide_lock:
            self._hide_generation += 1
            if self._hide_timer is not None:
                self._hide_timer.cancel()
                self._hide_timer = None

    def _schedule_hide(self):
        with self._hide_lock:
            self._cancel_hide()
            generation = self._hide_generation
            self._hide_timer = self.scheduler(self.hide_delay, lambda: self._hide(generation))

    def _hide(self, generation: int):
        with self._hide_lock:
            if generation != self._hide_generation:
                return
            self._hide_timer = None
            self.handle_visible = False

    def _show(self):
        with self._hide_lock:
            self._cancel_hide()
            self.handle_visible = True

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def _update_split(self, x: float):
        if self._bounds is None or self._bounds.width <= 0:
            return
        offset = max(0.0, min(x - self._bounds.left, self._bounds.width))
        self.split_percent = offset / self._bounds.width * 100

    def _on_event(self, event: PointerEvent):
        if event.type == PointerEventType.MOVE:
            if self.dragging:
                self._show()
                self._update_split(event.x)
        elif event.type == PointerEventType.RELEASE:
            self.release()

    def press(self, x: float, bounds: SurfaceBounds):
        """Pointer or touch pressed inside the surface."""
        self._bounds = bounds
        self.dragging = True
        self._show()
        self._update_split(x)
        if self._subscription is None or self._subscription.closed:
            self._subscription = self.bus.subscribe(self._on_event)

    def release(self):
        """End the drag and start the hide countdown."""
        if not self.dragging:
            return
        self.dragging = False
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
        self._schedule_hide()
        logger.debug(f"Drag ended at {self.split_percent:.1f}%")

    def enter(self):
        """Pointer entered the surface."""
        self._show()

    def hover(self):
        """Pointer moved over the surface without a drag."""
        self._show()
        if not self.dragging:
            self._schedule_hide()

    def leave(self):
        """Pointer left the surface; a live drag keeps tracking globally."""
        if not self.dragging:
            self._schedule_hide()

    # ------------------------------------------------------------------
    # Edited image
    # ------------------------------------------------------------------

    def set_edited_image(self, image: Any):
        """Reset the split to fully edited when the edited image changes."""
        if image != self._edited_image:
            self._edited_image = image
            self.split_percent = FULLY_EDITED

    def track_session(self, session):
        """Follow an EditSession's current image."""
        self.set_edited_image(session.current)
        session.add_listener(lambda s: self.set_edited_image(s.current))

    # ------------------------------------------------------------------
    # Rendering helpers
    # ------------------------------------------------------------------

    def clip_inset(self) -> str:
        """CSS clip-path for the edited layer."""
        return f"inset(0 {100 - self.split_percent:g}% 0 0)"

    def close(self):
        self._cancel_hide()
        if self._subscription is not None:
            self._subscription.close()
            self._subscription = None
        self.dragging = False
