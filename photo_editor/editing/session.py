"""
Edit Session

The editing state owned by the top-level controller: committed history,
pending adjustments, the single error slot and upload metadata.
"""

import logging
from pathlib import Path
from typing import Callable, List, Optional, Union

from ..errors import EditInProgressError, EditorError
from ..schemas import AdjustmentSet, ImageState
from .history import EditHistory

logger = logging.getLogger(__name__)

DEFAULT_DOWNLOAD_NAME = "image.png"

SessionListener = Callable[["EditSession"], None]


class EditSession:
    """
    History store plus pending AdjustmentSet.

    Every commit, undo, redo, reset and new upload resets the pending
    adjustments. `revision` increases whenever the current image changes
    so that callers can detect results computed from a stale base.
    """

    def __init__(self):
        self.history = EditHistory()
        self.adjustments = AdjustmentSet()
        self.image_name: Optional[str] = None
        self.error: Optional[EditorError] = None
        self.revision = 0
        self.edit_in_flight = False
        self._listeners: List[SessionListener] = []

    def __repr__(self) -> str:
        return (
            f"EditSession(history={self.history!r}, revision={self.revision}, "
            f"pending={self.has_pending_adjustments})"
        )

    # ------------------------------------------------------------------
    # Listeners
    # ------------------------------------------------------------------

    def add_listener(self, listener: SessionListener):
        """Register a callback run after every state change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SessionListener):
        self._listeners.remove(listener)

    def _notify(self):
        for listener in list(self._listeners):
            listener(self)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------

    @property
    def current(self) -> Optional[ImageState]:
        return self.history.current

    @property
    def original(self) -> Optional[ImageState]:
        return self.history.original

    @property
    def has_image(self) -> bool:
        return self.history.current is not None

    @property
    def has_pending_adjustments(self) -> bool:
        return not self.adjustments.is_default()

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo

    @property
    def can_reset(self) -> bool:
        return self.history.cursor > 0 or self.has_pending_adjustments

    @property
    def error_message(self) -> Optional[str]:
        return self.error.message if self.error else None

    @property
    def download_name(self) -> str:
        return f"edited-{self.image_name or DEFAULT_DOWNLOAD_NAME}"

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _changed(self, image_changed: bool = True):
        if image_changed:
            self.revision += 1
        self._notify()

    def upload(self, image: ImageState, name: Optional[str] = None):
        """
        Start editing a new image, replacing any existing history.

        Raises:
            EditInProgressError: If an edit is still in flight
        """
        if self.edit_in_flight:
            raise EditInProgressError("Cannot load a new image while an edit is in progress.")

        self.history.push_original(image)
        self.adjustments = AdjustmentSet()
        self.image_name = name
        self.error = None
        logger.info(f"Loaded image {name or '<unnamed>'} ({image.mime_type}, {len(image.data)} bytes)")
        self._changed()

    def upload_file(self, path: Union[str, Path]) -> ImageState:
        """Decode an image file and upload it."""
        path = Path(path)
        image = ImageState.from_file(path)
        self.upload(image, name=path.name)
        return image

    def commit(self, image: ImageState):
        """Append an edited image after the cursor and clear pending adjustments."""
        self.history.commit(image)
        self.adjustments = AdjustmentSet()
        logger.info(f"Committed state {self.history.cursor} (history length {len(self.history)})")
        self._changed()

    def undo(self):
        if self.history.undo():
            self.adjustments = AdjustmentSet()
            self._changed()

    def redo(self):
        if self.history.redo():
            self.adjustments = AdjustmentSet()
            self._changed()

    def reset(self):
        """Return to the original upload; history is kept for redo."""
        previous_cursor = self.history.cursor
        if self.history.reset():
            self.adjustments = AdjustmentSet()
            self._changed(image_changed=previous_cursor != self.history.cursor)

    def start_new(self):
        """Drop everything and return to the empty state."""
        self.history.clear()
        self.adjustments = AdjustmentSet()
        self.image_name = None
        self.error = None
        logger.info("Session cleared")
        self._changed()

    def set_adjustment(self, name: str, value: int) -> AdjustmentSet:
        """Change one pending slider (local preview only, nothing is committed)."""
        self.adjustments = self.adjustments.with_value(name, value)
        self._changed(image_changed=False)
        return self.adjustments

    def set_adjustments(self, adjustments: AdjustmentSet):
        self.adjustments = adjustments
        self._changed(image_changed=False)

    # ------------------------------------------------------------------
    # Errors
    # ------------------------------------------------------------------

    def set_error(self, error: EditorError):
        """Show an error, replacing any previous one."""
        self.error = error
        self._changed(image_changed=False)

    def clear_error(self):
        if self.error is not None:
            self.error = None
            self._changed(image_changed=False)

    # ------------------------------------------------------------------
    # Download
    # ------------------------------------------------------------------

    def save_current(self, destination: Union[str, Path]) -> Path:
        """
        Save the current image.

        Args:
            destination: File path, or a directory to save `download_name` into

        Returns:
            Path written

        Raises:
            ValueError: If no image is loaded
        """
        if self.current is None:
            raise ValueError("No image to save")

        destination = Path(destination)
        if destination.is_dir():
            destination = destination / self.download_name

        self.current.save(destination)
        logger.info(f"Saved current image to {destination}")
        return destination
