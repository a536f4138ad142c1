"""
Edit History

Linear undo/redo log of committed image states.
"""

import logging
from typing import List, Optional

from ..schemas import ImageState

logger = logging.getLogger(__name__)

NO_IMAGE = -1


class EditHistory:
    """
    Ordered log of ImageStates with a cursor at the current state.

    states[0] is the original upload and is never removed while the
    history is non-empty. Committing from the middle of the log drops
    everything after the cursor (no redo tree).
    """

    def __init__(self):
        self._states: List[ImageState] = []
        self._cursor: int = NO_IMAGE

    def __len__(self) -> int:
        return len(self._states)

    def __repr__(self) -> str:
        return f"EditHistory(length={len(self._states)}, cursor={self._cursor})"

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def states(self) -> List[ImageState]:
        """Snapshot of the log, oldest first."""
        return list(self._states)

    @property
    def current(self) -> Optional[ImageState]:
        if self._cursor < 0:
            return None
        return self._states[self._cursor]

    @property
    def original(self) -> Optional[ImageState]:
        return self._states[0] if self._states else None

    @property
    def can_undo(self) -> bool:
        return self._cursor > 0

    @property
    def can_redo(self) -> bool:
        return self._cursor < len(self._states) - 1

    def push_original(self, image: ImageState):
        """Replace the whole log with a fresh upload."""
        self._states = [image]
        self._cursor = 0

    def commit(self, image: ImageState):
        """
        Append a new state after the cursor.

        Raises:
            ValueError: If there is no original to edit
        """
        if self._cursor < 0:
            raise ValueError("Cannot commit to an empty history")

        dropped = len(self._states) - (self._cursor + 1)
        if dropped:
            logger.debug(f"Discarding {dropped} redo state(s)")

        self._states = self._states[:self._cursor + 1]
        self._states.append(image)
        self._cursor = len(self._states) - 1

    def undo(self) -> bool:
        """Step back one state. Returns False when already at the original."""
        if not self.can_undo:
            return False
        self._cursor -= 1
        return True

    def redo(self) -> bool:
        """Step forward one state. Returns False when already at the tail."""
        if not self.can_redo:
            return False
        self._cursor += 1
        return True

    def reset(self) -> bool:
        """Move the cursor back to the original without truncating."""
        if not self._states:
            return False
        self._cursor = 0
        return True

    def clear(self):
        self._states = []
        self._cursor = NO_IMAGE
