"""
Edit Orchestrator

Takes the current committed image plus an instruction, sends it through
the relay client and commits the result into the session.

Only one edit may be in flight at a time. A second request while one is
pending is rejected with EditInProgressError rather than queued, so
results always commit in request order. The relay call itself runs on a
single-worker thread pool so the event loop stays responsive.
"""

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple

from ..errors import EditInProgressError, EditorError, NoImageError, TransientOrUnknownError
from ..schemas import ImageState
from .panels import PanelKind
from .presets import (
    INSPIRATION_FALLBACK_TEMPLATE,
    INSPIRATION_THEMES,
    LUT_INSPIRATION_FALLBACK,
    LUTS,
    MAGIC_FALLBACK_PROMPT,
    QUICK_ACTIONS,
    card_prompt,
    lut_prompt,
)
from .prompt_builder import build_adjustment_prompt
from .session import EditSession

logger = logging.getLogger(__name__)

MAGIC_ACTION = "magic"


class EditOrchestrator:
    """
    Coordinates edits between the session and the relay client.

    A failed edit leaves history and pending adjustments untouched and
    puts the error in the session's error slot. A result whose base image
    is no longer current (new upload, undo, start-new, or cancel()) is
    discarded instead of committed.
    """

    def __init__(self, session: EditSession, client, executor: Optional[ThreadPoolExecutor] = None):
        """
        Initialize orchestrator.

        Args:
            session: Editing session to read from and commit into
            client: RelayClient (or any object with the same methods)
            executor: Thread pool for blocking relay calls
        """
        self.session = session
        self.client = client
        self.executor = executor or ThreadPoolExecutor(max_workers=1)

        self._in_flight = False
        self._cancelled = False

        self._panel_handlers: Dict[PanelKind, Callable[[Any], Awaitable[Optional[ImageState]]]] = {
            PanelKind.ADJUSTMENTS: lambda _payload: self.apply_adjustments(),
            PanelKind.ACTIONS: self.apply_preset,
            PanelKind.CUSTOM: self.apply_custom,
            PanelKind.CARD: self.apply_card,
            PanelKind.LUT: self.apply_lut,
        }

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    def _ensure_idle(self):
        if self._in_flight:
            logger.warning("Rejected edit: another edit is in progress")
            raise EditInProgressError()

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(self.executor, func, *args)

    def cancel(self) -> bool:
        """
        Discard the result of the in-flight edit.

        The relay request still runs to completion; its result and any
        error are dropped. Returns False when nothing is in flight.
        """
        if not self._in_flight:
            return False
        self._cancelled = True
        logger.info("In-flight edit cancelled")
        return True

    def close(self):
        self.executor.shutdown(wait=False)

    # ------------------------------------------------------------------
    # Core edit
    # ------------------------------------------------------------------

    async def apply_edit(self, instruction: str) -> Optional[ImageState]:
        """
        Edit the current image with a text instruction and commit the result.

        Args:
            instruction: Editing instruction; empty text is a no-op

        Returns:
            The committed ImageState, or None if nothing was committed

        Raises:
            EditInProgressError: If another edit is still pending
            NoImageError: If no image is loaded
        """
        if not instruction:
            return None

        base, base_revision = self._reserve()
        try:
            return await self._apply_edit_reserved(base, base_revision, instruction)
        finally:
            self._release()

    def _reserve(self) -> Tuple[ImageState, int]:
        """Claim the single edit slot; returns the base image and its revision."""
        self._ensure_idle()

        base = self.session.current
        if base is None:
            raise NoImageError()

        self._in_flight = True
        self._cancelled = False
        self.session.edit_in_flight = True
        self.session.clear_error()
        return base, self.session.revision

    def _release(self):
        self._in_flight = False
        self.session.edit_in_flight = False

    async def _apply_edit_reserved(
        self, base: ImageState, base_revision: int, instruction: str
    ) -> Optional[ImageState]:
        if self._is_stale(base_revision):
            logger.warning("Skipping edit: base image is no longer current")
            return None

        logger.info(f"Applying edit: {instruction[:100]}...")

        try:
            edited = await self._run(self.client.edit, base, instruction)
        except EditorError as e:
            logger.error(f"Edit failed ({type(e).__name__}): {e.message}")
            if not self._is_stale(base_revision):
                self.session.set_error(e)
            return None
        except Exception as e:
            logger.error(f"Edit failed with unexpected error: {e}")
            if not self._is_stale(base_revision):
                self.session.set_error(TransientOrUnknownError(
                    "An unknown error occurred. Please try again."
                ))
            return None

        if self._is_stale(base_revision):
            logger.warning("Discarding edit result: base image is no longer current")
            return None

        self.session.commit(edited)
        logger.info("✓ Edit committed")
        return edited

    def _is_stale(self, base_revision: int) -> bool:
        return self._cancelled or self.session.revision != base_revision

    # ------------------------------------------------------------------
    # Instruction sources
    # ------------------------------------------------------------------

    async def apply_adjustments(self) -> Optional[ImageState]:
        """Send the pending sliders as an instruction (no-op when all are default)."""
        prompt = build_adjustment_prompt(self.session.adjustments)
        if not prompt:
            logger.debug("No pending adjustments to apply")
            return None
        return await self.apply_edit(prompt)

    async def apply_preset(self, key: str) -> Optional[ImageState]:
        """
        Apply a quick action by key ('magic' asks the relay for a prompt).

        Raises:
            ValueError: If the key is not a known quick action
        """
        if key == MAGIC_ACTION:
            return await self.apply_magic()
        if key not in QUICK_ACTIONS:
            raise ValueError(
                f"Unknown quick action '{key}'. "
                f"Available: {list(QUICK_ACTIONS.keys()) + [MAGIC_ACTION]}"
            )
        return await self.apply_edit(QUICK_ACTIONS[key].prompt)

    async def apply_magic(self) -> Optional[ImageState]:
        """
        Apply a generated magic effect, falling back to a fixed one.

        The edit slot is held from the prompt request through the commit.
        """
        base, base_revision = self._reserve()
        try:
            try:
                prompt = await self._run(self.client.generate_magic_prompt)
            except EditorError as e:
                logger.error(f"Failed to generate magic prompt: {e.message}")
                prompt = MAGIC_FALLBACK_PROMPT
            return await self._apply_edit_reserved(base, base_revision, prompt)
        finally:
            self._release()

    async def apply_custom(self, text: str) -> Optional[ImageState]:
        """Apply free-form text; whitespace-only text is not submitted."""
        if not text or not text.strip():
            return None
        return await self.apply_edit(text)

    async def apply_card(self, theme: str) -> Optional[ImageState]:
        """Turn the image subject into a greeting card for a theme."""
        if not theme or not theme.strip():
            return None
        return await self.apply_edit(card_prompt(theme))

    async def apply_lut(self, look: str) -> Optional[ImageState]:
        """
        Apply a color grade.

        Args:
            look: Key of a catalog look, or a free-form look description
        """
        if not look or not look.strip():
            return None
        description = LUTS[look].prompt if look in LUTS else look
        return await self.apply_edit(lut_prompt(description))

    async def submit(self, kind: PanelKind, payload: Any = None) -> Optional[ImageState]:
        """Dispatch a panel submission to its handler."""
        handler = self._panel_handlers[PanelKind(kind)]
        return await handler(payload)

    # ------------------------------------------------------------------
    # Suggestions (never touch history)
    # ------------------------------------------------------------------

    async def suggest_inspiration(self, category: str) -> str:
        """Get a greeting card idea for a category (or a free theme)."""
        theme = INSPIRATION_THEMES.get(category, category)
        try:
            return await self._run(self.client.generate_inspiration_prompt, theme)
        except EditorError as e:
            logger.error(f"Failed to generate inspiration: {e.message}")
            return INSPIRATION_FALLBACK_TEMPLATE.format(theme=theme)

    async def suggest_lut(self) -> str:
        """Get a color grade description idea."""
        try:
            return await self._run(self.client.generate_lut_prompt)
        except EditorError as e:
            logger.error(f"Failed to generate LUT inspiration: {e.message}")
            return LUT_INSPIRATION_FALLBACK
