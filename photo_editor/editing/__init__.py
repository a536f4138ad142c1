"""
Editing core: prompt building, history, session state and orchestration.
"""

from .prompt_builder import build_adjustment_prompt, strength_word
from .history import EditHistory
from .session import EditSession
from .panels import PanelKind
from .orchestrator import EditOrchestrator

__all__ = [
    "build_adjustment_prompt",
    "strength_word",
    "EditHistory",
    "EditSession",
    "PanelKind",
    "EditOrchestrator",
]
