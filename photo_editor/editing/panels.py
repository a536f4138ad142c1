"""
Editor Panels

The fixed set of panels that can submit an edit. Each kind maps to one
orchestrator handler (see EditOrchestrator.submit).
"""

from enum import Enum


class PanelKind(str, Enum):
    """Panels that produce editing instructions."""
    ADJUSTMENTS = "adjustments"
    ACTIONS = "actions"
    CUSTOM = "custom"
    CARD = "card"
    LUT = "lut"

