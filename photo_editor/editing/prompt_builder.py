"""
Adjustment Prompt Builder

Translates slider deltas into a natural-language editing instruction
for the image model.

Sliders that deviate from their default each contribute one clause:
- brightness/contrast/saturation: "increase"/"decrease" relative to 100
- sharpness: "increase"/"decrease" relative to 0
- vignette: only positive values add a vignette
- sepia: any non-zero value adds a sepia tone
- hue: a fixed clause, the rotation amount has no strength mapping
"""

from typing import List, Tuple

from ..schemas import AdjustmentSet

PROMPT_PREFIX = "Apply the following image adjustments: "

# (upper bound inclusive, word)
STRENGTH_THRESHOLDS: Tuple[Tuple[int, str], ...] = (
    (20, "a tiny amount"),
    (40, "slightly"),
    (60, "moderately"),
    (80, "significantly"),
)
MAX_STRENGTH = "dramatically"

# slider name -> wording used in the clause
CENTERED_SLIDERS = (
    ("brightness", "brightness"),
    ("contrast", "contrast"),
    ("saturation", "color saturation"),
)
CENTER = 100


def strength_word(deviation: float) -> str:
    """
    Map an absolute deviation to a strength word.

    Args:
        deviation: Distance from the slider's neutral value

    Returns:
        Qualitative strength ("a tiny amount" ... "dramatically")
    """
    deviation = abs(deviation)
    for upper, word in STRENGTH_THRESHOLDS:
        if deviation <= upper:
            return word
    return MAX_STRENGTH


def describe_adjustments(adjustments: AdjustmentSet) -> List[str]:
    """List one clause per slider that differs from its default."""
    descriptions = []

    for field, wording in CENTERED_SLIDERS:
        value = getattr(adjustments, field)
        if value != CENTER:
            direction = "increase" if value > CENTER else "decrease"
            descriptions.append(f"{direction} the {wording} {strength_word(value - CENTER)}")

    if adjustments.sharpness != 0:
        direction = "increase" if adjustments.sharpness > 0 else "decrease"
        descriptions.append(f"{direction} the sharpness {strength_word(adjustments.sharpness)}")

    if adjustments.vignette > 0:
        descriptions.append(f"add a {strength_word(adjustments.vignette)} vignette effect")

    if adjustments.sepia != 0:
        descriptions.append(f"add a {strength_word(adjustments.sepia)} sepia tone")

    if adjustments.hue != 0:
        descriptions.append("shift the hue of the colors")

    return descriptions


def build_adjustment_prompt(adjustments: AdjustmentSet) -> str:
    """
    Build the instruction for a set of pending adjustments.

    Args:
        adjustments: Current slider values

    Returns:
        One sentence listing every active adjustment, or "" when all
        sliders are at their defaults (nothing to submit)
    """
    descriptions = describe_adjustments(adjustments)
    if not descriptions:
        return ""
    return f"{PROMPT_PREFIX}{', '.join(descriptions)}."
