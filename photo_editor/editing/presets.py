"""
Edit Presets

Fixed instructions behind the quick actions, greeting cards and LUT
color grades, plus the fallback texts used when a suggestion request
fails.
"""

from dataclasses import dataclass
from typing import Dict, List


@dataclass(frozen=True)
class Preset:
    """A named, ready-to-send editing instruction."""
    key: str
    label: str
    prompt: str


@dataclass(frozen=True)
class LutCategory:
    name: str
    looks: List[Preset]


# =============================================================================
# Quick actions
# =============================================================================

ENHANCE_PROMPT = """You are an expert photo retoucher and digital restorer. Your only goal is technical perfection and realism, not artistic interpretation.

**ABSOLUTE RULE:**
Never darken the overall image or apply any dark veil or filter unless the image is clearly and severely overexposed (blown-out areas without detail). If an image is dark, your only job is to make it brighter and clearer in a natural way.

**Step 1: Technical analysis (do not act before completing it).**
Judge the image as if reading a histogram and a vectorscope:
1. Exposure and contrast: is the histogram shifted left (underexposed), right (overexposed) or well distributed? Is the contrast flat?
2. White balance: is there an unnatural color cast? Are neutral tones really neutral?
3. Saturation: are the colors dull or already correct? Do not add saturation that is not needed.
4. Sharpness: is the image soft or lacking micro-contrast?

**Step 2: Targeted correction.**
Change a parameter ONLY if step 1 found a specific problem with it:
- Underexposed: raise exposure in the midtones and open the shadows without adding noise.
- Overexposed: recover only the highlights, never darken the whole image.
- Flat contrast: add subtle depth without crushing shadows or clipping highlights.
- Color cast: neutralize it completely.
- Dull colors: raise vibrance slightly rather than raw saturation.
- Soft: apply precise, subtle sharpening without halos or artifacts.

**Goal:** a clean, clear, balanced and realistic image, as if shot in perfect light with professional equipment. It must not look edited or filtered."""

QUICK_ACTIONS: Dict[str, Preset] = {
    preset.key: preset for preset in [
        Preset("enhance", "Enhance", ENHANCE_PROMPT),
        Preset("black_and_white", "Black & White",
               "Convert this image to a high-contrast black and white."),
        Preset("remove_background", "Remove Background",
               "Perfectly remove the background from this image, leaving only the main subject. "
               "Make the background transparent."),
        Preset("day_to_night", "Day to Night",
               "Turn this photo from day to night. Add realistic moonlight, shadows and perhaps "
               "a few stars in the sky."),
        Preset("golden_hour", "Golden Hour",
               "Bathe this image in the warm, soft, low light of golden hour just before sunset. "
               "Enhance the warm tones and create long, soft shadows."),
        Preset("color_splash", "Color Splash",
               "Convert this image to black and white, but keep the main subject in its original, "
               "vivid colors."),
        Preset("sketch", "Sketch",
               "Turn this photo into a detailed pencil sketch. It should look hand drawn with clean "
               "lines and shading, on a paper-like texture."),
    ]
}

MAGIC_FALLBACK_PROMPT = "Apply a magical, almost fantasy-like effect to this image."


# =============================================================================
# Greeting cards
# =============================================================================

CARD_TEMPLATE = (
    "Using the main subject (person, pet, etc.) of the provided image, create a beautiful, "
    "modern greeting card. The theme is: \"{theme}\". Integrate the subject seamlessly into "
    "the new scene. The card must be visually stunning and well composed."
)

# category key -> theme sent to the inspiration endpoint
INSPIRATION_THEMES: Dict[str, str] = {
    "birthday": "Birthday",
    "holiday": "Holidays",
    "thank_you": "Thank you",
    "romantic": "Romantic",
    "congratulations": "Congratulations",
    "friendship": "Friendship",
}

INSPIRATION_FALLBACK_TEMPLATE = (
    "An error prevented generating an idea. Try with: a {theme} themed scene."
)


def card_prompt(theme: str) -> str:
    """Wrap a card theme in the card composition instruction."""
    return CARD_TEMPLATE.format(theme=theme)


# =============================================================================
# LUT / color grading
# =============================================================================

LUT_TEMPLATE = (
    "You are a professional colorist. Apply a color grade (LUT) to the image based on the "
    "following description: \"{description}\". Focus on changing the colors, contrast and "
    "overall mood to reach this look while keeping the details of the original image."
)

LUT_INSPIRATION_FALLBACK = "Cinematic mood with warm colors and deep shadows."

LUT_CATEGORIES: List[LutCategory] = [
    LutCategory("Cinematic", [
        Preset("teal_orange", "Teal & Orange",
               "Apply a cinematic 'Teal and Orange' grade. Push shadows and cool tones toward "
               "cyan/teal and skin tones and highlights toward orange/yellow for a vibrant, "
               "contrasty look."),
        Preset("gotham", "Gotham",
               "Create a dark, gritty, desaturated look. Cold blues and greys dominate, with deep "
               "blacks and high contrast. Only warm light sources stay vivid."),
        Preset("neon_future", "Neon Future",
               "Apply a cyberpunk aesthetic with a strong dominant cast: dusty desert orange or "
               "neon blue/magenta city lights. High contrast and moody shadows."),
        Preset("pastel_symmetry", "Pastel Symmetry",
               "Apply a pastel palette dominated by yellows, pinks and light blues. Slightly "
               "raise saturation and keep contrast balanced for a clean, symmetric look."),
        Preset("digital_green", "Digital Green",
               "Apply a green cast across the whole image, especially in shadows and midtones. "
               "Raise contrast and slightly desaturate other colors for a cold, technological look."),
        Preset("war_documentary", "War Documentary",
               "Almost completely desaturate the colors, raise contrast and grain for a raw, "
               "documentary look using a bleach bypass technique."),
        Preset("desert_epic", "Desert Epic",
               "Apply an almost monochromatic palette of sand, ochre and grey. Desaturate, keep "
               "contrast soft and the mood vast and majestic."),
        Preset("modern_blockbuster", "Modern Blockbuster",
               "Raise contrast, slightly desaturate everything except primaries, add a subtle "
               "vignette and deep shadows with a slight cool cast."),
    ]),
    LutCategory("Film & Vintage", [
        Preset("kodachrome_70s", "Kodachrome '70s",
               "Apply a 1970s vintage film look. Enhance warm tones, slightly desaturate blues, "
               "raise contrast a little and add very fine film grain."),
        Preset("faded_polaroid", "Faded Polaroid",
               "Create the effect of an old Polaroid. Lower contrast with milky blacks, add a warm "
               "yellow/magenta cast and slightly desaturate for a nostalgic, faded look."),
        Preset("technicolor_50s", "Technicolor '50s",
               "Emulate 1950s Technicolor. Drastically raise saturation so reds, blues and yellows "
               "become vivid and almost surreal, with medium-high contrast."),
        Preset("fuji_greens", "Fuji Greens",
               "Emulate Fuji film: deep lush greens, slightly cyan blues, soft natural skin tones, "
               "balanced contrast and realistic saturation."),
        Preset("expired_film", "Expired Film",
               "Simulate expired film with unexpected casts (magenta shadows, green highlights), "
               "more grain and slightly reduced sharpness."),
        Preset("cross_processing", "Cross Processing",
               "Simulate cross-processing: raise contrast, shift colors unpredictably (blue/green "
               "shadows, yellow/red highlights) and raise saturation."),
        Preset("portra_400", "Portra 400",
               "Emulate Kodak Portra 400: very natural skin tones, warm colors, fine grain and "
               "soft contrast."),
        Preset("classic_sepia", "Classic Sepia",
               "Apply a classic, elegant sepia tone: convert to monochrome and tint with a rich "
               "warm brown while keeping a good contrast range."),
    ]),
    LutCategory("Modern & Moody", [
        Preset("moody_forest", "Moody Forest",
               "Create a moody forest atmosphere. Desaturate yellows and reds, deepen greens and "
               "blues and add a light haze."),
        Preset("cold_urban", "Cold Urban",
               "Apply a cold urban look. Desaturate, raise contrast and sharpness to bring out "
               "concrete and metal textures, with a cool blue cast."),
        Preset("california_dream", "California Dream",
               "Create a warm, dreamy California mood. Raise exposure, add a golden/orange cast, "
               "lift the shadows and reduce contrast."),
        Preset("dark_and_moody", "Dark & Moody",
               "Darken overall exposure, raise contrast for deep shadows and desaturate all colors "
               "except one or two accent tones."),
        Preset("light_and_airy", "Light & Airy",
               "Raise exposure noticeably, lift the shadows to lower contrast and add a light "
               "pastel cast."),
        Preset("blue_hour", "Blue Hour",
               "Emulate blue hour with a deep blue/indigo cast over the whole image, soft contrast "
               "and diffused light, artificial lights glowing warm."),
    ]),
    LutCategory("Black & White", [
        Preset("intense_noir", "Intense Noir",
               "Convert to dramatic, high-contrast black and white (film noir) with deep blacks "
               "and bright but not clipped highlights."),
        Preset("soft_portrait", "Soft Portrait",
               "Create a soft, flattering black and white for portraits with slightly lower "
               "contrast and a wide range of greys."),
        Preset("matte_bw", "Matte",
               "Apply a matte black and white effect: lift the black point so the deepest blacks "
               "become dark grey."),
        Preset("zone_system", "Zone System",
               "Create a black and white with maximum dynamic range: deep but detailed blacks and "
               "bright but unclipped whites."),
        Preset("high_key", "High Key",
               "Apply a high-key look: a very bright image with most tones in the highlights and "
               "light midtones and minimal shadows."),
        Preset("low_key", "Low Key",
               "Apply a low-key look: a very dark image with most tones in the shadows, using "
               "light to sculpt the subject."),
    ]),
]

LUTS: Dict[str, Preset] = {
    look.key: look for category in LUT_CATEGORIES for look in category.looks
}


def lut_prompt(description: str) -> str:
    """Wrap a look description in the color grading instruction."""
    return LUT_TEMPLATE.format(description=description)
