"""
Prompt Idea Pools

Meta-prompts for the text model. Each request combines randomly drawn
elements so that repeated requests produce different suggestions.
"""

import random
from typing import Optional, Sequence

STYLES = [
    "watercolor", "epic fantasy", "minimalist and modern", "neon cyberpunk",
    "fairy-tale and enchanted", "abstract art", "vintage comic book",
    "photorealistic and cinematic", "surreal and dreamlike", "pixel art", "art deco",
    "steampunk", "impressionist",
]

SETTINGS = [
    "on a tropical beach at sunset", "in a magical forest lit by lanterns",
    "in a futuristic metropolis", "on a snowy mountain peak",
    "inside a medieval castle", "in a secret flower garden",
    "on the moon with the Earth in the background", "in a cozy Parisian cafe",
    "underwater among glowing corals", "in a vast field of sunflowers",
    "on an orbiting space station", "in a picturesque village", "in the desert at night",
]

MOODS = [
    "joyful and celebratory", "serene and peaceful", "mysterious and intriguing",
    "energetic and vibrant", "nostalgic and dreamy", "warm and cozy",
    "adventurous and exciting", "elegant and sophisticated", "witty and fun",
    "epic and grand", "calm and relaxing",
]

MAGICAL_STYLES = [
    "ethereal and luminous", "dark and mysterious", "enchanted and fairy-tale",
    "cosmic and celestial", "crystalline and iridescent", "gothic and spectral",
    "steampunk with glowing gears", "organic and bioluminescent",
]

MAGICAL_ELEMENTS = [
    "dancing particles of light", "colored enchanted mist", "a crackling aura of energy",
    "floating crystals refracting the light", "flowers blooming instantly",
    "rainbow energy trails", "ancient runes glowing faintly", "gently falling stardust",
]

MAGICAL_MOODS = [
    "dreamy and surreal", "powerful and epic", "serene and calm",
    "playful and whimsical", "ancient and solemn", "melancholic but beautiful",
]

COLOR_PALETTES = [
    "warm earth tones (ochre, terracotta, brown)", "cool desaturated tones (steel blue, grey, cyan)",
    "dreamy pastel colors (pink, lavender, mint)", "monochrome palette with a single accent color",
    "vibrant neon colors (magenta, acid green, electric blue)", "autumn tones (rust, gold, burgundy)",
]

LIGHTING_STYLES = [
    "soft diffused overcast daylight", "strong dramatic contrast from direct sunlight",
    "dark mysterious atmosphere with deep shadows", "warm golden sunset light",
    "ethereal backlit illumination", "matte look with lifted shadows",
]

FILM_STOCKS = [
    "modern cinema film emulation", "faded vintage film look",
    "high-contrast black and white", "clean commercial look", "subtle organic film grain",
]


def _pick(pool: Sequence[str], rng: Optional[random.Random]) -> str:
    return (rng or random).choice(pool)


def inspiration_meta_prompt(theme: str, rng: Optional[random.Random] = None) -> str:
    """Ask for a short greeting card scene combining the theme with random elements."""
    return f"""You are an extremely creative idea generator. Your task is to write a prompt for another AI that generates images.
Create a short, original and VISUALLY striking description for a greeting card.

Strict rules:
1. The description must always be different and unexpected.
2. It must be in English.
3. At most 15 words.
4. Reply ONLY with the description, nothing else.

Combine these elements creatively:
- Main theme: "{theme}"
- Art style: "{_pick(STYLES, rng)}"
- Setting: "{_pick(SETTINGS, rng)}"
- Mood: "{_pick(MOODS, rng)}"

Example output: A cat celebrates its birthday on the moon in watercolor style.

Now it is your turn. Be bold."""


def magic_meta_prompt(rng: Optional[random.Random] = None) -> str:
    """Ask for a one-line magical effect instruction for an existing photo."""
    return (
        "You craft visual spells for a photo retouching AI. Write a short, descriptive prompt "
        "(at most 15 words) that transforms an existing photo by applying a unique and surprising "
        "magical effect. The prompt must be a direct, clear instruction for the AI performing the "
        "edit. Be creative and visually evocative. Reply ONLY with the prompt, nothing else, in "
        f"English. Creatively combine a '{_pick(MAGICAL_STYLES, rng)}' style, elements such as "
        f"'{_pick(MAGICAL_ELEMENTS, rng)}' and a '{_pick(MAGICAL_MOODS, rng)}' mood. "
        "Example output: Wrap the subject in an ethereal aura of dancing particles of light."
    )


def lut_meta_prompt(rng: Optional[random.Random] = None) -> str:
    """Ask for a color grade description."""
    return f"""You are a professional colorist. Your task is to write a descriptive prompt for an AI that will apply a color grade (LUT) to an image. Be evocative and technical.

Rules:
1. At most 20 words.
2. Reply ONLY with the description, nothing else.
3. It must be in English.

Creatively combine these elements:
- Color palette: "{_pick(COLOR_PALETTES, rng)}"
- Lighting style: "{_pick(LIGHTING_STYLES, rng)}"
- Film inspiration: "{_pick(FILM_STOCKS, rng)}"

Example: A cinematic look with warm earth tones and cold, deep shadows.

Your turn."""


def clean_suggestion(text: Optional[str]) -> str:
    """Trim a model suggestion and drop quotation marks around or inside it."""
    if not text:
        return ""
    text = text.strip()
    for quote in ('"', "“", "”"):
        text = text.replace(quote, "")
    return text.strip().strip("'").strip()
