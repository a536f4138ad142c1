"""
Unit tests for the Gemini service and prompt idea helpers.

The genai client is replaced with a stub returning SimpleNamespace
responses shaped like google-genai's GenerateContentResponse.
"""

import base64
import random
from types import SimpleNamespace

import pytest

from photo_editor.errors import SafetyBlockError, TransientOrUnknownError, ValidationError
from photo_editor.server.services import GeminiService
from photo_editor.server.services.gemini_service import clean_base64, finish_reason_name
from photo_editor.server.services.prompt_ideas import (
    STYLES,
    clean_suggestion,
    inspiration_meta_prompt,
    lut_meta_prompt,
    magic_meta_prompt,
)

IMAGE_B64 = base64.b64encode(b"input-image").decode()


class StubModels:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def generate_content(self, **kwargs):
        self.calls.append(kwargs)
        return self.response


def make_service(response):
    models = StubModels(response)
    service = GeminiService(
        client=SimpleNamespace(models=models),
        image_model="image-model",
        text_model="text-model",
        rng=random.Random(7),
    )
    return service, models


def image_response(data=b"edited-image", mime_type="image/png", finish_reason="STOP"):
    part_text = SimpleNamespace(text="Here you go", inline_data=None)
    part_image = SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type))
    candidate = SimpleNamespace(
        finish_reason=finish_reason,
        content=SimpleNamespace(parts=[part_text, part_image]),
    )
    return SimpleNamespace(candidates=[candidate])


def text_response(text, finish_reason="STOP"):
    return SimpleNamespace(
        text=text,
        candidates=[SimpleNamespace(finish_reason=finish_reason, content=None)],
    )


# ----------------------------------------------------------------------
# Image editing
# ----------------------------------------------------------------------

def test_edit_returns_first_image_as_data_uri():
    service, models = make_service(image_response(mime_type="image/jpeg"))

    result = service.edit_image(f"data:image/png;base64,{IMAGE_B64}", "image/png", "Make it blue")

    assert result == "data:image/jpeg;base64," + base64.b64encode(b"edited-image").decode()
    call = models.calls[0]
    assert call["model"] == "image-model"
    assert call["contents"][1] == "Make it blue"


def test_edit_defaults_output_mime():
    service, _ = make_service(image_response(mime_type=None))
    assert service.edit_image(IMAGE_B64, "image/png", "x").startswith("data:image/png;base64,")


def test_edit_safety_block():
    service, _ = make_service(image_response(finish_reason="SAFETY"))
    with pytest.raises(SafetyBlockError) as exc_info:
        service.edit_image(IMAGE_B64, "image/png", "x")
    assert exc_info.value.message == "Request blocked for safety reasons."
    assert exc_info.value.status_code == 403


def test_edit_other_finish_reason():
    service, _ = make_service(image_response(finish_reason="RECITATION"))
    with pytest.raises(TransientOrUnknownError) as exc_info:
        service.edit_image(IMAGE_B64, "image/png", "x")
    assert exc_info.value.message == "Processing interrupted, reason: RECITATION"


def test_edit_without_candidates():
    service, _ = make_service(SimpleNamespace(candidates=[]))
    with pytest.raises(TransientOrUnknownError) as exc_info:
        service.edit_image(IMAGE_B64, "image/png", "x")
    assert exc_info.value.message == "The AI did not return a valid response."


def test_edit_without_image_part():
    response = image_response()
    response.candidates[0].content.parts = [SimpleNamespace(text="Sorry", inline_data=None)]
    service, _ = make_service(response)
    with pytest.raises(TransientOrUnknownError) as exc_info:
        service.edit_image(IMAGE_B64, "image/png", "x")
    assert exc_info.value.message == "No image data found in the API response."


def test_edit_rejects_invalid_base64():
    service, models = make_service(image_response())
    with pytest.raises(ValidationError):
        service.edit_image("%%% not base64 %%%", "image/png", "x")
    assert models.calls == []


# ----------------------------------------------------------------------
# Text suggestions
# ----------------------------------------------------------------------

def test_inspiration_prompt_is_cleaned():
    service, models = make_service(text_response('  "A dragon\'s birthday party in pixel art"  '))

    prompt = service.generate_inspiration_prompt("Birthday")

    assert prompt == "A dragon's birthday party in pixel art"
    call = models.calls[0]
    assert call["model"] == "text-model"
    assert 'Main theme: "Birthday"' in call["contents"]


def test_magic_and_lut_prompts():
    service, _ = make_service(text_response("Glowing fireflies everywhere"))
    assert service.generate_magic_prompt() == "Glowing fireflies everywhere"
    assert service.generate_lut_prompt() == "Glowing fireflies everywhere"


def test_text_safety_block():
    service, _ = make_service(text_response(None, finish_reason="SAFETY"))
    with pytest.raises(SafetyBlockError) as exc_info:
        service.generate_magic_prompt()
    assert "magic" in exc_info.value.message


def test_empty_text_response():
    service, _ = make_service(text_response("   "))
    with pytest.raises(TransientOrUnknownError):
        service.generate_lut_prompt()


# ----------------------------------------------------------------------
# Helpers
# ----------------------------------------------------------------------

def test_clean_base64():
    assert clean_base64("data:image/png;base64,AAAA") == "AAAA"
    assert clean_base64("AAAA") == "AAAA"


def test_finish_reason_name():
    assert finish_reason_name(None) is None
    assert finish_reason_name("STOP") == "STOP"
    assert finish_reason_name(SimpleNamespace(value="SAFETY")) == "SAFETY"


@pytest.mark.parametrize("raw,expected", [
    ('"Quoted idea"', "Quoted idea"),
    ("“Curly quotes”", "Curly quotes"),
    ("'Single quoted'", "Single quoted"),
    ("  It's fine  ", "It's fine"),
    ("", ""),
    (None, ""),
])
def test_clean_suggestion(raw, expected):
    assert clean_suggestion(raw) == expected


def test_meta_prompts_vary_with_rng():
    prompts = {inspiration_meta_prompt("Birthday", random.Random(seed)) for seed in range(10)}
    assert len(prompts) > 1
    assert any(style in next(iter(prompts)) for style in STYLES)
    assert "English" in magic_meta_prompt(random.Random(1))
    assert "colorist" in lut_meta_prompt(random.Random(1))
