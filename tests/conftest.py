"""
Shared fixtures for photo editor tests.
"""

import threading
from io import BytesIO
from types import SimpleNamespace

import pytest
from PIL import Image

from photo_editor.editing import EditSession
from photo_editor.schemas import ImageState


def make_png(color=(255, 0, 0), size=(4, 4)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def original_image(png_bytes):
    return ImageState(data=png_bytes, mime_type="image/png")


@pytest.fixture
def edited_image():
    return ImageState(data=make_png((0, 0, 255)), mime_type="image/png")


@pytest.fixture
def session(original_image):
    session = EditSession()
    session.upload(original_image, name="photo.png")
    return session


class FakeRelayClient:
    """
    Records relay calls and returns canned results.

    Set `error` to make every call raise it. Set `gate` (or
    `prompt_gate`) to a threading.Event to hold edit() (or the prompt
    requests) until the event is set.
    """

    def __init__(self, result=None, prompt="A suggested prompt"):
        self.result = result
        self.prompt = prompt
        self.error = None
        self.gate = None
        self.prompt_gate = None
        self.started = threading.Event()
        self.edit_calls = []
        self.prompt_calls = []

    def edit(self, image, prompt):
        self.edit_calls.append((image, prompt))
        self.started.set()
        if self.gate is not None:
            self.gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.result

    def _suggest(self, name, *args):
        self.prompt_calls.append((name,) + args)
        if self.prompt_gate is not None:
            self.prompt_gate.wait(timeout=5)
        if self.error is not None:
            raise self.error
        return self.prompt

    def generate_inspiration_prompt(self, theme):
        return self._suggest("inspiration", theme)

    def generate_magic_prompt(self):
        return self._suggest("magic")

    def generate_lut_prompt(self):
        return self._suggest("lut")


@pytest.fixture
def fake_client(edited_image):
    return FakeRelayClient(result=edited_image)


class ManualScheduler:
    """Collects scheduled callbacks; tests fire them explicitly."""

    def __init__(self):
        self.timers = []

    def __call__(self, delay, callback):
        timer = SimpleNamespace(delay=delay, callback=callback, cancelled=False)
        timer.cancel = lambda: setattr(timer, "cancelled", True)
        self.timers.append(timer)
        return timer

    @property
    def pending(self):
        return [t for t in self.timers if not t.cancelled]

    def fire(self):
        for timer in self.pending:
            timer.cancelled = True
            timer.callback()


@pytest.fixture
def scheduler():
    return ManualScheduler()
