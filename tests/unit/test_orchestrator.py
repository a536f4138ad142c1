"""
Unit tests for the edit orchestrator.

The relay is replaced by FakeRelayClient (see conftest); async flows are
driven with asyncio.run.
"""

import asyncio
import logging
import threading

import pytest

from photo_editor.editing import EditOrchestrator, EditSession, PanelKind
from photo_editor.editing.presets import (
    LUT_INSPIRATION_FALLBACK,
    LUTS,
    MAGIC_FALLBACK_PROMPT,
    QUICK_ACTIONS,
    card_prompt,
    lut_prompt,
)
from photo_editor.errors import (
    ConnectivityError,
    EditInProgressError,
    NoImageError,
    SafetyBlockError,
    TransientOrUnknownError,
)
from photo_editor.schemas import ImageState


@pytest.fixture
def orchestrator(session, fake_client):
    orchestrator = EditOrchestrator(session, fake_client)
    yield orchestrator
    orchestrator.close()


def sent_prompts(client):
    return [prompt for _image, prompt in client.edit_calls]


def test_brightness_adjustment_commits(orchestrator, session, fake_client, original_image, edited_image):
    session.set_adjustment("brightness", 150)

    result = asyncio.run(orchestrator.apply_adjustments())

    assert result == edited_image
    assert session.history.states == [original_image, edited_image]
    assert session.history.cursor == 1
    assert session.adjustments.is_default()
    assert fake_client.edit_calls == [(
        original_image,
        "Apply the following image adjustments: increase the brightness moderately.",
    )]


def test_default_adjustments_do_not_call_relay(orchestrator, fake_client):
    assert asyncio.run(orchestrator.apply_adjustments()) is None
    assert fake_client.edit_calls == []


def test_safety_block_keeps_history_and_adjustments(orchestrator, session, fake_client, original_image):
    fake_client.error = SafetyBlockError("Request blocked for safety reasons.")
    session.set_adjustment("brightness", 150)

    result = asyncio.run(orchestrator.apply_adjustments())

    assert result is None
    assert session.history.states == [original_image]
    assert session.adjustments.brightness == 150
    assert session.error_message == "Request blocked for safety reasons."
    assert not orchestrator.in_flight
    assert not session.edit_in_flight


def test_unexpected_exception_becomes_unknown_error(orchestrator, session, fake_client):
    fake_client.error = RuntimeError("boom")

    assert asyncio.run(orchestrator.apply_edit("Make it blue")) is None
    assert isinstance(session.error, TransientOrUnknownError)
    assert session.error_message == "An unknown error occurred. Please try again."


def test_new_edit_clears_previous_error(orchestrator, session, fake_client, edited_image):
    session.set_error(ConnectivityError())
    asyncio.run(orchestrator.apply_edit("Make it blue"))
    assert session.error is None
    assert session.current == edited_image


def test_edit_without_image_raises(fake_client):
    orchestrator = EditOrchestrator(EditSession(), fake_client)
    try:
        with pytest.raises(NoImageError):
            asyncio.run(orchestrator.apply_edit("Make it blue"))
    finally:
        orchestrator.close()


def test_empty_instruction_is_noop(orchestrator, fake_client):
    assert asyncio.run(orchestrator.apply_edit("")) is None
    assert fake_client.edit_calls == []


def test_second_edit_rejected_while_in_flight(orchestrator, session, fake_client, edited_image):
    fake_client.gate = threading.Event()

    async def scenario():
        first = asyncio.create_task(orchestrator.apply_edit("first"))
        await asyncio.sleep(0)
        assert orchestrator.in_flight
        assert session.edit_in_flight

        with pytest.raises(EditInProgressError):
            await orchestrator.apply_edit("second")
        with pytest.raises(EditInProgressError):
            await orchestrator.apply_preset("magic")

        fake_client.gate.set()
        return await first

    assert asyncio.run(scenario()) == edited_image
    assert sent_prompts(fake_client) == ["first"]
    assert len(session.history) == 2


def test_result_discarded_after_start_new(orchestrator, session, fake_client):
    fake_client.gate = threading.Event()

    async def scenario():
        task = asyncio.create_task(orchestrator.apply_edit("Make it blue"))
        await asyncio.sleep(0)
        session.start_new()
        fake_client.gate.set()
        return await task

    assert asyncio.run(scenario()) is None
    assert not session.has_image
    assert len(session.history) == 0


def test_result_discarded_after_undo(orchestrator, session, fake_client, original_image):
    intermediate = ImageState(data=b"intermediate", mime_type="image/png")
    session.commit(intermediate)
    fake_client.gate = threading.Event()

    async def scenario():
        task = asyncio.create_task(orchestrator.apply_edit("Make it blue"))
        await asyncio.sleep(0)
        session.undo()
        fake_client.gate.set()
        return await task

    assert asyncio.run(scenario()) is None
    assert session.current == original_image
    assert session.history.states == [original_image, intermediate]


def test_cancel_discards_result_and_error(orchestrator, session, fake_client, original_image, caplog):
    assert not orchestrator.cancel()

    fake_client.gate = threading.Event()
    fake_client.error = SafetyBlockError()

    async def scenario():
        task = asyncio.create_task(orchestrator.apply_edit("Make it blue"))
        await asyncio.sleep(0)
        assert orchestrator.cancel()
        fake_client.gate.set()
        return await task

    with caplog.at_level(logging.ERROR, logger="photo_editor.editing.orchestrator"):
        assert asyncio.run(scenario()) is None

    assert session.error is None
    assert session.history.states == [original_image]
    # Dropped from the error slot but still logged
    assert "Request blocked for safety reasons." in caplog.text


def test_quick_action(orchestrator, fake_client):
    asyncio.run(orchestrator.apply_preset("black_and_white"))
    assert sent_prompts(fake_client) == [QUICK_ACTIONS["black_and_white"].prompt]


def test_unknown_quick_action(orchestrator):
    with pytest.raises(ValueError):
        asyncio.run(orchestrator.apply_preset("vaporwave"))


def test_magic_uses_generated_prompt(orchestrator, fake_client):
    fake_client.prompt = "Add floating lanterns"
    asyncio.run(orchestrator.apply_preset("magic"))
    assert sent_prompts(fake_client) == ["Add floating lanterns"]


def test_magic_falls_back_when_generation_fails(orchestrator, fake_client):
    def failing_magic():
        raise ConnectivityError()

    fake_client.generate_magic_prompt = failing_magic
    asyncio.run(orchestrator.apply_magic())
    assert sent_prompts(fake_client) == [MAGIC_FALLBACK_PROMPT]


def test_submit_dispatches_by_panel(orchestrator, session, fake_client):
    async def scenario():
        await orchestrator.submit(PanelKind.LUT, "teal_orange")
        await orchestrator.submit(PanelKind.LUT, "Washed out summer film")
        await orchestrator.submit(PanelKind.CARD, "Birthday")
        await orchestrator.submit("custom", "Add a rainbow")
        await orchestrator.submit(PanelKind.ACTIONS, "sketch")

    asyncio.run(scenario())

    assert sent_prompts(fake_client) == [
        lut_prompt(LUTS["teal_orange"].prompt),
        lut_prompt("Washed out summer film"),
        card_prompt("Birthday"),
        "Add a rainbow",
        QUICK_ACTIONS["sketch"].prompt,
    ]
    assert len(session.history) == 6


def test_blank_panel_text_is_not_submitted(orchestrator, fake_client):
    async def scenario():
        assert await orchestrator.submit(PanelKind.CUSTOM, "   ") is None
        assert await orchestrator.apply_card("") is None
        assert await orchestrator.apply_lut(" ") is None
        assert await orchestrator.submit(PanelKind.ADJUSTMENTS) is None

    asyncio.run(scenario())
    assert fake_client.edit_calls == []


def test_suggest_inspiration(orchestrator, fake_client):
    fake_client.prompt = "A cake on the moon"
    assert asyncio.run(orchestrator.suggest_inspiration("birthday")) == "A cake on the moon"
    assert fake_client.prompt_calls == [("inspiration", "Birthday")]


def test_suggestion_fallbacks(orchestrator, session, fake_client):
    fake_client.error = ConnectivityError()

    idea = asyncio.run(orchestrator.suggest_inspiration("holiday"))
    assert "Holidays" in idea
    assert asyncio.run(orchestrator.suggest_lut()) == LUT_INSPIRATION_FALLBACK
    # Suggestions never touch history or the error slot
    assert len(session.history) == 1
    assert session.error is None


def test_stale_unexpected_error_is_logged(orchestrator, session, fake_client, caplog):
    fake_client.gate = threading.Event()
    fake_client.error = RuntimeError("relay worker crashed")

    async def scenario():
        task = asyncio.create_task(orchestrator.apply_edit("Make it blue"))
        await asyncio.sleep(0)
        session.start_new()
        fake_client.gate.set()
        return await task

    with caplog.at_level(logging.ERROR, logger="photo_editor.editing.orchestrator"):
        assert asyncio.run(scenario()) is None

    assert session.error is None
    assert "relay worker crashed" in caplog.text


def test_edit_rejected_while_magic_prompt_pending(orchestrator, session, fake_client, edited_image):
    fake_client.prompt = "Add floating lanterns"
    fake_client.prompt_gate = threading.Event()

    async def scenario():
        magic = asyncio.create_task(orchestrator.apply_magic())
        await asyncio.sleep(0)
        assert orchestrator.in_flight
        assert session.edit_in_flight

        with pytest.raises(EditInProgressError):
            await orchestrator.apply_edit("other edit")
        with pytest.raises(EditInProgressError):
            await orchestrator.apply_magic()
        with pytest.raises(EditInProgressError):
            session.upload(edited_image, name="other.png")

        fake_client.prompt_gate.set()
        return await magic

    assert asyncio.run(scenario()) == edited_image
    assert sent_prompts(fake_client) == ["Add floating lanterns"]
    assert len(session.history) == 2
    assert not orchestrator.in_flight
    assert not session.edit_in_flight


def test_cancel_during_magic_prompt_skips_edit(orchestrator, session, fake_client, original_image):
    fake_client.prompt_gate = threading.Event()

    async def scenario():
        magic = asyncio.create_task(orchestrator.apply_magic())
        await asyncio.sleep(0)
        assert orchestrator.cancel()
        fake_client.prompt_gate.set()
        return await magic

    assert asyncio.run(scenario()) is None
    assert fake_client.edit_calls == []
    assert session.history.states == [original_image]
    assert not orchestrator.in_flight
