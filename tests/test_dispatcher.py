from __future__ import annotations

import asyncio
from typing import List

import pytest

from linehook.decoder import decode_payload
from linehook.dispatcher import DispatcherState, EventDispatcher, selectors_for
from linehook.types import EventType
from tests.fixtures.line_events import (
    follow_event,
    postback_event,
    sticker_message_event,
    text_message_event,
    webhook_body,
)


def _events(*raw):
    return decode_payload(webhook_body(list(raw))).events


def test_selectors_for_message_and_plain_events() -> None:
    text, follow = _events(text_message_event(), follow_event())
    assert selectors_for(text) == ["*", "message:text", "message"]
    assert selectors_for(follow) == ["*", "follow"]


def test_selectors_for_message_without_content() -> None:
    (event,) = _events({"type": "message", "replyToken": "RT1"})
    assert selectors_for(event) == ["*", "message"]


def test_unknown_selector_rejected() -> None:
    dispatcher = EventDispatcher()
    with pytest.raises(ValueError):
        dispatcher.on("message:hologram", lambda e: None)
    with pytest.raises(ValueError):
        dispatcher.on("messages", lambda e: None)


def test_on_returns_self_and_accepts_enum() -> None:
    dispatcher = EventDispatcher()
    handler = lambda e: None  # noqa: E731
    assert dispatcher.on(EventType.FOLLOW, handler) is dispatcher
    assert dispatcher.handlers("follow") == [handler]


@pytest.mark.asyncio
async def test_wildcard_then_subtype_then_type_order() -> None:
    calls: List[str] = []
    completed: List[str] = []

    def make(name: str):
        async def handler(event) -> None:
            calls.append(name)
            await asyncio.sleep(0)
            completed.append(name)

        return handler

    dispatcher = EventDispatcher()
    # Registered in reverse to show order comes from the selector, not registration
    dispatcher.on("message", make("H3"))
    dispatcher.on("message:text", make("H2"))
    dispatcher.on("*", make("H1"))

    await dispatcher.dispatch(_events(text_message_event()))

    assert calls == ["H1", "H2", "H3"]
    assert sorted(completed) == ["H1", "H2", "H3"]


@pytest.mark.asyncio
async def test_non_matching_event_runs_nothing() -> None:
    calls: List[str] = []
    dispatcher = EventDispatcher().on("message:text", lambda e: calls.append("text"))

    await dispatcher.dispatch(_events(follow_event()))

    assert calls == []


@pytest.mark.asyncio
async def test_subtype_handlers_only_see_their_subtype() -> None:
    seen: List[str] = []
    dispatcher = EventDispatcher()
    dispatcher.on("message:sticker", lambda e: seen.append(f"sticker:{e.message.sticker_id}"))
    dispatcher.on("message:text", lambda e: seen.append(f"text:{e.message.text}"))

    await dispatcher.dispatch(_events(sticker_message_event(), text_message_event(text="yo")))

    assert seen == ["sticker:1988", "text:yo"]


@pytest.mark.asyncio
async def test_duplicate_registration_runs_twice() -> None:
    calls: List[str] = []

    def handler(event) -> None:
        calls.append(event.type)

    dispatcher = EventDispatcher().on("follow", handler).on("follow", handler)
    await dispatcher.dispatch(_events(follow_event()))

    assert calls == ["follow", "follow"]


@pytest.mark.asyncio
async def test_events_launched_in_sequence_order() -> None:
    seen: List[str] = []
    dispatcher = EventDispatcher().on("*", lambda e: seen.append(e.type))

    await dispatcher.dispatch(_events(follow_event(), postback_event(), text_message_event()))

    assert seen == ["follow", "postback", "message"]


@pytest.mark.asyncio
async def test_handlers_run_concurrently() -> None:
    # The first handler waits for the second; sequential awaiting would deadlock
    gate = asyncio.Event()

    async def waiter(event) -> None:
        await asyncio.wait_for(gate.wait(), timeout=1)

    async def opener(event) -> None:
        gate.set()

    dispatcher = EventDispatcher().on("*", waiter).on("follow", opener)
    await dispatcher.dispatch(_events(follow_event()))

    assert gate.is_set()


@pytest.mark.asyncio
async def test_failure_propagates_after_siblings_finish() -> None:
    finished: List[str] = []

    async def boom(event) -> None:
        raise RuntimeError("handler exploded")

    async def slow(event) -> None:
        await asyncio.sleep(0.01)
        finished.append("slow")

    dispatcher = EventDispatcher().on("*", boom).on("follow", slow)

    with pytest.raises(RuntimeError, match="handler exploded"):
        await dispatcher.dispatch(_events(follow_event()))

    assert finished == ["slow"]


@pytest.mark.asyncio
async def test_first_failure_in_launch_order_wins() -> None:
    async def late_failure(event) -> None:
        await asyncio.sleep(0.01)
        raise KeyError("first launched")

    def early_failure(event) -> None:
        raise ValueError("second launched")

    dispatcher = EventDispatcher().on("*", late_failure).on("follow", early_failure)

    with pytest.raises(KeyError):
        await dispatcher.dispatch(_events(follow_event()))


@pytest.mark.asyncio
async def test_sync_handler_exception_does_not_stop_launching() -> None:
    calls: List[str] = []

    def bad(event) -> None:
        raise RuntimeError("sync failure")

    dispatcher = EventDispatcher().on("*", bad).on("follow", lambda e: calls.append("after"))

    with pytest.raises(RuntimeError):
        await dispatcher.dispatch(_events(follow_event()))

    assert calls == ["after"]


@pytest.mark.asyncio
async def test_state_moves_to_dispatched_and_redispatch_still_runs() -> None:
    calls: List[str] = []
    dispatcher = EventDispatcher().on("follow", lambda e: calls.append("x"))
    assert dispatcher.state is DispatcherState.ACCEPTING

    await dispatcher.dispatch(_events(follow_event()))
    assert dispatcher.state is DispatcherState.DISPATCHED

    await dispatcher.dispatch(_events(follow_event()))
    assert calls == ["x", "x"]


@pytest.mark.asyncio
async def test_empty_batch_completes() -> None:
    dispatcher = EventDispatcher().on("*", lambda e: None)
    await dispatcher.dispatch([])
    assert dispatcher.state is DispatcherState.DISPATCHED


@pytest.mark.asyncio
async def test_message_without_content_reaches_wildcard_and_message_handlers() -> None:
    calls: List[str] = []
    dispatcher = EventDispatcher()
    dispatcher.on("*", lambda e: calls.append("*"))
    dispatcher.on("message:text", lambda e: calls.append("text"))
    dispatcher.on("message", lambda e: calls.append("message"))

    await dispatcher.dispatch(
        _events({"type": "message", "replyToken": "RT1", "source": {"type": "user", "userId": "U999"}})
    )

    assert calls == ["*", "message"]


@pytest.mark.asyncio
async def test_incomplete_event_does_not_hide_its_neighbours() -> None:
    seen: List[str] = []
    dispatcher = EventDispatcher().on("*", lambda e: seen.append(e.type))

    await dispatcher.dispatch(_events(follow_event(), {"type": "postback", "replyToken": "RT3"}))

    assert seen == ["follow", "postback"]
