from __future__ import annotations

import asyncio
from typing import List

import httpx
import pytest

from linehook.decoder import decode_payload
from linehook.errors import DeliveryError
from linehook.helper import LineHelper
from linehook.messenger import Messenger, normalize_messages
from linehook.types import StickerMessage, TextMessage
from tests.conftest import RecordingTransport
from tests.fixtures.line_events import follow_event, text_message_event, webhook_body


def test_normalize_single_and_list_identical() -> None:
    message = {"type": "text", "text": "echo"}
    assert normalize_messages(message) == normalize_messages([message]) == [message]


def test_normalize_models_to_camel_case() -> None:
    messages = normalize_messages(
        [TextMessage(text="hi", quote_token="q1"), StickerMessage(package_id="446", sticker_id="1988")]
    )
    assert messages == [
        {"type": "text", "text": "hi", "quoteToken": "q1"},
        {"type": "sticker", "packageId": "446", "stickerId": "1988"},
    ]


def test_normalize_rejects_untyped_and_unsupported() -> None:
    with pytest.raises(ValueError):
        normalize_messages({"text": "missing type"})
    with pytest.raises(TypeError):
        normalize_messages(["plain string"])  # type: ignore[list-item]


@pytest.mark.asyncio
async def test_reply_single_vs_list_same_transport_call(transport: RecordingTransport) -> None:
    messenger = Messenger(transport)
    message = {"type": "text", "text": "echo"}

    await messenger.reply("RT1", message)
    await messenger.reply("RT1", [message])

    assert transport.calls[0] == transport.calls[1] == ("reply", "RT1", [message])


@pytest.mark.asyncio
async def test_push_forwards_recipient(transport: RecordingTransport) -> None:
    await Messenger(transport).push("U999", TextMessage(text="hello"))
    assert transport.calls == [("push", "U999", [{"type": "text", "text": "hello"}])]


@pytest.mark.asyncio
async def test_transport_failure_wrapped_in_delivery_error() -> None:
    cause = RuntimeError("connection reset")
    messenger = Messenger(RecordingTransport(fail_with=cause))

    with pytest.raises(DeliveryError) as excinfo:
        await messenger.reply("RT1", {"type": "text", "text": "x"})

    assert excinfo.value.cause is cause
    assert excinfo.value.__cause__ is cause
    assert excinfo.value.operation == "reply"


@pytest.mark.asyncio
async def test_http_status_failure_keeps_status_code() -> None:
    request = httpx.Request("POST", "https://api.line.me/v2/bot/message/push")
    response = httpx.Response(429, request=request)
    cause = httpx.HTTPStatusError("rate limited", request=request, response=response)

    with pytest.raises(DeliveryError) as excinfo:
        await Messenger(RecordingTransport(fail_with=cause)).push("U1", {"type": "text", "text": "x"})

    assert excinfo.value.status_code == 429


@pytest.mark.asyncio
async def test_failed_push_fails_dispatch_but_sibling_completes() -> None:
    transport = RecordingTransport(fail_with=RuntimeError("push rejected"))
    events = decode_payload(webhook_body([text_message_event(), follow_event()])).events
    line = LineHelper(events, transport)
    sibling_done: List[str] = []

    async def pusher(event) -> None:
        await line.push(event.source.user_id, {"type": "text", "text": "hi"})

    async def sibling(event) -> None:
        await asyncio.sleep(0.01)
        sibling_done.append(event.type)

    line.on("message:text", pusher).on("follow", sibling)

    with pytest.raises(DeliveryError):
        await line.handle()

    assert sibling_done == ["follow"]
    assert transport.calls[0][0] == "push"


@pytest.mark.asyncio
async def test_helper_accessors(transport: RecordingTransport) -> None:
    payload = decode_payload(webhook_body([follow_event()], destination="Ubot"))
    line = LineHelper(payload.events, transport, destination=payload.destination)

    assert line.destination == "Ubot"
    assert line.client is transport
    assert [e.type for e in line.events] == ["follow"]
    # events accessor hands out a copy
    line.events.clear()
    assert len(line.events) == 1
