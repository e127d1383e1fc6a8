from __future__ import annotations

import json

import httpx
import pytest
import respx

from linehook.adapters.line import LineClient


@pytest.mark.asyncio
@respx.mock
async def test_reply_posts_token_and_messages() -> None:
    client = LineClient("test-access-token")
    route = respx.post(client.reply_endpoint()).mock(
        return_value=httpx.Response(
            200,
            json={"sentMessages": [{"id": "461230966842064897", "quoteToken": "IStG5h1Tz7b"}]},
            headers={"x-line-request-id": "req-1"},
        )
    )

    result = await client.reply_message("RT1", [{"type": "text", "text": "echo"}])

    assert route.called
    request = route.calls.last.request
    assert request.headers["Authorization"] == "Bearer test-access-token"
    assert json.loads(request.content.decode()) == {
        "replyToken": "RT1",
        "messages": [{"type": "text", "text": "echo"}],
    }
    assert result.request_id == "req-1"
    assert result.sent_messages[0].id == "461230966842064897"
    assert result.sent_messages[0].quote_token == "IStG5h1Tz7b"


@pytest.mark.asyncio
@respx.mock
async def test_push_posts_recipient() -> None:
    client = LineClient("tok", api_base="https://api.line.me/")
    assert client.push_endpoint() == "https://api.line.me/v2/bot/message/push"
    route = respx.post(client.push_endpoint()).mock(return_value=httpx.Response(200, json={}))

    result = await client.push_message("U999", [{"type": "text", "text": "hi"}])

    payload = json.loads(route.calls.last.request.content.decode())
    assert payload == {"to": "U999", "messages": [{"type": "text", "text": "hi"}]}
    assert result.sent_messages == []


@pytest.mark.asyncio
@respx.mock
async def test_error_status_raises() -> None:
    client = LineClient("tok")
    respx.post(client.reply_endpoint()).mock(
        return_value=httpx.Response(400, json={"message": "Invalid reply token"})
    )

    with pytest.raises(httpx.HTTPStatusError):
        await client.reply_message("expired", [{"type": "text", "text": "x"}])


@pytest.mark.asyncio
@respx.mock
async def test_injected_http_client_is_used() -> None:
    route = respx.post("https://api.line.me/v2/bot/message/push").mock(
        return_value=httpx.Response(200, text="")
    )
    async with httpx.AsyncClient() as http_client:
        client = LineClient("tok", http_client=http_client)
        result = await client.push_message("U1", [{"type": "text", "text": "x"}])

    assert route.called
    assert result.data is None
