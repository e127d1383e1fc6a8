from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Optional

from fastapi import APIRouter, Depends, HTTPException, Request

from linehook.config import LineOptions
from linehook.errors import DeliveryError
from linehook.helper import LineHelper
from linehook.intake import IntakeResult, WebhookIntake
from linehook.messenger import Messenger
from linehook.types import (
    BaseEvent,
    FollowEvent,
    MessageEvent,
    PushMessageRequest,
    SendMessageResponse,
    TextMessage,
)
from server.config import get_settings

logger = logging.getLogger("linehook.server")

router = APIRouter(prefix="", tags=["line"])

WELCOME_TEXT = "Thanks for adding me! Send me any text and I'll echo it back."
PUSH_FOLLOW_UP_TEXT = "This is a push message!"


@lru_cache(maxsize=1)
def get_intake() -> WebhookIntake:
    """Build the intake for the configured channel (cached for the process)."""
    settings = get_settings()
    options = LineOptions(
        channel_secret=settings.line_channel_secret,
        channel_access_token=settings.line_channel_access_token,
        verbose=settings.line_verbose,
        api_base=settings.line_api_base,
    )
    return WebhookIntake(options)


async def line_helper(
    request: Request, intake: WebhookIntake = Depends(get_intake),
) -> Optional[LineHelper]:
    return await intake(request)


def register_handlers(line: LineHelper) -> LineHelper:
    """Echo bot: repeat text back, greet new followers, log every event."""

    async def _log_event(event: BaseEvent) -> None:
        logger.info("LINE event received", extra={"event_type": event.type})

    async def _echo_text(event: MessageEvent) -> None:
        if not event.reply_token or event.message is None:
            return
        await line.reply(event.reply_token, TextMessage(text=f"You said: {event.message.text}"))
        user_id = event.source.user_id if event.source else None
        if user_id:
            await line.push(user_id, TextMessage(text=PUSH_FOLLOW_UP_TEXT))

    async def _greet(event: FollowEvent) -> None:
        if event.reply_token:
            await line.reply(event.reply_token, TextMessage(text=WELCOME_TEXT))

    return line.on("*", _log_event).on("message:text", _echo_text).on("follow", _greet)


@router.post("/webhooks/line")
async def line_webhook(
    request: Request, line: Optional[LineHelper] = Depends(line_helper),
) -> dict[str, Any]:
    """LINE webhook endpoint.

    - Rejects bad signatures (401) and malformed bodies (400) via the intake
    - Ignores requests that are not platform callbacks
    - Runs the bot's handlers for every event and waits for them to finish
    - A failed reply or push surfaces as 502
    """
    if line is None:
        result: Optional[IntakeResult] = getattr(request.state, "line", None)
        status = result.status.value if result is not None else "ignored"
        return {"ok": True, "handled": 0, "intake": status}

    register_handlers(line)
    try:
        await line.handle()
    except DeliveryError as e:
        raise HTTPException(status_code=502, detail=f"Send error: {e}")
    return {"ok": True, "handled": len(line.events), "destination": line.destination}


@router.post("/messages/push")
async def push_message(
    payload: PushMessageRequest, intake: WebhookIntake = Depends(get_intake),
) -> SendMessageResponse:
    messenger = Messenger(intake.transport)
    try:
        result = await messenger.push(payload.to, payload.messages)
    except DeliveryError as e:
        raise HTTPException(status_code=502, detail=f"Send error: {e}")
    return SendMessageResponse(ok=True, result=result)
