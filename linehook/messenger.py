"""Reply and push on behalf of webhook handlers."""

from __future__ import annotations

import time
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import httpx

from linehook.errors import DeliveryError
from linehook.logger import LineLogger, mask
from linehook.types import LoggerProtocol, MessagingTransport, OutboundMessage, SendResult

MessageLike = Union[OutboundMessage, Mapping[str, Any]]
Messages = Union[MessageLike, Sequence[MessageLike]]


def normalize_messages(messages: Messages) -> List[Dict[str, Any]]:
    """Turn one message or a list of messages into the list the API expects.

    Models are serialized to camelCase JSON; mappings are passed through as
    plain dicts. `reply(token, m)` and `reply(token, [m])` therefore produce
    the same request.
    """
    if isinstance(messages, (OutboundMessage, Mapping)):
        items: Sequence[MessageLike] = [messages]
    else:
        items = messages

    normalized: List[Dict[str, Any]] = []
    for message in items:
        if isinstance(message, OutboundMessage):
            normalized.append(message.to_payload())
        elif isinstance(message, Mapping):
            if "type" not in message:
                raise ValueError("message objects must carry a 'type'")
            normalized.append(dict(message))
        else:
            raise TypeError(f"Unsupported message object: {type(message).__name__}")
    return normalized


class Messenger:
    """Sends messages through a MessagingTransport.

    Transport failures are wrapped in `DeliveryError` and propagate to the
    caller. Reply tokens are single-use and expire quickly; respecting that
    is the caller's job.
    """

    def __init__(self, transport: MessagingTransport, logger: Optional[LoggerProtocol] = None) -> None:
        self.transport = transport
        self._logger: LoggerProtocol = logger or LineLogger()

    async def reply(self, reply_token: str, messages: Messages) -> SendResult:
        message_list = normalize_messages(messages)
        self._logger.info(
            "Sending reply",
            {
                "replyToken": mask(reply_token, 20),
                "messageCount": len(message_list),
                "messageTypes": [m.get("type") for m in message_list],
            },
        )
        self._logger.debug("Reply messages content", message_list)

        start = time.perf_counter()
        try:
            result = await self.transport.reply_message(reply_token, message_list)
        except Exception as e:
            self._logger.error("Failed to send reply", e)
            raise DeliveryError("reply", e, _status_code(e)) from e
        self._logger.success(f"Reply sent successfully ({_elapsed_ms(start)}ms)")
        return result

    async def push(self, to: str, messages: Messages) -> SendResult:
        message_list = normalize_messages(messages)
        self._logger.info(
            "Pushing message",
            {
                "to": mask(to, 10),
                "messageCount": len(message_list),
                "messageTypes": [m.get("type") for m in message_list],
            },
        )
        self._logger.debug("Push messages content", message_list)

        start = time.perf_counter()
        try:
            result = await self.transport.push_message(to, message_list)
        except Exception as e:
            self._logger.error("Failed to push message", e)
            raise DeliveryError("push", e, _status_code(e)) from e
        self._logger.success(f"Push message sent successfully ({_elapsed_ms(start)}ms)")
        return result


def _status_code(error: Exception) -> Optional[int]:
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code
    return None


def _elapsed_ms(start: float) -> int:
    return round((time.perf_counter() - start) * 1000)
