from __future__ import annotations

from typing import List, Optional, Union

from linehook.dispatcher import EventDispatcher, EventHandler
from linehook.logger import LineLogger
from linehook.messenger import Messages, Messenger
from linehook.types import BaseEvent, EventType, LoggerProtocol, MessagingTransport, SendResult


class LineHelper:
    """Request-scoped facade handed to webhook route code.

    Bundles a fresh `EventDispatcher` for this request's events with a
    `Messenger` bound to the channel access token. Build one per request;
    never share it.

    Example:
        >>> @router.post("/webhooks/line")
        ... async def webhook(line: Optional[LineHelper] = Depends(intake)):
        ...     if line is None:
        ...         return {"ok": True, "ignored": True}
        ...     line.on("message:text", lambda e: line.reply(e.reply_token, {"type": "text", "text": e.message.text}))
        ...     await line.handle()
    """

    def __init__(
        self,
        events: List[BaseEvent],
        transport: MessagingTransport,
        destination: str = "",
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self._events = list(events)
        self._destination = destination
        self._transport = transport
        logger = logger or LineLogger()
        self._dispatcher = EventDispatcher(logger)
        self._messenger = Messenger(transport, logger)

    def on(self, selector: Union[str, EventType], handler: EventHandler) -> "LineHelper":
        """Register a handler for `*`, a bare event type or `message:<subtype>`."""
        self._dispatcher.on(selector, handler)
        return self

    async def handle(self) -> None:
        """Dispatch this request's events to the registered handlers."""
        await self._dispatcher.dispatch(self._events)

    async def reply(self, reply_token: str, messages: Messages) -> SendResult:
        return await self._messenger.reply(reply_token, messages)

    async def push(self, to: str, messages: Messages) -> SendResult:
        return await self._messenger.push(to, messages)

    @property
    def events(self) -> List[BaseEvent]:
        """Decoded events of this request, in delivery order."""
        return list(self._events)

    @property
    def destination(self) -> str:
        return self._destination

    @property
    def client(self) -> MessagingTransport:
        """Underlying transport, for API calls beyond reply and push."""
        return self._transport

    @property
    def dispatcher(self) -> EventDispatcher:
        return self._dispatcher
