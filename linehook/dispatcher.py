"""Per-request handler registry and concurrent event dispatch."""

from __future__ import annotations

import asyncio
import inspect
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, List, Optional, Sequence, Union

from linehook.logger import LineLogger
from linehook.types import WILDCARD, BaseEvent, EventType, LoggerProtocol, MessageEvent, MessageType

EventHandler = Callable[[Any], Union[None, Awaitable[None]]]

MESSAGE_SELECTOR_PREFIX = f"{EventType.MESSAGE.value}:"

SELECTORS = frozenset(
    [WILDCARD]
    + [e.value for e in EventType]
    + [f"{MESSAGE_SELECTOR_PREFIX}{m.value}" for m in MessageType]
)


class DispatcherState(str, Enum):
    ACCEPTING = "accepting"
    DISPATCHED = "dispatched"


def _selector_key(selector: Union[str, EventType]) -> str:
    key = selector.value if isinstance(selector, Enum) else selector
    if key not in SELECTORS:
        raise ValueError(f"Unknown event selector: {selector!r}")
    return key


def selectors_for(event: BaseEvent) -> List[str]:
    """Selectors matching an event, in the order their handlers are launched.

    Wildcard first, then `message:<subtype>` for message events that carry
    content, then the bare event type.
    """
    selectors = [WILDCARD]
    if isinstance(event, MessageEvent) and event.message is not None:
        selectors.append(f"{MESSAGE_SELECTOR_PREFIX}{event.message.type}")
    selectors.append(str(getattr(event, "type", "")))
    return selectors


class EventDispatcher:
    """Routes webhook events to registered handlers.

    One instance belongs to one webhook request. Handlers registered under the
    same selector run in registration order; registering a handler twice runs
    it twice.

    Example:
        >>> dispatcher = EventDispatcher()
        >>> dispatcher.on("message:text", handle_text).on("*", log_event)
        >>> await dispatcher.dispatch(payload.events)
    """

    def __init__(self, logger: Optional[LoggerProtocol] = None) -> None:
        self._handlers: Dict[str, List[EventHandler]] = {}
        self._logger: LoggerProtocol = logger or LineLogger()
        self.state = DispatcherState.ACCEPTING

    def on(self, selector: Union[str, EventType], handler: EventHandler) -> "EventDispatcher":
        """Append `handler` to the list for `selector` and return self for chaining."""
        key = _selector_key(selector)
        self._handlers.setdefault(key, []).append(handler)
        self._logger.debug("Handler registered", {"eventType": key})
        return self

    def handlers(self, selector: Union[str, EventType]) -> List[EventHandler]:
        """Copy of the handlers registered under `selector`."""
        return list(self._handlers.get(_selector_key(selector), []))

    async def dispatch(self, events: Sequence[BaseEvent]) -> None:
        """Run every matching handler for every event and wait for all of them.

        Handlers are launched as separate tasks in event order and, per
        event, wildcard -> message subtype -> bare type. None is awaited
        before the next is launched. Once all have settled, the first failure
        in launch order is re-raised; the others are logged.
        """
        if self.state is DispatcherState.DISPATCHED:
            self._logger.warning("Dispatcher already ran; events are being dispatched again")
        self.state = DispatcherState.DISPATCHED

        start = time.perf_counter()
        self._logger.section("Event Handler Execution")
        self._logger.info(f"Processing {len(events)} event(s)")

        tasks: List[asyncio.Task[None]] = []
        for event in events:
            self._logger.debug("Event received", event)
            for selector in selectors_for(event):
                handlers = self._handlers.get(selector, [])
                if not handlers:
                    continue
                if selector != WILDCARD:
                    self._logger.debug(f"Executing {len(handlers)} handler(s) for {selector}")
                for handler in handlers:
                    tasks.append(asyncio.ensure_future(_invoke(handler, event)))

        results = await asyncio.gather(*tasks, return_exceptions=True)
        duration_ms = round((time.perf_counter() - start) * 1000)

        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            self._logger.error(
                f"Handler execution failed after {duration_ms}ms",
                {"failed": len(failures), "totalHandlers": len(tasks)},
            )
            for extra in failures[1:]:
                self._logger.error("Additional handler failure", extra)
            raise failures[0]

        self._logger.success(
            "All handlers completed successfully",
            {"totalHandlers": len(tasks), "duration": f"{duration_ms}ms"},
        )


async def _invoke(handler: EventHandler, event: BaseEvent) -> None:
    result = handler(event)
    if inspect.isawaitable(result):
        await result
