from __future__ import annotations

from typing import Any, Dict, List, Protocol

from .results import SendResult


class MessagingTransport(Protocol):
    """Protocol for the client that talks to the LINE Messaging API.

    The messenger only depends on these two calls so tests (or alternative
    HTTP stacks) can stand in for `LineClient`.

    Responsibilities:
        - Deliver already-serialized message objects
        - Raise on any non-success response; never retry silently

    Minimal example:
        >>> class RecordingTransport:
        ...     def __init__(self) -> None:
        ...         self.calls = []
        ...     async def reply_message(self, reply_token, messages):
        ...         self.calls.append(("reply", reply_token, messages))
        ...         return SendResult()
        ...     async def push_message(self, to, messages):
        ...         self.calls.append(("push", to, messages))
        ...         return SendResult()
    """

    async def reply_message(self, reply_token: str, messages: List[Dict[str, Any]]) -> SendResult:
        """Send messages bound to a single-use reply token."""
        ...

    async def push_message(self, to: str, messages: List[Dict[str, Any]]) -> SendResult:
        """Send messages to a user, group or room id."""
        ...


class LoggerProtocol(Protocol):
    """Logging collaborator injected into the webhook components.

    Components never depend on a call here succeeding or producing output.
    """

    def debug(self, message: str, data: Any = None) -> None: ...

    def info(self, message: str, data: Any = None) -> None: ...

    def warning(self, message: str, data: Any = None) -> None: ...

    def error(self, message: str, data: Any = None) -> None: ...

    def success(self, message: str, data: Any = None) -> None: ...

    def section(self, title: str) -> None: ...

    def divider(self) -> None: ...
