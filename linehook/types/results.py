from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class SentMessage(BaseModel):
    """One message the platform accepted, as echoed back in the send response."""

    id: Optional[str] = None
    quote_token: Optional[str] = Field(default=None, alias="quoteToken")


class SendResult(BaseModel):
    """Standardized result returned by the transport after a reply or push.

    Attributes:
        sent_messages: Identifiers the platform assigned to each message sent.
        request_id: Value of the `x-line-request-id` response header, for support tickets.
        data: Raw provider response payload for debugging or advanced consumers.

    Example:
        >>> from linehook.types import SendResult
        >>> SendResult(request_id="r1").sent_messages
        []
    """

    sent_messages: List[SentMessage] = Field(default_factory=list)
    request_id: Optional[str] = None
    data: Optional[Dict[str, Any]] = None
