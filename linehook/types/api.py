from __future__ import annotations

from typing import List, Union

from pydantic import BaseModel, Field

from .messages import Message
from .results import SendResult


class PushMessageRequest(BaseModel):
    """Outbound push request model for the `/messages/push` endpoint.

    Attributes:
        to: User, group or room id to push to.
        messages: One message object or a list of them. The `type`
            discriminator in JSON must be one of: "text", "image", "video",
            "audio", "location" or "sticker".

    Examples:
        Single:
            {
              "to": "U4af4980629...",
              "messages": {"type": "text", "text": "Hello"}
            }

        Several:
            {
              "to": "C1234567890...",
              "messages": [
                {"type": "text", "text": "Look"},
                {"type": "sticker", "packageId": "446", "stickerId": "1988"}
              ]
            }
    """

    to: str = Field(min_length=1)
    messages: Union[Message, List[Message]]


class SendMessageResponse(BaseModel):
    """Standard response schema for outbound send API endpoints.

    Attributes:
        ok: Indicates request handling success.
        result: Transport `SendResult` containing provider response details.
    """

    ok: bool
    result: SendResult
