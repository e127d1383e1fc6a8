from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx

from linehook.config import DEFAULT_API_BASE
from linehook.types import MessagingTransport, SendResult, SentMessage


class LineClient(MessagingTransport):
    """LINE Messaging API client implementing the MessagingTransport protocol.

    Only the reply and push endpoints are wrapped. Non-2xx responses raise
    `httpx.HTTPStatusError`; nothing is retried here.

    An `httpx.AsyncClient` may be injected (shared connection pool, custom
    transport in tests); otherwise one is opened per call.
    """

    def __init__(
        self,
        channel_access_token: str,
        api_base: str = DEFAULT_API_BASE,
        timeout: float = 15.0,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.channel_access_token = channel_access_token
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.channel_access_token}",
            "Content-Type": "application/json",
        }

    def reply_endpoint(self) -> str:
        return f"{self.api_base}/v2/bot/message/reply"

    def push_endpoint(self) -> str:
        return f"{self.api_base}/v2/bot/message/push"

    async def reply_message(self, reply_token: str, messages: List[Dict[str, Any]]) -> SendResult:  # type: ignore[override]
        """Reply using the single-use token from an inbound event.

        See: https://developers.line.biz/en/reference/messaging-api/#send-reply-message
        """
        return await self._post(self.reply_endpoint(), {"replyToken": reply_token, "messages": messages})

    async def push_message(self, to: str, messages: List[Dict[str, Any]]) -> SendResult:  # type: ignore[override]
        """Push to a user, group or room at any time.

        See: https://developers.line.biz/en/reference/messaging-api/#send-push-message
        """
        return await self._post(self.push_endpoint(), {"to": to, "messages": messages})

    async def _post(self, url: str, payload: Dict[str, Any]) -> SendResult:
        if self._http_client is not None:
            response = await self._http_client.post(url, headers=self._headers(), json=payload)
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, headers=self._headers(), json=payload)

        response.raise_for_status()
        try:
            data = response.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = None

        sent = (data or {}).get("sentMessages") or []
        return SendResult(
            sent_messages=[SentMessage.model_validate(m) for m in sent if isinstance(m, dict)],
            request_id=response.headers.get("x-line-request-id"),
            data=data,
        )
