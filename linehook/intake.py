"""Webhook intake: verify, decode and hand a request-scoped helper to the route.

Runs the signature check and payload decoding for every inbound POST and
builds a `LineHelper` only when the body carried at least one event. Usable
directly (`process` + `helper_for`) or as a FastAPI dependency:

    intake = WebhookIntake(LineOptions.from_env())

    @router.post("/webhooks/line")
    async def webhook(line: Optional[LineHelper] = Depends(intake)):
        ...
"""

from __future__ import annotations

import inspect
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Awaitable, Callable, Mapping, Optional, Union

from fastapi import HTTPException, Request, status

from linehook.adapters.line import LineClient
from linehook.config import LineOptions
from linehook.decoder import decode_payload
from linehook.errors import BodyReadError, MalformedPayload
from linehook.helper import LineHelper
from linehook.logger import LineLogger
from linehook.signature import SIGNATURE_HEADER, verify_signature
from linehook.types import LoggerProtocol, MessagingTransport, WebhookPayload

BodySource = Union[bytes, str, Callable[[], Awaitable[bytes]]]


class IntakeStatus(str, Enum):
    IGNORED = "ignored"
    ACCEPTED = "accepted"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"


_STATUS_CODES = {
    IntakeStatus.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    IntakeStatus.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
}


@dataclass(frozen=True)
class IntakeResult:
    """Outcome of running one request through the intake.

    Attributes:
        status: What the route should do with the request.
        payload: Decoded body, only set when `status` is ACCEPTED.
        error: Client-facing reason for BAD_REQUEST / UNAUTHORIZED.
        request_id: Short id used to correlate log lines of one request.
    """

    status: IntakeStatus
    payload: Optional[WebhookPayload] = None
    error: Optional[str] = None
    request_id: str = ""

    @property
    def status_code(self) -> Optional[int]:
        return _STATUS_CODES.get(self.status)


def _find_header(headers: Mapping[str, str], name: str) -> Optional[str]:
    value = headers.get(name)
    if value is not None:
        return value
    lowered = name.lower()
    for key, candidate in headers.items():
        if key.lower() == lowered:
            return candidate
    return None


async def _read(body: BodySource) -> bytes:
    if callable(body):
        body = body()
        if inspect.isawaitable(body):
            body = await body
    if isinstance(body, str):
        return body.encode("utf-8")
    if not isinstance(body, (bytes, bytearray)):
        raise BodyReadError(f"Unsupported body type: {type(body).__name__}")
    return bytes(body)


class WebhookIntake:
    """Verifies and decodes webhook requests for one LINE channel.

    Raises `ConfigurationError` at construction (through `LineOptions`) when
    credentials are missing, so a misconfigured app fails at startup.
    """

    def __init__(
        self,
        options: LineOptions,
        transport: Optional[MessagingTransport] = None,
        logger: Optional[LoggerProtocol] = None,
    ) -> None:
        self.options = options
        self._logger: LoggerProtocol = logger or LineLogger(options.verbose)
        self._transport: MessagingTransport = transport or LineClient(
            options.channel_access_token, api_base=options.api_base
        )

    @property
    def transport(self) -> MessagingTransport:
        return self._transport

    async def process(
        self, method: str, headers: Mapping[str, str], body: BodySource,
    ) -> IntakeResult:
        """Run signature verification and decoding for one request.

        Non-POST requests and requests without `x-line-signature` are
        IGNORED: they are not platform callbacks. The body is only read after
        the signature header is known to be present.
        """
        if method.upper() != "POST":
            return IntakeResult(IntakeStatus.IGNORED)

        request_id = uuid.uuid4().hex[:7]
        self._logger.section(f"Webhook Request [{request_id}]")

        signature = _find_header(headers, SIGNATURE_HEADER)
        if not signature:
            self._logger.warning(f"Request ignored: Missing {SIGNATURE_HEADER} header")
            return IntakeResult(IntakeStatus.IGNORED, request_id=request_id)

        self._logger.info("Signature verification started")
        try:
            raw_body = await _read(body)
        except Exception as e:
            self._logger.error("Failed to read request body", e)
            return IntakeResult(
                IntakeStatus.BAD_REQUEST, error="Failed to read request body", request_id=request_id,
            )
        self._logger.debug(
            "Request body received",
            {"contentLength": len(raw_body), "contentType": _find_header(headers, "content-type")},
        )

        if not verify_signature(raw_body, signature, self.options.channel_secret):
            self._logger.error(
                "Signature verification failed",
                {"signatureLength": len(signature), "bodyLength": len(raw_body)},
            )
            return IntakeResult(
                IntakeStatus.UNAUTHORIZED, error="Invalid signature", request_id=request_id,
            )
        self._logger.success("Signature verified")

        try:
            payload = decode_payload(raw_body)
        except MalformedPayload as e:
            self._logger.error("Failed to parse JSON body", e)
            return IntakeResult(
                IntakeStatus.BAD_REQUEST, error="Invalid JSON body", request_id=request_id,
            )

        self._logger.info(
            "Webhook payload parsed",
            {
                "destination": payload.destination,
                "eventCount": len(payload.events),
                "eventTypes": [e.type for e in payload.events],
            },
        )
        self._logger.debug("Full webhook payload", payload)
        self._logger.success("Request processed successfully")
        self._logger.divider()
        return IntakeResult(IntakeStatus.ACCEPTED, payload=payload, request_id=request_id)

    def helper_for(self, result: IntakeResult) -> Optional[LineHelper]:
        """Build the request facade, or None when there is nothing to handle."""
        if result.status is not IntakeStatus.ACCEPTED or result.payload is None:
            return None
        if not result.payload.events:
            return None
        return LineHelper(
            result.payload.events,
            self._transport,
            destination=result.payload.destination,
            logger=self._logger,
        )

    async def __call__(self, request: Request) -> Optional[LineHelper]:
        """FastAPI dependency: reject bad requests, otherwise yield the helper or None."""
        result = await self.process(request.method, request.headers, request.body)
        request.state.line = result
        if result.status_code is not None:
            raise HTTPException(status_code=result.status_code, detail=result.error)
        return self.helper_for(result)
