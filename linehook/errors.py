"""Exception hierarchy for webhook intake and outbound delivery."""

from __future__ import annotations

from typing import Optional


class LineWebhookError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(LineWebhookError):
    """Required channel credentials are missing; the plugin cannot be used."""


class BodyReadError(LineWebhookError):
    """The raw request body could not be read."""


class MalformedPayload(LineWebhookError):
    """The verified body is not valid JSON or does not match the webhook envelope."""


class DeliveryError(LineWebhookError):
    """A reply or push call failed at the transport level.

    The transport's own exception is kept as `cause` (and as `__cause__`
    when raised with `raise ... from`).
    """

    def __init__(self, operation: str, cause: BaseException, status_code: Optional[int] = None) -> None:
        self.operation = operation
        self.cause = cause
        self.status_code = status_code
        super().__init__(f"{operation} failed: {cause}")
