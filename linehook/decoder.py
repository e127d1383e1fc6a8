"""Parse a verified webhook body into typed events."""

from __future__ import annotations

import json
from typing import Union

from pydantic import ValidationError

from linehook.errors import MalformedPayload
from linehook.types import WebhookPayload


def decode_payload(raw_body: Union[bytes, str]) -> WebhookPayload:
    """Decode the raw body into a `WebhookPayload`.

    Only call this on bytes whose signature already verified. A missing
    `destination` becomes "" and a missing `events` list becomes empty;
    anything that is not a JSON object, or whose events do not validate,
    raises `MalformedPayload`.
    """
    try:
        body = json.loads(raw_body)
    except (TypeError, ValueError) as e:
        raise MalformedPayload(f"Invalid JSON body: {e}") from e

    if not isinstance(body, dict):
        raise MalformedPayload(
            f"Webhook body must be a JSON object, got {type(body).__name__}"
        )

    try:
        return WebhookPayload.model_validate(body)
    except ValidationError as e:
        raise MalformedPayload(
            f"Webhook body does not match the expected envelope: {e.error_count()} error(s)"
        ) from e
