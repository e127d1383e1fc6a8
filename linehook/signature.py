"""Webhook request signing (`x-line-signature`)."""

from __future__ import annotations

import base64
import hashlib
import hmac
from typing import Optional, Union

SIGNATURE_HEADER = "x-line-signature"


def _as_bytes(value: Union[bytes, str]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def generate_signature(raw_body: Union[bytes, str], channel_secret: str) -> str:
    """Return the base64 HMAC-SHA256 digest the platform puts in `x-line-signature`."""
    digest = hmac.new(
        channel_secret.encode("utf-8"), _as_bytes(raw_body), hashlib.sha256,
    ).digest()
    return base64.b64encode(digest).decode("ascii")


def verify_signature(
    raw_body: Union[bytes, str], signature: Optional[str], channel_secret: str,
) -> bool:
    """Check a webhook body against its signature header value.

    The digest must be computed over the exact bytes received; any
    re-serialization of the JSON changes the bytes and fails verification.
    Empty or missing signatures never verify. Comparison is constant-time
    via hmac.compare_digest.
    """
    if not signature:
        return False
    expected = generate_signature(raw_body, channel_secret)
    return hmac.compare_digest(expected.encode("ascii"), signature.encode("utf-8"))
