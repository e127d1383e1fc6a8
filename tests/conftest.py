import os
from typing import Any, Dict, List, Optional, Tuple

# Settings read the environment at import time, so set credentials before importing the app
os.environ["ENV"] = "test"
os.environ["LINE_CHANNEL_SECRET"] = "test-channel-secret"
os.environ["LINE_CHANNEL_ACCESS_TOKEN"] = "test-access-token"
os.environ["LINE_API_BASE"] = "https://api.line.me"
os.environ.pop("LINE_VERBOSE", None)

import pytest
from fastapi.testclient import TestClient

from linehook.config import LineOptions
from linehook.signature import generate_signature
from linehook.types import SendResult
from main import app

CHANNEL_SECRET = os.environ["LINE_CHANNEL_SECRET"]
ACCESS_TOKEN = os.environ["LINE_CHANNEL_ACCESS_TOKEN"]


@pytest.fixture()
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture()
def options() -> LineOptions:
    return LineOptions(channel_secret=CHANNEL_SECRET, channel_access_token=ACCESS_TOKEN)


def signed_headers(body: bytes, secret: str = CHANNEL_SECRET) -> Dict[str, str]:
    return {
        "x-line-signature": generate_signature(body, secret),
        "content-type": "application/json",
    }


class RecordingTransport:
    """In-memory MessagingTransport that records calls and can be told to fail."""

    def __init__(self, fail_with: Optional[Exception] = None) -> None:
        self.calls: List[Tuple[str, str, List[Dict[str, Any]]]] = []
        self.fail_with = fail_with

    async def reply_message(self, reply_token: str, messages: List[Dict[str, Any]]) -> SendResult:
        self.calls.append(("reply", reply_token, messages))
        if self.fail_with is not None:
            raise self.fail_with
        return SendResult()

    async def push_message(self, to: str, messages: List[Dict[str, Any]]) -> SendResult:
        self.calls.append(("push", to, messages))
        if self.fail_with is not None:
            raise self.fail_with
        return SendResult()


@pytest.fixture()
def transport() -> RecordingTransport:
    return RecordingTransport()
