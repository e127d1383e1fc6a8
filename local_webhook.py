"""Simple script to exercise the webhook locally with correctly signed LINE payloads.

Start the server first (`uvicorn main:app --reload --log-level debug`), with
LINE_CHANNEL_SECRET set to the same value this script signs with. Replies and
pushes go to the real LINE API, so use dummy reply tokens unless you point
LINE_API_BASE at a mock.
"""

from __future__ import annotations

import json
import os
import time
from typing import Any, Dict, List, Optional

import httpx

from linehook.signature import generate_signature

BASE_URL = os.getenv("LINEHOOK_URL", "http://localhost:8000")
WEBHOOK_ENDPOINT = f"{BASE_URL}/api/v1/webhooks/line"
CHANNEL_SECRET = os.getenv("LINE_CHANNEL_SECRET", "")


def send_events(events: List[Dict[str, Any]], secret: Optional[str] = None) -> Optional[httpx.Response]:
    """Sign and post a webhook body containing `events`."""
    body = json.dumps({"destination": "Ulocaltest", "events": events}).encode("utf-8")
    headers = {"Content-Type": "application/json"}
    if secret is not None:
        headers["x-line-signature"] = generate_signature(body, secret)

    print(f"\n{'='*60}")
    print(f"Sending {len(events)} event(s): {[e.get('type') for e in events]}")
    print(f"{'='*60}")

    try:
        response = httpx.post(WEBHOOK_ENDPOINT, content=body, headers=headers, timeout=10)
    except httpx.ConnectError:
        print("ERROR: Could not connect to server!")
        print("   Make sure the server is running:")
        print("   uvicorn main:app --reload --log-level debug")
        return None

    print(f"Status Code: {response.status_code}")
    print(f"Response: {response.text}")
    return response


def _text_event(text: str) -> Dict[str, Any]:
    now = int(time.time() * 1000)
    return {
        "type": "message",
        "timestamp": now,
        "replyToken": f"local-{now}",
        "source": {"type": "user", "userId": "Ulocaluser"},
        "message": {"id": str(now), "type": "text", "text": text},
    }


def main() -> None:
    if not CHANNEL_SECRET:
        raise SystemExit("Set LINE_CHANNEL_SECRET to the server's channel secret")

    cases = [
        ("text_message", [_text_event("Hello!")], CHANNEL_SECRET),
        ("two_events", [_text_event("one"), _text_event("two")], CHANNEL_SECRET),
        ("verification_no_events", [], CHANNEL_SECRET),
        ("bad_signature", [_text_event("forged")], "wrong-secret"),
        ("unsigned", [_text_event("not from LINE")], None),
    ]

    results = []
    for name, events, secret in cases:
        response = send_events(events, secret)
        results.append((name, response.status_code if response is not None else None))
        time.sleep(0.5)

    print(f"\n{'='*60}")
    print("SUMMARY")
    print(f"{'='*60}")
    for name, status in results:
        print(f"{status} {name}")


if __name__ == "__main__":
    main()
