"""ASGI entrypoint: `uvicorn main:app`."""

from __future__ import annotations

import uvicorn

from server.app import app
from server.config import get_settings

__all__ = ["app"]


if __name__ == "__main__":
    settings = get_settings()
    uvicorn.run(app, host=settings.server_host, port=settings.server_port)
