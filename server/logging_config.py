"""Logging configuration for the webhook server."""

from __future__ import annotations

import logging
import os

logger = logging.getLogger("linehook.server")


def configure_logging() -> None:
    """Configure logging with a plain structured format and configurable log level."""
    if logger.handlers:
        return

    log_level = os.getenv("LOG_LEVEL", "INFO").upper()
    numeric_level = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # LINE_VERBOSE only gates output; the level still has to let debug lines through
    if os.getenv("LINE_VERBOSE", "").strip().lower() in ("1", "true", "yes", "on"):
        logging.getLogger("linehook").setLevel(logging.DEBUG)

    # Suppress noisy HTTP client logs
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
