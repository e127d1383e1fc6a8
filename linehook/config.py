from __future__ import annotations

import os
from dataclasses import dataclass

from linehook.errors import ConfigurationError

DEFAULT_API_BASE = "https://api.line.me"


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").strip().lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class LineOptions:
    """Channel credentials and switches, fixed once the intake is built.

    `channel_secret` signs webhook bodies and is only ever used as an HMAC
    key; it is never logged or echoed in error messages.
    """

    channel_secret: str
    channel_access_token: str
    verbose: bool = False
    api_base: str = DEFAULT_API_BASE

    def __post_init__(self) -> None:
        if not self.channel_secret:
            raise ConfigurationError(
                "channel_secret is required. Get it from LINE Developers Console."
            )
        if not self.channel_access_token:
            raise ConfigurationError(
                "channel_access_token is required. Get it from LINE Developers Console."
            )

    def __repr__(self) -> str:
        return f"LineOptions(verbose={self.verbose!r}, api_base={self.api_base!r})"

    @classmethod
    def from_env(cls) -> "LineOptions":
        return cls(
            channel_secret=os.getenv("LINE_CHANNEL_SECRET", ""),
            channel_access_token=os.getenv("LINE_CHANNEL_ACCESS_TOKEN", ""),
            verbose=_env_flag("LINE_VERBOSE"),
            api_base=os.getenv("LINE_API_BASE", DEFAULT_API_BASE),
        )
