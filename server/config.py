"""Configuration management for the LINE webhook server."""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field


def _load_env_file() -> None:
    """Load .env from root directory if present."""
    env_path = Path(__file__).parent.parent / ".env"
    if not env_path.is_file():
        return
    try:
        for line in env_path.read_text(encoding="utf-8").splitlines():
            stripped = line.strip()
            if stripped and not stripped.startswith("#") and "=" in stripped:
                key, value = stripped.split("=", 1)
                key, value = key.strip(), value.strip().strip("'\"")
                if key and value and key not in os.environ:
                    os.environ[key] = value
    except OSError:
        pass


_load_env_file()


DEFAULT_APP_NAME = "linehook - LINE Messaging API webhook server"
DEFAULT_APP_VERSION = "0.1.0"


def _env_int(name: str, fallback: int) -> int:
    try:
        return int(os.getenv(name, str(fallback)))
    except (TypeError, ValueError):
        return fallback


def _env_bool(name: str, fallback: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return fallback
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    """Server settings read from environment variables."""

    # App metadata
    app_name: str = Field(default=DEFAULT_APP_NAME)
    app_version: str = Field(default=DEFAULT_APP_VERSION)

    # Server runtime
    server_host: str = Field(default=os.getenv("LINEHOOK_HOST", "0.0.0.0"))
    server_port: int = Field(default=_env_int("LINEHOOK_PORT", 8000))

    # Environment
    env: str = Field(default=os.getenv("ENV", "dev"))
    log_level: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))

    # HTTP behaviour
    cors_allow_origins_raw: str = Field(default=os.getenv("CORS_ORIGINS", "*"))
    enable_docs: bool = Field(default=os.getenv("LINEHOOK_ENABLE_DOCS", "1") != "0")
    docs_url: Optional[str] = Field(default=os.getenv("DOCS_URL", "/docs"))

    # LINE channel
    line_channel_secret: str = Field(default=os.getenv("LINE_CHANNEL_SECRET", ""))
    line_channel_access_token: str = Field(default=os.getenv("LINE_CHANNEL_ACCESS_TOKEN", ""))
    line_verbose: bool = Field(default=_env_bool("LINE_VERBOSE"))
    line_api_base: str = Field(default=os.getenv("LINE_API_BASE", "https://api.line.me"))

    @property
    def cors_allow_origins(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        if self.cors_allow_origins_raw.strip() in {"", "*"}:
            return ["*"]
        return [origin.strip() for origin in self.cors_allow_origins_raw.split(",") if origin.strip()]

    @property
    def resolved_docs_url(self) -> Optional[str]:
        """Return documentation URL when docs are enabled."""
        return (self.docs_url or "/docs") if self.enable_docs else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
