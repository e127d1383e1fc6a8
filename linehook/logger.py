"""Verbose-aware logger used by the webhook components."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from pydantic import BaseModel

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

_RULE = "-" * 60


def _render(data: Any) -> str:
    if isinstance(data, BaseModel):
        data = data.model_dump(by_alias=True, exclude_none=True, mode="json")
    elif isinstance(data, (list, tuple)):
        data = [
            d.model_dump(by_alias=True, exclude_none=True, mode="json") if isinstance(d, BaseModel) else d
            for d in data
        ]
    try:
        return json.dumps(data, default=str, ensure_ascii=False)
    except (TypeError, ValueError):
        return repr(data)


class LineLogger:
    """Thin wrapper over a stdlib logger.

    Debug, info, success and banner output are only emitted when `verbose`
    is on; warnings and errors always go through. Exceptions passed as `data`
    are attached as `exc_info` so the traceback is kept.
    """

    def __init__(self, verbose: bool = False, logger: Optional[logging.Logger] = None) -> None:
        self.verbose = verbose
        self._logger = logger or logging.getLogger("linehook")

    def _emit(self, level: int, message: str, data: Any = None) -> None:
        if isinstance(data, BaseException):
            self._logger.log(level, "%s: %s", message, data, exc_info=data)
        elif data is None:
            self._logger.log(level, "%s", message)
        else:
            self._logger.log(level, "%s %s", message, _render(data))

    def debug(self, message: str, data: Any = None) -> None:
        if self.verbose:
            self._emit(logging.DEBUG, message, data)

    def info(self, message: str, data: Any = None) -> None:
        if self.verbose:
            self._emit(logging.INFO, message, data)

    def success(self, message: str, data: Any = None) -> None:
        if self.verbose:
            self._emit(SUCCESS, message, data)

    def warning(self, message: str, data: Any = None) -> None:
        self._emit(logging.WARNING, message, data)

    def error(self, message: str, data: Any = None) -> None:
        self._emit(logging.ERROR, message, data)

    def section(self, title: str) -> None:
        if self.verbose:
            self._logger.info("%s", _RULE)
            self._logger.info("%s", title)
            self._logger.info("%s", _RULE)

    def divider(self) -> None:
        if self.verbose:
            self._logger.info("%s", _RULE)


def mask(value: Optional[str], keep: int) -> str:
    """Shorten an identifier for log output."""
    if not value:
        return ""
    return f"{value[:keep]}..." if len(value) > keep else value
