"""Log levels, ordered by severity."""
from __future__ import annotations

import logging
from enum import IntEnum

from seqlog.core.exceptions import ConfigurationError


class LogLevel(IntEnum):
    """The five levels. ERROR and FATAL carry a post-write action."""
    DEBUG = 10
    INFO = 20
    WARN = 30
    ERROR = 40
    FATAL = 50

    @classmethod
    def parse(cls, name: str) -> "LogLevel":
        """Level from a case-insensitive name (WARNING and CRITICAL accepted)."""
        key = (name or "").strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls[key]
        except KeyError:
            raise ConfigurationError(
                f"Unknown log level: {name!r}",
                details={"accepted": [lvl.name for lvl in cls]},
            ) from None

    @classmethod
    def from_stdlib(cls, levelno: int) -> "LogLevel":
        """Nearest level at or below a stdlib ``logging`` level number."""
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARN
        if levelno >= logging.INFO:
            return cls.INFO
        return cls.DEBUG

    @property
    def terminating(self) -> bool:
        return self >= LogLevel.ERROR


_ALIASES = {"WARNING": "WARN", "CRITICAL": "FATAL"}
