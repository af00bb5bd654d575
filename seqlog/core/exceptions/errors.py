"""
Built-in exception types.
"""
from __future__ import annotations

from typing import Any, Optional

from seqlog.core.exceptions.base import SeqlogError


class ConfigurationError(SeqlogError):
    """Invalid or missing configuration."""

    default_code = "CONFIGURATION_ERROR"


class SinkError(SeqlogError):
    """A log file could not be scanned, opened, written or created."""

    default_code = "SINK_ERROR"


class LevelSignal(SeqlogError):
    """Raised after a terminating level has been written to every destination.

    ``level`` and ``context`` describe the log call that raised it.
    """

    def __init__(
        self,
        message: str,
        *,
        level: Any = None,
        context: Optional[Any] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.level = level
        self.context = context


class ErrorLogged(LevelSignal):
    """An ERROR line was logged. Meant to be caught by a recovery boundary."""

    default_code = "ERROR_LOGGED"


class FatalLogged(LevelSignal):
    """A FATAL line was logged and the fatal action is set to raise."""

    default_code = "FATAL_LOGGED"
