"""
Exception system for the logging facility.

Usage:
    from seqlog.core.exceptions import ErrorLogged, SinkError

    try:
        handle_request()
    except ErrorLogged as exc:
        # the line is already on disk and on stderr
        recover(exc.context)
"""
from seqlog.core.exceptions.base import SeqlogError
from seqlog.core.exceptions.errors import (
    ConfigurationError,
    ErrorLogged,
    FatalLogged,
    LevelSignal,
    SinkError,
)

__all__ = [
    "SeqlogError",
    "ConfigurationError",
    "SinkError",
    "LevelSignal",
    "ErrorLogged",
    "FatalLogged",
]
