"""
Logger setup: the process-wide Log, built from config.
"""
from __future__ import annotations

from typing import Any, Optional

from seqlog.core.logger.config import LoggerConfig
from seqlog.core.logger.facade import Log
from seqlog.core.logger.handler import SeqlogHandler
from seqlog.core.logger.levels import LogLevel


# Module-level singleton; created by configure() or on first get_log()
_log: Optional[Log] = None


def configure(config: Optional[LoggerConfig] = None) -> Log:
    """
    Configure the process-wide log with the given config.
    If config is None, uses LoggerConfig.from_env().
    Call once at application startup; calling again replaces both files.
    """
    global _log
    if config is None:
        config = LoggerConfig.from_env()
    if _log is None:
        _log = Log()
    _log.configure(config)
    return _log


def get_log(config: Optional[LoggerConfig] = None) -> Log:
    """
    Return the process-wide log. If configure() was never called,
    calls configure(config or from_env()) first.
    """
    if _log is None:
        return configure(config)
    return _log


def shutdown() -> None:
    """Close the log files and drop the singleton. Call at process exit."""
    global _log
    if _log is None:
        return
    log, _log = _log, None
    log.close()


def build_bridge_handler(level: str = "DEBUG") -> SeqlogHandler:
    """Build a stdlib logging handler that forwards records to the process-wide log."""
    handler = SeqlogHandler(get_log())
    handler.setLevel(LogLevel.parse(level).value)
    return handler


# Module-level level functions. Each calls Log._log directly so the caller
# sits at the same stack depth as with the Log methods.

def debug(fmt: Any, *args: Any) -> None:
    get_log()._log(LogLevel.DEBUG, fmt, args)


def info(fmt: Any, *args: Any) -> None:
    get_log()._log(LogLevel.INFO, fmt, args)


def warn(fmt: Any, *args: Any) -> None:
    get_log()._log(LogLevel.WARN, fmt, args)


def error(fmt: Any, *args: Any) -> None:
    get_log()._log(LogLevel.ERROR, fmt, args)


def fatal(fmt: Any, *args: Any) -> None:
    get_log()._log(LogLevel.FATAL, fmt, args)
