"""
The log facade: level methods, file configuration and the write path.

One call runs: resolve caller -> format line -> select route -> write each
destination in order -> post-write action. Destinations are chosen per call
from a snapshot of the current sinks; no writer is shared and retargeted.
"""
from __future__ import annotations

import logging
import os
import sys
import threading
from typing import Any, Callable, Optional, TextIO, Union

from seqlog.core.exceptions import ConfigurationError, ErrorLogged, FatalLogged
from seqlog.core.logger.caller import BaseCallerResolver, CallerContext, StackCallerResolver
from seqlog.core.logger.config import LoggerConfig
from seqlog.core.logger.formatters import PrefixFormatter, render_message
from seqlog.core.logger.levels import LogLevel
from seqlog.core.logger.router import LevelRouter, PostWriteAction, StreamDestination, Targets
from seqlog.core.logger.sink import RotatingFileSink

logger = logging.getLogger(__name__)

# Frames between StackCallerResolver.resolve() and the user's call site:
# Log._log and the level method (or module-level function) that called it.
_CALLER_SKIP = 2

FatalAction = Callable[[FatalLogged], None]


def exit_process(signal: FatalLogged) -> None:
    """Default FATAL action: flush the standard streams and exit with status 1."""
    sys.stdout.flush()
    sys.stderr.flush()
    os._exit(1)


def raise_fatal(signal: FatalLogged) -> None:
    raise signal


_FATAL_ACTIONS = {"exit": exit_process, "raise": raise_fatal}


class Log:
    """
    Leveled logger writing to stdout/stderr and up to two rotating files.

    The general file receives every line; the error file only ERROR and
    FATAL. ERROR raises ErrorLogged after the line is written everywhere;
    FATAL hands a FatalLogged to the fatal action (process exit by default).
    """

    def __init__(
        self,
        *,
        stdout: Optional[TextIO] = None,
        stderr: Optional[TextIO] = None,
        max_size: int = 0,
        min_level: LogLevel = LogLevel.DEBUG,
        resolver: Optional[BaseCallerResolver] = None,
        formatter: Optional[PrefixFormatter] = None,
        router: Optional[LevelRouter] = None,
        fatal_action: Optional[FatalAction] = None,
    ) -> None:
        self._stdout = StreamDestination("stdout", stdout)
        self._stderr = StreamDestination("stderr", stderr)
        self._max_size = max_size
        self._min_level = min_level
        self._resolver = resolver or StackCallerResolver()
        self._formatter = formatter or PrefixFormatter()
        self._router = router or LevelRouter()
        self._fatal_action = fatal_action or exit_process
        self._out_sink: Optional[RotatingFileSink] = None
        self._err_sink: Optional[RotatingFileSink] = None
        self._lock = threading.RLock()

    # ── configuration ──────────────────────────────────────────────────────

    def configure(self, config: LoggerConfig) -> None:
        """
        Apply every setting of ``config``, reopening both file roles.

        Both files are opened before anything changes; if either fails the
        log keeps its previous files and settings.
        """
        with self._lock:
            out_sink = self._open_sink(config.file_out_name, config.max_size)
            try:
                err_sink = self._open_sink(config.file_err_name, config.max_size)
            except Exception:
                self._close_sink(out_sink)
                raise
            self.set_max_size(config.max_size)
            self.set_min_level(config.min_level)
            self._fatal_action = _FATAL_ACTIONS[config.fatal_action]
            old_out, self._out_sink = self._out_sink, out_sink
            old_err, self._err_sink = self._err_sink, err_sink
            self._close_sink(old_out)
            self._close_sink(old_err)

    def set_file_out_name(self, name: str) -> None:
        """Open the general file for ``name`` (empty disables it), then close the previous one."""
        with self._lock:
            sink = self._open_sink(name, self._max_size)
            old, self._out_sink = self._out_sink, sink
            self._close_sink(old)

    def set_file_err_name(self, name: str) -> None:
        """Open the ERROR/FATAL file for ``name`` (empty disables it), then close the previous one."""
        with self._lock:
            sink = self._open_sink(name, self._max_size)
            old, self._err_sink = self._err_sink, sink
            self._close_sink(old)

    def set_max_size(self, max_size: int) -> None:
        if not isinstance(max_size, int) or max_size < 0:
            raise ConfigurationError(
                f"max_size must be a non-negative integer, got {max_size!r}"
            )
        with self._lock:
            self._max_size = max_size
            for sink in (self._out_sink, self._err_sink):
                if sink is not None:
                    sink.max_size = max_size

    def set_min_level(self, level: Union[LogLevel, str]) -> None:
        with self._lock:
            self._min_level = _as_level(level)

    def set_fatal_action(self, action: FatalAction) -> None:
        with self._lock:
            self._fatal_action = action

    @property
    def out_sink(self) -> Optional[RotatingFileSink]:
        return self._out_sink

    @property
    def err_sink(self) -> Optional[RotatingFileSink]:
        return self._err_sink

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def min_level(self) -> LogLevel:
        return self._min_level

    def close(self) -> None:
        """Close both files. Standard streams stay open and keep receiving lines."""
        with self._lock:
            out_sink, err_sink = self._out_sink, self._err_sink
            self._out_sink = self._err_sink = None
            self._close_sink(out_sink)
            self._close_sink(err_sink)

    # ── level methods ──────────────────────────────────────────────────────

    def debug(self, fmt: Any, *args: Any) -> None:
        self._log(LogLevel.DEBUG, fmt, args)

    def info(self, fmt: Any, *args: Any) -> None:
        self._log(LogLevel.INFO, fmt, args)

    def warn(self, fmt: Any, *args: Any) -> None:
        self._log(LogLevel.WARN, fmt, args)

    def error(self, fmt: Any, *args: Any) -> None:
        """Log at ERROR, then raise ErrorLogged."""
        self._log(LogLevel.ERROR, fmt, args)

    def fatal(self, fmt: Any, *args: Any) -> None:
        """Log at FATAL, then run the fatal action."""
        self._log(LogLevel.FATAL, fmt, args)

    def log(self, level: Union[LogLevel, str], fmt: Any, *args: Any) -> None:
        self._log(_as_level(level), fmt, args)

    def log_context(
        self,
        level: Union[LogLevel, str],
        context: CallerContext,
        fmt: Any,
        *args: Any,
        signal: bool = True,
    ) -> None:
        """
        Log with an explicit caller context instead of inspecting the stack.

        With ``signal=False`` the line is routed as usual but ERROR does not
        raise and FATAL does not run the fatal action.
        """
        level = _as_level(level)
        if self._dropped(level):
            return
        self._emit(level, context, fmt, args, signal)

    # ── write path ─────────────────────────────────────────────────────────

    def _log(self, level: LogLevel, fmt: Any, args: tuple) -> None:
        if self._dropped(level):
            return
        context = self._resolver.resolve(_CALLER_SKIP)
        self._emit(level, context, fmt, args, True)

    def _emit(
        self,
        level: LogLevel,
        context: CallerContext,
        fmt: Any,
        args: tuple,
        signal: bool,
    ) -> None:
        message = render_message(fmt, args)
        line = self._formatter.format(level, context, message)
        with self._lock:
            route = self._router.select(level, self._targets())
            for destination in route.destinations:
                destination.emit(line)
        if not signal or route.action is PostWriteAction.NONE:
            return
        if route.action is PostWriteAction.RAISE:
            raise ErrorLogged(message, level=level, context=context)
        self._fatal_action(FatalLogged(message, level=level, context=context))

    def _dropped(self, level: LogLevel) -> bool:
        return not level.terminating and level < self._min_level

    def _targets(self) -> Targets:
        return Targets(
            stdout=self._stdout,
            stderr=self._stderr,
            out_sink=self._out_sink,
            err_sink=self._err_sink,
        )

    @staticmethod
    def _open_sink(name: str, max_size: int) -> Optional[RotatingFileSink]:
        if not name:
            return None
        sink = RotatingFileSink.open(name, max_size)
        logger.debug("Log: writing %s", sink.path)
        return sink

    @staticmethod
    def _close_sink(sink: Optional[RotatingFileSink]) -> None:
        if sink is not None:
            sink.close()


def _as_level(level: Union[LogLevel, str]) -> LogLevel:
    if isinstance(level, LogLevel):
        return level
    if isinstance(level, str):
        return LogLevel.parse(level)
    return LogLevel(level)
