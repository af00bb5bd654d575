"""
Level routing: which destinations receive a line, and what happens afterwards.

    DEBUG/INFO/WARN  -> stdout, general file
    ERROR            -> general file, error file, stderr, then raise
    FATAL            -> general file, error file, stderr, then terminate

The standard-error write is always last for ERROR and FATAL so that the files
hold the line before the process unwinds or exits.
"""
from __future__ import annotations

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol, TextIO, Tuple

from seqlog.core.logger.levels import LogLevel
from seqlog.core.logger.sink import RotatingFileSink


class Destination(Protocol):
    """Anything a rendered line can be written to."""

    def emit(self, line: str) -> None:
        ...


class PostWriteAction(str, Enum):
    NONE = "none"
    RAISE = "raise"
    TERMINATE = "terminate"


class StreamDestination:
    """
    A standard stream. Never closed.

    With ``stream=None`` the stream is looked up on ``sys`` at every write,
    so redirections of sys.stdout/sys.stderr are honoured.
    """

    def __init__(self, name: str, stream: Optional[TextIO] = None) -> None:
        self.name = name
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else getattr(sys, self.name)

    def emit(self, line: str) -> None:
        stream = self.stream
        stream.write(line)
        stream.flush()

    def __repr__(self) -> str:
        return f"StreamDestination({self.name!r})"


@dataclass(frozen=True)
class Targets:
    """Snapshot of the facade's destinations for one call."""

    stdout: Destination
    stderr: Destination
    out_sink: Optional[RotatingFileSink] = None
    err_sink: Optional[RotatingFileSink] = None


@dataclass(frozen=True)
class Route:
    destinations: Tuple[Destination, ...]
    action: PostWriteAction = PostWriteAction.NONE


class LevelRouter:
    """Stateless; the facade hands it a fresh Targets snapshot per call."""

    def select(self, level: LogLevel, targets: Targets) -> Route:
        if not level.terminating:
            dests: list[Destination] = [targets.stdout]
            if targets.out_sink is not None:
                dests.append(targets.out_sink)
            return Route(tuple(dests))

        dests = []
        if targets.out_sink is not None:
            dests.append(targets.out_sink)
        if targets.err_sink is not None:
            dests.append(targets.err_sink)
        dests.append(targets.stderr)
        action = PostWriteAction.TERMINATE if level is LogLevel.FATAL else PostWriteAction.RAISE
        return Route(tuple(dests), action)
