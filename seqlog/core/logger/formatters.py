"""
Line formatting: timestamp, caller prefix and printf-style message.

A line looks like:

    2024/05/01 12:00:00.123456 [app.worker:Worker.run] | INFO : worker.py:42: started 3 jobs
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any, Callable, Optional, Sequence

from seqlog.core.logger.caller import CallerContext
from seqlog.core.logger.levels import LogLevel

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S.%f"


def format_prefix(level: LogLevel, context: CallerContext) -> str:
    return (
        f"[{context.package_path}:{context.function_name}] | {level.name} : "
        f"{context.source_file}:{context.line_number}: "
    )


def render_message(fmt: Any, args: Sequence[Any] = ()) -> str:
    """
    %-style substitution; ``fmt`` is used as-is when there are no args.

    A format that does not fit its args never fails the log call: the raw
    format is kept and the args are appended as ``%!(BADARGS ...)``.
    """
    msg = str(fmt)
    if not args:
        return msg
    # Same convention as stdlib logging: a lone non-empty mapping feeds %(name)s
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values: Any = args[0]
    else:
        values = tuple(args)
    try:
        return msg % values
    except (TypeError, ValueError, KeyError) as e:
        logger.debug("render_message: %r does not fit %r (%s)", msg, values, e)
        return f"{msg} %!(BADARGS {values!r})"


class PrefixFormatter:
    """Builds complete, newline-terminated lines."""

    def __init__(
        self,
        *,
        datefmt: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.datefmt = datefmt or TIMESTAMP_FORMAT
        self._clock = clock or datetime.now

    def format(
        self,
        level: LogLevel,
        context: CallerContext,
        fmt: Any,
        args: Sequence[Any] = (),
    ) -> str:
        line = (
            self._clock().strftime(self.datefmt)
            + " "
            + format_prefix(level, context)
            + render_message(fmt, args)
        )
        if not line.endswith("\n"):
            line += "\n"
        return line
