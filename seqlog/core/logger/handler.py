"""
Bridge from stdlib ``logging`` into the seqlog facade.

Records keep their own caller information (module, function, file, line);
the handler passes it to the facade explicitly, so stack depth does not
matter here. Bridged ERROR/CRITICAL records are written like any other
ERROR/FATAL line but never raise ErrorLogged or exit the process.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from seqlog.core.exceptions import SinkError
from seqlog.core.logger.caller import CallerContext
from seqlog.core.logger.levels import LogLevel

if TYPE_CHECKING:
    from seqlog.core.logger.facade import Log

_OWN_LOGGER = "seqlog"


def _not_own_record(record: logging.LogRecord) -> bool:
    # seqlog's diagnostics must not loop back into the sinks that produce them
    return not (record.name == _OWN_LOGGER or record.name.startswith(_OWN_LOGGER + "."))


class SeqlogHandler(logging.Handler):
    def __init__(self, log: "Log", level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.log = log
        self.addFilter(_not_own_record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            msg = self.format(record)
            self.log.log_context(
                LogLevel.from_stdlib(record.levelno),
                CallerContext.from_record(record),
                msg,
                signal=False,
            )
        except SinkError:
            raise
        except Exception:
            self.handleError(record)
