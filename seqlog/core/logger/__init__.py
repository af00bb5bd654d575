"""
Project logger: leveled lines on stdout/stderr plus sequence-numbered rotating files.

Usage:
    from seqlog.core.logger import LoggerConfig, configure, get_log

    # Configure once at startup (optional; from_env() if not called)
    configure(LoggerConfig(file_out_name="logs/app", file_err_name="logs/err", max_size=1 << 20))

    # Or from env: LOG_FILE_OUT, LOG_FILE_ERR, LOG_MAX_SIZE, LOG_LEVEL, LOG_FATAL_ACTION
    configure()  # uses LoggerConfig.from_env()

    log = get_log()
    log.info("started %d workers", 4)
    # 2024/05/01 12:00:00.123456 [app.main:main] | INFO : main.py:12: started 4 workers

    # ERROR raises ErrorLogged once the line is written; FATAL exits the process
    from seqlog.core.exceptions import ErrorLogged
    try:
        log.error("job %s failed", job_id)
    except ErrorLogged:
        ...

    # Close the files at shutdown
    shutdown()

    # Forward stdlib logging records into the same files
    import logging
    logging.getLogger().addHandler(build_bridge_handler())
"""
from seqlog.core.logger.caller import (
    BaseCallerResolver,
    CallerContext,
    StackCallerResolver,
)
from seqlog.core.logger.config import LoggerConfig
from seqlog.core.logger.facade import Log, exit_process, raise_fatal
from seqlog.core.logger.formatters import PrefixFormatter
from seqlog.core.logger.handler import SeqlogHandler
from seqlog.core.logger.levels import LogLevel
from seqlog.core.logger.router import LevelRouter, PostWriteAction, Route, StreamDestination, Targets
from seqlog.core.logger.setup import (
    build_bridge_handler,
    configure,
    debug,
    error,
    fatal,
    get_log,
    info,
    shutdown,
    warn,
)
from seqlog.core.logger.sink import RotatingFileSink

__all__ = [
    "LoggerConfig",
    "LogLevel",
    "Log",
    "CallerContext",
    "BaseCallerResolver",
    "StackCallerResolver",
    "PrefixFormatter",
    "LevelRouter",
    "Route",
    "Targets",
    "PostWriteAction",
    "StreamDestination",
    "RotatingFileSink",
    "SeqlogHandler",
    "exit_process",
    "raise_fatal",
    "configure",
    "get_log",
    "shutdown",
    "build_bridge_handler",
    "debug",
    "info",
    "warn",
    "error",
    "fatal",
]
