"""
Logger configuration. Easy to configure via code or env.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from seqlog.core.exceptions import ConfigurationError
from seqlog.core.logger.levels import LogLevel

FATAL_ACTIONS = ("exit", "raise")


def _parse_int(raw: str, name: str) -> int:
    try:
        return int(raw.strip())
    except ValueError:
        raise ConfigurationError(
            f"{name} must be an integer, got {raw!r}", details={"var": name}
        ) from None


@dataclass(frozen=True)
class LoggerConfig:
    """
    Configuration for the process-wide log.

    Use LoggerConfig.from_env() for env-based config, or build explicitly.
    """

    # General log file base name ("" disables the general file)
    file_out_name: str = ""
    # ERROR/FATAL duplicate file base name ("" disables the error file)
    file_err_name: str = ""
    # Max bytes per file before rotating to the next sequence number (0 = never)
    max_size: int = 10 * 1024 * 1024  # 10 MB
    # Minimum level for DEBUG/INFO/WARN; ERROR and FATAL are always written
    level: str = "DEBUG"
    # What FATAL does after writing: "exit" the process or "raise" FatalLogged
    fatal_action: str = "exit"

    def __post_init__(self) -> None:
        if not isinstance(self.max_size, int) or self.max_size < 0:
            raise ConfigurationError(
                f"max_size must be a non-negative integer, got {self.max_size!r}"
            )
        LogLevel.parse(self.level)
        if self.fatal_action not in FATAL_ACTIONS:
            raise ConfigurationError(
                f"fatal_action must be one of {FATAL_ACTIONS}, got {self.fatal_action!r}"
            )

    @property
    def min_level(self) -> LogLevel:
        return LogLevel.parse(self.level)

    @classmethod
    def from_env(
        cls,
        *,
        file_out_var: str = "LOG_FILE_OUT",
        file_err_var: str = "LOG_FILE_ERR",
        max_size_var: str = "LOG_MAX_SIZE",
        level_var: str = "LOG_LEVEL",
        fatal_action_var: str = "LOG_FATAL_ACTION",
    ) -> "LoggerConfig":
        """Build config from environment variables."""
        file_out_name = os.environ.get(file_out_var, "").strip()
        file_err_name = os.environ.get(file_err_var, "").strip()
        max_size = _parse_int(os.environ.get(max_size_var, "10485760"), max_size_var)  # 10MB
        level = os.environ.get(level_var, "DEBUG").upper()
        fatal_action = os.environ.get(fatal_action_var, "exit").strip().lower()
        return cls(
            file_out_name=file_out_name,
            file_err_name=file_err_name,
            max_size=max_size,
            level=level,
            fatal_action=fatal_action,
        )

    def with_overrides(
        self,
        *,
        file_out_name: Optional[str] = None,
        file_err_name: Optional[str] = None,
        max_size: Optional[int] = None,
        level: Optional[str] = None,
        fatal_action: Optional[str] = None,
    ) -> "LoggerConfig":
        """Return a new config with the given overrides (for immutability)."""
        return LoggerConfig(
            file_out_name=file_out_name if file_out_name is not None else self.file_out_name,
            file_err_name=file_err_name if file_err_name is not None else self.file_err_name,
            max_size=max_size if max_size is not None else self.max_size,
            level=level or self.level,
            fatal_action=fatal_action or self.fatal_action,
        )
