"""
Caller resolution: recover the package, function, file and line that issued a log call.

The stack-based resolver counts frames, so it is only correct when the number
of frames between the user's call and ``resolve()`` is fixed. Callers that
cannot guarantee that pass a CallerContext explicitly instead
(see ``Log.log_context`` and ``CallerContext.from_record``).
"""
from __future__ import annotations

import logging
import os
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import FrameType
from typing import Optional, Tuple

SENTINEL_FILE = "???"
SENTINEL_FUNCTION = "???"

# Scope marker the interpreter puts in qualified names of nested functions.
LOCALS_MARKER = "<locals>"


@dataclass(frozen=True)
class CallerContext:
    """Where a log call came from."""

    package_path: str
    function_name: str
    source_file: str
    line_number: int

    @classmethod
    def unknown(cls) -> "CallerContext":
        return cls(
            package_path="",
            function_name=SENTINEL_FUNCTION,
            source_file=SENTINEL_FILE,
            line_number=0,
        )

    @classmethod
    def from_record(cls, record: logging.LogRecord) -> "CallerContext":
        """Build a context from a stdlib record; the logger name stands in for the package."""
        return cls(
            package_path=record.name if record.name != "root" else record.module,
            function_name=record.funcName or SENTINEL_FUNCTION,
            source_file=short_file_name(record.pathname) if record.pathname else SENTINEL_FILE,
            line_number=record.lineno or 0,
        )


def short_file_name(path: str) -> str:
    """Final path component of ``path``."""
    cut = max(path.rfind("/"), path.rfind(os.sep))
    if cut < 0:
        return path
    return path[cut + 1:]


def split_function_name(module: str, qualname: str) -> Tuple[str, str]:
    """
    Split ``<module>.<qualname>`` into (package_path, function_name).

    The last segment is the function. When the segment before it is an
    enclosing class, the pair becomes the composite ``Class.function`` and
    the package path is everything before that pair; otherwise the package
    path is everything before the function. ``<locals>`` markers never appear
    in the package path.
    """
    parts = qualname.split(".") if qualname else [SENTINEL_FUNCTION]
    function_name = parts[-1]
    if len(parts) >= 2 and parts[-2] != LOCALS_MARKER:
        function_name = f"{parts[-2]}.{function_name}"
        enclosing = parts[:-2]
    else:
        enclosing = parts[:-1]
    package_path = ".".join(
        p for p in [module, *enclosing] if p and p != LOCALS_MARKER
    )
    return package_path, function_name


def _qualified_name(frame: FrameType) -> str:
    code = frame.f_code
    qualname = getattr(code, "co_qualname", None)
    if qualname is not None:
        return qualname
    # Interpreters without co_qualname: recover the receiver from self/cls.
    owner = frame.f_locals.get("self", frame.f_locals.get("cls"))
    if owner is None:
        return code.co_name
    owner_type = owner if isinstance(owner, type) else type(owner)
    return f"{owner_type.__qualname__}.{code.co_name}"


def context_from_frame(frame: FrameType) -> CallerContext:
    module = frame.f_globals.get("__name__", "")
    package_path, function_name = split_function_name(module, _qualified_name(frame))
    return CallerContext(
        package_path=package_path,
        function_name=function_name,
        source_file=short_file_name(frame.f_code.co_filename),
        line_number=frame.f_lineno,
    )


class BaseCallerResolver(ABC):
    @abstractmethod
    def resolve(self, skip: int) -> CallerContext:
        """Context for the frame ``skip`` levels above whoever called resolve()."""
        ...


class StackCallerResolver(BaseCallerResolver):
    """Reads the interpreter call stack. Never raises."""

    def resolve(self, skip: int) -> CallerContext:
        frame: Optional[FrameType]
        try:
            # +1 for this method's own frame
            frame = sys._getframe(skip + 1)
        except (AttributeError, ValueError):
            return CallerContext.unknown()
        try:
            return context_from_frame(frame)
        finally:
            del frame
