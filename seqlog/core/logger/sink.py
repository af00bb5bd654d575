"""
Rotating file sink: an append-only log file whose name carries a sequence number.

Physical files are named ``<base>.<N>.log``. A new sink continues after the
highest N already on disk for its base, so restarts never reuse a file. Once
the bytes written reach ``max_size`` the sink moves on to ``<base>.<N+1>.log``
before the next write.
"""
from __future__ import annotations

import logging
import os
import threading
from typing import BinaryIO, Optional, Tuple

from seqlog.core.exceptions import ConfigurationError, SinkError

logger = logging.getLogger(__name__)

LOG_SUFFIX = "log"


def normalize_base_name(name: str) -> str:
    """Strip one trailing ``.log`` so ``app`` and ``app.log`` name the same sink."""
    suffix = "." + LOG_SUFFIX
    if name.endswith(suffix):
        return name[: -len(suffix)]
    return name


def parse_file_name(file_name: str) -> Optional[Tuple[str, int]]:
    """
    Split ``<base>.<N>.log`` into (base, N).

    Only the last two dot-delimited components are inspected, so the base may
    contain dots of its own. Returns None for names that do not match.
    """
    parts = file_name.rsplit(".", 2)
    if len(parts) != 3:
        return None
    base, number, suffix = parts
    if suffix != LOG_SUFFIX or not (number.isascii() and number.isdigit()):
        return None
    return base, int(number)


def sequenced_path(base_path: str, sequence_number: int) -> str:
    return f"{base_path}.{sequence_number}.{LOG_SUFFIX}"


def discover_sequence_number(base_path: str) -> int:
    """
    Sequence number a new sink for ``base_path`` starts at.

    Scans the containing directory (non-recursive, regular files only) and
    returns one past the highest N among ``<base>.<N>.log``, or 0 if none.
    """
    directory, stem = os.path.split(base_path)
    directory = directory or "."
    highest: Optional[int] = None
    try:
        with os.scandir(directory) as entries:
            for entry in entries:
                parsed = parse_file_name(entry.name)
                if parsed is None or parsed[0] != stem:
                    continue
                if not entry.is_file():
                    continue
                if highest is None or parsed[1] > highest:
                    highest = parsed[1]
    except OSError as e:
        raise SinkError(
            f"Could not scan log directory {directory}",
            details={"directory": directory},
            cause=e,
        ) from e
    logger.debug("RotatingFileSink: highest sequence for %s is %s", base_path, highest)
    return 0 if highest is None else highest + 1


class RotatingFileSink:
    """
    One open log file plus the byte count written to it.

    Size is tracked in memory from the file's size at open time; the file is
    not re-stat'ed per write. ``max_size <= 0`` disables rotation.
    """

    def __init__(
        self,
        base_path: str,
        sequence_number: int,
        stream: BinaryIO,
        size: int,
        max_size: int = 0,
    ) -> None:
        self._base_path = base_path
        self._sequence_number = sequence_number
        self._stream: Optional[BinaryIO] = stream
        self._size = size
        self._max_size = max_size
        self._lock = threading.RLock()

    @classmethod
    def open(cls, base_name: str, max_size: int = 0) -> "RotatingFileSink":
        """Discover the next sequence number for ``base_name`` and open that file for append."""
        base_path = normalize_base_name(base_name)
        if not os.path.basename(base_path):
            raise ConfigurationError(
                f"Log file name {base_name!r} has no base name",
                details={"base_name": base_name},
            )
        directory = os.path.dirname(base_path)
        if directory:
            try:
                os.makedirs(directory, exist_ok=True)
            except OSError as e:
                raise SinkError(
                    f"Could not create log directory {directory}",
                    details={"directory": directory},
                    cause=e,
                ) from e
        sequence_number = discover_sequence_number(base_path)
        path = sequenced_path(base_path, sequence_number)
        try:
            stream = open(path, "ab")
            size = os.fstat(stream.fileno()).st_size
        except OSError as e:
            raise SinkError(f"Could not open log file {path}", details={"path": path}, cause=e) from e
        logger.debug("RotatingFileSink: opened %s (size=%d)", path, size)
        return cls(base_path, sequence_number, stream, size, max_size)

    @property
    def base_path(self) -> str:
        return self._base_path

    @property
    def sequence_number(self) -> int:
        return self._sequence_number

    @property
    def path(self) -> str:
        """Physical file currently written to."""
        return sequenced_path(self._base_path, self._sequence_number)

    @property
    def size(self) -> int:
        return self._size

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, value: int) -> None:
        with self._lock:
            self._max_size = value

    @property
    def closed(self) -> bool:
        return self._stream is None

    def write(self, data: bytes) -> None:
        """Append ``data`` and flush it to the OS."""
        with self._lock:
            if self._stream is None:
                raise SinkError(f"Log file {self.path} is closed", details={"path": self.path})
            try:
                self._stream.write(data)
                self._stream.flush()
            except OSError as e:
                raise SinkError(
                    f"Could not write log file {self.path}", details={"path": self.path}, cause=e
                ) from e
            self._size += len(data)

    def check_and_rotate(self) -> bool:
        """Move to the next numbered file if the current one reached ``max_size``."""
        with self._lock:
            if self._max_size <= 0 or self._size < self._max_size:
                return False
            old_path = self.path
            next_number = self._sequence_number + 1
            next_path = sequenced_path(self._base_path, next_number)
            try:
                # truncate: rotation never appends to an older file of the same name
                next_stream = open(next_path, "wb")
            except OSError as e:
                # the current file stays open; the next emit retries the rotation
                raise SinkError(
                    f"Could not create log file {next_path}", details={"path": next_path}, cause=e
                ) from e
            try:
                self._close_stream()
            except SinkError:
                next_stream.close()
                raise
            self._stream = next_stream
            self._sequence_number = next_number
            self._size = 0
            logger.debug("RotatingFileSink: rotated %s -> %s", old_path, next_path)
            return True

    def emit(self, line: str) -> None:
        """Rotate if needed, then append ``line``; atomic with respect to other emitters."""
        # lone surrogates (undecodable file names, argv) must not abort the call
        data = line.encode("utf-8", errors="backslashreplace")
        with self._lock:
            self.check_and_rotate()
            self.write(data)

    def close(self) -> None:
        with self._lock:
            if self._stream is None:
                return
            path = self.path
            self._close_stream()
            logger.debug("RotatingFileSink: closed %s", path)

    def _close_stream(self) -> None:
        stream, self._stream = self._stream, None
        if stream is None:
            return
        try:
            stream.close()
        except OSError as e:
            raise SinkError(f"Could not close log file {self.path}", details={"path": self.path}, cause=e) from e

    def __repr__(self) -> str:
        return f"RotatingFileSink(path={self.path!r}, size={self._size}, max_size={self._max_size})"
