"""
Sink contract and two thin adapters.

A sink is anything with ``write(data: bytes) -> int`` that raises on failure.
Sinks own their own thread-safety; the logger issues one write per call.
"""

from __future__ import annotations

import io
import sys
from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Sink(Protocol):
    """Destination for rendered log lines."""

    def write(self, data: bytes) -> int: ...


class StreamSink:
    """Writes to a binary stream, or a text stream after decoding.

    Args:
        stream: Target stream (default: stderr)
    """

    def __init__(self, stream: Any = None):
        self._stream = stream if stream is not None else sys.stderr

    def write(self, data: bytes) -> int:
        if isinstance(self._stream, io.TextIOBase):
            self._stream.write(data.decode("utf-8", errors="replace"))
            written = len(data)
        else:
            written = self._stream.write(data)
            if written is None:
                written = len(data)
        self._stream.flush()
        return written


class FileSink:
    """Appends to a local file. Rotation is left to external tooling."""

    def __init__(self, path: str | Path):
        self._path = Path(path)
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self._path, "ab")

    @property
    def path(self) -> Path:
        return self._path

    def write(self, data: bytes) -> int:
        written = self._file.write(data)
        self._file.flush()
        return written

    def close(self) -> None:
        self._file.close()

    def __enter__(self) -> "FileSink":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
