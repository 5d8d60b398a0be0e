"""
Formatter abstraction (Strategy Pattern).

A formatter turns ``(level, message, props)`` into the exact bytes a sink
receives. Subclasses only implement ``render``; line termination and encoding
are applied here so every format ends in exactly one newline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Callable

from ..levels import LogLevel
from ..props import PropertySet, PropLike, clean_text

Clock = Callable[[], datetime]

LINE_TERMINATOR = "\n"
ENCODING = "utf-8"


def local_now() -> datetime:
    """Current time as an aware datetime in the local zone."""
    return datetime.now().astimezone()


def normalize_line(text: str) -> str:
    """Strip trailing CR/LF and append a single terminator."""
    return text.rstrip("\r\n") + LINE_TERMINATOR


class Formatter(ABC):
    """Abstract base class for log formatters.

    Implementations must be pure given their configuration (and clock) and
    safe for concurrent read-only use.
    """

    @abstractmethod
    def render(self, level: LogLevel, message: str, props: PropertySet) -> str:
        """Render one event without caring about the trailing newline."""
        ...

    def format(self, level: LogLevel, message: str, props: PropertySet) -> bytes:
        """Render, normalize the line ending and encode."""
        rendered = self.render(level, clean_text(message), props)
        return normalize_line(rendered).encode(ENCODING, errors="replace")

    def format_and_normalize(self, level: LogLevel, message: str, *props: PropLike, **fields: Any) -> bytes:
        """Bytes a ``Logger`` would write for the same call.

        Builds the ``PropertySet`` the same way ``Logger.log`` does, which
        makes it the reference output in equivalence tests.
        """
        return self.format(LogLevel.parse(level), str(message), PropertySet(*props, **fields))
