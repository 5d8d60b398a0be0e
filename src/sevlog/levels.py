"""
Severity levels.

Levels follow the syslog severity numbering: a lower ordinal is more severe,
so filtering is a plain integer comparison.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Union

from .exceptions import ConfigurationError


class LogLevel(IntEnum):
    EMERGENCY = 0
    ALERT = 1
    CRITICAL = 2
    ERROR = 3
    WARNING = 4
    NOTICE = 5
    INFORMATIONAL = 6
    DEBUG = 7

    def __str__(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def label(self) -> str:
        """Stable display name used by formatters."""
        return _DISPLAY_NAMES[self]

    def permits(self, other: "LogLevel") -> bool:
        """True when ``other`` is as severe as this threshold or more."""
        return other <= self

    @classmethod
    def parse(cls, value: Union["LogLevel", int, str]) -> "LogLevel":
        """Coerce a level, ordinal or (case-insensitive) name into a ``LogLevel``."""
        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ConfigurationError(f"Invalid log level: {value!r}", field="level")
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                raise ConfigurationError(
                    f"Log level ordinal out of range: {value} (expected {MOST_SEVERE:d}..{LEAST_SEVERE:d})",
                    field="level",
                ) from None
        if isinstance(value, str):
            key = value.strip().lower()
            if key.isdigit():
                return cls.parse(int(key))
            if key in _ALIASES:
                return _ALIASES[key]
        raise ConfigurationError(f"Unknown log level: {value!r}", field="level")


_DISPLAY_NAMES = {
    LogLevel.EMERGENCY: "Emergency",
    LogLevel.ALERT: "Alert",
    LogLevel.CRITICAL: "Critical",
    LogLevel.ERROR: "Error",
    LogLevel.WARNING: "Warning",
    LogLevel.NOTICE: "Notice",
    LogLevel.INFORMATIONAL: "Informational",
    LogLevel.DEBUG: "Debug",
}

_ALIASES = {
    **{level.name.lower(): level for level in LogLevel},
    "emerg": LogLevel.EMERGENCY,
    "panic": LogLevel.EMERGENCY,
    "crit": LogLevel.CRITICAL,
    "err": LogLevel.ERROR,
    "warn": LogLevel.WARNING,
    "info": LogLevel.INFORMATIONAL,
}

MOST_SEVERE = LogLevel.EMERGENCY
LEAST_SEVERE = LogLevel.DEBUG

LevelLike = Union[LogLevel, int, str]
