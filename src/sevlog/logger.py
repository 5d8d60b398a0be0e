"""
Level-filtering logger.

A ``Logger`` binds one formatter to one sink. Each permitted call renders the
event once and performs exactly one sink write; filtered calls do nothing.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .diagnostics import get_logger
from .exceptions import ConfigurationError, SinkWriteError
from .formatters.base import Formatter
from .levels import LevelLike, LogLevel
from .props import PropertySet, PropLike
from .sinks import Sink

_diag = get_logger("logger")


@dataclass(frozen=True)
class LoggerConfig:
    """Construction parameters for ``Logger``.

    ``max_level`` is the least severe level still written; ``default_level``
    is used by ``Logger.emit``.
    """

    max_level: LevelLike = LogLevel.INFORMATIONAL
    default_level: LevelLike = LogLevel.INFORMATIONAL
    formatter: Optional[Formatter] = None
    sink: Optional[Sink] = None


class Logger:
    """Structured logger with a severity threshold."""

    def __init__(self, config: LoggerConfig) -> None:
        if config.formatter is None:
            raise ConfigurationError("Logger requires a formatter", field="formatter")
        if not isinstance(config.formatter, Formatter):
            raise ConfigurationError(
                f"formatter must be a Formatter, got {type(config.formatter).__name__}",
                field="formatter",
            )
        if config.sink is None:
            raise ConfigurationError("Logger requires a sink", field="sink")
        if not isinstance(config.sink, Sink):
            raise ConfigurationError(
                f"sink must provide write(bytes), got {type(config.sink).__name__}",
                field="sink",
            )

        self._formatter = config.formatter
        self._sink = config.sink
        self._max_level = LogLevel.parse(config.max_level)
        self._default_level = LogLevel.parse(config.default_level)

        _diag.debug(
            "logger_created",
            formatter=type(self._formatter).__name__,
            sink=type(self._sink).__name__,
            max_level=self._max_level.label,
        )

    @property
    def formatter(self) -> Formatter:
        return self._formatter

    @property
    def sink(self) -> Sink:
        return self._sink

    @property
    def max_level(self) -> LogLevel:
        return self._max_level

    @property
    def default_level(self) -> LogLevel:
        return self._default_level

    def enabled(self, level: LevelLike) -> bool:
        return self._max_level.permits(LogLevel.parse(level))

    def log(self, level: LevelLike, message: str, *props: PropLike, **fields: Any) -> None:
        """Write one event if ``level`` passes the threshold.

        Raises:
            SinkWriteError: the sink raised while writing. Nothing is retried.
        """
        level = LogLevel.parse(level)
        if not self._max_level.permits(level):
            return

        data = self._formatter.format(level, str(message), PropertySet(*props, **fields))
        try:
            written = self._sink.write(data)
        except Exception as exc:
            _diag.warning("sink_write_failed", sink=type(self._sink).__name__, size=len(data), error=str(exc))
            raise SinkWriteError(sink=self._sink, size=len(data), reason=str(exc)) from exc

        # TODO: decide whether a short write should surface as SinkWriteError
        if isinstance(written, int) and written < len(data):
            _diag.warning("sink_short_write", sink=type(self._sink).__name__, size=len(data), written=written)

    def emit(self, message: str, *props: PropLike, **fields: Any) -> None:
        """Log at the configured default level."""
        self.log(self._default_level, message, *props, **fields)

    def emergency(self, message: str, *props: PropLike, **fields: Any) -> None:
        self.log(LogLevel.EMERGENCY, message, *props, **fields)

    def alert(self, message: str, *props: PropLike, **fields: Any) -> None:
        self.log(LogLevel.ALERT, message, *props, **fields)

    def critical(self, message: str, *props: PropLike, **fields: Any) -> None:
        self.log(LogLevel.CRITICAL, message, *props, **fields)

    def error(self, message: str, *props: PropLike, **fields: Any) -> None:
        self.log(LogLevel.ERROR, message, *props, **fields)

    def warning(self, message: str, *props: PropLike, **fields: Any) -> None:
        self.log(LogLevel.WARNING, message, *props, **fields)

    def notice(self, message: str, *props: PropLike, **fields: Any) -> None:
        self.log(LogLevel.NOTICE, message, *props, **fields)

    def info(self, message: str, *props: PropLike, **fields: Any) -> None:
        self.log(LogLevel.INFORMATIONAL, message, *props, **fields)

    def debug(self, message: str, *props: PropLike, **fields: Any) -> None:
        self.log(LogLevel.DEBUG, message, *props, **fields)
