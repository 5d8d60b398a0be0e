"""
Preset constructors for the common logger setups.
"""

from __future__ import annotations

from .formatters import (
    Facility,
    JSONConfig,
    JSONFormatter,
    JSONPrettyFormatter,
    Syslog3164Formatter,
    Syslog5424Formatter,
    SyslogConfig,
)
from .levels import LevelLike, LogLevel
from .logger import Logger, LoggerConfig
from .sinks import Sink


def json_logger(
    max_level: LevelLike = LogLevel.INFORMATIONAL,
    default_level: LevelLike = LogLevel.INFORMATIONAL,
    sink: Sink | None = None,
) -> Logger:
    return Logger(LoggerConfig(max_level, default_level, JSONFormatter(JSONConfig()), sink))


def json_pretty_logger(
    indent: str = "  ",
    max_level: LevelLike = LogLevel.INFORMATIONAL,
    default_level: LevelLike = LogLevel.INFORMATIONAL,
    sink: Sink | None = None,
) -> Logger:
    return Logger(LoggerConfig(max_level, default_level, JSONPrettyFormatter(JSONConfig(indent=indent)), sink))


def syslog3164_logger(
    tag: str,
    include_pid: bool = False,
    max_level: LevelLike = LogLevel.INFORMATIONAL,
    default_level: LevelLike = LogLevel.INFORMATIONAL,
    sink: Sink | None = None,
    facility: Facility = Facility.USER,
) -> Logger:
    """RFC3164 logger; ``tag`` is the program name shown before ``[PID]:``."""
    config = SyslogConfig(tag=tag, include_pid=include_pid, facility=facility)
    return Logger(LoggerConfig(max_level, default_level, Syslog3164Formatter(config), sink))


def syslog5424_logger(
    app_name: str,
    msg_id: str = "",
    max_level: LevelLike = LogLevel.INFORMATIONAL,
    default_level: LevelLike = LogLevel.INFORMATIONAL,
    sink: Sink | None = None,
    facility: Facility = Facility.USER,
) -> Logger:
    """RFC5424 logger; ``msg_id`` is the default MSGID when no tag prop is given."""
    config = SyslogConfig(app_name=app_name, msg_id=msg_id, facility=facility)
    return Logger(LoggerConfig(max_level, default_level, Syslog5424Formatter(config), sink))
