"""
sevlog: leveled, structured logging with pluggable formatters.

Formats: compact JSON, indented JSON, syslog RFC3164 and RFC5424.

Design Pattern: Strategy Pattern for the formatter abstraction.
Library: orjson for JSON, structlog for the library's own diagnostics.
"""

from .exceptions import ConfigurationError, SevlogError, SinkWriteError
from .formatters import (
    Facility,
    Formatter,
    JSONConfig,
    JSONFormatter,
    JSONPrettyFormatter,
    Syslog3164Formatter,
    Syslog5424Formatter,
    SyslogConfig,
)
from .levels import LEAST_SEVERE, MOST_SEVERE, LogLevel
from .logger import Logger, LoggerConfig
from .props import SYSLOG_APPNAME, SYSLOG_HOSTNAME, SYSLOG_TAG, Prop, PropertySet
from .sinks import FileSink, Sink, StreamSink

__all__ = [
    "ConfigurationError",
    "Facility",
    "FileSink",
    "Formatter",
    "JSONConfig",
    "JSONFormatter",
    "JSONPrettyFormatter",
    "LEAST_SEVERE",
    "LogLevel",
    "Logger",
    "LoggerConfig",
    "MOST_SEVERE",
    "Prop",
    "PropertySet",
    "SYSLOG_APPNAME",
    "SYSLOG_HOSTNAME",
    "SYSLOG_TAG",
    "SevlogError",
    "Sink",
    "SinkWriteError",
    "StreamSink",
    "Syslog3164Formatter",
    "Syslog5424Formatter",
    "SyslogConfig",
]
