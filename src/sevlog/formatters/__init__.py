"""
Formatters turn a log event into the bytes written to a sink.
"""

from .base import Formatter, normalize_line
from .json import JSONConfig, JSONFormatter, JSONPrettyFormatter
from .syslog import (
    Facility,
    Syslog3164Formatter,
    Syslog5424Formatter,
    SyslogConfig,
    parse_sd_element,
    priority,
)

__all__ = [
    "Facility",
    "Formatter",
    "JSONConfig",
    "JSONFormatter",
    "JSONPrettyFormatter",
    "Syslog3164Formatter",
    "Syslog5424Formatter",
    "SyslogConfig",
    "normalize_line",
    "parse_sd_element",
    "priority",
]
