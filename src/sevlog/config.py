"""
Environment-driven logger configuration.

Every setting reads from a ``SEVLOG_`` prefixed environment variable or a
``.env`` file, e.g. ``SEVLOG_FORMAT=syslog_rfc5424``.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .formatters import (
    Formatter,
    JSONConfig,
    JSONFormatter,
    JSONPrettyFormatter,
    Syslog3164Formatter,
    Syslog5424Formatter,
    SyslogConfig,
)
from .levels import LogLevel
from .logger import Logger, LoggerConfig
from .sinks import Sink


class LogFormat(str, Enum):
    JSON = "json"
    JSON_PRETTY = "json_pretty"
    SYSLOG_RFC3164 = "syslog_rfc3164"
    SYSLOG_RFC5424 = "syslog_rfc5424"


class LoggingSettings(BaseSettings):
    """Logger and formatter options."""

    model_config = SettingsConfigDict(
        env_prefix="SEVLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    max_level: str = Field(default="informational", description="Least severe level written")
    default_level: str = Field(default="informational", description="Level used by Logger.emit")
    format: LogFormat = Field(default=LogFormat.JSON, description="Output format")
    indent: str = Field(default="  ", description="Indent unit for json_pretty")
    time_key: str = Field(default="", description="JSON timestamp key; empty omits it")
    tag: str = Field(default="", description="RFC3164 tag")
    app_name: str = Field(default="", description="RFC5424 app name")
    msg_id: str = Field(default="", description="RFC5424 default MSGID")
    include_pid: bool = Field(default=False, description="Emit the process id in syslog lines")
    facility: str = Field(default="user", description="Syslog facility name or number")
    hostname: str = Field(default="", description="Syslog hostname override")


def build_formatter(settings: LoggingSettings) -> Formatter:
    """Instantiate the formatter selected by ``settings.format``."""
    try:
        if settings.format is LogFormat.JSON:
            return JSONFormatter(JSONConfig(time_key=settings.time_key))
        if settings.format is LogFormat.JSON_PRETTY:
            return JSONPrettyFormatter(JSONConfig(indent=settings.indent, time_key=settings.time_key))

        syslog_config = SyslogConfig(
            tag=settings.tag,
            app_name=settings.app_name,
            msg_id=settings.msg_id,
            include_pid=settings.include_pid,
            facility=settings.facility,
            hostname=settings.hostname,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid formatter settings: {exc}", field="format") from exc

    if settings.format is LogFormat.SYSLOG_RFC3164:
        return Syslog3164Formatter(syslog_config)
    return Syslog5424Formatter(syslog_config)


def create_logger(settings: LoggingSettings | None = None, sink: Sink | None = None) -> Logger:
    """Build a ``Logger`` from settings (environment by default) and a sink."""
    settings = settings or LoggingSettings()
    return Logger(
        LoggerConfig(
            max_level=LogLevel.parse(settings.max_level),
            default_level=LogLevel.parse(settings.default_level),
            formatter=build_formatter(settings),
            sink=sink,
        )
    )
