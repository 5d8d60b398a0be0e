"""
Syslog formatters for RFC3164 (BSD) and RFC5424 lines.

Three property names are reserved here (see ``sevlog.props``): hostname,
app name and tag override the header fields and are left out of the trailing
key/value section or structured data.
"""

from __future__ import annotations

import os
import socket
import sys
from datetime import datetime
from enum import IntEnum
from typing import Any, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..exceptions import ConfigurationError
from ..levels import LogLevel
from ..props import (
    RESERVED_SYSLOG_NAMES,
    SYSLOG_APPNAME,
    SYSLOG_HOSTNAME,
    SYSLOG_TAG,
    PropertySet,
    PropValue,
)
from .base import Clock, Formatter, local_now

NILVALUE = "-"
SD_ID = "props@32473"

_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

# RFC5424 header field limits
_HOSTNAME_MAX = 255
_APPNAME_MAX = 48
_PROCID_MAX = 128
_MSGID_MAX = 32
_SD_NAME_MAX = 32

# RFC3164 TAG limit
_TAG_MAX = 32


class Facility(IntEnum):
    KERN = 0
    USER = 1
    MAIL = 2
    DAEMON = 3
    AUTH = 4
    SYSLOG = 5
    LPR = 6
    NEWS = 7
    UUCP = 8
    CRON = 9
    AUTHPRIV = 10
    FTP = 11
    NTP = 12
    AUDIT = 13
    ALERT = 14
    CLOCK = 15
    LOCAL0 = 16
    LOCAL1 = 17
    LOCAL2 = 18
    LOCAL3 = 19
    LOCAL4 = 20
    LOCAL5 = 21
    LOCAL6 = 22
    LOCAL7 = 23


def priority(facility: int, level: LogLevel) -> int:
    """PRI value: facility * 8 + severity ordinal."""
    return int(facility) * 8 + int(level)


class SyslogConfig(BaseModel):
    """Options shared by both syslog formatters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    tag: str = Field(default="", description="RFC3164 TAG (program name)")
    app_name: str = Field(default="", description="RFC5424 APP-NAME; RFC3164 tag fallback")
    msg_id: str = Field(default="", description="RFC5424 MSGID default")
    include_pid: bool = Field(default=False, description="Emit the process id")
    facility: Facility = Field(default=Facility.USER, description="Syslog facility")
    hostname: str = Field(default="", description="Host identifier; empty uses the machine hostname")

    @field_validator("facility", mode="before")
    @classmethod
    def parse_facility(cls, value: Any) -> Any:
        if isinstance(value, str):
            key = value.strip()
            if key.isdigit():
                return int(key)
            try:
                return Facility[key.upper()]
            except KeyError:
                raise ValueError(f"unknown syslog facility {value!r}") from None
        return value


def plain_value(value: PropValue) -> str:
    """String form of a property value for syslog text."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, tuple):
        return ",".join(value)
    return str(value)


def _prop_text(props: PropertySet, name: str) -> str:
    value = props.get(name)
    return plain_value(value) if value is not None else ""


def _machine_hostname() -> str:
    try:
        return socket.gethostname()
    except OSError:
        return ""


def _process_name() -> str:
    name = os.path.basename(sys.argv[0]) if sys.argv and sys.argv[0] else ""
    return name or "sevlog"


class _SyslogFormatter(Formatter):
    def __init__(self, config: SyslogConfig | None = None, *, clock: Clock = local_now) -> None:
        if config is not None and not isinstance(config, SyslogConfig):
            raise ConfigurationError("syslog formatter expects a SyslogConfig", field="config")
        self.config = config or SyslogConfig()
        self._clock = clock

    @property
    def facility(self) -> Facility:
        return self.config.facility

    def _now(self) -> datetime:
        now = self._clock()
        return now if now.tzinfo is not None else now.astimezone()


# =============================================================================
# RFC3164
# =============================================================================


def rfc3164_timestamp(moment: datetime) -> str:
    """``Mmm dd hh:mm:ss`` with a space-padded day and English month names."""
    return f"{_MONTHS[moment.month - 1]} {moment.day:>2} {moment:%H:%M:%S}"


def kv_name(name: str) -> str:
    """Key for the RFC3164 `k=v` tail: no spaces, `=` or control characters."""
    cleaned = "".join(ch if ord(ch) > 32 and ord(ch) != 127 and ch != "=" else "_" for ch in name)
    return cleaned or "_"


class Syslog3164Formatter(_SyslogFormatter):
    """``<PRI>TIMESTAMP HOSTNAME TAG[PID]: MESSAGE k=v ...``"""

    def __init__(self, config: SyslogConfig | None = None, *, clock: Clock = local_now) -> None:
        super().__init__(config, clock=clock)
        # BSD syslog wants the short host name
        self._hostname = (self.config.hostname or _machine_hostname()).split(".")[0] or NILVALUE
        self._tag = self.config.tag or self.config.app_name or _process_name()

    def render(self, level: LogLevel, message: str, props: PropertySet) -> str:
        hostname = header_field(_prop_text(props, SYSLOG_HOSTNAME) or self._hostname, _HOSTNAME_MAX)
        tag = header_field(
            _prop_text(props, SYSLOG_TAG) or _prop_text(props, SYSLOG_APPNAME) or self._tag,
            _TAG_MAX,
        )
        pid = f"[{os.getpid()}]" if self.config.include_pid else ""

        line = (
            f"<{priority(self.facility, level)}>{rfc3164_timestamp(self._now())} "
            f"{hostname} {tag}{pid}: {message}"
        )
        pairs = [f"{kv_name(p.name)}={plain_value(p.value)}" for p in props.without(RESERVED_SYSLOG_NAMES)]
        if pairs:
            line = f"{line} {' '.join(pairs)}"
        return line


# =============================================================================
# RFC5424
# =============================================================================


def rfc5424_timestamp(moment: datetime) -> str:
    """RFC3339 timestamp with microseconds and a numeric offset."""
    return moment.isoformat(timespec="microseconds")


def header_field(value: str, max_len: int) -> str:
    """Restrict to printable US-ASCII without spaces; empty becomes NILVALUE."""
    cleaned = "".join(ch for ch in value if 33 <= ord(ch) <= 126)[:max_len]
    return cleaned or NILVALUE


def sd_param_name(name: str) -> str:
    cleaned = "".join(
        ch if 33 <= ord(ch) <= 126 and ch not in '= ]"' else "_" for ch in name
    )[:_SD_NAME_MAX]
    return cleaned or "_"


def escape_sd_value(value: str) -> str:
    """Backslash-escape the three characters RFC5424 reserves in PARAM-VALUE."""
    return value.replace("\\", "\\\\").replace('"', '\\"').replace("]", "\\]")


def structured_data(props: PropertySet) -> str:
    """One SD-ELEMENT holding every prop, or NILVALUE when there are none."""
    if not props:
        return NILVALUE
    params = " ".join(
        f'{sd_param_name(p.name)}="{escape_sd_value(plain_value(p.value))}"' for p in props
    )
    return f"[{SD_ID} {params}]"


def parse_sd_element(text: str) -> Tuple[str, List[Tuple[str, str]]]:
    """Parse a single ``[SD-ID name="value" ...]`` element.

    Inverse of ``structured_data`` for one element; raises ``ValueError`` on
    malformed input.
    """
    if not text.startswith("["):
        raise ValueError("SD-ELEMENT must start with '['")
    pos = 1
    end = len(text)
    while pos < end and text[pos] not in " ]":
        pos += 1
    sd_id = text[1:pos]
    if not sd_id:
        raise ValueError("SD-ELEMENT has an empty SD-ID")

    params: List[Tuple[str, str]] = []
    while pos < end and text[pos] == " ":
        pos += 1
        eq = text.find("=", pos)
        if eq < 0 or eq + 1 >= end or text[eq + 1] != '"':
            raise ValueError(f"malformed SD-PARAM at offset {pos}")
        name = text[pos:eq]
        pos = eq + 2
        chars: List[str] = []
        while True:
            if pos >= end:
                raise ValueError("unterminated PARAM-VALUE")
            ch = text[pos]
            if ch == "\\" and pos + 1 < end and text[pos + 1] in '"\\]':
                chars.append(text[pos + 1])
                pos += 2
            elif ch == '"':
                pos += 1
                break
            else:
                chars.append(ch)
                pos += 1
        params.append((name, "".join(chars)))

    if pos >= end or text[pos] != "]":
        raise ValueError("SD-ELEMENT must end with ']'")
    return sd_id, params


class Syslog5424Formatter(_SyslogFormatter):
    """``<PRI>1 TIMESTAMP HOSTNAME APP-NAME PROCID MSGID SD MSG``"""

    VERSION = 1

    def __init__(self, config: SyslogConfig | None = None, *, clock: Clock = local_now) -> None:
        super().__init__(config, clock=clock)
        self._hostname = self.config.hostname or _machine_hostname() or NILVALUE

    def render(self, level: LogLevel, message: str, props: PropertySet) -> str:
        hostname = header_field(_prop_text(props, SYSLOG_HOSTNAME) or self._hostname, _HOSTNAME_MAX)
        app_name = header_field(_prop_text(props, SYSLOG_APPNAME) or self.config.app_name, _APPNAME_MAX)
        proc_id = header_field(str(os.getpid()) if self.config.include_pid else "", _PROCID_MAX)
        msg_id = header_field(_prop_text(props, SYSLOG_TAG) or self.config.msg_id, _MSGID_MAX)
        sd = structured_data(props.without(RESERVED_SYSLOG_NAMES))

        header = (
            f"<{priority(self.facility, level)}>{self.VERSION} {rfc5424_timestamp(self._now())} "
            f"{hostname} {app_name} {proc_id} {msg_id} {sd}"
        )
        return f"{header} {message}" if message else header
