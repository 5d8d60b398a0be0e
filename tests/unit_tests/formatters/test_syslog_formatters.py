"""
RFC3164 and RFC5424 formatters.
"""

import os

import pytest
from pydantic import ValidationError

from sevlog import (
    SYSLOG_APPNAME,
    SYSLOG_HOSTNAME,
    SYSLOG_TAG,
    Facility,
    LogLevel,
    PropertySet,
    Syslog3164Formatter,
    Syslog5424Formatter,
    SyslogConfig,
)
from sevlog.formatters.syslog import (
    escape_sd_value,
    header_field,
    parse_sd_element,
    priority,
    rfc3164_timestamp,
    sd_param_name,
    structured_data,
)

RESERVED = PropertySet(
    (SYSLOG_HOSTNAME, "jnichols@debbie"),
    (SYSLOG_APPNAME, "some-other-app"),
    (SYSLOG_TAG, "testing"),
)


def _pri(line: bytes) -> int:
    return int(line[1 : line.index(b">")])


class TestPriority:
    @pytest.mark.parametrize("facility", [Facility.KERN, Facility.USER, Facility.LOCAL7])
    def test_pri_for_every_severity(self, facility, fixed_clock) -> None:
        config = SyslogConfig(facility=facility, hostname="h", tag="t")
        for formatter in (Syslog3164Formatter(config, clock=fixed_clock), Syslog5424Formatter(config, clock=fixed_clock)):
            for level in LogLevel:
                line = formatter.format(level, "m", PropertySet())
                assert _pri(line) == facility * 8 + int(level)

    def test_emergency_is_severity_zero(self) -> None:
        assert priority(Facility.LOCAL0, LogLevel.EMERGENCY) == 128
        assert priority(Facility.LOCAL0, LogLevel.DEBUG) == 135

    def test_default_facility_is_user(self) -> None:
        assert SyslogConfig().facility is Facility.USER

    def test_facility_by_name_or_number(self) -> None:
        assert SyslogConfig(facility="local3").facility is Facility.LOCAL3
        assert SyslogConfig(facility="4").facility is Facility.AUTH

    @pytest.mark.parametrize("facility", [24, -1, "nope"])
    def test_invalid_facility(self, facility) -> None:
        with pytest.raises(ValidationError):
            SyslogConfig(facility=facility)


class TestSyslog3164:
    def test_timestamp_pads_day_with_space(self, fixed_clock) -> None:
        assert rfc3164_timestamp(fixed_clock()) == "Mar  5 14:07:09"

    def test_line_layout(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="log-test", hostname="web-1"), clock=fixed_clock)
        out = fmt.format(LogLevel.WARNING, "disk at 90%", PropertySet(("disk", "/dev/sda1")))
        assert out == b"<12>Mar  5 14:07:09 web-1 log-test: disk at 90% disk=/dev/sda1\n"

    def test_pid_included_when_enabled(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="app", hostname="h", include_pid=True), clock=fixed_clock)
        out = fmt.format(LogLevel.ERROR, "boom", PropertySet())
        assert out == f"<11>Mar  5 14:07:09 h app[{os.getpid()}]: boom\n".encode()

    def test_short_hostname(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="t", hostname="web-1.example.com"), clock=fixed_clock)
        assert b" web-1 t: " in fmt.format(LogLevel.ERROR, "m", PropertySet())

    def test_reserved_props_override_and_are_excluded(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="default-tag", hostname="h"), clock=fixed_clock)
        props = PropertySet(*RESERVED, ("a", 1))
        out = fmt.format(LogLevel.NOTICE, "m", props)
        assert out == b"<13>Mar  5 14:07:09 jnichols@debbie testing: m a=1\n"

    def test_app_name_prop_used_as_tag_without_tag_prop(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="default-tag", hostname="h"), clock=fixed_clock)
        out = fmt.format(LogLevel.NOTICE, "m", PropertySet((SYSLOG_APPNAME, "svc")))
        assert out == b"<13>Mar  5 14:07:09 h svc: m\n"

    def test_value_rendering_and_order(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="t", hostname="h"), clock=fixed_clock)
        props = PropertySet(("z", ["hello", "world"]), ("b", True), ("n", None), ("a", 2.5))
        out = fmt.format(LogLevel.DEBUG, "m", props)
        assert out.endswith(b": m z=hello,world b=true n= a=2.5\n")

    def test_deterministic_with_fixed_clock(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="t"), clock=fixed_clock)
        props = PropertySet(("a", 1))
        assert fmt.format(LogLevel.ALERT, "m", props) == fmt.format(LogLevel.ALERT, "m", props)

    def test_tag_falls_back_to_app_name(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(app_name="svc", hostname="h"), clock=fixed_clock)
        assert b" h svc: " in fmt.format(LogLevel.ERROR, "m", PropertySet())


class TestSyslog5424:
    def test_line_layout(self, fixed_clock) -> None:
        fmt = Syslog5424Formatter(SyslogConfig(app_name="log-test", msg_id="log", hostname="web-1"), clock=fixed_clock)
        out = fmt.format(LogLevel.WARNING, "disk at 90%", PropertySet(("disk", "/dev/sda1")))
        assert out == (
            b'<12>1 2026-03-05T14:07:09.123456+02:00 web-1 log-test - log '
            b'[props@32473 disk="/dev/sda1"] disk at 90%\n'
        )

    def test_nil_values(self, fixed_clock) -> None:
        fmt = Syslog5424Formatter(SyslogConfig(hostname="h"), clock=fixed_clock)
        out = fmt.format(LogLevel.INFORMATIONAL, "m", PropertySet())
        assert out == b"<14>1 2026-03-05T14:07:09.123456+02:00 h - - - - m\n"

    def test_empty_message_has_no_trailing_space(self, fixed_clock) -> None:
        fmt = Syslog5424Formatter(SyslogConfig(hostname="h"), clock=fixed_clock)
        assert fmt.format(LogLevel.INFORMATIONAL, "", PropertySet()).endswith(b" - - - -\n")

    def test_procid(self, fixed_clock) -> None:
        fmt = Syslog5424Formatter(SyslogConfig(hostname="h", include_pid=True), clock=fixed_clock)
        assert f" h - {os.getpid()} - - ".encode() in fmt.format(LogLevel.ERROR, "m", PropertySet())

    def test_reserved_props_override_and_are_excluded(self, fixed_clock) -> None:
        fmt = Syslog5424Formatter(SyslogConfig(app_name="app", msg_id="id", hostname="h"), clock=fixed_clock)
        out = fmt.format(LogLevel.ERROR, "m", PropertySet(*RESERVED, ("k", "v")))
        assert out == (
            b'<11>1 2026-03-05T14:07:09.123456+02:00 jnichols@debbie some-other-app - testing '
            b'[props@32473 k="v"] m\n'
        )

    def test_only_reserved_props_render_nil_sd(self, fixed_clock) -> None:
        fmt = Syslog5424Formatter(SyslogConfig(hostname="h"), clock=fixed_clock)
        out = fmt.format(LogLevel.ERROR, "m", RESERVED)
        assert out.endswith(b" testing - m\n")

    def test_naive_clock_gets_local_offset(self) -> None:
        from datetime import datetime

        fmt = Syslog5424Formatter(SyslogConfig(hostname="h"), clock=lambda: datetime(2026, 1, 2, 3, 4, 5))
        stamp = fmt.format(LogLevel.ERROR, "m", PropertySet()).split(b" ")[1]
        assert stamp.startswith(b"2026-01-02T03:04:05.000000")
        assert len(stamp) == len(b"2026-01-02T03:04:05.000000+00:00")

    def test_header_fields_are_sanitized(self) -> None:
        assert header_field("my app", 48) == "myapp"
        assert header_field("", 48) == "-"
        assert header_field("x" * 40, 32) == "x" * 32

    def test_property_order_preserved(self, fixed_clock) -> None:
        fmt = Syslog5424Formatter(SyslogConfig(hostname="h"), clock=fixed_clock)
        out = fmt.format(LogLevel.ERROR, "m", PropertySet(("c", 1), ("a", 2), ("b", 3)))
        assert b'[props@32473 c="1" a="2" b="3"]' in out


class TestStructuredData:
    def test_escaping(self) -> None:
        assert escape_sd_value('a"b]c\\d') == 'a\\"b\\]c\\\\d'

    def test_escaped_element(self) -> None:
        sd = structured_data(PropertySet(("path", 'C:\\dir "x" [y]')))
        assert sd == '[props@32473 path="C:\\\\dir \\"x\\" [y\\]"]'

    @pytest.mark.parametrize(
        "value",
        ['quote " here', "bracket ] here", "slash \\ here", '\\"]', '"]\\"]\\', "plain", ""],
    )
    def test_round_trip(self, value) -> None:
        sd_id, params = parse_sd_element(structured_data(PropertySet(("v", value), ("w", "x"))))
        assert sd_id == "props@32473"
        assert params == [("v", value), ("w", "x")]

    def test_round_trip_through_formatter(self, fixed_clock) -> None:
        value = 'he said "hi" [ok] \\o/'
        fmt = Syslog5424Formatter(SyslogConfig(hostname="h"), clock=fixed_clock)
        line = fmt.format(LogLevel.ERROR, "m", PropertySet(("quote", value))).decode()
        start = line.index("[")
        end = line.rindex("] m\n") + 1
        _, params = parse_sd_element(line[start:end])
        assert params == [("quote", value)]

    def test_empty_renders_nil(self) -> None:
        assert structured_data(PropertySet()) == "-"

    def test_param_names_are_sanitized(self) -> None:
        assert sd_param_name('a b=c]d"e') == "a_b_c_d_e"
        assert sd_param_name("") == "_"
        assert len(sd_param_name("n" * 50)) == 32

    @pytest.mark.parametrize("text", ["", "no-bracket", "[]", '[id k="v"', '[id k=v]', '[id k="v'])
    def test_parse_rejects_malformed(self, text) -> None:
        with pytest.raises(ValueError):
            parse_sd_element(text)


class TestSyslog3164Sanitizing:
    def test_header_fields_from_props_are_cleaned(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="t", hostname="h"), clock=fixed_clock)
        props = PropertySet((SYSLOG_HOSTNAME, "web 1"), (SYSLOG_TAG, "my tag"))
        out = fmt.format(LogLevel.ERROR, "m", props)
        assert out == b"<11>Mar  5 14:07:09 web1 mytag: m\n"

    def test_tag_is_truncated(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="t" * 40, hostname="h"), clock=fixed_clock)
        assert f" h {'t' * 32}: m".encode() in fmt.format(LogLevel.ERROR, "m", PropertySet())

    def test_blank_prop_hostname_falls_back(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="t", hostname="h"), clock=fixed_clock)
        out = fmt.format(LogLevel.ERROR, "m", PropertySet((SYSLOG_HOSTNAME, "")))
        assert b" h t: m" in out

    def test_tail_keys_are_cleaned(self, fixed_clock) -> None:
        fmt = Syslog3164Formatter(SyslogConfig(tag="t", hostname="h"), clock=fixed_clock)
        out = fmt.format(LogLevel.ERROR, "m", PropertySet(("a b", 1), ("c=d", 2), ("", 3)))
        assert out.endswith(b": m a_b=1 c_d=2 _=3\n")
