"""
JSON formatters: compact single-line objects or indented documents.
"""

from __future__ import annotations

import json
from typing import Any, Dict

import orjson
from pydantic import BaseModel, ConfigDict, Field

from ..levels import LogLevel
from ..props import PropertySet
from .base import Clock, Formatter, local_now


def orjson_dumps(payload: Dict[str, Any], *, option: int = 0) -> str:
    """Serialize with orjson, coercing anything unknown to its string form."""
    return orjson.dumps(payload, default=str, option=option).decode()


class JSONConfig(BaseModel):
    """Options for the JSON formatters."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    indent: str = Field(default="", description="Indent unit; empty means compact output")
    time_key: str = Field(default="", description="Key for an RFC3339 timestamp; empty omits it")


class JSONFormatter(Formatter):
    """Renders ``{"level": ..., "message": ..., <props>}``.

    Props are written after the fixed keys in the order supplied. A repeated
    name (including one shadowing ``level`` or ``message``) overwrites the
    earlier value but keeps the earlier position.
    """

    def __init__(self, config: JSONConfig | None = None, *, clock: Clock = local_now) -> None:
        self.config = config or JSONConfig()
        self._clock = clock

    @property
    def indent(self) -> str:
        return self.config.indent

    def _payload(self, level: LogLevel, message: str, props: PropertySet) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"level": level.label, "message": message}
        if self.config.time_key:
            payload[self.config.time_key] = self._clock().isoformat(timespec="microseconds")
        for prop in props:
            payload[prop.name] = list(prop.value) if isinstance(prop.value, tuple) else prop.value
        return payload

    def render(self, level: LogLevel, message: str, props: PropertySet) -> str:
        payload = self._payload(level, message, props)
        indent = self.config.indent
        if not indent:
            return orjson_dumps(payload)
        if indent == "  ":
            return orjson_dumps(payload, option=orjson.OPT_INDENT_2)
        # orjson only indents by two spaces; round-trip through it first so
        # non-finite floats and unknown values render the same way.
        normalized = orjson.loads(orjson_dumps(payload))
        return json.dumps(normalized, indent=indent, ensure_ascii=False)


class JSONPrettyFormatter(JSONFormatter):
    """JSON formatter that always indents (two spaces unless configured)."""

    def __init__(self, config: JSONConfig | None = None, *, clock: Clock = local_now) -> None:
        config = config or JSONConfig(indent="  ")
        if not config.indent:
            config = config.model_copy(update={"indent": "  "})
        super().__init__(config, clock=clock)
