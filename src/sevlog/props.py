"""
Properties attached to a single log event.

A ``PropertySet`` is built fresh for each log call and never mutated. Values
are squeezed into a small closed set of shapes up front so formatters never
have to inspect arbitrary objects.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple, Union

PropValue = Union[str, int, float, bool, None, Tuple[str, ...]]

# Names interpreted by the syslog formatters. JSON treats them as ordinary keys.
SYSLOG_HOSTNAME = "syslog_hostname"
SYSLOG_APPNAME = "syslog_appname"
SYSLOG_TAG = "syslog_tag"

RESERVED_SYSLOG_NAMES = frozenset({SYSLOG_HOSTNAME, SYSLOG_APPNAME, SYSLOG_TAG})

# orjson only encodes integers that fit in 64 bits (signed or unsigned)
_INT_MIN = -(2**63)
_INT_MAX = 2**64 - 1


def clean_text(text: str) -> str:
    """Replace lone surrogates so the text is valid UTF-8."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return text.encode("utf-8", errors="replace").decode("utf-8")
    return text


def _text(value: Any) -> str:
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    try:
        return clean_text(str(value))
    except Exception:
        return f"<unprintable {type(value).__name__}>"


def normalize_value(value: Any) -> PropValue:
    """Coerce ``value`` into one of the supported property shapes.

    Never raises: anything unrecognized ends up as its string form, as do
    integers too wide for 64 bits.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return clean_text(value)
    if isinstance(value, int):
        return int(value) if _INT_MIN <= value <= _INT_MAX else _text(int(value))
    if isinstance(value, float):
        return float(value)
    if isinstance(value, (list, tuple)):
        return tuple(_text(item) for item in value)
    if isinstance(value, (set, frozenset)):
        return tuple(sorted(_text(item) for item in value))
    return _text(value)


@dataclass(frozen=True)
class Prop:
    """A named value. Names need not be unique within a set."""

    name: str
    value: PropValue = None

    def __post_init__(self) -> None:
        # frozen: bypass __setattr__ to store the normalized forms
        object.__setattr__(self, "name", _text(self.name))
        object.__setattr__(self, "value", normalize_value(self.value))


PropLike = Union[Prop, Tuple[str, Any]]


def _to_prop(item: PropLike) -> Prop:
    if isinstance(item, Prop):
        return item
    name, value = item
    return Prop(name, value)


class PropertySet:
    """Immutable, ordered sequence of ``Prop``.

    Positional items come first, keyword fields after them in keyword order.
    """

    __slots__ = ("_props",)

    def __init__(self, *props: PropLike, **fields: Any) -> None:
        items = [_to_prop(p) for p in props]
        items.extend(Prop(name, value) for name, value in fields.items())
        self._props: Tuple[Prop, ...] = tuple(items)

    @classmethod
    def of(cls, props: Iterable[PropLike]) -> "PropertySet":
        return cls(*props)

    def __iter__(self) -> Iterator[Prop]:
        return iter(self._props)

    def __len__(self) -> int:
        return len(self._props)

    def __getitem__(self, index: int) -> Prop:
        return self._props[index]

    def __bool__(self) -> bool:
        return bool(self._props)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertySet):
            return NotImplemented
        return self._props == other._props

    def __hash__(self) -> int:
        return hash(self._props)

    def __repr__(self) -> str:
        inner = ", ".join(f"{p.name}={p.value!r}" for p in self._props)
        return f"PropertySet({inner})"

    def get(self, name: str, default: Optional[PropValue] = None) -> Optional[PropValue]:
        """Value of the last prop called ``name``."""
        for prop in reversed(self._props):
            if prop.name == name:
                return prop.value
        return default

    def __contains__(self, name: object) -> bool:
        return any(prop.name == name for prop in self._props)

    def without(self, names: Iterable[str]) -> "PropertySet":
        excluded = frozenset(names)
        return PropertySet(*(p for p in self._props if p.name not in excluded))

    def as_dict(self) -> Dict[str, PropValue]:
        """Last write wins; a repeated name keeps its first position."""
        result: Dict[str, PropValue] = {}
        for prop in self._props:
            result[prop.name] = prop.value
        return result


EMPTY_PROPS = PropertySet()
