import typing as t
from datetime import datetime, timedelta, timezone

import pytest

FIXED_TIME = datetime(2026, 3, 5, 14, 7, 9, 123456, tzinfo=timezone(timedelta(hours=2)))


class RecordingSink:
    """Sink that keeps every write for inspection."""

    def __init__(self) -> None:
        self.writes: t.List[bytes] = []

    def write(self, data: bytes) -> int:
        self.writes.append(data)
        return len(data)

    @property
    def last(self) -> bytes:
        return self.writes[-1] if self.writes else b""


class FailingSink:
    """Sink configured to always fail."""

    def __init__(self) -> None:
        self.attempts = 0

    def write(self, data: bytes) -> int:
        self.attempts += 1
        raise OSError("sink configured to fail")


class ShortSink(RecordingSink):
    """Sink that reports fewer bytes than it was given."""

    def write(self, data: bytes) -> int:
        super().write(data)
        return len(data) // 2


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def failing_sink() -> FailingSink:
    return FailingSink()


@pytest.fixture
def short_sink() -> ShortSink:
    return ShortSink()


@pytest.fixture
def fixed_clock() -> t.Callable[[], datetime]:
    return lambda: FIXED_TIME
