from __future__ import annotations

from datetime import datetime, timezone

import pytest

from log_channel.channel import Channel
from log_channel.domain.levels import LogLevel
from log_channel.domain.records import LogRecord

CHANNEL_NAME = "foo channel"
FIXED_NOW = datetime(2025, 9, 23, 12, 0, tzinfo=timezone.utc)


class FixedClock:
    def now(self) -> datetime:
        return FIXED_NOW


class RecordingHandler:
    """Handler double that logs every call it receives into a shared journal."""

    def __init__(self, name: str, *, accepts: bool, journal: list[tuple[str, str]] | None = None) -> None:
        self.name = name
        self.accepts = accepts
        self.journal = journal if journal is not None else []
        self.handled: list[LogRecord] = []

    def is_handling(self, record: LogRecord) -> bool:
        self.journal.append((self.name, "is_handling"))
        return self.accepts

    def handle(self, record: LogRecord) -> bool:
        self.journal.append((self.name, "handle"))
        self.handled.append(record)
        return True


@pytest.fixture
def fixed_clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def channel(fixed_clock: FixedClock) -> Channel:
    return Channel(CHANNEL_NAME, clock=fixed_clock)


@pytest.fixture
def journal() -> list[tuple[str, str]]:
    return []


@pytest.fixture
def make_record():
    def _make(level: LogLevel = LogLevel.INFO, message: str = "hello", **kwargs) -> LogRecord:
        return LogRecord(message=message, level=level, channel=CHANNEL_NAME, timestamp=FIXED_NOW, **kwargs)

    return _make
