"""Threshold handlers implementing :class:`HandlerPort`.

Purpose
-------
Supply the minimal sinks every host needs before wiring real writers: a
handler that swallows eligible records and a handler that keeps them in
memory for assertions.

Contents
--------
* :class:`ThresholdHandler` – abstract base with a minimum level and a
  ``bubble`` flag.
* :class:`NullHandler` – discards eligible records.
* :class:`TestHandler` – stores eligible records for inspection.

System Role
-----------
Adapters in the outer ring. Eligibility here is level-only; the port receives
the full record so other handlers can filter on content.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from log_channel.application.ports.handler import HandlerPort
from log_channel.domain.levels import LogLevel
from log_channel.domain.records import LogRecord


class ThresholdHandler(HandlerPort, ABC):
    """Accept records at or above ``level``.

    Parameters
    ----------
    level:
        Minimum severity; names and numbers are coerced through
        :meth:`LogLevel.coerce`.
    bubble:
        When ``True`` :meth:`handle` reports the record as not fully handled,
        signalling that fan-out layers built on top may pass it on.
    """

    def __init__(self, level: LogLevel | str | int = LogLevel.DEBUG, *, bubble: bool = True) -> None:
        self.level = LogLevel.coerce(level)
        self.bubble = bubble

    def is_handling(self, record: LogRecord) -> bool:
        """Return ``True`` when ``record.level`` meets the threshold."""
        return record.level >= self.level

    def handle(self, record: LogRecord) -> bool:
        """Write ``record`` and return ``True`` unless the handler bubbles."""
        self.write(record)
        return not self.bubble

    @abstractmethod
    def write(self, record: LogRecord) -> None:
        """Perform the sink-specific effect for ``record``."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(level={self.level.name}, bubble={self.bubble})"


class NullHandler(ThresholdHandler):
    """Accept eligible records and throw them away.

    Pushing it at a given level silences everything from that level up that
    would otherwise fall through to handlers below it.
    """

    def __init__(self, level: LogLevel | str | int = LogLevel.DEBUG) -> None:
        super().__init__(level, bubble=False)

    def write(self, record: LogRecord) -> None:
        return None


class TestHandler(ThresholdHandler):
    """Keep every handled record in :attr:`records`.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> handler = TestHandler(level="INFO")
    >>> ts = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> record = LogRecord('saved', LogLevel.ERROR, 'app', ts)
    >>> handler.is_handling(record) and handler.handle(record)
    False
    >>> handler.has_record('saved', LogLevel.ERROR)
    True
    """

    __test__ = False  # keep pytest from collecting the class

    def __init__(self, level: LogLevel | str | int = LogLevel.DEBUG, *, bubble: bool = True) -> None:
        super().__init__(level, bubble=bubble)
        self.records: list[LogRecord] = []

    def write(self, record: LogRecord) -> None:
        self.records.append(record)

    def records_at(self, level: LogLevel | str | int) -> list[LogRecord]:
        """Return the stored records logged exactly at ``level``."""

        wanted = LogLevel.coerce(level)
        return [record for record in self.records if record.level is wanted]

    def has_records(self, level: LogLevel | str | int) -> bool:
        return bool(self.records_at(level))

    def has_record(self, message: str, level: LogLevel | str | int) -> bool:
        """Return ``True`` when a record with ``message`` was stored at ``level``."""

        return any(record.message == message for record in self.records_at(level))

    def clear(self) -> None:
        self.records.clear()


__all__ = ["NullHandler", "TestHandler", "ThresholdHandler"]
