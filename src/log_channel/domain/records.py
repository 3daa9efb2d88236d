"""Record value object describing one log call.

Purpose
-------
Provide an immutable, serialisable representation of a log event as it moves
from the channel through the processor chain into a handler.

Contents
--------
* :class:`LogRecord` dataclass with copy and serialisation helpers.
* Utility function ``_ensure_aware`` for timestamp validation.

System Role
-----------
Sits in the domain layer. The channel creates exactly one record per log call
and never modifies it afterwards; processors derive enriched copies through
:meth:`LogRecord.replace` or :meth:`LogRecord.with_extra`.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any

from .levels import LogLevel


def _ensure_aware(ts: datetime) -> datetime:
    """Validate that ``ts`` is timezone-aware and normalise to UTC."""
    if ts.tzinfo is None or ts.tzinfo.utcoffset(ts) is None:
        raise ValueError("timestamp must be timezone-aware")
    return ts.astimezone(timezone.utc)


@dataclass(slots=True, frozen=True)
class LogRecord:
    """Immutable log record handed to processors and handlers.

    Attributes
    ----------
    message:
        Text passed by the caller.
    level:
        :class:`LogLevel` severity of the call.
    channel:
        Name of the channel that created the record.
    timestamp:
        Capture time in timezone-aware UTC.
    context:
        Ordered copy of the caller-supplied auxiliary data.
    extra:
        Data added by processors; always empty when the channel creates the
        record.
    level_name:
        Label matching ``level``; derived when omitted.
    """

    message: str
    level: LogLevel
    channel: str
    timestamp: datetime
    context: Mapping[str, Any] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)
    level_name: str = ""

    def __post_init__(self) -> None:
        if not isinstance(self.level, LogLevel):
            raise TypeError(f"level must be a LogLevel, got {self.level!r}")
        if not self.level_name:
            object.__setattr__(self, "level_name", self.level.name)
        elif self.level_name != self.level.name:
            raise ValueError(f"level_name {self.level_name!r} does not match level {self.level.name}")
        object.__setattr__(self, "timestamp", _ensure_aware(self.timestamp))
        object.__setattr__(self, "context", dict(self.context))
        object.__setattr__(self, "extra", dict(self.extra))

    def replace(self, **changes: Any) -> "LogRecord":
        """Return a copied record with ``changes`` applied.

        When ``level`` changes without an explicit ``level_name`` the label
        follows the new level.
        """

        if "level" in changes and "level_name" not in changes:
            changes["level_name"] = ""
        return replace(self, **changes)

    def with_extra(self, **values: Any) -> "LogRecord":
        """Return a copy whose ``extra`` mapping also contains ``values``.

        Examples
        --------
        >>> ts = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
        >>> record = LogRecord('hi', LogLevel.INFO, 'app', ts)
        >>> record.with_extra(win=True).extra
        {'win': True}
        >>> record.extra
        {}
        """

        return self.replace(extra={**self.extra, **values})

    def to_dict(self) -> dict[str, Any]:
        """Serialize the record to a dictionary with an ISO8601 timestamp."""

        return {
            "message": self.message,
            "context": dict(self.context),
            "level": self.level.value,
            "level_name": self.level_name,
            "channel": self.channel,
            "timestamp": self.timestamp.isoformat(),
            "extra": dict(self.extra),
        }

    def to_json(self) -> str:
        """Serialize the record to JSON with sorted keys for deterministic output."""

        return json.dumps(self.to_dict(), sort_keys=True, default=str)


__all__ = ["LogRecord"]
