"""Severity levels understood by every channel.

Purpose
-------
Provide the fixed, totally ordered severity enumeration that handlers compare
against and records carry, together with the conversions callers need when
levels arrive as names, numbers, or stdlib :mod:`logging` constants.

Contents
--------
* :class:`LogLevel` enum with ordering, parsing helpers, and presentation
  metadata.
* ``_ICON_TABLE`` constant mapping levels to console glyphs.

System Role
-----------
Lives in the domain layer. The numeric spacing (100 between the main levels)
leaves room for intermediate levels without renumbering existing ones.
"""

from __future__ import annotations

import logging
from enum import Enum
from functools import total_ordering


@total_ordering
class LogLevel(Enum):
    """Enumerated severities, ordered by their numeric value."""

    DEBUG = 100
    INFO = 200
    WARNING = 300
    ERROR = 400
    CRITICAL = 500
    ALERT = 550

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.value < other.value

    @property
    def severity(self) -> str:
        """Return the lowercase severity name for structured payloads."""

        return self.name.lower()

    @property
    def icon(self) -> str:
        """Return the unicode icon visualizing the level on consoles."""

        return _ICON_TABLE[self]

    def to_python_level(self) -> int:
        """Return the closest :mod:`logging` constant for this level."""

        return _PYTHON_LEVELS[self]

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        normalized = name.strip().upper()
        try:
            return cls[normalized]
        except KeyError as exc:
            raise ValueError(f"Unknown log level: {name!r}") from exc

    @classmethod
    def from_numeric(cls, level: int) -> "LogLevel":
        """Return the :class:`LogLevel` whose value equals ``level``."""
        try:
            return cls(level)
        except ValueError as exc:
            raise ValueError(f"Unsupported log level numeric: {level}") from exc

    @classmethod
    def coerce(cls, value: "LogLevel | str | int") -> "LogLevel":
        """Normalise ``value`` (member, name, or number) into a :class:`LogLevel`.

        Examples
        --------
        >>> LogLevel.coerce("warning") is LogLevel.WARNING
        True
        >>> LogLevel.coerce(550) is LogLevel.ALERT
        True
        """

        if isinstance(value, LogLevel):
            return value
        if isinstance(value, str):
            return cls.from_name(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return cls.from_numeric(value)
        raise TypeError(f"Cannot interpret {value!r} as a log level")


_ICON_TABLE = {
    LogLevel.DEBUG: "🐞",
    LogLevel.INFO: "ℹ",
    LogLevel.WARNING: "⚠",
    LogLevel.ERROR: "✖",
    LogLevel.CRITICAL: "☠",
    LogLevel.ALERT: "🚨",
}

_PYTHON_LEVELS = {
    LogLevel.DEBUG: logging.DEBUG,
    LogLevel.INFO: logging.INFO,
    LogLevel.WARNING: logging.WARNING,
    LogLevel.ERROR: logging.ERROR,
    LogLevel.CRITICAL: logging.CRITICAL,
    LogLevel.ALERT: logging.CRITICAL,
}
# stdlib logging has nothing above CRITICAL; ALERT folds onto it.


__all__ = ["LogLevel"]
