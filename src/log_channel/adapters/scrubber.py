"""Regex-based processor masking sensitive values.

Purpose
-------
Apply configurable regular expressions to the ``context`` and ``extra``
payloads of a :class:`LogRecord` so secrets are masked before a handler sees
the record.

Contents
--------
* :class:`ContextScrubber` – concrete :class:`ProcessorPort` implementation.

System Role
-----------
Registered with :meth:`Channel.push_processor`; runs only for records that
already have a recipient handler.
"""

from __future__ import annotations

import re
from collections import UserString
from collections.abc import Mapping, Sequence, Set as AbstractSet
from typing import Any, Dict, Pattern

from log_channel.application.ports.processor import ProcessorPort
from log_channel.domain.records import LogRecord


class ContextScrubber(ProcessorPort):
    """Redact sensitive fields using regular expressions.

    Parameters
    ----------
    patterns:
        Mapping of field name → regex string; matching values are redacted.
    replacement:
        Token replacing matched values (defaults to ``"***"``).

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from log_channel.domain.levels import LogLevel
    >>> ts = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> record = LogRecord('login', LogLevel.INFO, 'auth', ts, context={'password': 'hunter2'})
    >>> ContextScrubber(patterns={'password': '.+'})(record).context['password']
    '***'
    """

    def __init__(self, *, patterns: Mapping[str, str], replacement: str = "***") -> None:
        """Compile the provided ``patterns`` and store the replacement token."""
        self._patterns: Dict[str, Pattern[str]] = {key: re.compile(pattern) for key, pattern in patterns.items()}
        self._replacement = replacement

    def __call__(self, record: LogRecord) -> LogRecord:
        """Return a copy of ``record`` with matching fields redacted."""
        return record.replace(
            context=self._scrub_mapping(record.context),
            extra=self._scrub_mapping(record.extra),
        )

    def _scrub_mapping(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        scrubbed = dict(payload)
        for key, regex in self._patterns.items():
            if key in scrubbed:
                scrubbed[key] = self._scrub_value(scrubbed[key], regex)
        return scrubbed

    def _scrub_value(self, value: Any, pattern: Pattern[str]) -> Any:
        """Recursively scrub ``value`` using ``pattern``.

        Nested mappings, sequences, sets, and raw bytes are walked so a secret
        stays masked however the caller packed it. Tuples and frozensets keep
        their type; any other sequence comes back as a list and any other set
        as a set.
        """

        if isinstance(value, (str, UserString)):
            return self._replacement if pattern.search(str(value)) else value
        if isinstance(value, (bytes, bytearray, memoryview)):
            text = bytes(value).decode("utf-8", errors="ignore")
            return self._replacement if pattern.search(text) else value
        if isinstance(value, Mapping):
            return {k: self._scrub_value(v, pattern) for k, v in value.items()}
        if isinstance(value, AbstractSet):
            scrubbed_items = [self._scrub_value(item, pattern) for item in value]
            if isinstance(value, frozenset):
                return frozenset(scrubbed_items)
            return set(scrubbed_items)
        if isinstance(value, Sequence):
            converted = [self._scrub_value(item, pattern) for item in value]
            if isinstance(value, tuple):
                return tuple(converted)
            return converted
        return value


__all__ = ["ContextScrubber"]
