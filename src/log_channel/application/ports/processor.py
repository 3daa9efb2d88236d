"""Port for record enrichment callables."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from log_channel.domain.records import LogRecord


@runtime_checkable
class ProcessorPort(Protocol):
    """Transform a record before it reaches its handler.

    Plain functions, lambdas, and objects with ``__call__`` all satisfy the
    protocol. Implementations may add to ``extra`` but must keep ``message``,
    ``level``, and ``channel`` intact.
    """

    def __call__(self, record: LogRecord) -> LogRecord:
        """Return the (possibly) enriched ``record``."""


__all__ = ["ProcessorPort"]
