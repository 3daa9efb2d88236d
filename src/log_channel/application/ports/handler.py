"""Handler port describing the sink capability.

Purpose
-------
Define the narrow contract a sink must satisfy before a channel will dispatch
records to it, so concrete writers never leak into the dispatch core.

Contents
--------
* :class:`HandlerPort` – runtime-checkable protocol with an eligibility query
  and a consume operation.

System Role
-----------
The channel walks its handler stack asking :meth:`HandlerPort.is_handling`
and delivers the enriched record to the first handler that says yes.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from log_channel.domain.records import LogRecord


@runtime_checkable
class HandlerPort(Protocol):
    """Accept or reject records and consume the accepted ones."""

    def is_handling(self, record: LogRecord) -> bool:
        """Return ``True`` when this handler accepts ``record``.

        Must be free of side effects; the channel may call it for records it
        ends up delivering elsewhere. The full record is passed so handlers can
        filter on more than the level.
        """

    def handle(self, record: LogRecord) -> bool:
        """Consume ``record`` and report whether it is fully handled."""


__all__ = ["HandlerPort"]
