"""Use case deciding where a single record goes and in what shape.

Purpose
-------
Implement the first-eligible-wins dispatch: walk the handler stack, stop at
the first handler that accepts the record, enrich the record through the
processor chain, and hand it over.

Contents
--------
* :func:`select_handler` – eligibility walk over the handler stack.
* :func:`apply_processors` – LIFO processor chain.
* :func:`dispatch_record` – full dispatch returning the accepted flag.
* :func:`build_diagnostic_emitter` – adapts the optional diagnostic hook.

System Role
-----------
Application-layer orchestrator invoked by :class:`log_channel.channel.Channel`
for every log call. Processors only run once a recipient exists, so expensive
enrichment (stack capture, lookups) is never wasted on records nobody wants.
Exceptions raised by handlers or processors are not caught here; only the
diagnostic hook is guarded.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any

from log_channel.application.ports import HandlerPort, ProcessorPort
from log_channel.domain import LogRecord

logger = logging.getLogger(__name__)

DiagnosticHook = Callable[[str, dict[str, Any]], None] | None


def select_handler(handlers: Iterable[HandlerPort], record: LogRecord) -> HandlerPort | None:
    """Return the first handler accepting ``record``, or ``None``.

    Handlers after the first match are not queried.

    Examples
    --------
    >>> from datetime import datetime, timezone
    >>> from log_channel.domain import LogLevel
    >>> class Threshold:
    ...     def __init__(self, level):
    ...         self.level = level
    ...     def is_handling(self, record):
    ...         return record.level >= self.level
    ...     def handle(self, record):
    ...         return True
    >>> strict, lenient = Threshold(LogLevel.ERROR), Threshold(LogLevel.DEBUG)
    >>> ts = datetime(2025, 9, 30, 12, 0, tzinfo=timezone.utc)
    >>> select_handler([strict, lenient], LogRecord('x', LogLevel.INFO, 'app', ts)) is lenient
    True
    """

    for handler in handlers:
        if handler.is_handling(record):
            return handler
    return None


def apply_processors(processors: Iterable[ProcessorPort], record: LogRecord) -> LogRecord:
    """Feed ``record`` through ``processors`` in order, chaining their outputs."""

    for processor in processors:
        record = processor(record)
    return record


def build_diagnostic_emitter(diagnostic: DiagnosticHook) -> Callable[[str, dict[str, Any]], None]:
    """Return a callable that logs milestones and forwards them to ``diagnostic``.

    Failures inside ``diagnostic`` are logged and never reach the log call.
    """

    def emit(event_name: str, payload: dict[str, Any]) -> None:
        logger.debug("%s %s", event_name, payload)
        if diagnostic is None:
            return
        try:
            diagnostic(event_name, payload)
        except Exception as diagnostic_exc:  # noqa: BLE001
            logger.error("Diagnostic hook raised while reporting %s", event_name, exc_info=diagnostic_exc)

    return emit


def dispatch_record(
    record: LogRecord,
    *,
    handlers: Iterable[HandlerPort],
    processors: Iterable[ProcessorPort],
    emit: Callable[[str, dict[str, Any]], None] | None = None,
) -> bool:
    """Deliver ``record`` to the first eligible handler.

    Parameters
    ----------
    record:
        Freshly built record; never mutated here.
    handlers:
        Handler stack in visiting order (most recently pushed first).
    processors:
        Processor stack in visiting order (most recently pushed first).
    emit:
        Optional diagnostic emitter from :func:`build_diagnostic_emitter`.

    Returns
    -------
    bool
        ``True`` when a handler consumed the record, ``False`` when none was
        eligible (in which case no processor ran).
    """

    handler = select_handler(handlers, record)
    if handler is None:
        _notify(emit, "record_unhandled", record, handler=None)
        return False
    enriched = apply_processors(processors, record)
    handler.handle(enriched)
    _notify(emit, "record_handled", enriched, handler=handler)
    return True


def _notify(
    emit: Callable[[str, dict[str, Any]], None] | None,
    event_name: str,
    record: LogRecord,
    *,
    handler: HandlerPort | None,
) -> None:
    if emit is None:
        return
    payload: dict[str, Any] = {"channel": record.channel, "level": record.level_name}
    if handler is not None:
        payload["handler"] = type(handler).__name__
    emit(event_name, payload)


__all__ = ["DiagnosticHook", "apply_processors", "build_diagnostic_emitter", "dispatch_record", "select_handler"]
