"""Channel façade owning the handler and processor stacks.

Purpose
-------
Expose the application-facing logger: a named channel with one entry point per
severity that builds a :class:`LogRecord` and dispatches it through the
first-eligible-wins pipeline.

Contents
--------
* :class:`Channel` – stack management plus the level convenience methods.
* :func:`new` – factory mirroring ``Channel(name)``.
* :class:`SystemClock` – default UTC clock.

System Role
-----------
Outer shell of the dispatch core. All policy lives in
:mod:`log_channel.application.use_cases.dispatch`; this module owns state
(the two stacks) and translates convenience calls into records.

Concurrency
-----------
A channel holds no locks. Dispatch runs synchronously to completion in the
caller's thread; mutating the stacks while another thread dispatches requires
external synchronisation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from .application.ports import ClockPort, HandlerPort, ProcessorPort
from .application.use_cases.dispatch import DiagnosticHook, build_diagnostic_emitter, dispatch_record
from .domain import InvalidProcessorError, LifoStack, LogLevel, LogRecord

logger = logging.getLogger(__name__)


class SystemClock(ClockPort):
    """Concrete clock port returning timezone-aware UTC timestamps."""

    def now(self) -> datetime:
        """Return the current UTC timestamp with timezone info."""
        return datetime.now(timezone.utc)


class Channel:
    """Named logging channel with a handler stack and a processor stack.

    Parameters
    ----------
    name:
        Channel name stamped on every record; immutable afterwards.
    handlers, processors:
        Optional initial registrations, pushed in the given order so the last
        entry ends up on top.
    clock:
        Source of record timestamps; defaults to :class:`SystemClock`.
    diagnostic:
        Optional callback receiving ``(event_name, payload)`` milestones such
        as ``record_handled`` and ``record_unhandled``.

    Examples
    --------
    >>> from log_channel.adapters import TestHandler
    >>> channel = Channel("payments")
    >>> handler = TestHandler(level="WARNING")
    >>> channel.push_handler(handler)
    >>> channel.info("x")
    False
    >>> channel.error("y")
    True
    >>> handler.records[0].level_name, handler.records[0].channel
    ('ERROR', 'payments')
    """

    def __init__(
        self,
        name: str,
        *,
        handlers: Iterable[HandlerPort] = (),
        processors: Iterable[ProcessorPort] = (),
        clock: ClockPort | None = None,
        diagnostic: DiagnosticHook = None,
    ) -> None:
        self._name = name
        self._handlers: LifoStack[HandlerPort] = LifoStack("handler", handlers)
        self._processors: LifoStack[ProcessorPort] = LifoStack("processor")
        for processor in processors:
            self.push_processor(processor)
        self._clock: ClockPort = clock if clock is not None else SystemClock()
        self._emit = build_diagnostic_emitter(diagnostic)

    @property
    def name(self) -> str:
        """Return the channel name."""

        return self._name

    @property
    def handlers(self) -> tuple[HandlerPort, ...]:
        """Return the handler stack in visiting order."""

        return self._handlers.snapshot()

    @property
    def processors(self) -> tuple[ProcessorPort, ...]:
        """Return the processor stack in visiting order."""

        return self._processors.snapshot()

    def push_handler(self, handler: HandlerPort) -> None:
        """Push ``handler`` on top of the handler stack."""
        self._handlers.push(handler)
        logger.debug("channel %s: pushed handler %s", self._name, type(handler).__name__)

    def pop_handler(self) -> HandlerPort:
        """Remove and return the handler on top of the stack.

        Raises
        ------
        EmptyStackError
            When no handler is registered.
        """
        handler = self._handlers.pop()
        logger.debug("channel %s: popped handler %s", self._name, type(handler).__name__)
        return handler

    def push_processor(self, processor: ProcessorPort) -> None:
        """Push ``processor`` on top of the processor stack.

        Raises
        ------
        InvalidProcessorError
            When ``processor`` is not callable; checked here rather than on
            first use.
        """
        if not callable(processor):
            raise InvalidProcessorError(
                f"Processors must be callables (function or object with a __call__ method), {processor!r} given",
            )
        self._processors.push(processor)
        logger.debug("channel %s: pushed processor %r", self._name, processor)

    def pop_processor(self) -> ProcessorPort:
        """Remove and return the processor on top of the stack.

        Raises
        ------
        EmptyStackError
            When no processor is registered.
        """
        processor = self._processors.pop()
        logger.debug("channel %s: popped processor %r", self._name, processor)
        return processor

    def add_record(
        self,
        level: LogLevel | str | int,
        message: Any,
        context: Mapping[str, Any] | None = None,
    ) -> bool:
        """Build a record at ``level`` and dispatch it.

        Returns
        -------
        bool
            Whether a handler consumed the record.
        """

        record = self._build_record(LogLevel.coerce(level), message, context)
        return dispatch_record(
            record,
            handlers=self._handlers.snapshot(),
            processors=self._processors.snapshot(),
            emit=self._emit,
        )

    def debug(self, message: Any, context: Mapping[str, Any] | None = None) -> bool:
        """Log ``message`` at DEBUG."""
        return self.add_record(LogLevel.DEBUG, message, context)

    def info(self, message: Any, context: Mapping[str, Any] | None = None) -> bool:
        """Log ``message`` at INFO."""
        return self.add_record(LogLevel.INFO, message, context)

    def warning(self, message: Any, context: Mapping[str, Any] | None = None) -> bool:
        """Log ``message`` at WARNING."""
        return self.add_record(LogLevel.WARNING, message, context)

    def error(self, message: Any, context: Mapping[str, Any] | None = None) -> bool:
        """Log ``message`` at ERROR."""
        return self.add_record(LogLevel.ERROR, message, context)

    def critical(self, message: Any, context: Mapping[str, Any] | None = None) -> bool:
        """Log ``message`` at CRITICAL."""
        return self.add_record(LogLevel.CRITICAL, message, context)

    def alert(self, message: Any, context: Mapping[str, Any] | None = None) -> bool:
        """Log ``message`` at ALERT."""
        return self.add_record(LogLevel.ALERT, message, context)

    def _build_record(self, level: LogLevel, message: Any, context: Mapping[str, Any] | None) -> LogRecord:
        return LogRecord(
            message=str(message),
            level=level,
            channel=self._name,
            timestamp=self._clock.now(),
            context=dict(context or {}),
        )

    def __repr__(self) -> str:
        return f"Channel({self._name!r}, handlers={len(self._handlers)}, processors={len(self._processors)})"


def new(name: str) -> Channel:
    """Return a fresh :class:`Channel` called ``name``."""

    return Channel(name)


__all__ = ["Channel", "SystemClock", "new"]
