from __future__ import annotations

from datetime import datetime, timezone

import pytest

from log_channel.adapters import ContextScrubber, NullHandler, TestHandler
from log_channel.application.ports.handler import HandlerPort
from log_channel.application.ports.processor import ProcessorPort
from log_channel.application.ports.time import ClockPort
from log_channel.channel import SystemClock
from log_channel.domain.levels import LogLevel
from log_channel.domain.records import LogRecord


class _FakeHandler:
    def __init__(self) -> None:
        self.handled: list[LogRecord] = []

    def is_handling(self, record: LogRecord) -> bool:
        return True

    def handle(self, record: LogRecord) -> bool:
        self.handled.append(record)
        return False


class _CallableProcessor:
    def __call__(self, record: LogRecord) -> LogRecord:
        return record.with_extra(seen=True)


class _HandleOnly:
    def handle(self, record: LogRecord) -> bool:
        return True


@pytest.mark.parametrize("handler", [_FakeHandler(), NullHandler(), TestHandler()])
def test_handlers_satisfy_the_handler_port(handler: object, make_record) -> None:
    assert isinstance(handler, HandlerPort)
    record = make_record()
    assert handler.is_handling(record) is True
    assert isinstance(handler.handle(record), bool)


def test_objects_without_eligibility_query_are_not_handlers() -> None:
    assert not isinstance(_HandleOnly(), HandlerPort)


@pytest.mark.parametrize(
    "processor",
    [
        _CallableProcessor(),
        lambda record: record,
        ContextScrubber(patterns={"secret": ".+"}),
    ],
)
def test_processors_satisfy_the_processor_port(processor: object, make_record) -> None:
    assert isinstance(processor, ProcessorPort)
    result = processor(make_record())
    assert isinstance(result, LogRecord)


def test_plain_values_are_not_processors() -> None:
    assert not isinstance("not callable", ProcessorPort)


def test_system_clock_returns_aware_utc() -> None:
    clock: ClockPort = SystemClock()
    assert isinstance(clock, ClockPort)
    now = clock.now()
    assert now.tzinfo is timezone.utc
    assert abs((datetime.now(timezone.utc) - now).total_seconds()) < 5


def test_handler_port_receives_the_full_record(make_record) -> None:
    class ContentFilter:
        def is_handling(self, record: LogRecord) -> bool:
            return "audit" in record.context

        def handle(self, record: LogRecord) -> bool:
            return True

    sink = ContentFilter()
    assert isinstance(sink, HandlerPort)
    assert sink.is_handling(make_record(LogLevel.DEBUG, context={"audit": 1}))
    assert not sink.is_handling(make_record(LogLevel.ALERT))
