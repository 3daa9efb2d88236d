from __future__ import annotations

import itertools

import pytest

from conftest import CHANNEL_NAME, FIXED_NOW, RecordingHandler
from log_channel import Channel, new
from log_channel.adapters import ContextScrubber, NullHandler, TestHandler
from log_channel.domain import EmptyStackError, InvalidProcessorError, LogLevel, LogRecord

LEVEL_METHODS = [
    ("debug", LogLevel.DEBUG),
    ("info", LogLevel.INFO),
    ("warning", LogLevel.WARNING),
    ("error", LogLevel.ERROR),
    ("critical", LogLevel.CRITICAL),
    ("alert", LogLevel.ALERT),
]


def test_new_creates_named_channel() -> None:
    channel = new("payments")
    assert isinstance(channel, Channel)
    assert channel.name == "payments"
    assert channel.handlers == ()
    assert channel.processors == ()


def test_name_is_read_only(channel: Channel) -> None:
    with pytest.raises(AttributeError):
        channel.name = "other"  # type: ignore[misc]


@pytest.mark.parametrize("method, level", LEVEL_METHODS)
def test_level_methods_build_matching_records(channel: Channel, method: str, level: LogLevel) -> None:
    handler = TestHandler()
    channel.push_handler(handler)

    assert getattr(channel, method)("test", {"user": "ada"}) is True

    (record,) = handler.records
    assert record.level is level
    assert record.level_name == level.name
    assert record.channel == CHANNEL_NAME
    assert record.message == "test"
    assert record.context == {"user": "ada"}
    assert record.extra == {}
    assert record.timestamp == FIXED_NOW


def test_message_is_coerced_to_text(channel: Channel) -> None:
    handler = TestHandler()
    channel.push_handler(handler)
    channel.info(42)
    assert handler.records[0].message == "42"


def test_add_record_accepts_level_names_and_numbers(channel: Channel) -> None:
    handler = TestHandler()
    channel.push_handler(handler)
    channel.add_record("critical", "by name")
    channel.add_record(550, "by number")
    assert [record.level for record in handler.records] == [LogLevel.CRITICAL, LogLevel.ALERT]


def test_dispatch_without_handlers_returns_false(channel: Channel) -> None:
    assert channel.alert("nobody listens") is False


def test_payments_scenario() -> None:
    channel = Channel("payments")
    sink = TestHandler(level=LogLevel.WARNING)
    channel.push_handler(sink)

    assert channel.info("x") is False
    assert sink.records == []

    assert channel.error("y") is True
    (record,) = sink.records
    assert (record.level, record.level.value, record.level_name) == (LogLevel.ERROR, 400, "ERROR")
    assert (record.channel, record.message) == ("payments", "y")


@pytest.mark.parametrize(
    "low, high",
    [pair for pair in itertools.combinations(list(LogLevel), 2)],
)
def test_threshold_handler_never_sees_lower_levels(channel: Channel, low: LogLevel, high: LogLevel) -> None:
    handler = TestHandler(level=high)
    channel.push_handler(handler)
    assert channel.add_record(low, "below") is False
    assert handler.records == []


def test_only_the_first_eligible_handler_is_notified(channel: Channel, journal) -> None:
    s3 = RecordingHandler("S3", accepts=True, journal=journal)
    s2 = RecordingHandler("S2", accepts=True, journal=journal)
    s1 = RecordingHandler("S1", accepts=False, journal=journal)
    for handler in (s3, s2, s1):
        channel.push_handler(handler)
    assert [h.name for h in channel.handlers] == ["S1", "S2", "S3"]

    assert channel.warning("irrelevant") is True

    assert journal == [("S1", "is_handling"), ("S2", "is_handling"), ("S2", "handle")]
    assert len(s2.handled) == 1
    assert s1.handled == [] and s3.handled == []


def test_most_recently_pushed_handler_wins(channel: Channel) -> None:
    older, newer = TestHandler(), TestHandler()
    channel.push_handler(older)
    channel.push_handler(newer)
    channel.info("hi")
    assert len(newer.records) == 1
    assert older.records == []


def test_null_handler_silences_levels_below_a_specific_handler(channel: Channel) -> None:
    errors = TestHandler(level=LogLevel.ERROR)
    channel.push_handler(NullHandler())
    channel.push_handler(errors)

    assert channel.debug("noise") is True
    assert channel.error("boom") is True
    assert [record.message for record in errors.records] == ["boom"]


def test_processor_runs_with_the_built_record(channel: Channel) -> None:
    seen: list[LogRecord] = []

    def spy(record: LogRecord) -> LogRecord:
        seen.append(record)
        return record

    channel.push_processor(spy)
    channel.push_handler(TestHandler())
    channel.warning("message")
    assert [record.message for record in seen] == ["message"]


def test_processors_are_executed(channel: Channel) -> None:
    handler = TestHandler()
    channel.push_handler(handler)
    channel.push_processor(lambda record: record.with_extra(win=True))
    channel.error("test")
    assert handler.records[0].extra["win"] is True


def test_processors_run_most_recent_first(channel: Channel) -> None:
    handler = TestHandler()
    channel.push_handler(handler)

    def p1(record: LogRecord) -> LogRecord:
        return record.replace(message=record.message + ">p1")

    def p2(record: LogRecord) -> LogRecord:
        return record.replace(message=record.message + ">p2")

    channel.push_processor(p1)
    channel.push_processor(p2)
    channel.info("start")

    assert handler.records[0].message == "start>p2>p1"


def test_no_processor_runs_when_no_handler_accepts(channel: Channel) -> None:
    counter = {"calls": 0}

    def counting(record: LogRecord) -> LogRecord:
        counter["calls"] += 1
        return record

    channel.push_processor(counting)
    channel.push_handler(TestHandler(level=LogLevel.ERROR))

    assert channel.info("ignored") is False
    assert counter["calls"] == 0

    assert channel.error("kept") is True
    assert counter["calls"] == 1


def test_record_without_processors_arrives_unchanged(channel: Channel) -> None:
    handler = RecordingHandler("only", accepts=True)
    channel.push_handler(handler)
    channel.info("plain", {"k": "v"})

    expected = LogRecord(
        message="plain",
        level=LogLevel.INFO,
        channel=CHANNEL_NAME,
        timestamp=FIXED_NOW,
        context={"k": "v"},
    )
    assert handler.handled == [expected]


def test_scrubber_processor_masks_context(channel: Channel) -> None:
    handler = TestHandler()
    channel.push_handler(handler)
    channel.push_processor(ContextScrubber(patterns={"card": r"\d"}))
    channel.info("charged", {"card": "4111"})
    assert handler.records[0].context["card"] == "***"


def test_handler_stack_pops_in_reverse_order(channel: Channel) -> None:
    handlers = [TestHandler(), NullHandler(), TestHandler()]
    for handler in handlers:
        channel.push_handler(handler)

    popped = [channel.pop_handler() for _ in handlers]

    assert popped == list(reversed(handlers))
    with pytest.raises(EmptyStackError, match="empty handler stack"):
        channel.pop_handler()


def test_processor_stack_pops_in_reverse_order(channel: Channel) -> None:
    processors = [lambda r: r, lambda r: r]
    for processor in processors:
        channel.push_processor(processor)

    assert channel.pop_processor() is processors[1]
    assert channel.pop_processor() is processors[0]
    with pytest.raises(EmptyStackError, match="empty processor stack"):
        channel.pop_processor()


@pytest.mark.parametrize("bad", [None, "strtoupper", 42, object()])
def test_push_processor_rejects_non_callables(channel: Channel, bad: object) -> None:
    with pytest.raises(InvalidProcessorError, match="callable"):
        channel.push_processor(bad)  # type: ignore[arg-type]
    assert channel.processors == ()


def test_invalid_processor_error_is_a_type_error() -> None:
    assert issubclass(InvalidProcessorError, TypeError)


def test_constructor_registrations_follow_push_order(fixed_clock) -> None:
    first, second = TestHandler(), TestHandler()
    identity = lambda record: record  # noqa: E731
    channel = Channel("seeded", handlers=[first, second], processors=[identity], clock=fixed_clock)
    assert channel.handlers == (second, first)
    assert channel.processors == (identity,)


def test_constructor_rejects_non_callable_processor() -> None:
    with pytest.raises(InvalidProcessorError):
        Channel("seeded", processors=["nope"])  # type: ignore[list-item]


def test_sink_errors_propagate_to_the_caller(channel: Channel) -> None:
    class Broken(TestHandler):
        def write(self, record: LogRecord) -> None:
            raise RuntimeError("sink down")

    channel.push_handler(Broken())
    with pytest.raises(RuntimeError, match="sink down"):
        channel.critical("boom")


def test_handler_pushed_during_dispatch_applies_to_next_call(channel: Channel) -> None:
    late = TestHandler(bubble=False)

    class Registering(TestHandler):
        def write(self, record: LogRecord) -> None:
            super().write(record)
            channel.push_handler(late)

    first = Registering()
    channel.push_handler(first)
    channel.info("one")
    channel.info("two")
    assert [r.message for r in first.records] == ["one"]
    assert [r.message for r in late.records] == ["two"]


def test_diagnostic_hook_receives_dispatch_outcomes(fixed_clock) -> None:
    events: list[tuple[str, dict]] = []
    channel = Channel("diag", clock=fixed_clock, diagnostic=lambda name, payload: events.append((name, payload)))
    channel.push_handler(TestHandler(level=LogLevel.ERROR))

    channel.info("skip")
    channel.error("keep")

    assert [name for name, _ in events] == ["record_unhandled", "record_handled"]
    assert events[1][1]["handler"] == "TestHandler"


def test_repr_mentions_stack_sizes(channel: Channel) -> None:
    channel.push_handler(NullHandler())
    assert repr(channel) == "Channel('foo channel', handlers=1, processors=0)"


def test_failing_diagnostic_hook_does_not_fail_the_log_call(fixed_clock) -> None:
    def exploding(name: str, payload: dict) -> None:
        raise RuntimeError("hook down")

    channel = Channel("diag", clock=fixed_clock, diagnostic=exploding)
    handler = TestHandler()
    channel.push_handler(handler)

    assert channel.info("x") is True
    assert channel.info("y") is True
    assert [record.message for record in handler.records] == ["x", "y"]


def test_handler_errors_still_propagate_with_a_diagnostic_hook(fixed_clock) -> None:
    class Broken(TestHandler):
        def write(self, record: LogRecord) -> None:
            raise RuntimeError("sink down")

    channel = Channel("diag", clock=fixed_clock, diagnostic=lambda name, payload: None)
    channel.push_handler(Broken())
    with pytest.raises(RuntimeError, match="sink down"):
        channel.error("boom")
