"""Public package surface of the channel-based logging façade.

``Channel`` is the entry point: push handlers and processors, then log through
``debug`` … ``alert``. The remaining exports are the record/level value types,
the capability ports handlers and processors satisfy, and the bundled
adapters.
"""

from __future__ import annotations

from .adapters import ContextScrubber, NullHandler, TestHandler, ThresholdHandler
from .application.ports import ClockPort, HandlerPort, ProcessorPort
from .channel import Channel, SystemClock, new
from .domain import ChannelError, EmptyStackError, InvalidProcessorError, LogLevel, LogRecord

__all__ = [
    "Channel",
    "ChannelError",
    "ClockPort",
    "ContextScrubber",
    "EmptyStackError",
    "HandlerPort",
    "InvalidProcessorError",
    "LogLevel",
    "LogRecord",
    "NullHandler",
    "ProcessorPort",
    "SystemClock",
    "TestHandler",
    "ThresholdHandler",
    "new",
]
