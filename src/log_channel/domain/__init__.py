"""Domain entities and value objects used by the dispatch core."""

from __future__ import annotations

from .errors import ChannelError, EmptyStackError, InvalidProcessorError
from .levels import LogLevel
from .records import LogRecord
from .stack import LifoStack

__all__ = [
    "ChannelError",
    "EmptyStackError",
    "InvalidProcessorError",
    "LifoStack",
    "LogLevel",
    "LogRecord",
]
