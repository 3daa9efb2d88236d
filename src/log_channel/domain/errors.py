"""Exceptions raised for structural misuse of a channel.

Both errors signal programming mistakes (lifecycle bugs, bad registrations),
so they are raised synchronously and never downgraded to warnings. Failures
raised by handlers or processors are deliberately not part of this hierarchy;
they reach the caller unchanged.
"""

from __future__ import annotations


class ChannelError(Exception):
    """Base class for channel configuration errors."""


class EmptyStackError(ChannelError, IndexError):
    """Raised when popping from a handler or processor stack with no entries."""


class InvalidProcessorError(ChannelError, TypeError):
    """Raised when registering a processor that cannot be called."""


__all__ = ["ChannelError", "EmptyStackError", "InvalidProcessorError"]
