"""Concrete handlers and processors plugged into a channel."""

from __future__ import annotations

from .handlers import NullHandler, TestHandler, ThresholdHandler
from .scrubber import ContextScrubber

__all__ = ["ContextScrubber", "NullHandler", "TestHandler", "ThresholdHandler"]
