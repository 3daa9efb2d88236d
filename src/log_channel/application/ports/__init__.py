"""Ports describing the collaborators a channel talks to."""

from __future__ import annotations

from .handler import HandlerPort
from .processor import ProcessorPort
from .time import ClockPort

__all__ = ["ClockPort", "HandlerPort", "ProcessorPort"]
