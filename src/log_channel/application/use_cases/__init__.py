"""Use cases composing the domain with the ports."""

from __future__ import annotations

from .dispatch import apply_processors, dispatch_record, select_handler

__all__ = ["apply_processors", "dispatch_record", "select_handler"]
