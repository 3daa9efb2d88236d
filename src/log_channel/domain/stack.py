"""Ordered stack used for both handler and processor registrations.

Purpose
-------
Give each channel its own push/pop collection where the most recently pushed
entry sits in front and is visited first.

Contents
--------
* :class:`LifoStack` with push/pop, iteration, and snapshot helpers.

System Role
-----------
Owned exclusively by :class:`log_channel.channel.Channel`; entries are shared
references whose lifetime the registering caller manages.
"""

from __future__ import annotations

from collections import deque
from typing import Deque, Generic, Iterable, Iterator, TypeVar

from .errors import EmptyStackError

T = TypeVar("T")


class LifoStack(Generic[T]):
    """Stack whose front is the most recently pushed item.

    Examples
    --------
    >>> stack = LifoStack("handler")
    >>> stack.push("first")
    >>> stack.push("second")
    >>> list(stack)
    ['second', 'first']
    >>> stack.pop()
    'second'
    """

    def __init__(self, label: str, items: Iterable[T] = ()) -> None:
        self._label = label
        self._items: Deque[T] = deque()
        for item in items:
            self.push(item)

    @property
    def label(self) -> str:
        """Return the name used in error messages (``handler``, ``processor``)."""

        return self._label

    def push(self, item: T) -> None:
        """Place ``item`` in front of every existing entry."""
        self._items.appendleft(item)

    def pop(self) -> T:
        """Remove and return the front entry."""
        if not self._items:
            raise EmptyStackError(f"You tried to pop from an empty {self._label} stack.")
        return self._items.popleft()

    def peek(self) -> T:
        """Return the front entry without removing it."""
        if not self._items:
            raise EmptyStackError(f"The {self._label} stack is empty.")
        return self._items[0]

    def clear(self) -> None:
        self._items.clear()

    def snapshot(self) -> tuple[T, ...]:
        """Return the entries in visiting order as an immutable tuple."""

        return tuple(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __repr__(self) -> str:
        return f"LifoStack({self._label!r}, size={len(self._items)})"


__all__ = ["LifoStack"]
