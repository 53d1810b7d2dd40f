"""Small shared building blocks: snowflakes, locks and queues."""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

DISCORD_EPOCH_MS = 1420070400000
_MAX_UINT64 = (1 << 64) - 1
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class Snowflake(int):
    """A Discord identifier: an unsigned 64 bit integer with an embedded timestamp."""

    def __new__(cls, value: int = 0) -> "Snowflake":
        number = int(value)
        if not 0 <= number <= _MAX_UINT64:
            raise ValueError(f"snowflake out of range: {number}")
        return super().__new__(cls, number)

    def __str__(self) -> str:
        return int.__repr__(self)

    def __repr__(self) -> str:
        return f"Snowflake({int.__repr__(self)})"

    def is_zero(self) -> bool:
        """Return True when the snowflake is unset."""
        return int(self) == 0

    def date(self) -> datetime:
        """Return the creation time encoded in the snowflake, in UTC."""
        millis = (int(self) >> 22) + DISCORD_EPOCH_MS
        return _UNIX_EPOCH + timedelta(milliseconds=millis)


def _parse_uint64(value: str) -> int:
    if not value or not value.isascii() or not value.isdigit():
        raise ValueError(f"invalid snowflake string: {value!r}")
    number = int(value)
    if number > _MAX_UINT64:
        raise ValueError(f"snowflake out of range: {value!r}")
    return number


def parse_snowflake_string(value: str) -> Snowflake:
    """Parse a decimal string; an invalid string gives the zero snowflake."""
    try:
        return Snowflake(_parse_uint64(value))
    except ValueError:
        return Snowflake(0)


def get_snowflake(value: Any) -> Snowflake:
    """Convert an integer, a decimal string or a snowflake into a snowflake."""
    if isinstance(value, Snowflake):
        return value
    if isinstance(value, bool):
        raise TypeError("a bool can not be converted to a snowflake")
    if isinstance(value, int):
        return Snowflake(value)
    if isinstance(value, str):
        return Snowflake(_parse_uint64(value))
    raise TypeError(f"unsupported snowflake type: {type(value).__name__}")


class AtomicLock:
    """A non-blocking lock that is either taken or free."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locked = False

    def acquire_lock(self) -> bool:
        """Take the lock if it is free; return whether it was taken."""
        with self._guard:
            if self._locked:
                return False
            self._locked = True
            return True

    def is_locked(self) -> bool:
        with self._guard:
            return self._locked

    def unlock(self) -> None:
        with self._guard:
            self._locked = False


class QueueEmptyError(LookupError):
    """Raised when popping from an empty queue."""


class Queue:
    """A first-in first-out queue."""

    def __init__(self) -> None:
        self._items: deque[Any] = deque()

    def pop(self) -> Any:
        """Remove and return the oldest item."""
        if not self._items:
            raise QueueEmptyError("queue is empty")
        return self._items.popleft()

    def push(self, *args: Any) -> None:
        """Append the given items in order."""
        self._items.extend(args)

    def __len__(self) -> int:
        return len(self._items)


class ThreadSafeQueue(Queue):
    """A queue guarded by a lock."""

    def __init__(self) -> None:
        super().__init__()
        self._lock = threading.Lock()

    def pop(self) -> Any:
        with self._lock:
            return super().pop()

    def push(self, *args: Any) -> None:
        with self._lock:
            super().push(*args)

    def __len__(self) -> int:
        with self._lock:
            return super().__len__()


NO_TICKET = -1


class TicketQueue:
    """Hands out increasing tickets and lets them through strictly in order."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tickets: list[int] = []
        self._next_ticket = 0

    def new_ticket(self) -> int:
        """Issue a ticket and place it at the back of the line."""
        with self._lock:
            ticket = self._next_ticket
            self._tickets.append(ticket)
            self._next_ticket += 1
            return ticket

    def delete(self, ticket: int) -> None:
        """Remove a ticket from the line, if it is there."""
        with self._lock:
            try:
                self._tickets.remove(ticket)
            except ValueError:
                pass

    def next(self, ticket: int, callback: Callable[[], bool]) -> bool:
        """Let the ticket through if it is first in line and the callback agrees."""
        with self._lock:
            if not self._tickets or self._tickets[0] != ticket:
                return False
            if not callback():
                return False
            self._tickets.pop(0)
            return True

    def __len__(self) -> int:
        with self._lock:
            return len(self._tickets)