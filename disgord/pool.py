"""Object pools that recycle resettable objects."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Generic, Protocol, TypeVar

from .message import Message, User

__all__ = ["Pool", "Pools"]


class _Resettable(Protocol):
    def reset(self) -> None: ...


T = TypeVar("T", bound=_Resettable)


class Pool(Generic[T]):
    """Keeps reset objects around for reuse; creates new ones when empty."""

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._items: list[T] = []

    def put(self, item: T) -> None:
        """Reset the object and return it to the pool."""
        item.reset()
        with self._lock:
            self._items.append(item)

    def get(self) -> T:
        """Take an object from the pool, or create a new one."""
        with self._lock:
            if self._items:
                return self._items.pop()
        return self._factory()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


class Pools:
    """The pools of commonly created resources."""

    def __init__(self) -> None:
        self.user: Pool[User] = Pool(User)
        self.message: Pool[Message] = Pool(lambda: Message(author=self.user.get()))