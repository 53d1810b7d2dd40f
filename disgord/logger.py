"""A minimal logging interface and two simple implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class Logger(ABC):
    """The logging interface used throughout the package."""

    @abstractmethod
    def debug(self, *args: Any) -> None: ...

    @abstractmethod
    def info(self, *args: Any) -> None: ...

    @abstractmethod
    def error(self, *args: Any) -> None: ...


class EmptyLogger(Logger):
    """A logger that discards everything."""

    def debug(self, *args: Any) -> None:
        pass

    def info(self, *args: Any) -> None:
        pass

    def error(self, *args: Any) -> None:
        pass


def _emit(level: str, args: tuple[Any, ...]) -> None:
    print(f"{level} -- " + " ".join(str(arg) for arg in args))


class FmtPrinter(Logger):
    """A logger that prints each entry to standard output."""

    def debug(self, *args: Any) -> None:
        _emit("debug", args)

    def info(self, *args: Any) -> None:
        _emit("info", args)

    def error(self, *args: Any) -> None:
        _emit("error", args)