"""Shared value types: Discord timestamps, discriminators and guild levels."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import IntEnum
from typing import Any

from .util import Snowflake

__all__ = [
    "DefaultMessageNotificationLvl",
    "Discriminator",
    "ExplicitContentFilterLvl",
    "MFALvl",
    "Time",
    "UnsupportedTypeError",
    "VerificationLvl",
    "extract_attribute",
    "new_discriminator",
]


class UnsupportedTypeError(TypeError):
    """Raised when a given parameter type is not supported."""


_ZERO_DATETIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_RFC3339 = re.compile(
    r"^(\d{4})-(\d{2})-(\d{2})[Tt](\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?([Zz]|[+-]\d{2}:\d{2})$"
)


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.match(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    year, month, day, hour, minute, second, fraction, zone = match.groups()
    micro = int((fraction or "0")[:6].ljust(6, "0"))
    if zone in ("Z", "z"):
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        hours, minutes = int(zone[1:3]), int(zone[4:6])
        tz = timezone(sign * timedelta(hours=hours, minutes=minutes))
    return datetime(
        int(year), int(month), int(day), int(hour), int(minute), int(second), micro, tzinfo=tz
    )


@dataclass(frozen=True)
class Time:
    """A Discord timestamp; an unset value is the zero time."""

    value: datetime | None = None

    def is_zero(self) -> bool:
        return self.value is None or self.value == _ZERO_DATETIME

    def to_json(self) -> str:
        """Return the JSON value: the Discord formatted timestamp, or "" when unset."""
        return "" if self.is_zero() else str(self)

    @classmethod
    def from_json(cls, data: Any) -> "Time":
        """Build a time from a decoded JSON value; an empty string gives the zero time."""
        if data is None or data == "":
            return cls()
        if not isinstance(data, str):
            raise UnsupportedTypeError(f"timestamp must be a string, got {type(data).__name__}")
        return cls(_parse_rfc3339(data))

    def __str__(self) -> str:
        moment = self.value if self.value is not None else _ZERO_DATETIME
        return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond:06d}+00:00"


class ExplicitContentFilterLvl(IntEnum):
    DISABLED = 0
    MEMBERS_WITHOUT_ROLES = 1
    ALL_MEMBERS = 2

    def disabled(self) -> bool:
        return self is ExplicitContentFilterLvl.DISABLED

    def members_without_roles(self) -> bool:
        return self is ExplicitContentFilterLvl.MEMBERS_WITHOUT_ROLES

    def all_members(self) -> bool:
        return self is ExplicitContentFilterLvl.ALL_MEMBERS


class MFALvl(IntEnum):
    NONE = 0
    ELEVATED = 1

    def none(self) -> bool:
        return self is MFALvl.NONE

    def elevated(self) -> bool:
        return self is MFALvl.ELEVATED


class VerificationLvl(IntEnum):
    NONE = 0
    LOW = 1
    MEDIUM = 2
    HIGH = 3
    VERY_HIGH = 4

    def none(self) -> bool:
        return self is VerificationLvl.NONE

    def low(self) -> bool:
        return self is VerificationLvl.LOW

    def medium(self) -> bool:
        return self is VerificationLvl.MEDIUM

    def high(self) -> bool:
        return self is VerificationLvl.HIGH

    def very_high(self) -> bool:
        return self is VerificationLvl.VERY_HIGH


class DefaultMessageNotificationLvl(IntEnum):
    ALL_MESSAGES = 0
    ONLY_MENTIONS = 1

    def all_messages(self) -> bool:
        return self is DefaultMessageNotificationLvl.ALL_MESSAGES

    def only_mentions(self) -> bool:
        return self is DefaultMessageNotificationLvl.ONLY_MENTIONS


class Discriminator(int):
    """A user's four digit tag, stored as an unsigned 16 bit number."""

    def __new__(cls, value: int = 0) -> "Discriminator":
        number = int(value)
        if not 0 <= number <= 0xFFFF:
            raise ValueError(f"discriminator out of range: {number}")
        return super().__new__(cls, number)

    def __str__(self) -> str:
        number = int(self)
        if number == 0:
            return ""
        return str(number).rjust(4, "0")

    def __repr__(self) -> str:
        return f"Discriminator({int(self)})"

    def __format__(self, spec: str) -> str:
        return str(self) if not spec else int.__format__(self, spec)

    def not_set(self) -> bool:
        """Return True when no discriminator is set."""
        return int(self) == 0

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, data: Any) -> "Discriminator":
        """Build a discriminator from a decoded JSON value such as "0001"."""
        if data is None or data == "":
            return cls(0)
        if isinstance(data, bool):
            raise UnsupportedTypeError("a bool is not a discriminator")
        if isinstance(data, int):
            return cls(data)
        if isinstance(data, str):
            if not (data.isascii() and data.isdigit()):
                raise ValueError(f"invalid discriminator: {data!r}")
            return cls(int(data) & 0xFFFF)
        raise UnsupportedTypeError(f"unsupported discriminator type: {type(data).__name__}")


def new_discriminator(value: str) -> Discriminator:
    """Parse a decimal discriminator string; raises ValueError when invalid."""
    if not value or not value.isascii() or not value.isdigit():
        raise ValueError(f"invalid discriminator: {value!r}")
    return Discriminator(int(value))


def extract_attribute(attribute_filter: bytes | str, scope: int, data: bytes | str) -> Snowflake:
    """Find a snowflake in raw JSON by the text just before its value.

    For the root id use the filter '"id":"' with scope 0. Only matches at
    scope 0 count; braces in between change the scope.
    """
    needle = attribute_filter.encode() if isinstance(attribute_filter, str) else bytes(attribute_filter)
    raw = data.encode() if isinstance(data, str) else bytes(data)

    start = 0
    last = len(raw) - len(needle)
    for i in range(1, last + 1):
        char = raw[i : i + 1]
        if char == b"{":
            scope += 1
        elif char == b"}":
            scope -= 1
        if scope != 0:
            continue
        if raw[i : i + len(needle)] == needle:
            start = i + len(needle)
            break

    if start == 0:
        raise ValueError("unable to locate ID")

    end = start
    while end < len(raw) and 0x30 <= raw[end] <= 0x39:
        end += 1
    if end == start:
        raise ValueError("id was empty")
    return Snowflake(int(raw[start:end]))