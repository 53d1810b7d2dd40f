"""HTTP header handling and rate limit header normalisation."""

from __future__ import annotations

import json
import math
from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from email.utils import parsedate_to_datetime
from typing import Any

X_AUDIT_LOG_REASON = "X-Audit-Log-Reason"
X_RATELIMIT_PRECISION = "X-RateLimit-Precision"
X_RATELIMIT_BUCKET = "X-RateLimit-Bucket"
X_RATELIMIT_LIMIT = "X-RateLimit-Limit"
X_RATELIMIT_REMAINING = "X-RateLimit-Remaining"
X_RATELIMIT_RESET = "X-RateLimit-Reset"
X_RATELIMIT_RESET_AFTER = "X-RateLimit-Reset-After"
X_RATELIMIT_GLOBAL = "X-RateLimit-Global"
RATELIMIT_RETRY_AFTER = "Retry-After"
DISGORD_NORMALIZED_HEADER = "X-Disgord-Normalized-Kufdsfksduhf-S47yf"
X_DISGORD_NOW = "X-Disgord-Now-fsagkhf"

HTTP_TOO_MANY_REQUESTS = 429

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _canonical(name: str) -> str:
    return "-".join(part[:1].upper() + part[1:].lower() for part in name.split("-"))


class Headers:
    """Case-insensitive, multi-valued HTTP headers."""

    def __init__(self, initial: Mapping[str, Any] | None = None) -> None:
        self._fields: dict[str, list[str]] = {}
        for name, value in (initial or {}).items():
            values = [value] if isinstance(value, str) else list(value)
            for item in values:
                self.add(name, item)

    def get(self, name: str, default: str = "") -> str:
        """Return the first value of a field, or the default."""
        values = self._fields.get(_canonical(name))
        return values[0] if values else default

    def get_all(self, name: str) -> list[str]:
        return list(self._fields.get(_canonical(name), []))

    def set(self, name: str, value: str) -> None:
        self._fields[_canonical(name)] = [value]

    def add(self, name: str, value: str) -> None:
        self._fields.setdefault(_canonical(name), []).append(value)

    def delete(self, name: str) -> None:
        self._fields.pop(_canonical(name), None)

    def copy(self) -> "Headers":
        duplicate = Headers()
        duplicate._fields = {name: list(values) for name, values in self._fields.items()}
        return duplicate

    def items(self) -> Iterator[tuple[str, list[str]]]:
        for name, values in self._fields.items():
            yield name, list(values)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _canonical(name) in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._fields))

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"Headers({self._fields!r})"


@dataclass
class Response:
    """An HTTP response: status and headers."""

    status_code: int
    headers: Headers = field(default_factory=Headers)
    reason: str = ""


@dataclass
class RateLimitResponse:
    """The body Discord sends along with a 429 response."""

    message: str = ""
    retry_after: float = 0.0
    is_global: bool = False

    @classmethod
    def from_json(cls, body: bytes | str) -> "RateLimitResponse":
        data = json.loads(body)
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("rate limit body is not a JSON object")
        return cls(
            message=str(data.get("message", "")),
            retry_after=float(data.get("retry_after", 0.0) or 0.0),
            is_global=bool(data.get("global", False)),
        )


class RateLimitedError(Exception):
    """Raised when a request is rate limited."""

    def __init__(self, message: str = "rate limited", reset: datetime = _UNIX_EPOCH) -> None:
        super().__init__(message)
        self.message = message
        self.reset = reset


def header_to_time(header: Headers) -> datetime:
    """Read the response's date field, to detect clock drift against Discord."""
    date_str = header.get("date")
    if not date_str:
        raise ValueError("missing header field 'date'")
    try:
        moment = parsedate_to_datetime(date_str)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"invalid date header: {date_str!r}") from exc
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _epoch_ms(moment: datetime) -> int:
    return (moment - _UNIX_EPOCH) // timedelta(milliseconds=1)


def _seconds_to_ms(seconds: float) -> int:
    return int(seconds * 1000)


def _parse_float(text: str) -> float:
    try:
        value = float(text)
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def normalize_discord_header(status_code: int, header: Headers, body: bytes | None) -> Headers:
    """Rewrite rate limit fields so the reset is an epoch in milliseconds.

    The body of a 429 response may carry the delay and the global flag.
    The header is changed in place and returned.
    """
    now_field = header.get(X_DISGORD_NOW)
    if now_field and now_field.isascii() and now_field.isdigit():
        now = _UNIX_EPOCH + timedelta(milliseconds=int(now_field))
    else:
        now = datetime.now(timezone.utc)

    delay = 0
    retry = header.get(X_RATELIMIT_RESET_AFTER)
    if retry:
        delay = _seconds_to_ms(_parse_float(retry))

    if delay == 0 and status_code == HTTP_TOO_MANY_REQUESTS and body is not None:
        info = RateLimitResponse.from_json(body)
        if info.is_global:
            header.set(X_RATELIMIT_GLOBAL, "true")
        if info.retry_after > 0:
            delay = _seconds_to_ms(info.retry_after)

    reset = header.get(X_RATELIMIT_RESET)
    if reset:
        if delay == 0:
            header.set(X_RATELIMIT_RESET, str(_seconds_to_ms(_parse_float(reset))))
        else:
            header.set(X_RATELIMIT_RESET, str(_epoch_ms(now) + delay))
    elif delay > 0:
        try:
            timestamp = header_to_time(header)
        except ValueError:
            timestamp = now
        header.set(X_RATELIMIT_RESET, str(_epoch_ms(timestamp) + delay))

    header.set(DISGORD_NORMALIZED_HEADER, "true")
    return header