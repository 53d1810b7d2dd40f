"""Rate limit buckets that combine a leaky bucket with a token bucket."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from datetime import datetime, timedelta, timezone

from .header import (
    DISGORD_NORMALIZED_HEADER,
    HTTP_TOO_MANY_REQUESTS,
    X_RATELIMIT_BUCKET,
    X_RATELIMIT_GLOBAL,
    X_RATELIMIT_REMAINING,
    X_RATELIMIT_RESET,
    Headers,
    Response,
    header_to_time,
)
from .util import AtomicLock, TicketQueue

GLOBAL_HASH = "global"

ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)
_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_POLL_INTERVAL = 0.01

Transaction = Callable[[], "tuple[Response, bytes | None]"]


def _parse_int(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _now() -> datetime:
    return datetime.now(timezone.utc)


class Bucket:
    """A rate limit bucket for one or more endpoints.

    A bucket without a global bucket, or whose global bucket is itself,
    is the global bucket.
    """

    def __init__(self, global_bucket: Bucket | None = None) -> None:
        self._mu = threading.RLock()
        self.atomic_lock = AtomicLock()
        self.hash = ""
        self.queue = TicketQueue()
        self.remaining = -1
        self.reset_time = _now()
        self.discord_reset_time = ZERO_TIME
        self.updated_at = ZERO_TIME
        self.global_bucket = global_bucket
        self.using_global = False

    def _is_global(self) -> bool:
        return self.global_bucket is None or self.global_bucket is self

    def acquire_lock(self) -> bool:
        """Lock this bucket, and the global bucket when it is in effect."""
        if not self.atomic_lock.acquire_lock():
            return False
        try:
            self.selective_global_lock()
        except RuntimeError:
            self.atomic_lock.unlock()
            return False
        return True

    def selective_global_lock(self) -> bool:
        """Lock the global bucket if it is currently active.

        Raises RuntimeError when the global bucket is active but already locked.
        """
        if self._is_global():
            return False
        global_bucket = self.global_bucket
        assert global_bucket is not None
        with global_bucket._mu:
            global_active = global_bucket.active()
        if not global_active:
            return False

        if not global_bucket.atomic_lock.acquire_lock():
            raise RuntimeError("unable to acquire needed global lock")
        with global_bucket._mu:
            if not global_bucket.active():
                global_bucket.atomic_lock.unlock()
            else:
                self.using_global = True
        return True

    def transaction(self, do: Transaction, timeout: float | None = None) -> tuple[Response, bytes | None]:
        """Wait for this bucket's turn and rate limit, then run the request.

        Raises TimeoutError when the timeout (in seconds) runs out first.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        ticket = self.queue.new_ticket()
        while True:
            if deadline is not None:
                left = deadline - time.monotonic()
                if left <= 0:
                    self.queue.delete(ticket)
                    raise TimeoutError("time out")
                time.sleep(min(_POLL_INTERVAL, left))
            else:
                time.sleep(_POLL_INTERVAL)
            if self.queue.next(ticket, self.acquire_lock):
                break

        using_global = self.using_global
        bucket = self.global_bucket if using_global and self.global_bucket is not None else self
        try:
            now = _now()
            wait = timedelta(0)
            if bucket.reset_time > now and bucket.remaining == 0:
                wait = bucket.reset_time - now
            if deadline is not None and deadline - time.monotonic() < wait.total_seconds():
                raise TimeoutError(f"time out, bucket resets in {wait}")
            if wait > timedelta(0):
                time.sleep(wait.total_seconds())

            response, body = do()

            adjusted = self.update_after_request(response.headers, response.status_code)
            with bucket._mu:
                if not adjusted and bucket.remaining > 0:
                    bucket.remaining -= 1
            return response, body
        finally:
            if using_global and self.global_bucket is not None:
                self.using_global = False
                self.global_bucket.atomic_lock.unlock()
            self.atomic_lock.unlock()

    def update_after_request(self, header: Headers, status_code: int) -> bool:
        """Update the bucket from a normalised response header.

        Returns whether the remaining count was adjusted.
        """
        if not header.get(DISGORD_NORMALIZED_HEADER):
            raise RuntimeError("headers were not normalized to use milliseconds")

        try:
            discord_time = header_to_time(header)
        except ValueError:
            discord_time = _now()
        diff = _now() - discord_time

        bucket_hash = header.get(X_RATELIMIT_BUCKET)
        is_global = X_RATELIMIT_BUCKET in header and bucket_hash == ""
        is_global = is_global or header.get(X_RATELIMIT_GLOBAL) == "true"

        if status_code != HTTP_TOO_MANY_REQUESTS and self.hash == "":
            if is_global:
                self.hash = GLOBAL_HASH
            elif bucket_hash:
                self.hash = bucket_hash

        reset = ZERO_TIME
        discord_reset = ZERO_TIME
        remaining = -1
        reset_str = header.get(X_RATELIMIT_RESET)
        if reset_str:
            epoch = _UNIX_EPOCH + timedelta(milliseconds=_parse_int(reset_str))
            reset = epoch + diff
            discord_reset = epoch

        remaining_str = header.get(X_RATELIMIT_REMAINING)
        if remaining_str:
            parsed = _parse_int(remaining_str)
            if parsed >= 0:
                remaining = parsed

        if is_global:
            bucket = self if self._is_global() else self.global_bucket
        else:
            bucket = self
            if not self._is_global() and bucket_hash:
                self.hash = bucket_hash
        assert bucket is not None

        with bucket._mu:
            if discord_reset < _UNIX_EPOCH + timedelta(hours=1):
                return False

            if discord_reset > bucket.discord_reset_time:
                bucket.reset_time = reset
                bucket.discord_reset_time = discord_reset
                bucket.remaining = remaining
                bucket.updated_at = discord_time
                return True
            if bucket.discord_reset_time == discord_reset:
                if bucket.remaining == -1 or bucket.remaining > remaining:
                    bucket.remaining = remaining
                    bucket.updated_at = discord_time
                    bucket.discord_reset_time = discord_reset
                    return True
            return False

    def active(self) -> bool:
        """Return whether the bucket holds a limit that has not reset yet."""
        return self.remaining >= 0 and not _now() > self.reset_time