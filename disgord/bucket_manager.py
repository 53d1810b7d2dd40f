"""Keeps track of rate limit buckets and how endpoints map onto them."""

from __future__ import annotations

import threading
from collections import defaultdict
from collections.abc import Callable, Mapping

from .bucket import GLOBAL_HASH, Bucket


def relations_by_bucket_id(relations: Mapping[str, str]) -> dict[str, list[str]]:
    """Invert a mapping of endpoint id to bucket hash."""
    by_hash: dict[str, list[str]] = defaultdict(list)
    for local_id, bucket_hash in relations.items():
        by_hash[bucket_hash].append(local_id)
    return dict(by_hash)


class BucketManager:
    """Hands out buckets for hashed endpoints, sharing those Discord groups together."""

    def __init__(self, default_relations: Mapping[str, str] | None = None) -> None:
        self._lock = threading.Lock()
        self.global_bucket = Bucket(None)
        self.global_bucket.hash = GLOBAL_HASH
        # links a local endpoint hash to a Discord bucket hash, or to itself
        self.proxy: dict[str, str] = {}
        self.buckets: dict[str, Bucket] = {}

        for bucket_hash, ids in relations_by_bucket_id(default_relations or {}).items():
            if bucket_hash == GLOBAL_HASH:
                bucket = self.global_bucket
            else:
                bucket = Bucket(self.global_bucket)
            for local_id in ids:
                self.buckets[local_id] = bucket

    def bucket_grouping(self) -> dict[str, list[str]]:
        """Map each bucket hash to the local endpoint hashes that use it."""
        with self._lock:
            group: dict[str, list[str]] = defaultdict(list)
            for local_id, bucket_hash in self.proxy.items():
                group[bucket_hash].append(local_id)
            return dict(group)

    def proxy_id(self, local_id: str) -> str:
        """Return the bucket key for a local endpoint hash, registering it if new."""
        with self._lock:
            return self.proxy.setdefault(local_id, local_id)

    def update_proxy_id(self, local_id: str, proxy_id: str, bucket_hash: str) -> None:
        """Point a local endpoint hash at the bucket hash Discord reported."""
        if not bucket_hash or bucket_hash == proxy_id:
            return
        with self._lock:
            if bucket_hash not in self.buckets:
                current = self.buckets.get(self.proxy.get(local_id, local_id))
                if current is not None:
                    self.buckets[bucket_hash] = current
            self.proxy[local_id] = bucket_hash

    def bucket(self, local_id: str, callback: Callable[[Bucket], None]) -> None:
        """Run the callback with the bucket for a local endpoint hash."""
        proxy_id = self.proxy_id(local_id)
        with self._lock:
            bucket = self.buckets.get(proxy_id)
            if bucket is None:
                bucket = Bucket(self.global_bucket)
                self.buckets[proxy_id] = bucket

        try:
            callback(bucket)
        finally:
            with bucket._mu:
                bucket_hash = bucket.hash
            self.update_proxy_id(local_id, proxy_id, bucket_hash)