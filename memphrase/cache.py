#!/usr/bin/env python3
"""
Bounded memoization cache.

Purely a speed-up: every cached value can be recomputed, so a lost race
just means the same value is written twice.

Usage:
    cache = BoundedCache(capacity=1000, policy="lru")
    value = cache.get_or_compute(key, lambda: expensive(key))
"""

from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Hashable, Optional, Union

from memphrase.settings import require_setting

logger = logging.getLogger(__name__)

_MISSING = object()


class EvictionPolicy:
    """Decides what to drop once the cache is over capacity."""
    name = "base"

    def on_hit(self, entries: OrderedDict, key: Hashable) -> None:
        pass

    def victim(self, entries: OrderedDict) -> Hashable:
        raise NotImplementedError


class FifoEviction(EvictionPolicy):
    """Drop the oldest inserted entry."""
    name = "fifo"

    def victim(self, entries: OrderedDict) -> Hashable:
        return next(iter(entries))


class LruEviction(FifoEviction):
    """Drop the least recently used entry."""
    name = "lru"

    def on_hit(self, entries: OrderedDict, key: Hashable) -> None:
        entries.move_to_end(key)


POLICIES = {
    FifoEviction.name: FifoEviction,
    LruEviction.name: LruEviction,
}


def make_policy(policy: Union[str, EvictionPolicy, None]) -> EvictionPolicy:
    if isinstance(policy, EvictionPolicy):
        return policy
    if policy is None:
        policy = require_setting("cache.policy")
    try:
        return POLICIES[policy]()
    except KeyError:
        available = ', '.join(sorted(POLICIES))
        raise ValueError(f"Unknown cache policy '{policy}'. Available: {available}") from None


class BoundedCache:
    """Thread-safe mapping that evicts once ``capacity`` is exceeded."""

    def __init__(self,
                 capacity: Optional[int] = None,
                 policy: Union[str, EvictionPolicy, None] = None):
        if capacity is None:
            capacity = require_setting("cache.capacity")
        if capacity < 1:
            raise ValueError("cache capacity must be at least 1")
        self.capacity = capacity
        self.policy = make_policy(policy)
        self._entries: OrderedDict = OrderedDict()
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, key: Hashable, default: Any = None) -> Any:
        with self._lock:
            value = self._entries.get(key, _MISSING)
            if value is _MISSING:
                self.misses += 1
                return default
            self.hits += 1
            self.policy.on_hit(self._entries, key)
            return value

    def put(self, key: Hashable, value: Any) -> None:
        with self._lock:
            existed = key in self._entries
            self._entries[key] = value
            if existed:
                self.policy.on_hit(self._entries, key)
            while len(self._entries) > self.capacity:
                victim = self.policy.victim(self._entries)
                del self._entries[victim]
                logger.debug("Cache evicted %r", victim)

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the cached value, computing and storing it on a miss."""
        value = self.get(key, _MISSING)
        if value is _MISSING:
            value = compute()
            self.put(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = [
    "BoundedCache",
    "EvictionPolicy",
    "FifoEviction",
    "LruEviction",
    "make_policy",
]
