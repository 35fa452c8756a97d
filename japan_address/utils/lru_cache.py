"""Least-recently-used cache whose entries also expire after a fixed age."""

import time
from collections import OrderedDict
from collections.abc import Callable
from typing import Any


class LRUCache:
    """
    Bounded mapping. Inserting past `max_size` drops the least recently used
    entry; any entry older than `ttl` seconds is dropped on access regardless
    of use.
    """

    def __init__(
        self,
        max_size: int = 100,
        ttl: float = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.max_size = max_size
        self.ttl = ttl
        self._clock = clock
        self.cache: OrderedDict[Any, Any] = OrderedDict()
        self.timestamps: dict[Any, float] = {}

    def get(self, key: Any) -> Any | None:
        if key not in self.cache:
            return None

        if self._clock() - self.timestamps[key] > self.ttl:
            del self.cache[key]
            del self.timestamps[key]
            return None

        # Move to end (most recently used)
        self.cache.move_to_end(key)
        return self.cache[key]

    def put(self, key: Any, value: Any) -> Any | None:
        """Store value. Returns the evicted key, if any."""
        evicted = None
        if key in self.cache:
            self.cache.move_to_end(key)
        elif len(self.cache) >= self.max_size:
            evicted, _ = self.cache.popitem(last=False)
            del self.timestamps[evicted]

        self.cache[key] = value
        self.timestamps[key] = self._clock()
        return evicted

    def clear(self) -> None:
        self.cache.clear()
        self.timestamps.clear()

    def __contains__(self, key: Any) -> bool:
        return key in self.cache

    def __len__(self) -> int:
        return len(self.cache)
