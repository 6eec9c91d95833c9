"""Passthrough memoization for catalog lookups."""

from __future__ import annotations

import time
from collections import OrderedDict
from threading import RLock
from typing import Any, Callable, Hashable, Tuple

MISSING = object()


class MemoCache:
    """Remember computed values for ``ttl`` seconds, keeping at most ``maxsize``.

    The least recently used entry is dropped once ``maxsize`` is exceeded.
    A ``ttl`` of zero turns the cache into a plain passthrough.
    """

    def __init__(self, ttl: float = 300.0, maxsize: int = 128) -> None:
        if ttl < 0:
            raise ValueError("ttl must not be negative")
        if maxsize <= 0:
            raise ValueError("maxsize must be positive")
        self.ttl = ttl
        self.maxsize = maxsize
        self._data: "OrderedDict[Hashable, Tuple[Any, float]]" = OrderedDict()
        self._lock = RLock()

    @property
    def enabled(self) -> bool:
        return self.ttl > 0

    def _evict_expired(self) -> None:
        now = time.time()
        for key in [key for key, (_, expiry) in self._data.items() if expiry <= now]:
            self._data.pop(key, None)

    def get(self, key: Hashable, default: Any = MISSING) -> Any:
        with self._lock:
            self._evict_expired()
            entry = self._data.get(key)
            if entry is None:
                return default
            self._data.move_to_end(key)
            return entry[0]

    def set(self, key: Hashable, value: Any) -> None:
        if not self.enabled:
            return
        with self._lock:
            self._evict_expired()
            if key in self._data:
                self._data.move_to_end(key)
            self._data[key] = (value, time.time() + self.ttl)
            while len(self._data) > self.maxsize:
                self._data.popitem(last=False)

    def get_or_compute(self, key: Hashable, compute: Callable[[], Any]) -> Any:
        """Return the cached value for ``key`` or compute and remember it.

        Exceptions raised by ``compute`` propagate and nothing is stored.
        """
        cached = self.get(key)
        if cached is not MISSING:
            return cached
        value = compute()
        self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)


__all__ = ["MemoCache", "MISSING"]
