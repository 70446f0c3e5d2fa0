from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Generic, Hashable, Optional, Tuple, TypeVar

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class TTLCache(Generic[K, V]):
    """Small key -> (value, inserted_at) store with expiry on read.

    Values are expected to be immutable; the cache never copies them.
    """

    def __init__(
        self,
        ttl_seconds: float,
        *,
        max_items: Optional[int] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be positive")
        self.ttl = ttl_seconds
        self.max = max_items
        self._clock = clock
        self._data: Dict[K, Tuple[V, float]] = {}
        self._lock = threading.Lock()

    def _expired(self, inserted_at: float, now: float) -> bool:
        return now - inserted_at > self.ttl

    def _purge(self, now: float) -> None:
        stale = [k for k, (_, ts) in self._data.items() if self._expired(ts, now)]
        for k in stale:
            self._data.pop(k, None)
        if self.max is not None:
            while len(self._data) > self.max:
                # Insertion order: evict oldest first.
                self._data.pop(next(iter(self._data)))

    def get(self, key: K) -> Optional[V]:
        with self._lock:
            entry = self._data.get(key)
            if entry is None:
                return None
            value, inserted_at = entry
            if self._expired(inserted_at, self._clock()):
                self._data.pop(key, None)
                return None
            return value

    def set(self, key: K, value: V) -> None:
        with self._lock:
            now = self._clock()
            self._data.pop(key, None)
            self._data[key] = (value, now)
            self._purge(now)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def __len__(self) -> int:
        with self._lock:
            self._purge(self._clock())
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        return self.get(key) is not None  # type: ignore[arg-type]
