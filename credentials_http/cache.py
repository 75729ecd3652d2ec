from __future__ import annotations

"""Thread-safe cache of verified identities keyed by credential pair."""

import threading
from collections import OrderedDict
from typing import Any, Optional, Tuple

CacheKey = Tuple[str, str]


def cache_key(userid: str, password: str) -> CacheKey:
    return (userid, password)


class ProfileCache:
    """In-process ``key -> identity`` store shared by concurrent requests.

    ``capacity=None`` keeps every entry; otherwise the least recently used
    entry is evicted once the capacity is exceeded. Only identities that came
    back from a successful verification should ever be stored.
    """

    def __init__(self, capacity: Optional[int] = None) -> None:
        if capacity is not None and capacity <= 0:
            raise ValueError("cache capacity must be positive")
        self.capacity = capacity
        self._lock = threading.Lock()
        self._entries: "OrderedDict[CacheKey, Any]" = OrderedDict()

    def lookup(self, key: CacheKey) -> Optional[Any]:
        with self._lock:
            identity = self._entries.get(key)
            if identity is not None:
                self._entries.move_to_end(key)
            return identity

    def store(self, key: CacheKey, identity: Any) -> None:
        with self._lock:
            self._entries[key] = identity
            self._entries.move_to_end(key)
            if self.capacity is not None:
                while len(self._entries) > self.capacity:
                    self._entries.popitem(last=False)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries


__all__ = ["CacheKey", "ProfileCache", "cache_key"]
