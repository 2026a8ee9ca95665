from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Any, Callable, Hashable, Optional, TypeVar

logger = logging.getLogger(__name__)

DEFAULT_MAX_SIZE = 10_000

T = TypeVar("T")


def _validate_max_size(max_size: int) -> int:
    if isinstance(max_size, bool) or not isinstance(max_size, int) or max_size <= 0:
        raise ValueError(f"max_size must be a positive integer, got {max_size!r}")
    return max_size


class LRUCache:
    """Thread-safe least-recently-used cache.

    The OrderedDict keeps recency order: the most recently used key sits at the
    end, evictions pop from the front.
    """

    def __init__(self, max_size: int = DEFAULT_MAX_SIZE) -> None:
        self._max_size = _validate_max_size(max_size)
        self._data: "OrderedDict[Hashable, Any]" = OrderedDict()
        self._lock = threading.RLock()

    @property
    def max_size(self) -> int:
        return self._max_size

    @max_size.setter
    def max_size(self, value: int) -> None:
        value = _validate_max_size(value)
        with self._lock:
            self._max_size = value
            self._evict()

    def get(self, key: Hashable) -> Optional[Any]:
        with self._lock:
            if key not in self._data:
                return None
            self._data.move_to_end(key)
            return self._data[key]

    def set(self, key: Hashable, value: Any) -> Any:
        with self._lock:
            self._data[key] = value
            self._data.move_to_end(key)
            self._evict()
        return value

    def fetch(self, key: Hashable, compute: Callable[[], T]) -> T:
        with self._lock:
            if key in self._data:
                self._data.move_to_end(key)
                return self._data[key]
        # computed outside the lock; concurrent misses may both compute
        value = compute()
        self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def size(self) -> int:
        with self._lock:
            return len(self._data)

    def __len__(self) -> int:
        return self.size()

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def _evict(self) -> None:
        while len(self._data) > self._max_size:
            key, _ = self._data.popitem(last=False)
            logger.debug("cache evicted %r", key)


class NullCache:
    """Same interface as LRUCache; stores nothing."""

    max_size = 0

    def get(self, key: Hashable) -> None:
        return None

    def set(self, key: Hashable, value: Any) -> Any:
        return value

    def fetch(self, key: Hashable, compute: Callable[[], T]) -> T:
        return compute()

    def clear(self) -> None:
        pass

    def size(self) -> int:
        return 0

    def __len__(self) -> int:
        return 0

    def __contains__(self, key: object) -> bool:
        return False


def round_terrestrial_time(tt: float, precision: int) -> float:
    if precision <= 0:
        return tt
    return round(tt, precision)


def cache_key(kind: str, instant, *components: Hashable, precision: int) -> tuple:
    """Key ``(kind, rounded tt, *components)`` for a computation at ``instant``."""
    return (kind, round_terrestrial_time(instant.tt, precision), *components)
