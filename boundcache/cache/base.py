# boundcache/cache/base.py

from abc import ABC, abstractmethod
from typing import Any, Hashable, Optional

from ..utils.durations import Duration


class BaseCache(ABC):
    """Minimal contract every cache in this package implements."""

    @abstractmethod
    def get(self, key: Hashable, default: Any = None) -> Optional[Any]:
        """Return the live value stored under `key`, or `default`."""

    @abstractmethod
    def add(self, key: Hashable, value: Any, ttl: Optional[Duration] = None) -> None:
        """Insert or overwrite `key`. Raises CacheOverflow when full."""

    @abstractmethod
    def remove(self, key: Hashable) -> None:
        """Drop `key` if present; absent keys are ignored."""
