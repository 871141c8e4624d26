# boundcache/cache/engine.py
"""
Bounded in-memory key/value cache with per-entry or global TTL.

Expired records are removed lazily (every get() scans the whole map first)
or by an explicitly started periodic sweep (see sweeper.py). Both paths go
through clean(), so there is one expiry predicate and one removal routine.
"""

import threading
import time
from typing import Any, Callable, Dict, Hashable, Optional, Set

from ..domain.errors import CacheOverflow, InvalidConfiguration
from ..utils.config import Settings, settings as default_settings
from ..utils.durations import Duration, optional_seconds, to_seconds
from ..utils.logging import get_logger
from .base import BaseCache
from .record import CacheRecord, expires_at, is_expired
from .sweeper import DEFAULT_SWEEP_PERIOD, SweepHandle, start_periodic_sweep

log = get_logger(__name__)

Clock = Callable[[], float]


class Cache(BaseCache):
    def __init__(
        self,
        global_ttl: Optional[Duration] = None,
        max_entries: int = 1024,
        clock: Clock = time.monotonic,
        sweep_period: Duration = DEFAULT_SWEEP_PERIOD,
    ):
        if isinstance(max_entries, bool) or not isinstance(max_entries, int) or max_entries <= 0:
            raise InvalidConfiguration(f"max_entries must be a positive integer, got {max_entries!r}")
        self.global_ttl = optional_seconds(global_ttl, "global_ttl")
        self.max_entries = max_entries
        self.sweep_period = to_seconds(sweep_period, "sweep_period")
        self._clock = clock
        self._lock = threading.RLock()
        self._sweep_guard = threading.Lock()
        self.entries: Dict[Hashable, CacheRecord] = {}
        self.clear()

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None, **overrides) -> "Cache":
        """Build an engine from Settings (env-driven); keyword overrides win."""
        s = settings or default_settings
        kwargs = {
            "global_ttl": s.CACHE_DEFAULT_TTL,
            "max_entries": s.CACHE_MAX_ENTRIES,
            "sweep_period": s.CACHE_SWEEP_PERIOD,
        }
        kwargs.update(overrides)
        return cls(**kwargs)

    # -------------------- expiry --------------------

    def _is_expired(self, record: CacheRecord, now: float) -> bool:
        return is_expired(record, self.global_ttl, now)

    def expired_keys(self) -> Set[Hashable]:
        """Keys whose effective expiry instant has passed, judged at one clock reading."""
        with self._lock:
            now = self._clock()
            return {k for k, rec in self.entries.items() if self._is_expired(rec, now)}

    def clean(self) -> int:
        """
        Remove every expired record. Keys judged expired at scan start are
        removed without re-checking. Returns how many were removed.
        """
        with self._lock:
            expired = self.expired_keys()
            for key in expired:
                self.remove(key)
        if expired:
            log.debug(f"cache.clean removed={len(expired)}")
        return len(expired)

    def try_sweep(self) -> Optional[int]:
        """
        clean() guarded so that two sweeps on this engine never overlap.
        Returns None when another sweep is already running (tick skipped).
        """
        if not self._sweep_guard.acquire(blocking=False):
            log.debug("cache.sweep skipped, previous sweep still running")
            return None
        try:
            return self.clean()
        finally:
            self._sweep_guard.release()

    def cleanup(self, period: Optional[Duration] = None) -> SweepHandle:
        """Start a periodic sweep of this cache. The caller owns (and stops) the handle."""
        return start_periodic_sweep(self, period if period is not None else self.sweep_period)

    # -------------------- operations --------------------

    def get(self, key: Hashable, default: Any = None) -> Optional[Any]:
        with self._lock:
            # every read is a safe point to reclaim expired space
            self.clean()
            record = self.entries.get(key)
            if record is None:
                return default
            return record.value

    def add(self, key: Hashable, value: Any, ttl: Optional[Duration] = None) -> None:
        seconds = optional_seconds(ttl, "ttl")
        with self._lock:
            # raw size, so unswept expired records and overwrites both count
            if len(self.entries) >= self.max_entries:
                log.warning(f"cache overflow size={len(self.entries)} max_entries={self.max_entries}")
                raise CacheOverflow(f"Cache overflow: {self.max_entries} entries")
            if key in self.entries:
                log.debug(f"cache.add overwrite key={key!r}")
            self.entries[key] = CacheRecord(value=value, created_at=self._clock(), ttl=seconds)

    def remove(self, key: Hashable) -> None:
        with self._lock:
            self.entries.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            self.entries = {}

    # -------------------- introspection --------------------

    def ttl_remaining(self, key: Hashable) -> Optional[float]:
        """Seconds left before `key` expires; None if absent, expired or never expiring."""
        with self._lock:
            record = self.entries.get(key)
            if record is None:
                return None
            deadline = expires_at(record, self.global_ttl)
            if deadline is None:
                return None
            left = deadline - self._clock()
            return left if left > 0 else None

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            record = self.entries.get(key)
            return record is not None and not self._is_expired(record, self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self.entries)

    def __repr__(self) -> str:
        return f"Cache(size={len(self)}, max_entries={self.max_entries}, global_ttl={self.global_ttl})"
