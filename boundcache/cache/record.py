# boundcache/cache/record.py

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class CacheRecord:
    """A cached value, the clock reading at insertion and its own ttl (seconds) if any."""
    value: Any
    created_at: float
    ttl: Optional[float] = None


def effective_ttl(ttl: Optional[float], global_ttl: Optional[float]) -> Optional[float]:
    """
    Two-level fallback:
      record ttl  -> if set
      global ttl  -> if set
      None        -> never expires
    """
    if ttl is not None:
        return ttl
    return global_ttl


def expires_at(record: CacheRecord, global_ttl: Optional[float]) -> Optional[float]:
    ttl = effective_ttl(record.ttl, global_ttl)
    if ttl is None:
        return None
    return record.created_at + ttl


def is_expired(record: CacheRecord, global_ttl: Optional[float], now: float) -> bool:
    # boundary is inclusive: a record is dead at exactly created_at + ttl
    deadline = expires_at(record, global_ttl)
    return deadline is not None and now >= deadline
