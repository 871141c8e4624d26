# boundcache/cache/memo.py

import functools
from typing import Any, Callable, Hashable, Optional

from ..domain.errors import CacheOverflow
from ..utils.durations import Duration
from ..utils.logging import get_logger
from .base import BaseCache

log = get_logger(__name__)

_MISSING = object()


def _default_key(func: Callable, args: tuple, kwargs: dict) -> Hashable:
    return (func.__qualname__, args, tuple(sorted(kwargs.items())))


def memoize(
    cache: BaseCache,
    ttl: Optional[Duration] = None,
    key: Optional[Callable[..., Hashable]] = None,
):
    """
    Cache a function's return value in `cache`.

    `key(*args, **kwargs)` builds the cache key; by default it is the
    function's qualname plus its arguments (which must be hashable).
    A full cache does not fail the call: the result is returned uncached.
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            k = key(*args, **kwargs) if key else _default_key(func, args, kwargs)
            cached = cache.get(k, _MISSING)
            if cached is not _MISSING:
                return cached
            result = func(*args, **kwargs)
            try:
                cache.add(k, result, ttl)
            except CacheOverflow as e:
                log.debug(f"memoize {func.__qualname__}: result not cached ({e.message})")
            return result

        wrapper.cache = cache
        return wrapper

    return decorator
