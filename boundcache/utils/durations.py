# boundcache/utils/durations.py

import math
from datetime import timedelta
from typing import Optional, Union

from ..domain.errors import InvalidConfiguration

Duration = Union[int, float, timedelta]


def to_seconds(value: Duration, name: str = "duration") -> float:
    """
    Normalise a duration to seconds (float).
      - int / float are taken as seconds
      - timedelta is converted with total_seconds()
    Must be finite and strictly positive.
    """
    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidConfiguration(f"{name} must be a number of seconds or a timedelta, got {value!r}")
    else:
        seconds = float(value)

    if not math.isfinite(seconds) or seconds <= 0:
        raise InvalidConfiguration(f"{name} must be a positive, finite duration, got {value!r}")
    return seconds


def optional_seconds(value: Optional[Duration], name: str = "duration") -> Optional[float]:
    """Same as to_seconds() but passes None through (meaning "no ttl")."""
    if value is None:
        return None
    return to_seconds(value, name)
