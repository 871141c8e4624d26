
import os
from dataclasses import dataclass, field
from typing import Optional

from ..domain.errors import InvalidConfiguration

_NONE_VALUES = ("", "none", "null", "0")


def _env_ttl(name: str) -> Optional[float]:
    v = os.getenv(name)
    if v is None or v.strip().lower() in _NONE_VALUES:
        return None
    return _env_float(name, 0.0)


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v in (None, ""):
        return default
    try:
        return float(v)
    except ValueError:
        raise InvalidConfiguration(f"{name} must be a number, got {v!r}")


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v in (None, ""):
        return default
    try:
        return int(v)
    except ValueError:
        raise InvalidConfiguration(f"{name} must be an integer, got {v!r}")


@dataclass
class Settings:
    CACHE_DEFAULT_TTL: Optional[float] = field(default_factory=lambda: _env_ttl("CACHE_DEFAULT_TTL"))
    CACHE_MAX_ENTRIES: int = field(default_factory=lambda: _env_int("CACHE_MAX_ENTRIES", 1024))
    CACHE_SWEEP_PERIOD: float = field(default_factory=lambda: _env_float("CACHE_SWEEP_PERIOD", 2.0))
    LOG_LEVEL: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))

    @classmethod
    def from_env(cls) -> "Settings":
        return cls()

settings = Settings.from_env()
