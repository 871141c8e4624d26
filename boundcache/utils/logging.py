# boundcache/utils/logging.py

import logging
import json
from datetime import datetime, timezone
from typing import Optional

from .config import Settings, settings as default_settings


def level_for(name: str) -> int:
    """LOG_LEVEL name -> logging level; anything unknown falls back to INFO."""
    level = logging.getLevelName((name or "").strip().upper())
    return level if isinstance(level, int) else logging.INFO


def get_logger(name: str, settings: Optional[Settings] = None) -> logging.Logger:
    """
    Logger with one JSON stream handler. The level comes from
    settings.LOG_LEVEL (module settings unless `settings` is passed);
    passing settings again re-applies the level to an existing logger.
    """
    logger = logging.getLogger(name)
    if settings is not None or not logger.handlers:
        logger.setLevel(level_for((settings or default_settings).LOG_LEVEL))
    if logger.handlers:
        return logger
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())
    logger.addHandler(handler)
    return logger


class JsonFormatter(logging.Formatter):
    def format(self, record):
        payload = {
            "ts": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "name": record.name,
            "thread": record.threadName,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)
