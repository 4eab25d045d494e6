"""Конфигурация приложения."""
import os
from functools import lru_cache

from .constants import DEFAULT_HEARTBEAT_INTERVAL


@lru_cache
def get_config():
    debug = os.environ.get("DEBUG", "0").lower() in ("1", "true", "yes")
    return type("Config", (), {
        "host": os.environ.get("HOST", "0.0.0.0"),
        "port": int(os.environ.get("PORT", 3000)),
        "heartbeat_interval": float(os.environ.get("HEARTBEAT_INTERVAL", DEFAULT_HEARTBEAT_INTERVAL)),
        "log_level": os.environ.get("LOG_LEVEL", "DEBUG" if debug else "INFO").upper(),
        "debug": debug,
        "allowed_origins": os.environ.get("ALLOWED_ORIGINS", "*").split(","),
    })()
