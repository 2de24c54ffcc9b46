"""
Configuration settings for the Employee API
"""

import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from employee_api.utils.errors import StartupError

logger = logging.getLogger(__name__)

# Max payload size accepted by the bounded body reader (256 KiB)
MAX_PAYLOAD_SIZE = 262_144

API_PREFIX = "/api/v1"

LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET")


@dataclass(frozen=True)
class Settings:
    """Runtime configuration, resolved once at startup"""

    database_url: str
    host: str = "127.0.0.1"
    port: int = 8080
    pool_size: int = 10
    max_overflow: int = 0
    pool_timeout: float = 30.0
    pool_recycle: int = 1800
    db_echo: bool = False
    offload_workers: Optional[int] = None
    json_body_limit: int = 32_768
    log_level: str = "INFO"

    @property
    def max_connections(self) -> int:
        return self.pool_size + self.max_overflow

    @property
    def worker_count(self) -> int:
        """Executor threads; defaults to the pool's connection ceiling"""
        return self.offload_workers or self.max_connections


def _get_int(env: Mapping[str, str], name: str, default: int, minimum: int = 0) -> int:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise StartupError(f"{name} must be an integer, got {raw!r}")
    if value < minimum:
        raise StartupError(f"{name} must be >= {minimum}, got {value}")
    return value


def _get_bool(env: Mapping[str, str], name: str, default: bool = False) -> bool:
    raw = env.get(name)
    if raw is None or raw == "":
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables

    Reads a .env file first when env is not given explicitly.

    Raises:
        StartupError: DATABASE_URL is missing, a numeric setting is invalid
            or LOG_LEVEL is not a known level
    """
    if env is None:
        load_dotenv()
        env = os.environ

    database_url = env.get("DATABASE_URL")
    if not database_url:
        raise StartupError("DATABASE_URL environment variable is required")

    offload_workers = _get_int(env, "OFFLOAD_WORKERS", 0)

    log_level = env.get("LOG_LEVEL", "INFO").strip().upper()
    if log_level not in LOG_LEVELS:
        raise StartupError(f"LOG_LEVEL must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

    settings = Settings(
        database_url=database_url,
        host=env.get("HOST", "127.0.0.1"),
        port=_get_int(env, "PORT", 8080, minimum=1),
        pool_size=_get_int(env, "DB_POOL_SIZE", 10, minimum=1),
        max_overflow=_get_int(env, "DB_MAX_OVERFLOW", 0),
        pool_timeout=float(_get_int(env, "DB_POOL_TIMEOUT", 30, minimum=1)),
        pool_recycle=_get_int(env, "DB_POOL_RECYCLE", 1800),
        db_echo=_get_bool(env, "DB_ECHO"),
        offload_workers=offload_workers or None,
        json_body_limit=_get_int(env, "JSON_BODY_LIMIT", 32_768, minimum=1),
        log_level=log_level,
    )

    logger.info(
        f"Settings loaded - bind: {settings.host}:{settings.port}, "
        f"pool: {settings.pool_size}+{settings.max_overflow}, workers: {settings.worker_count}"
    )
    return settings
