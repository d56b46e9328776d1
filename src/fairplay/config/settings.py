"""Environment-driven runtime settings."""

from __future__ import annotations

import logging
import os
from pathlib import Path


logger = logging.getLogger(__name__)

DB_PATH_ENV = "FAIRPLAY_DB_PATH"
LINEUPS_PATH_ENV = "FAIRPLAY_LINEUPS_PATH"
MAX_WORKERS_ENV = "FAIRPLAY_MAX_WORKERS"
WRITE_RETRIES_ENV = "FAIRPLAY_WRITE_RETRIES"
RETRY_BACKOFF_ENV = "FAIRPLAY_RETRY_BACKOFF"

MAX_WORKERS_DEFAULT = 4
WRITE_RETRIES_DEFAULT = 3
RETRY_BACKOFF_DEFAULT = 0.05

DEFAULT_DB_PATH = Path(__file__).resolve().parent.parent / "fairplay.sqlite"


def _env_int(name: str, default: int, *, min_value: int | None = None) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Invalid int for %s: %s; using default %d", name, raw, default)
        return default
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_float(name: str, default: float, *, clamp_min: float | None = None, clamp_max: float | None = None) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.3f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    if clamp_max is not None:
        value = min(clamp_max, value)
    return value


def _env_str(name: str) -> str | None:
    raw = os.getenv(name)
    if raw is None:
        return None
    raw = raw.strip()
    return raw or None


def max_workers() -> int:
    return _env_int(MAX_WORKERS_ENV, MAX_WORKERS_DEFAULT, min_value=1)


def write_retries() -> int:
    return _env_int(WRITE_RETRIES_ENV, WRITE_RETRIES_DEFAULT, min_value=1)


def db_path_override() -> str | None:
    return _env_str(DB_PATH_ENV)


def lineups_path() -> Path | None:
    raw = _env_str(LINEUPS_PATH_ENV)
    return Path(raw) if raw else None


def retry_backoff() -> float:
    """Upper bound in seconds of the first jittered wait after a write conflict."""

    return _env_float(RETRY_BACKOFF_ENV, RETRY_BACKOFF_DEFAULT, clamp_min=0.0, clamp_max=5.0)
