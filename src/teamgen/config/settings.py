"""Environment-driven settings."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping


logger = logging.getLogger(__name__)

_DB_PATH_ENV = "TEAMGEN_DB_PATH"
_DB_TIMEOUT_ENV = "TEAMGEN_DB_TIMEOUT"
_LOG_LEVEL_ENV = "TEAMGEN_LOG_LEVEL"

_DB_PATH_DEFAULT = "teamgen.sqlite"
_DB_TIMEOUT_DEFAULT = 5.0
_LOG_LEVEL_DEFAULT = "INFO"


@dataclass(frozen=True)
class Settings:
    db_path: Path
    db_timeout: float
    log_level: str


def _env_float(
    env: Mapping[str, str],
    name: str,
    default: float,
    *,
    clamp_min: float | None = None,
) -> float:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid float for %s: %s; using default %.2f", name, raw, default)
        return default
    if clamp_min is not None:
        value = max(clamp_min, value)
    return value


def _env_level(env: Mapping[str, str], name: str, default: str) -> str:
    raw = env.get(name)
    if raw is None:
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Invalid log level for %s: %s; using default %s", name, raw, default)
        return default
    return level


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build settings from ``env`` (defaults to ``os.environ``)."""

    env = os.environ if env is None else env
    db_path = env.get(_DB_PATH_ENV) or _DB_PATH_DEFAULT
    return Settings(
        db_path=Path(db_path),
        db_timeout=_env_float(env, _DB_TIMEOUT_ENV, _DB_TIMEOUT_DEFAULT, clamp_min=0.0),
        log_level=_env_level(env, _LOG_LEVEL_ENV, _LOG_LEVEL_DEFAULT),
    )
