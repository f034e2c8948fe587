"""Runtime settings for SalesPulse.

Values come from environment variables, optionally seeded from a local
``.env`` file. Malformed numeric values fall back to their defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from salespulse.models.constants import DEFAULT_SEED_TASK_COUNT, DEFAULT_FORECAST_HORIZON_WEEKS

load_dotenv()


def _get_env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def _get_env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass
class Settings:
    """Application settings."""

    # Where the initial task records come from (http(s) URL or JSON file path)
    tasks_source_url: Optional[str] = None
    fetch_timeout_sec: float = 10.0
    seed_task_count: int = DEFAULT_SEED_TASK_COUNT
    forecast_horizon_weeks: int = DEFAULT_FORECAST_HORIZON_WEEKS
    load_on_startup: bool = True

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    log_level: str = "info"


def get_settings() -> Settings:
    """Build Settings from the current environment."""
    return Settings(
        tasks_source_url=os.getenv("TASKS_SOURCE_URL") or None,
        fetch_timeout_sec=_get_env_float("TASKS_FETCH_TIMEOUT_SEC", 10.0),
        seed_task_count=_get_env_int("SEED_TASK_COUNT", DEFAULT_SEED_TASK_COUNT),
        forecast_horizon_weeks=_get_env_int("FORECAST_HORIZON_WEEKS", DEFAULT_FORECAST_HORIZON_WEEKS),
        load_on_startup=_get_env_bool("LOAD_ON_STARTUP", True),
        host=os.getenv("HOST", "0.0.0.0"),
        port=_get_env_int("PORT", 8000),
        debug=_get_env_bool("DEBUG", False),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )
