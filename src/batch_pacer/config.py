# src/batch_pacer/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Only the CLI imports this module; the library API never reads .env or the environment.
- Bad values fall back to defaults instead of failing at import time.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .stats.smoother import DEFAULT_WINDOW_SIZE
from .tasks.task_scheduler import DEFAULT_CONCURRENCY

ENV_PREFIX = "PACER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Scheduler tuning ----
    concurrency: int
    window_size: int

    # ---- Demo batch ----
    demo_items: int
    demo_max_delay: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "batch-pacer").strip() or "batch-pacer"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/pacer"))

        # Non-positive values fall back to the defaults.
        concurrency = _env_int(_k("CONCURRENCY"), DEFAULT_CONCURRENCY)
        if concurrency <= 0:
            concurrency = DEFAULT_CONCURRENCY
        window_size = _env_int(_k("WINDOW_SIZE"), DEFAULT_WINDOW_SIZE)
        if window_size <= 0:
            window_size = DEFAULT_WINDOW_SIZE

        demo_items = max(0, _env_int(_k("DEMO_ITEMS"), 20))
        demo_max_delay = max(0.0, _env_float(_k("DEMO_MAX_DELAY"), 0.5))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            concurrency=concurrency,
            window_size=window_size,
            demo_items=demo_items,
            demo_max_delay=demo_max_delay,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
