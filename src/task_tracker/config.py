# src/task_tracker/config.py

"""Settings for the tracker, read from TASK_TRACKER_* environment variables.

A local .env file is loaded first (existing variables win). Every value has
a default, so importing this module never fails on missing configuration.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASK_TRACKER_"
TRUE_WORDS = frozenset({"1", "true", "yes", "y", "on"})

load_dotenv(override=False)


def _setting(name: str) -> str | None:
    """Stripped value of TASK_TRACKER_<name>, or None when unset or blank."""
    raw = os.environ.get(ENV_PREFIX + name, "").strip()
    return raw or None


def _int_setting(name: str, default: int) -> int:
    raw = _setting(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Connector flags ----
    console_enabled: bool

    # ---- Task manager ----
    history_limit: int

    # ---- Local data paths (logs only; tasks live in memory) ----
    data_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        console_raw = _setting("CONSOLE_ENABLED")
        data_dir_raw = _setting("DATA_DIR")

        return Settings(
            app_name=_setting("APP_NAME") or "task-tracker",
            log_level=(_setting("LOG_LEVEL") or "INFO").upper(),
            console_enabled=True if console_raw is None else console_raw.lower() in TRUE_WORDS,
            # History needs room for at least one item.
            history_limit=max(1, _int_setting("HISTORY_LIMIT", 10)),
            data_dir=Path(data_dir_raw).expanduser() if data_dir_raw else Path(".local/task_tracker"),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
