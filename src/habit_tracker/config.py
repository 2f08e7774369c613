"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    """Read an integer environment variable, rejecting junk values."""

    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value.strip())
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}.") from exc


class BaseConfig:
    """Settings shared by every command, resolved from the environment."""

    APP_NAME = "habit_tracker"
    DATA_FILENAME = "data.json"
    GRAPHS_DIRNAME = "graphs"
    LOG_FILENAME = "habit_tracker.log"

    def __init__(self) -> None:
        self.DATA_FILE = Path(
            os.getenv("HABIT_TRACKER_DATA_FILE", self.DATA_FILENAME)
        ).expanduser()
        self.GRAPHS_DIR = Path(
            os.getenv("HABIT_TRACKER_GRAPHS_DIR", self.GRAPHS_DIRNAME)
        ).expanduser()
        self.LOG_DIR = self._resolve_log_dir()
        self.DAY_OFFSET = timedelta(hours=_env_int("HABIT_TRACKER_DAY_OFFSET_HOURS", 2))
        self.DEV_MODE = _env_bool("HABIT_TRACKER_DEV_MODE", default=False)

    def _resolve_log_dir(self) -> Path:
        """Return the directory the rotating JSON log lives in."""

        raw = os.getenv("HABIT_TRACKER_LOG_DIR")
        if raw:
            return Path(raw).expanduser()
        return Path.home() / f".{self.APP_NAME}" / "logs"


class DevConfig(BaseConfig):
    """Verbose configuration used while hacking on the tool."""

    def __init__(self) -> None:
        super().__init__()
        self.DEV_MODE = True
