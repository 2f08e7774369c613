"""Application context shared by CLI commands."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from . import clock
from .config import BaseConfig
from .logging_config import setup_logging
from .services.store import HabitStore


@dataclass
class AppContext:
    """Configuration plus the loaded store for one invocation."""

    config: BaseConfig
    data_file: Path
    store: HabitStore
    logger: logging.Logger

    def save(self) -> Path:
        """Flush the whole store back to disk."""

        return self.store.save(self.data_file)


def create_app_context(
    config: Optional[BaseConfig] = None, *, data_file: Optional[Path] = None
) -> AppContext:
    """Configure logging and the habit-day offset, then load the store."""

    if config is None:
        config = BaseConfig()

    logger = setup_logging(config)
    clock.configure(offset=config.DAY_OFFSET)

    path = Path(data_file) if data_file is not None else config.DATA_FILE
    store = HabitStore.load(path)
    return AppContext(config=config, data_file=path, store=store, logger=logger)


__all__ = ["AppContext", "create_app_context"]
