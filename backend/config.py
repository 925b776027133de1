"""
Runtime configuration for GridSnake.

Settings come from environment variables, optionally loaded from a .env
file. Anything unset falls back to the game's built-in defaults.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from domain.constants import GRID_SIZE, MIN_GRID_SIZE, TICK_SECONDS, LEDGER_CAPACITY

load_dotenv()

DEFAULT_SCORES_PATH = "Highscores.json"
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


@dataclass
class Settings:
    scores_path: str = DEFAULT_SCORES_PATH
    grid_size: int = GRID_SIZE
    tick_seconds: float = TICK_SECONDS
    ledger_capacity: Optional[int] = LEDGER_CAPACITY
    log_level: str = DEFAULT_LOG_LEVEL


def _read_number(name: str, default, cast):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as e:
        raise ValueError(f"Invalid value for {name}: {raw!r}") from e


def _read_capacity() -> Optional[int]:
    raw = os.getenv('GRIDSNAKE_LEDGER_CAPACITY')
    if raw is not None and raw.strip().lower() in ('0', 'none', 'unbounded'):
        return None
    capacity = _read_number('GRIDSNAKE_LEDGER_CAPACITY', LEDGER_CAPACITY, int)
    if capacity < 0:
        raise ValueError(f"Invalid value for GRIDSNAKE_LEDGER_CAPACITY: {raw!r}")
    return capacity


def get_settings() -> Settings:
    """
    Build Settings from the current environment.

    Returns:
        Settings with every GRIDSNAKE_* override applied.

    Raises:
        ValueError: if a numeric variable cannot be parsed
    """
    grid_size = _read_number('GRIDSNAKE_GRID_SIZE', GRID_SIZE, int)
    if grid_size < MIN_GRID_SIZE:
        raise ValueError(f"GRIDSNAKE_GRID_SIZE must be at least {MIN_GRID_SIZE}, got {grid_size}")

    tick_seconds = _read_number('GRIDSNAKE_TICK_SECONDS', TICK_SECONDS, float)
    if tick_seconds <= 0:
        raise ValueError(f"GRIDSNAKE_TICK_SECONDS must be positive, got {tick_seconds}")

    return Settings(
        scores_path=os.getenv('GRIDSNAKE_SCORES_PATH') or DEFAULT_SCORES_PATH,
        grid_size=grid_size,
        tick_seconds=tick_seconds,
        ledger_capacity=_read_capacity(),
        log_level=(os.getenv('GRIDSNAKE_LOG_LEVEL') or DEFAULT_LOG_LEVEL).upper(),
    )
