"""Configuration management."""

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from solitaire_engine.models.game_state import FREECELL_CELLS, Variant
from solitaire_engine.utils.history import DEFAULT_MAX_SIZE


class GameConfig(BaseModel):
    """Game configuration."""

    variant: Variant = Variant.FREECELL
    seed: int | None = None  # None picks a seed at startup
    draw_count: Literal[1, 3] = 1  # Klondike only
    free_cells: int = Field(default=FREECELL_CELLS, ge=0)  # FreeCell only


class HistoryConfig(BaseModel):
    """Undo/redo configuration."""

    max_size: int = Field(default=DEFAULT_MAX_SIZE, ge=1)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    show_board: bool = False


class GameLogConfig(BaseModel):
    """Configuration for the JSONL game event log."""

    enabled: bool = False
    output_path: str = "game_log.jsonl"


class Config(BaseModel):
    """Root configuration."""

    game: GameConfig = GameConfig()
    history: HistoryConfig = HistoryConfig()
    logging: LoggingConfig = LoggingConfig()
    game_log: GameLogConfig = GameLogConfig()


def load_config(path: Path | str | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        path: Path to config file. If None, uses default config.

    Returns:
        Config object.
    """
    if path is None:
        return Config()

    config_path = Path(path)
    if not config_path.exists():
        return Config()

    with open(config_path) as f:
        data = yaml.safe_load(f)

    return Config(**data) if data else Config()
