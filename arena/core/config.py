"""
Configuration module for the arena.

Holds the tunable parameters of a simulation run and loads them from JSON
files, in the same way game content is loaded.
"""

import json
from pathlib import Path
from typing import Any

from catchery import log_warning
from pydantic import BaseModel, Field

from arena.core.constants import MAX_ROUNDS, MELEE_RANGE


class SimulationConfig(BaseModel):
    """Tunable parameters of a match or a batch of matches."""

    max_rounds: int = Field(
        default=MAX_ROUNDS,
        ge=1,
        description="Number of initiative passes after which a match is called",
    )
    melee_range: int = Field(
        default=MELEE_RANGE,
        ge=0,
        description="Distance, in metres, within which melee attacks are possible",
    )
    initial_distance: int = Field(
        default=10,
        ge=0,
        description="Starting distance, in metres, between the two factions",
    )
    match_count: int = Field(
        default=100,
        ge=1,
        description="Number of matches played by a batch",
    )
    seed: int | None = Field(
        default=None,
        description="Master seed of a batch; None draws from system entropy",
    )
    workers: int = Field(
        default=1,
        ge=1,
        description="Number of threads a batch spreads its matches over",
    )
    verbose_level: int = Field(
        default=0,
        ge=0,
        le=2,
        description="Amount of detail printed while a match runs",
    )


def load_config(path: Path | None, **overrides: Any) -> SimulationConfig:
    """
    Loads a simulation configuration, applying explicit overrides on top.

    Args:
        path (Path | None): JSON file with configuration values. When None or
            missing, the defaults are used.
        **overrides (Any): Values that take precedence over the file. Entries
            set to None are ignored.

    Returns:
        SimulationConfig: The validated configuration.

    """
    data: dict[str, Any] = {}
    if path is not None:
        if path.exists():
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        else:
            log_warning(
                f"Configuration file not found, using defaults: {path}",
                {"path": str(path)},
            )
    data.update({key: value for key, value in overrides.items() if value is not None})
    return SimulationConfig(**data)
