"""
Core system module for the arena.

This module contains the fundamental components the engine is built on,
including rule constants, dice primitives, errors, configuration, logging
and console utilities.
"""

from .config import SimulationConfig, load_config
from .constants import (
    DRAW,
    CellType,
    DamageType,
    Faction,
    FireMode,
    Metatype,
    WeaponCategory,
    WeaponType,
    is_oponent,
)
from .dice import DiceRoller, PoolResult, evaluate_pool, roll_and_evaluate, roll_pool
from .error_handling import (
    ConfigurationError,
    ErrorHandler,
    ErrorSeverity,
    GameException,
    InvalidInput,
)
from .utils import ccapture, cprint, crule, format_rolls, monitor_boxes

__all__ = [
    # Import from config.py
    "SimulationConfig",
    "load_config",
    # Import from constants.py
    "DRAW",
    "CellType",
    "DamageType",
    "Faction",
    "FireMode",
    "Metatype",
    "WeaponCategory",
    "WeaponType",
    "is_oponent",
    # Import from dice.py
    "DiceRoller",
    "PoolResult",
    "evaluate_pool",
    "roll_and_evaluate",
    "roll_pool",
    # Import from error_handling.py
    "ConfigurationError",
    "ErrorHandler",
    "ErrorSeverity",
    "GameException",
    "InvalidInput",
    # Import from utils.py
    "ccapture",
    "cprint",
    "crule",
    "format_rolls",
    "monitor_boxes",
]
