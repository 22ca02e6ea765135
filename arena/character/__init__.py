"""
Character system module for the arena.

This module handles the roster records of characters, their derived
statistics, and the per-match combatant state built from them.
"""

from .character_stats import (
    max_physical,
    max_stun,
    mental_limit,
    movement_allowance,
    physical_limit,
)
from .combatant import Combatant
from .main import (
    Attributes,
    Character,
    Skills,
    character_from_dict,
    load_characters,
)

__all__ = [
    # Import from character_stats.py
    "max_physical",
    "max_stun",
    "mental_limit",
    "movement_allowance",
    "physical_limit",
    # Import from combatant.py
    "Combatant",
    # Import from main.py
    "Attributes",
    "Character",
    "Skills",
    "character_from_dict",
    "load_characters",
]
