"""
Combat system module for the arena.

This module handles all combat mechanics including range tables, attack
resolution, damage and status tracking, the initiative scheduler, the
decisions of the combatants, and the match and batch runners.
"""

from .attack import resolve_attack
from .batch import BatchResult, calculate_round_wins, run_batch
from .combat_manager import MatchState, resolve_next_action, run_match, start_match
from .results import MatchResult, RoundResult

__all__ = [
    "resolve_attack",
    "BatchResult",
    "calculate_round_wins",
    "run_batch",
    "MatchState",
    "resolve_next_action",
    "run_match",
    "start_match",
    "MatchResult",
    "RoundResult",
]
