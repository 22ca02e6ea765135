"""
Tactical module for the arena: grid positions, the battle map and the
path-finding port used for movement legality.
"""

from .game_map import GameMap, GridVector, generate_map
from .pathfinding import OpenGroundPathfinder, Pathfinder

__all__ = [
    "GameMap",
    "GridVector",
    "generate_map",
    "OpenGroundPathfinder",
    "Pathfinder",
]
