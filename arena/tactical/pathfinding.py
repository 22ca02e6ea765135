"""
Path-finding port for the arena.

Movement legality needs the length of the shortest path between two cells.
Finding that path is not the engine's job: any object implementing the
Pathfinder protocol can be plugged into a match.
"""

from typing import Protocol

from arena.tactical.game_map import GridVector


class Pathfinder(Protocol):
    """Answers shortest path length queries on the grid."""

    def shortest_path_length(
        self,
        start: GridVector,
        goal: GridVector,
        blocked: set[tuple[int, int]],
    ) -> int | None:
        """
        Returns the number of steps of the shortest path, or None if the goal
        cannot be reached.
        """
        ...


class OpenGroundPathfinder:
    """Path-finder for open ground: every path is the straight one.

    Used when no real path-finder is plugged in. Only a blocked destination
    is refused.
    """

    def shortest_path_length(
        self,
        start: GridVector,
        goal: GridVector,
        blocked: set[tuple[int, int]],
    ) -> int | None:
        if goal.as_tuple() in blocked:
            return None
        return start.distance_to(goal)
