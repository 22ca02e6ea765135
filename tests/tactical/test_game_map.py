"""
Tests for grid geometry, the battle map and the path-finding port.
"""

import random

import pytest
from arena.core.constants import CellType
from arena.tactical.game_map import GameMap, GridVector, generate_map
from arena.tactical.pathfinding import OpenGroundPathfinder
from pydantic import ValidationError

E, P, H = CellType.EMPTY, CellType.PARTIAL_COVER, CellType.HARD_COVER


@pytest.fixture
def game_map():
    # 5 x 3 map, row-major:
    # y=0: E E E E E
    # y=1: E E P H E
    # y=2: E E E E E
    return GameMap(
        width=5,
        height=3,
        cells=(E, E, E, E, E, E, E, P, H, E, E, E, E, E, E),
    )


def test_distance_is_chebyshev():
    """Test that diagonal steps count as one metre."""
    assert GridVector(x=0, y=0).distance_to(GridVector(x=3, y=2)) == 3
    assert GridVector(x=2, y=2).distance_to(GridVector(x=2, y=2)) == 0


def test_line_includes_both_ends():
    """Test the cells of a straight line."""
    line = GridVector(x=0, y=0).line_to(GridVector(x=3, y=0))
    assert [cell.as_tuple() for cell in line] == [(0, 0), (1, 0), (2, 0), (3, 0)]


def test_line_length_matches_distance():
    """Test that a line has one cell per metre of distance, plus the start."""
    start, goal = GridVector(x=1, y=1), GridVector(x=7, y=4)
    assert len(start.line_to(goal)) == start.distance_to(goal) + 1


def test_map_size_is_validated():
    """Test that the cell count must match the size."""
    with pytest.raises(ValidationError):
        GameMap(width=2, height=2, cells=(E, E, E))


def test_cell_lookup(game_map):
    """Test cell lookups, including off-map cells."""
    assert game_map.cell_at(GridVector(x=2, y=1)) == P
    assert game_map.cell_at(GridVector(x=3, y=1)) == H
    assert game_map.cell_at(GridVector(x=-1, y=0)) == E
    assert not game_map.in_bounds(GridVector(x=5, y=0))


def test_blocked_cells_are_hard_cover(game_map):
    """Test that only hard cover blocks movement."""
    assert game_map.blocked_cells() == {(3, 1)}


def test_adjacent_cover(game_map):
    """Test finding the cover cells around a position."""
    assert game_map.adjacent_cover(GridVector(x=2, y=2)) == {(2, 1), (3, 1)}
    assert game_map.adjacent_cover(GridVector(x=0, y=0)) == set()


def test_cover_bonus_when_line_crosses_cover(game_map):
    """Test the bonus granted by the best cover cell on the line of fire."""
    defender = GridVector(x=2, y=2)
    cover = {(2, 1), (3, 1)}
    assert game_map.cover_bonus_between(GridVector(x=2, y=0), defender, cover) == 2
    assert game_map.cover_bonus_between(GridVector(x=4, y=0), defender, cover) == 4


def test_no_cover_bonus_when_line_misses_cover(game_map):
    """Test that cover on the wrong side gives nothing."""
    defender = GridVector(x=2, y=2)
    cover = {(2, 1), (3, 1)}
    assert game_map.cover_bonus_between(GridVector(x=0, y=2), defender, cover) == 0
    assert game_map.cover_bonus_between(GridVector(x=2, y=0), defender, set()) == 0


def test_generate_map_is_reproducible():
    """Test that the same generator state yields the same map."""
    first = generate_map(10, 8, 0.2, 0.1, random.Random(3))
    second = generate_map(10, 8, 0.2, 0.1, random.Random(3))
    assert first == second
    assert len(first.cells) == 80


def test_generate_map_probabilities():
    """Test the extreme cover probabilities."""
    assert set(generate_map(4, 4, 0.0, 0.0, random.Random(1)).cells) == {E}
    assert set(generate_map(4, 4, 0.0, 1.0, random.Random(1)).cells) == {H}


def test_open_ground_pathfinder():
    """Test the default path-finder."""
    pathfinder = OpenGroundPathfinder()
    start, goal = GridVector(x=0, y=0), GridVector(x=4, y=2)
    assert pathfinder.shortest_path_length(start, goal, set()) == 4
    assert pathfinder.shortest_path_length(start, goal, {(4, 2)}) is None
