"""
Game map module for the arena.

The map is external data: a width, a height and a flat row-major grid of cell
types. The engine only reads it, to grant cover bonuses and to tell the
path-finder which cells are blocked.
"""

import random
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from arena.core.constants import CellType


class GridVector(BaseModel):
    """A cell position on the grid. One cell is one metre."""

    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def distance_to(self, other: "GridVector") -> int:
        """
        Returns the grid distance to another cell.

        Diagonal steps cost the same as straight ones, so the distance is the
        Chebyshev distance.

        Args:
            other (GridVector): The other cell.

        Returns:
            int: The number of steps between the two cells.

        """
        return max(abs(self.x - other.x), abs(self.y - other.y))

    def line_to(self, other: "GridVector") -> list["GridVector"]:
        """
        Returns the cells crossed by the straight line to another cell.

        Uses Bresenham's algorithm; both end cells are included.

        Args:
            other (GridVector): The destination cell.

        Returns:
            list[GridVector]: The cells from self to other, in order.

        """
        x0, y0 = self.x, self.y
        x1, y1 = other.x, other.y
        dx = abs(x1 - x0)
        dy = -abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        err = dx + dy
        cells: list[GridVector] = []
        while True:
            cells.append(GridVector(x=x0, y=y0))
            if x0 == x1 and y0 == y1:
                break
            e2 = 2 * err
            if e2 >= dy:
                err += dy
                x0 += sx
            if e2 <= dx:
                err += dx
                y0 += sy
        return cells

    def neighbours(self) -> list["GridVector"]:
        """Returns the eight surrounding cells."""
        return [
            GridVector(x=self.x + dx, y=self.y + dy)
            for dy in (-1, 0, 1)
            for dx in (-1, 0, 1)
            if dx or dy
        ]

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


class GameMap(BaseModel):
    """A rectangular battle map."""

    model_config = ConfigDict(frozen=True)

    width: int = Field(
        ge=1,
        description="Number of columns",
    )
    height: int = Field(
        ge=1,
        description="Number of rows",
    )
    cells: tuple[CellType, ...] = Field(
        description="Row-major cell types, width x height entries",
    )

    @model_validator(mode="after")
    def _check_size(self) -> "GameMap":
        if len(self.cells) != self.width * self.height:
            raise ValueError(
                f"Map of {self.width}x{self.height} needs "
                f"{self.width * self.height} cells, got {len(self.cells)}"
            )
        return self

    def in_bounds(self, position: GridVector) -> bool:
        return 0 <= position.x < self.width and 0 <= position.y < self.height

    def cell_at(self, position: GridVector) -> CellType:
        """
        Returns the type of a cell. Cells off the map count as empty.

        Args:
            position (GridVector): The cell to look up.

        Returns:
            CellType: The content of the cell.

        """
        if not self.in_bounds(position):
            return CellType.EMPTY
        return self.cells[position.y * self.width + position.x]

    def blocked_cells(self) -> set[tuple[int, int]]:
        """Returns the cells movement cannot enter."""
        return {
            (index % self.width, index // self.width)
            for index, cell in enumerate(self.cells)
            if cell == CellType.HARD_COVER
        }

    def adjacent_cover(self, position: GridVector) -> set[tuple[int, int]]:
        """
        Returns the cover cells touching a position.

        Args:
            position (GridVector): The position of a character taking cover.

        Returns:
            set[tuple[int, int]]: The partial or hard cover cells around it.

        """
        return {
            cell.as_tuple()
            for cell in position.neighbours()
            if self.cell_at(cell) != CellType.EMPTY
        }

    def cover_bonus_between(
        self,
        attacker: GridVector,
        defender: GridVector,
        cover_cells: set[tuple[int, int]],
    ) -> int:
        """
        Returns the cover bonus a defender gets against an attacker.

        The bonus applies only when the line of fire crosses one of the
        defender's recorded cover cells. The best crossed cell counts.

        Args:
            attacker (GridVector): The attacker's position.
            defender (GridVector): The defender's position.
            cover_cells (set[tuple[int, int]]): The defender's cover cells.

        Returns:
            int: 0, or the bonus of the best cover cell on the line.

        """
        if not cover_cells:
            return 0
        bonus = 0
        for cell in attacker.line_to(defender)[1:]:
            if cell.as_tuple() in cover_cells:
                bonus = max(bonus, self.cell_at(cell).cover_bonus)
        return bonus


def generate_map(
    width: int,
    height: int,
    partial_cover_prob: float,
    hard_cover_prob: float,
    rng: random.Random | None = None,
) -> GameMap:
    """
    Generates a random battle map.

    Args:
        width (int): Number of columns.
        height (int): Number of rows.
        partial_cover_prob (float): Chance of a cell being partial cover.
        hard_cover_prob (float): Chance of a cell being hard cover.
        rng (random.Random | None): The random source.

    Returns:
        GameMap: The generated map.

    """
    rng = rng or random.Random()
    cells: list[Any] = []
    for _ in range(width * height):
        roll = rng.random()
        if roll < hard_cover_prob:
            cells.append(CellType.HARD_COVER)
        elif roll < hard_cover_prob + partial_cover_prob:
            cells.append(CellType.PARTIAL_COVER)
        else:
            cells.append(CellType.EMPTY)
    return GameMap(width=width, height=height, cells=tuple(cells))
