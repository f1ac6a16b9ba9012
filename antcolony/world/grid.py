"""Grid — the spatial container for the colony.

The Grid owns cells arranged in a fixed 2D array and provides the
coordinate lookups, neighbourhood scans, and bulk operations (visibility
reset, food scattering, clearing) used by the colony and its ants.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from numpy.random import Generator

from antcolony.world.cell import Cell

# 3x3 neighbourhood offsets in scan order (column-major, like the cell grid)
OFFSETS: tuple[tuple[int, int], ...] = tuple(
    (dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)
)


class OutOfBoundsError(IndexError):
    """Raised when a coordinate outside the grid is looked up."""


@dataclass
class Grid:
    """A fixed-size 2D grid of cells.

    Only the centre 3x3 block starts revealed; everything else is hidden
    until a scout walks onto it.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        cells: 2D list of Cell objects indexed as ``cells[y][x]``.
    """

    width: int
    height: int
    cells: list[list[Cell]] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        """Build every cell and reveal the centre region."""
        self.cells = [
            [Cell(x=x, y=y) for x in range(self.width)] for y in range(self.height)
        ]
        self.reset_visibility()

    @property
    def center(self) -> tuple[int, int]:
        """Coordinates of the queen's starting cell."""
        return (self.width // 2, self.height // 2)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def cell_at(self, x: int, y: int) -> Cell:
        """Return the cell at grid coordinates ``(x, y)``.

        Args:
            x: Column index.
            y: Row index.

        Raises:
            OutOfBoundsError: If coordinates are out of bounds.
        """
        if not self.in_bounds(x, y):
            msg = f"({x}, {y}) out of bounds for {self.width}x{self.height}"
            raise OutOfBoundsError(msg)
        return self.cells[y][x]

    def neighbours(self, x: int, y: int) -> list[Cell]:
        """Return the in-bound cells of the 3x3 block around ``(x, y)``.

        The centre cell itself is excluded.
        """
        result: list[Cell] = []
        for dx, dy in OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                result.append(self.cells[ny][nx])
        return result

    def __iter__(self) -> Iterator[Cell]:
        for row in self.cells:
            yield from row

    def reveal(self, x: int, y: int) -> None:
        self.cell_at(x, y).reveal()

    def hide(self, x: int, y: int) -> None:
        self.cell_at(x, y).hide()

    def reset_visibility(self) -> None:
        """Hide every cell, then reveal the 3x3 block around the centre."""
        for cell in self:
            if cell.revealed:
                cell.hide()
        cx, cy = self.center
        for dy in range(-1, 2):
            for dx in range(-1, 2):
                if self.in_bounds(cx + dx, cy + dy):
                    self.reveal(cx + dx, cy + dy)

    def clear(self) -> None:
        """Zero resources and occupancy on every cell."""
        for cell in self:
            cell.reset()

    def scatter_food(
        self,
        rng: Generator,
        *,
        chance: float,
        amount: tuple[int, int],
        exclude: tuple[int, int] | None = None,
    ) -> int:
        """Drop random food piles across the grid.

        Args:
            rng: Seeded random generator.
            chance: Probability that a given cell receives a pile.
            amount: Inclusive (min, max) size of each pile.
            exclude: A cell that never receives food (the queen's).

        Returns:
            Number of cells that received food.
        """
        lo, hi = amount
        seeded = 0
        for cell in self:
            if rng.random() < chance and cell.coords != exclude:
                cell.add_food(int(rng.integers(lo, hi + 1)))
                seeded += 1
        return seeded

    def perimeter_point(self, rng: Generator) -> tuple[int, int]:
        """Pick a random cell on the outer edge of the grid.

        An interior column forces the row onto the top or bottom border;
        the two edge columns allow any row.
        """
        x = int(rng.integers(self.width))
        if 0 < x < self.width - 1:
            y = 0 if rng.integers(2) == 0 else self.height - 1
        else:
            y = int(rng.integers(self.height))
        return (x, y)
