"""Evaporation and deposit rules for trail pheromone.

Pheromone is an integer level stored on each ``Cell``.  Returning
foragers deposit it in fixed amounts and the whole grid loses half of it
at the start of every day.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from antcolony.world.cell import Cell
    from antcolony.world.grid import Grid


def decayed_level(level: int) -> int:
    """Return the level a cell holds after one evaporation step.

    The level is halved (rounding down) but never drops below 1 through
    evaporation alone, so a cell at 1 stays at 1 and only an empty cell
    is at 0.
    """
    if level <= 0:
        return 0
    return max(1, level // 2)


def evaporate(grid: Grid) -> None:
    """Apply one evaporation step to every cell of the grid."""
    for cell in grid:
        if cell.pheromone > 1:
            cell.reduce_pheromone(cell.pheromone - decayed_level(cell.pheromone))


def deposit(cell: Cell, amount: int, cap: int) -> bool:
    """Lay pheromone on ``cell`` unless it is the queen's cell or full.

    Args:
        cell: Where the forager stands.
        amount: Units to add.
        cap: Level the cell may never exceed.

    Returns:
        True if anything was deposited.
    """
    if cell.queen_present or cell.pheromone >= cap:
        return False
    cell.add_pheromone(amount, cap)
    return True
