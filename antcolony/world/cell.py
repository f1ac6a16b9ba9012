"""Cell — a single tile in the colony grid.

Each cell holds its food and pheromone levels, its visibility, and
non-owning references to the ants standing on it.  Every mutation is
announced to subscribed listeners so a view can stay in sync without
the core knowing how it is drawn.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING

from antcolony.colony.ant import AntKind

if TYPE_CHECKING:
    from antcolony.colony.ant import Ant

FOOD_MAX = 2**31 - 1


class CellChange(Enum):
    """What part of a cell a notification is about."""

    FOOD = auto()
    PHEROMONE = auto()
    OCCUPANCY = auto()
    VISIBILITY = auto()


CellListener = Callable[["Cell", CellChange], None]


@dataclass(eq=False)
class Cell:
    """A single tile in the colony grid.

    Attributes:
        x: Column position.
        y: Row position.
        food: Food units stored here (saturates at ``FOOD_MAX``).
        pheromone: Trail pheromone level (never negative).
        revealed: Whether the tile has been discovered.
        queen_present: Whether the queen stands on this tile.
        friendly: Friendly ants here, keyed by id in arrival order.
        enemies: Enemy ants here, keyed by id in arrival order.
        counts: Number of friendly ants here per kind.
    """

    x: int
    y: int
    food: int = 0
    pheromone: int = 0
    revealed: bool = False
    queen_present: bool = False
    friendly: dict[int, Ant] = field(default_factory=dict, repr=False)
    enemies: dict[int, Ant] = field(default_factory=dict, repr=False)
    counts: Counter[AntKind] = field(default_factory=Counter, repr=False)
    _listeners: list[CellListener] = field(default_factory=list, repr=False)

    @property
    def coords(self) -> tuple[int, int]:
        return (self.x, self.y)

    def subscribe(self, listener: CellListener) -> None:
        """Call ``listener(cell, change)`` after every mutation."""
        self._listeners.append(listener)

    def _notify(self, change: CellChange) -> None:
        for listener in self._listeners:
            listener(self, change)

    # -- Resources ------------------------------------------------------------

    def add_food(self, amount: int) -> None:
        """Add food, saturating at ``FOOD_MAX`` instead of overflowing."""
        self.food = min(FOOD_MAX, self.food + amount)
        self._notify(CellChange.FOOD)

    def take_food(self, amount: int) -> bool:
        """Remove up to ``amount`` food.

        Returns:
            False if the cell held no food at all, True otherwise.  The
            level is clamped at zero when less than ``amount`` is left.
        """
        if self.food <= 0:
            return False
        self.food = max(0, self.food - amount)
        self._notify(CellChange.FOOD)
        return True

    def add_pheromone(self, amount: int, cap: int) -> None:
        """Deposit pheromone without letting the level exceed ``cap``."""
        self.pheromone = min(cap, self.pheromone + amount)
        self._notify(CellChange.PHEROMONE)

    def reduce_pheromone(self, amount: int) -> None:
        """Remove pheromone, clamping at zero."""
        self.pheromone = max(0, self.pheromone - amount)
        self._notify(CellChange.PHEROMONE)

    # -- Visibility -----------------------------------------------------------

    def reveal(self) -> None:
        self.revealed = True
        self._notify(CellChange.VISIBILITY)

    def hide(self) -> None:
        self.revealed = False
        self._notify(CellChange.VISIBILITY)

    # -- Occupancy ------------------------------------------------------------

    def add_occupant(self, ant: Ant) -> None:
        """Register an ant in the friendly or enemy set by its kind."""
        if ant.kind.is_hostile:
            if ant.ant_id in self.enemies:
                return
            self.enemies[ant.ant_id] = ant
        else:
            if ant.ant_id in self.friendly:
                return
            self.friendly[ant.ant_id] = ant
            self.counts[ant.kind] += 1
            if ant.kind is AntKind.QUEEN:
                self.queen_present = True
        self._notify(CellChange.OCCUPANCY)

    def remove_occupant(self, ant: Ant) -> None:
        """Drop an ant from whichever occupant set holds it."""
        if ant.kind.is_hostile:
            if self.enemies.pop(ant.ant_id, None) is None:
                return
        else:
            if self.friendly.pop(ant.ant_id, None) is None:
                return
            self.counts[ant.kind] -= 1
            if self.counts[ant.kind] == 0:
                del self.counts[ant.kind]
            if ant.kind is AntKind.QUEEN:
                self.queen_present = False
        self._notify(CellChange.OCCUPANCY)

    def count(self, kind: AntKind) -> int:
        """Number of ants of ``kind`` on this cell."""
        if kind.is_hostile:
            return len(self.enemies)
        return self.counts[kind]

    def live_enemies(self) -> list[Ant]:
        return [a for a in self.enemies.values() if a.is_alive]

    def reset(self) -> None:
        """Zero resources and forget every occupant.  Visibility is kept."""
        self.friendly.clear()
        self.enemies.clear()
        self.counts.clear()
        self.queen_present = False
        self.food = 0
        self.pheromone = 0
        self._notify(CellChange.FOOD)
        self._notify(CellChange.PHEROMONE)
        self._notify(CellChange.OCCUPANCY)
