"""Ant -- the shared base for every agent on the grid.

Each concrete kind (queen, forager, scout, soldier, enemy) subclasses
``Ant`` and fixes its ``kind`` once at class level, so cells and the
colony dispatch on a closed enum instead of re-checking types.

Agents never leave the grid by themselves: ``kill`` only flags the ant
and queues it with the colony, which removes it from its cell and its
population list once every agent has acted for the turn.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from numpy.random import Generator

    from antcolony.colony.colony import Colony
    from antcolony.world.cell import Cell


class AntKind(Enum):
    """The closed set of agent kinds."""

    QUEEN = auto()
    FORAGER = auto()
    SCOUT = auto()
    SOLDIER = auto()
    ENEMY = auto()

    @property
    def is_hostile(self) -> bool:
        return self is AntKind.ENEMY


@dataclass(eq=False)
class Ant:
    """A single agent.

    Attributes:
        colony: The colony that owns this ant.
        ant_id: Unique, never reused identifier.
        x: Current column.
        y: Current row.
        max_age: Age in turns at which the ant dies.
        age: Turns lived so far.
        dead: Set once the ant has been killed.
        cell: The cell at ``(x, y)``; kept in sync by ``move``.
    """

    kind: ClassVar[AntKind]

    colony: Colony = field(repr=False)
    ant_id: int
    x: int
    y: int
    max_age: int
    age: int = 0
    dead: bool = False
    cell: Cell = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self.cell = self.colony.grid.cell_at(self.x, self.y)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ant):
            msg = f"cannot compare Ant with {type(other).__name__}"
            raise TypeError(msg)
        return self.ant_id == other.ant_id

    def __lt__(self, other: Ant) -> bool:
        if not isinstance(other, Ant):
            msg = f"cannot compare Ant with {type(other).__name__}"
            raise TypeError(msg)
        return self.ant_id < other.ant_id

    def __hash__(self) -> int:
        return self.ant_id

    @property
    def is_alive(self) -> bool:
        """Return True if this ant has not been killed."""
        return not self.dead

    @property
    def coords(self) -> tuple[int, int]:
        return (self.x, self.y)

    def increment_age(self) -> bool:
        """Age by one turn, dying on reaching ``max_age``.

        Returns:
            True if the ant is still alive afterwards.
        """
        self.age += 1
        if self.age >= self.max_age:
            self.kill()
        return self.is_alive

    def kill(self) -> None:
        """Flag the ant as dead and queue it for end-of-turn removal.

        Killing an ant that is already dead does nothing.
        """
        if self.dead:
            return
        self.dead = True
        self.colony.mark_dead(self)

    def move(self, x: int, y: int) -> None:
        """Relocate to ``(x, y)``, keeping cell occupancy consistent."""
        self.cell.remove_occupant(self)
        self.x, self.y = x, y
        self.cell = self.colony.grid.cell_at(x, y)
        self.cell.add_occupant(self)

    def take_action(self, rng: Generator) -> None:
        """Perform one turn: age, then act if still alive.

        Args:
            rng: Seeded random generator.
        """
        if self.dead:
            return
        if not self.increment_age():
            return
        self.act(rng)

    def act(self, rng: Generator) -> None:
        """Kind-specific behaviour for one turn."""
        raise NotImplementedError

    # -- Helpers shared by the kinds --

    def pick_neighbour(
        self,
        rng: Generator,
        accept: Callable[[Cell], bool] | None = None,
    ) -> Cell | None:
        """Choose a uniformly random neighbouring cell.

        Args:
            rng: Seeded random generator.
            accept: Optional filter; only cells it returns True for are
                eligible.

        Returns:
            The chosen cell, or None when no neighbour qualifies.
        """
        options = [
            cell
            for cell in self.colony.grid.neighbours(self.x, self.y)
            if accept is None or accept(cell)
        ]
        if not options:
            return None
        return options[int(rng.integers(len(options)))]

    def strike(self, targets: list[Ant], rng: Generator) -> Ant | None:
        """Attack one uniformly chosen target.

        The blow lands with the colony's configured hit chance.  Targets
        already killed this turn may be chosen; hitting one changes nothing.

        Returns:
            The target that was killed, or None on a miss or a dead target.
        """
        target = targets[int(rng.integers(len(targets)))]
        if rng.random() >= self.colony.config.attack_hit_chance or target.dead:
            return None
        target.kill()
        return target
