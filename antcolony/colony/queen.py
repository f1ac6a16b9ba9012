"""Queen -- eats from her cell every turn and hatches one ant per day."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from antcolony.colony.ant import Ant, AntKind

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)

# Hatch roll in [0, 100): below 25 soldier, below 50 scout, otherwise forager
_SOLDIER_ROLL = 25
_SCOUT_ROLL = 50


@dataclass(eq=False)
class Queen(Ant):
    """The colony's queen.  Her death ends the simulation."""

    kind: ClassVar[AntKind] = AntKind.QUEEN

    def act(self, rng: Generator) -> None:
        if not self.eat():
            logger.info("Queen %d starved on turn %d", self.ant_id, self.colony.turn)
            self.kill()
            return
        if self.colony.clock.is_day_boundary:
            self.hatch(rng)

    def eat(self) -> bool:
        """Consume one food unit from her cell; False if there is none."""
        return self.cell.take_food(1)

    def hatch(self, rng: Generator) -> Ant:
        """Lay one new ant on her own cell, kind chosen at random."""
        roll = int(rng.integers(100))
        if roll < _SOLDIER_ROLL:
            kind = AntKind.SOLDIER
        elif roll < _SCOUT_ROLL:
            kind = AntKind.SCOUT
        else:
            kind = AntKind.FORAGER
        ant = self.colony.spawn(kind, self.x, self.y)
        logger.debug("Queen hatched %s %d", kind.name.lower(), ant.ant_id)
        return ant
