"""Soldier -- hunts enemies that wander into revealed territory."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from antcolony.colony.ant import Ant, AntKind

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Soldier(Ant):
    """Attacks enemies on its own cell, otherwise closes in or patrols.

    Soldiers never step onto hidden cells.
    """

    kind: ClassVar[AntKind] = AntKind.SOLDIER

    def act(self, rng: Generator) -> None:
        enemies = self.cell.live_enemies()
        if enemies:
            victim = self.strike(enemies, rng)
            if victim is not None:
                logger.debug("Soldier %d killed enemy %d", self.ant_id, victim.ant_id)
            return

        target = self.pick_neighbour(
            rng,
            lambda c: c.revealed and bool(c.live_enemies()),
        )
        if target is None:
            target = self.pick_neighbour(rng, lambda c: c.revealed)
        if target is not None:
            self.move(target.x, target.y)
