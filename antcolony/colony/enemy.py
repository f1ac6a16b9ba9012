"""Enemy -- a raider that enters at the grid's edge and attacks workers."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from antcolony.colony.ant import Ant, AntKind

if TYPE_CHECKING:
    from numpy.random import Generator

logger = logging.getLogger(__name__)


@dataclass(eq=False)
class Enemy(Ant):
    """Attacks any friendly ant sharing its cell, otherwise wanders.

    Friendlies killed earlier in the turn still count until they are
    reaped, so the enemy holds its cell and may swing at a corpse.

    Enemies ignore visibility and may walk onto hidden cells.
    """

    kind: ClassVar[AntKind] = AntKind.ENEMY

    def act(self, rng: Generator) -> None:
        friendlies = list(self.cell.friendly.values())
        if friendlies:
            victim = self.strike(friendlies, rng)
            if victim is not None:
                logger.debug(
                    "Enemy %d killed %s %d",
                    self.ant_id,
                    victim.kind.name.lower(),
                    victim.ant_id,
                )
            return

        target = self.pick_neighbour(rng)
        if target is not None:
            self.move(target.x, target.y)
