"""Scout -- wanders at random and uncovers hidden cells."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from antcolony.colony.ant import Ant, AntKind

if TYPE_CHECKING:
    from numpy.random import Generator


@dataclass(eq=False)
class Scout(Ant):
    """Moves to a random adjacent cell each turn and reveals it."""

    kind: ClassVar[AntKind] = AntKind.SCOUT

    def act(self, rng: Generator) -> None:
        target = self.pick_neighbour(rng)
        if target is None:
            return
        self.move(target.x, target.y)
        if not self.cell.revealed:
            self.cell.reveal()
