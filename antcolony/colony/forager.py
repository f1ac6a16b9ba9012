"""Forager -- searches for food along pheromone trails and carries it home.

A forager alternates between two states:

- **Foraging** (empty-handed): climb the pheromone gradient among the
  revealed neighbours, falling back to a random walk when there is no
  signal.  Every step is pushed onto a backtracking stack and every
  destination is registered in a visited graph so the ant does not walk
  in circles during one excursion.
- **Returning** (carrying one unit): pop the stack to retrace the path to
  the queen, laying pheromone on the way so others can follow it back
  out.

Loop handling happens twice: before a move the visited graph vetoes
cells already seen on this excursion, and after a move any cycle that
still formed is cut out of the backtracking stack so the trip home stays
short.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, ClassVar

from antcolony.colony.ant import Ant, AntKind
from antcolony.pheromones.evaporation import deposit
from antcolony.world.grid import OFFSETS

if TYPE_CHECKING:
    from numpy.random import Generator

    from antcolony.world.cell import Cell

logger = logging.getLogger(__name__)

Coord = tuple[int, int]


@dataclass
class VisitedGraph:
    """Cells visited during one foraging excursion.

    Attributes:
        nodes: Every registered coordinate.
        edges: Parent-to-child links recorded at registration.
    """

    nodes: set[Coord] = field(default_factory=set)
    edges: dict[Coord, set[Coord]] = field(default_factory=dict)

    def __contains__(self, node: object) -> bool:
        return node in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def add(self, node: Coord, parent: Coord | None = None) -> bool:
        """Register ``node``, linking it from ``parent`` when given.

        Returns:
            False if the node was already registered.
        """
        if node in self.nodes:
            return False
        self.nodes.add(node)
        if parent is not None and len(self.nodes) > 1:
            self.edges.setdefault(parent, set()).add(node)
        return True

    def clear(self) -> None:
        self.nodes.clear()
        self.edges.clear()


@dataclass(eq=False)
class Forager(Ant):
    """A worker that ferries food from the field to the queen.

    Attributes:
        carrying: Food units held (0 or 1).
        previous: Cell occupied before the last foraging step, if any.
        path: Backtracking stack of coordinates, most recent last.
        visited: Cells registered during the current excursion.
    """

    kind: ClassVar[AntKind] = AntKind.FORAGER

    carrying: int = 0
    previous: Coord | None = None
    path: list[Coord] = field(default_factory=list, repr=False)
    visited: VisitedGraph = field(default_factory=VisitedGraph, repr=False)

    @property
    def foraging(self) -> bool:
        """True while the forager is not carrying food."""
        return self.carrying == 0

    def kill(self) -> None:
        """Drop any carried food where the forager falls, then die."""
        if self.dead:
            return
        self.drop_food()
        self.forget_path()
        super().kill()

    def forget_path(self) -> None:
        """Clear the backtracking stack, visited graph and previous cell."""
        self.path.clear()
        self.visited.clear()
        self.previous = None

    def act(self, rng: Generator) -> None:
        if self.foraging:
            self.forage_step(rng)
            self.pick_up_food()
            return

        config = self.colony.config
        deposit(self.cell, config.pheromone_deposit, config.pheromone_cap)
        self.return_step()
        if self.cell.queen_present:
            self.drop_food()

    # -- Food handling --

    def pick_up_food(self) -> bool:
        """Take one unit from the current cell if allowed."""
        if self.carrying or self.cell.queen_present or self.cell.food <= 0:
            return False
        self.cell.take_food(1)
        self.carrying = 1
        logger.debug("Forager %d picked up food at %s", self.ant_id, self.coords)
        return True

    def drop_food(self) -> bool:
        """Put carried food down on the current cell."""
        if not self.carrying:
            return False
        self.cell.add_food(self.carrying)
        self.carrying = 0
        logger.debug("Forager %d dropped food at %s", self.ant_id, self.coords)
        return True

    # -- Movement --

    def _eligible(self, cell: Cell) -> bool:
        return cell.revealed and cell.coords != self.previous

    def choose_destination(self, rng: Generator) -> Coord | None:
        """Pick the next cell from pheromone levels around the forager.

        Returns:
            Target coordinates, or None if the forager has nowhere to go.
        """
        neighbours = self.colony.grid.neighbours(self.x, self.y)

        best_level = 0
        best_count = 0
        best: Coord | None = None
        for cell in neighbours:
            if not self._eligible(cell):
                continue
            if cell.pheromone > best_level:
                best_level = cell.pheromone
                best_count = 1
                best = cell.coords
            elif cell.pheromone == best_level and best_level > 0:
                best_count += 1
                best = cell.coords

        if best_count == 1:
            return best
        if best_count > 1:
            tied = self.pick_neighbour(
                rng,
                lambda c: self._eligible(c) and c.pheromone == best_level,
            )
            return tied.coords if tied is not None else best

        # No trail nearby: back out of a dead end, otherwise wander
        revealed = [c for c in neighbours if c.revealed]
        if len(revealed) == 1 and revealed[0].coords == self.previous:
            return self.previous
        wander = self.pick_neighbour(rng, self._eligible)
        if wander is None:
            return self.previous
        return wander.coords

    def avoid_loop(self, target: Coord, rng: Generator) -> Coord | None:
        """Redirect ``target`` if it was already visited this excursion.

        The eight neighbour offsets are tried in random order and the
        first revealed, unvisited cell wins.  When every neighbour has
        been seen the forager steps back to its previous cell.
        """
        if self.visited.add(target, self.previous):
            return target

        grid = self.colony.grid
        for index in rng.permutation(len(OFFSETS)):
            dx, dy = OFFSETS[index]
            nx, ny = self.x + dx, self.y + dy
            if not grid.in_bounds(nx, ny) or not grid.cell_at(nx, ny).revealed:
                continue
            if self.visited.add((nx, ny), self.previous):
                return (nx, ny)
        return self.previous

    def forage_step(self, rng: Generator) -> None:
        """Take one outbound step, recording it for the way home."""
        target = self.choose_destination(rng)
        if target is None:
            return
        target = self.avoid_loop(target, rng)
        if target is None:
            return

        origin = self.coords
        self.previous = origin
        self.path.append(origin)
        self.move(*target)
        self.trim_loop()

    def trim_loop(self) -> None:
        """Cut a freshly closed cycle out of the backtracking stack.

        If the current position is already on the stack, everything from
        its most recent occurrence upward is discarded.
        """
        here = self.coords
        for index in range(len(self.path) - 1, -1, -1):
            if self.path[index] == here:
                del self.path[index:]
                return

    def return_step(self) -> None:
        """Retrace one step toward the queen."""
        if not self.path:
            return
        self.move(*self.path.pop())
        if self.cell.queen_present:
            self.forget_path()
