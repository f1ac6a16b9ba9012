"""Colony — owns the grid and every agent, and runs one turn at a time.

Turn order is fixed: the queen acts first, then scouts, foragers,
soldiers and finally enemies, so friendly ants always move before the
raiders.  Ants killed during the turn stay on the grid (flagged dead)
until ``reap`` removes them after everyone has acted; only the queen's
death takes effect immediately, because it ends the simulation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field

import numpy as np
from numpy.random import Generator

from antcolony.colony.ant import Ant, AntKind
from antcolony.colony.enemy import Enemy
from antcolony.colony.forager import Forager
from antcolony.colony.queen import Queen
from antcolony.colony.scout import Scout
from antcolony.colony.soldier import Soldier
from antcolony.pheromones.evaporation import evaporate
from antcolony.simulation.config import SimulationConfig
from antcolony.simulation.status import LoggingStatusSink, StatusSink
from antcolony.world.clock import TurnClock
from antcolony.world.grid import Grid

logger = logging.getLogger(__name__)

QUEEN_DEAD_MESSAGE = "Queen is dead, simulation over!"

_ANT_TYPES: dict[AntKind, type[Ant]] = {
    AntKind.QUEEN: Queen,
    AntKind.FORAGER: Forager,
    AntKind.SCOUT: Scout,
    AntKind.SOLDIER: Soldier,
    AntKind.ENEMY: Enemy,
}


@dataclass
class Colony:
    """All simulation state for one colony run.

    Attributes:
        config: Simulation parameters.
        rng: Seeded random generator shared by every agent.
        status: Sink for the per-turn day label and the end message.
        grid: The cell grid.
        clock: Turn counter and day calendar.
        queen: The queen, or None before seeding and after ``destroy``.
        queen_dead: Set the moment the queen dies.
        foragers: Forager population in action order.
        scouts: Scout population in action order.
        soldiers: Soldier population in action order.
        enemies: Enemy population in action order.
        pending_dead: Ants killed this turn, waiting to be reaped.
    """

    config: SimulationConfig = field(default_factory=SimulationConfig)
    rng: Generator | None = None
    status: StatusSink = field(default_factory=LoggingStatusSink)
    grid: Grid = field(init=False)
    clock: TurnClock = field(init=False)
    queen: Queen | None = field(init=False, default=None)
    queen_dead: bool = field(init=False, default=False)
    foragers: list[Forager] = field(init=False, default_factory=list)
    scouts: list[Scout] = field(init=False, default_factory=list)
    soldiers: list[Soldier] = field(init=False, default_factory=list)
    enemies: list[Enemy] = field(init=False, default_factory=list)
    pending_dead: list[Ant] = field(init=False, default_factory=list)
    _next_id: int = field(init=False, default=0, repr=False)

    def __post_init__(self) -> None:
        """Build the grid and the clock; the colony starts unpopulated."""
        if self.rng is None:
            self.rng = np.random.default_rng(self.config.seed)
        self.grid = Grid(width=self.config.grid_width, height=self.config.grid_height)
        self.clock = TurnClock(turns_per_day=self.config.turns_per_day)

    @property
    def turn(self) -> int:
        return self.clock.turn

    # -- Population bookkeeping --

    def next_id(self) -> int:
        """Return the next unused ant id."""
        ant_id = self._next_id
        self._next_id += 1
        return ant_id

    def _population(self, kind: AntKind) -> list[Ant]:
        match kind:
            case AntKind.FORAGER:
                return self.foragers
            case AntKind.SCOUT:
                return self.scouts
            case AntKind.SOLDIER:
                return self.soldiers
            case AntKind.ENEMY:
                return self.enemies
        msg = f"{kind.name} has no population list"
        raise ValueError(msg)

    def max_age_for(self, kind: AntKind) -> int:
        if kind is AntKind.QUEEN:
            return self.config.queen_max_age
        return self.config.worker_max_age

    def spawn(self, kind: AntKind, x: int, y: int) -> Ant:
        """Create a new ant of ``kind`` at ``(x, y)`` and add it.

        Returns:
            The new ant.
        """
        ant = _ANT_TYPES[kind](
            colony=self,
            ant_id=self.next_id(),
            x=x,
            y=y,
            max_age=self.max_age_for(kind),
        )
        self.add_agent(ant)
        return ant

    def add_agent(self, ant: Ant) -> None:
        """Insert an ant into its population and onto its cell."""
        if ant.kind is AntKind.QUEEN:
            self.queen = ant
            self.queen_dead = False
        else:
            self._population(ant.kind).append(ant)
        ant.cell.add_occupant(ant)

    def mark_dead(self, ant: Ant) -> None:
        """Queue a killed ant for removal at the end of the turn.

        The queen is not queued: her death ends the simulation at once.
        """
        if ant.kind is AntKind.QUEEN:
            self.queen_dead = True
            ant.cell.remove_occupant(ant)
            logger.warning("Queen died on turn %d", self.turn)
            self.status.show_status(QUEEN_DEAD_MESSAGE)
            return
        self.pending_dead.append(ant)

    def reap(self) -> list[Ant]:
        """Remove every ant killed this turn from the grid and populations.

        Returns:
            The ants that were removed.
        """
        dead, self.pending_dead = self.pending_dead, []
        if not dead:
            return dead
        for ant in dead:
            ant.cell.remove_occupant(ant)
        self.foragers = [a for a in self.foragers if a.is_alive]
        self.scouts = [a for a in self.scouts if a.is_alive]
        self.soldiers = [a for a in self.soldiers if a.is_alive]
        self.enemies = [a for a in self.enemies if a.is_alive]
        logger.debug("Reaped %d ants on turn %d", len(dead), self.turn)
        return dead

    def agents(self) -> Iterator[Ant]:
        """Iterate every ant still held by the colony, queen first."""
        if self.queen is not None and self.queen.is_alive:
            yield self.queen
        yield from self.scouts
        yield from self.foragers
        yield from self.soldiers
        yield from self.enemies

    def population(self) -> dict[AntKind, int]:
        """Number of living ants per kind."""
        counts = {kind: 0 for kind in AntKind}
        for ant in self.agents():
            if ant.is_alive:
                counts[ant.kind] += 1
        return counts

    # -- Turn processing --

    def process_turn(self) -> None:
        """Advance the colony by exactly one turn.

        1. Publish the day label
        2. Evaporate pheromone on day boundaries
        3. Queen, scouts, foragers, soldiers, enemies act
        4. Reap the dead
        5. Maybe spawn a raider on the perimeter
        """
        if self.queen is None or self.queen_dead:
            logger.warning("No living queen, turn %d not processed", self.turn)
            return

        self.status.show_status(self.clock.label)

        if self.clock.is_day_boundary:
            evaporate(self.grid)

        self.queen.take_action(self.rng)
        for population in (self.scouts, self.foragers, self.soldiers, self.enemies):
            for ant in population:
                ant.take_action(self.rng)

        self.reap()

        if self.rng.random() < self.config.enemy_spawn_chance:
            self.spawn_enemy()

        self.clock.advance()

    def spawn_enemy(self) -> Enemy:
        """Bring a new raider in at a random point on the grid's edge."""
        x, y = self.grid.perimeter_point(self.rng)
        enemy = self.spawn(AntKind.ENEMY, x, y)
        logger.info("Enemy %d arrived at (%d, %d)", enemy.ant_id, x, y)
        return enemy

    # -- Setup and teardown --

    def destroy(self) -> None:
        """Remove every ant and zero every cell.

        Visibility is left as it is.
        """
        for ant in self.agents():
            ant.dead = True
        self.queen = None
        self.queen_dead = False
        self.foragers = []
        self.scouts = []
        self.soldiers = []
        self.enemies = []
        self.pending_dead = []
        self.grid.clear()
        self.status.show_status("")

    def _found(self) -> Queen:
        """Start over with a fed queen alone in the centre."""
        self.destroy()
        self.clock.reset()
        cx, cy = self.grid.center
        queen = self.spawn(AntKind.QUEEN, cx, cy)
        queen.cell.add_food(self.config.queen_starting_food)
        return queen

    def _scatter_food(self) -> None:
        self.grid.scatter_food(
            self.rng,
            chance=self.config.food_spawn_chance,
            amount=(self.config.food_spawn_min, self.config.food_spawn_max),
            exclude=self.grid.center,
        )

    def _spawn_many(self, kind: AntKind, count: int, x: int, y: int) -> None:
        for _ in range(count):
            self.spawn(kind, x, y)

    def reset(self) -> None:
        """Seed the normal colony: queen, soldiers, foragers, scouts, food."""
        queen = self._found()
        self._spawn_many(AntKind.SOLDIER, self.config.initial_soldiers, *queen.coords)
        self._spawn_many(AntKind.FORAGER, self.config.initial_foragers, *queen.coords)
        self._spawn_many(AntKind.SCOUT, self.config.initial_scouts, *queen.coords)
        self._scatter_food()
        self.grid.reset_visibility()
        logger.info("Colony reset with %d ants", sum(self.population().values()))

    def queen_only(self) -> None:
        """Seed a queen and scattered food, nothing else."""
        self._found()
        self._scatter_food()
        self.grid.reset_visibility()
        logger.info("Seeded queen-only scenario")

    def scouts_only(self) -> None:
        """Seed a queen surrounded by scouts."""
        queen = self._found()
        self.grid.reset_visibility()
        self._spawn_many(AntKind.SCOUT, self.config.scenario_scouts, *queen.coords)
        logger.info("Seeded scout scenario")

    def foragers_only(self) -> None:
        """Seed a queen, food and foragers.

        Besides the centre block, the four cells two steps away on each
        diagonal are revealed so foragers have isolated patches to find.
        """
        queen = self._found()
        self._scatter_food()
        self._spawn_many(AntKind.FORAGER, self.config.scenario_foragers, *queen.coords)
        self.grid.reset_visibility()
        cx, cy = queen.coords
        for dx in (-2, 2):
            for dy in (-2, 2):
                self.grid.reveal(cx + dx, cy + dy)
        logger.info("Seeded forager scenario")

    def soldiers_vs_enemies(self) -> None:
        """Seed soldiers at the queen and a raiding party next to them."""
        queen = self._found()
        self.grid.reset_visibility()
        cx, cy = queen.coords
        self._spawn_many(AntKind.SOLDIER, self.config.scenario_soldiers, cx, cy)
        self._spawn_many(AntKind.ENEMY, self.config.scenario_enemies, cx - 1, cy + 1)
        logger.info("Seeded soldier scenario")
