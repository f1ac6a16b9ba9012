"""SimulationController — the host-facing control surface.

Wraps one ``Colony`` and exposes what a window or a script needs:
seeding (normal setup or one of the test scenarios), single steps,
host-paced playback, and teardown.  Automatic playback halts as soon as
the colony reports that its queen has died.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.random import Generator

from antcolony.colony.colony import Colony
from antcolony.simulation.config import SimulationConfig
from antcolony.simulation.status import LoggingStatusSink, StatusSink

logger = logging.getLogger(__name__)


class Scenario(Enum):
    """Ways to seed the colony."""

    NORMAL = "normal"
    QUEEN = "queen"
    SCOUT = "scout"
    FORAGER = "forager"
    SOLDIER = "soldier"


@dataclass
class SimulationController:
    """Drives a colony turn by turn on behalf of a host.

    Attributes:
        config: Loaded simulation configuration.
        status: Sink for status lines; shared with the colony.
        colony: The colony being simulated.
        rng: Master seeded random generator.
        stopped: True until a scenario is seeded, and again after the
            queen dies or the colony is destroyed.
        running: True while the host timer should advance turns.
    """

    config: SimulationConfig
    status: StatusSink = field(default_factory=LoggingStatusSink)
    colony: Colony = field(init=False)
    rng: Generator = field(init=False)
    stopped: bool = field(init=False, default=True)
    running: bool = field(init=False, default=False)

    def __post_init__(self) -> None:
        """Create the RNG and an empty colony from config."""
        self.rng = np.random.default_rng(self.config.seed)
        self.colony = Colony(config=self.config, rng=self.rng, status=self.status)

    @property
    def queen_dead(self) -> bool:
        return self.colony.queen_dead

    @property
    def turn(self) -> int:
        return self.colony.turn

    def setup(self, scenario: Scenario = Scenario.NORMAL) -> None:
        """Replace the population and terrain with a fresh scenario.

        Playback is left paused.
        """
        match scenario:
            case Scenario.NORMAL:
                self.colony.reset()
            case Scenario.QUEEN:
                self.colony.queen_only()
            case Scenario.SCOUT:
                self.colony.scouts_only()
            case Scenario.FORAGER:
                self.colony.foragers_only()
            case Scenario.SOLDIER:
                self.colony.soldiers_vs_enemies()
        self.stopped = False
        self.running = False
        logger.info("Simulation set up (%s)", scenario.value)

    def reset(self) -> None:
        """Rebuild the default population and terrain."""
        self.setup(Scenario.NORMAL)

    def start(self) -> None:
        """Let ``tick`` advance turns until paused or the queen dies."""
        if not self.stopped:
            self.running = True

    def pause(self) -> None:
        self.running = False

    def stop(self) -> None:
        self.stopped = True
        self.running = False

    def step(self) -> bool:
        """Advance exactly one turn.

        Returns:
            True if a turn was processed.
        """
        if self.stopped:
            return False
        if self.queen_dead:
            self.stop()
            return False
        self.colony.process_turn()
        if self.queen_dead:
            self.stop()
        return True

    def tick(self) -> bool:
        """Timer callback: advance one turn while playback is running."""
        if not self.running:
            return False
        return self.step()

    def run(self, turns: int) -> int:
        """Advance up to ``turns`` turns, stopping early if the queen dies.

        Args:
            turns: Maximum number of turns to process.

        Returns:
            Number of turns actually processed.
        """
        processed = 0
        for _ in range(turns):
            if not self.step():
                break
            processed += 1
        return processed

    def destroy(self) -> None:
        """Kill every ant, zero every cell, and stop the simulation."""
        self.colony.destroy()
        self.stop()

    def end(self) -> None:
        """Stop playback and put the default colony back in place."""
        self.stop()
        self.colony.reset()
