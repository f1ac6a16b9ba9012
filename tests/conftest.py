"""Shared fixtures for the antcolony test suite."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.random import Generator

from antcolony.colony.ant import AntKind
from antcolony.colony.colony import Colony
from antcolony.colony.queen import Queen
from antcolony.simulation.config import SimulationConfig


class RecordingSink:
    """Status sink that keeps every message it is shown."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def show_status(self, message: str) -> None:
        self.messages.append(message)


class FixedRoll:
    """Stand-in generator whose integer draws always return ``value``."""

    def __init__(self, value: int) -> None:
        self.value = value

    def integers(self, *_args: object) -> int:
        return self.value


@pytest.fixture
def rng() -> Generator:
    """A deterministic random generator for reproducible tests."""
    return np.random.default_rng(seed=12345)


@pytest.fixture
def small_config() -> SimulationConfig:
    """A 9x9 grid with no random raids."""
    return SimulationConfig(
        seed=7,
        grid_width=9,
        grid_height=9,
        enemy_spawn_chance=0.0,
    )


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def colony(small_config: SimulationConfig, sink: RecordingSink) -> Colony:
    """An empty 9x9 colony; only the centre block (3..5, 3..5) is revealed."""
    return Colony(config=small_config, status=sink)


@pytest.fixture
def queen(colony: Colony) -> Queen:
    """A queen at the centre (4, 4) of ``colony`` sitting on 1000 food."""
    queen = colony.spawn(AntKind.QUEEN, 4, 4)
    queen.cell.add_food(1000)
    return queen
