"""Config — load simulation parameters from YAML files.

All tunable constants (grid size, calendar, population sizes, spawn and
combat odds, pheromone amounts) live in YAML and are parsed into a typed
dataclass here.  The defaults reproduce the classic 27x27 colony.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

# Smallest grid that fits the centre block plus the forager scenario corners
_MIN_GRID = 5


@dataclass
class SimulationConfig:
    """Top-level simulation configuration.

    Attributes:
        seed: RNG seed for deterministic replay (None for a random run).
        grid_width: Number of grid columns.
        grid_height: Number of grid rows.
        turns_per_day: Turns in a day; pheromone evaporates and the
            queen hatches on each day boundary.
        days_per_year: Days in a year, used to derive lifespans.
        queen_lifespan_years: Queen lifespan in years.
        worker_lifespan_years: Lifespan of every other kind in years.
        queen_starting_food: Food placed on the queen's cell at setup.
        initial_soldiers: Soldiers in the normal setup.
        initial_foragers: Foragers in the normal setup.
        initial_scouts: Scouts in the normal setup.
        food_spawn_chance: Per-cell probability of a food pile at setup.
        food_spawn_min: Smallest food pile.
        food_spawn_max: Largest food pile.
        enemy_spawn_chance: Per-turn probability of an enemy arriving.
        attack_hit_chance: Probability that an attack kills its target.
        pheromone_deposit: Pheromone laid per step by a returning forager.
        pheromone_cap: Highest pheromone level a deposit may reach.
        scenario_scouts: Scouts in the scout scenario.
        scenario_foragers: Foragers in the forager scenario.
        scenario_soldiers: Soldiers in the soldier scenario.
        scenario_enemies: Enemies in the soldier scenario.
    """

    seed: int | None = 42
    grid_width: int = 27
    grid_height: int = 27
    turns_per_day: int = 10
    days_per_year: int = 365
    queen_lifespan_years: int = 20
    worker_lifespan_years: int = 1
    queen_starting_food: int = 1000

    # Normal setup population
    initial_soldiers: int = 10
    initial_foragers: int = 50
    initial_scouts: int = 4

    # Terrain
    food_spawn_chance: float = 0.25
    food_spawn_min: int = 500
    food_spawn_max: int = 1000

    # Combat and raids
    enemy_spawn_chance: float = 0.03
    attack_hit_chance: float = 0.5

    # Pheromone trail
    pheromone_deposit: int = 10
    pheromone_cap: int = 1000

    # Scenario populations
    scenario_scouts: int = 10
    scenario_foragers: int = 100
    scenario_soldiers: int = 20
    scenario_enemies: int = 20

    def __post_init__(self) -> None:
        """Reject settings the simulation cannot run with.

        Raises:
            ValueError: If a size, probability or range is invalid.
        """
        if self.grid_width < _MIN_GRID or self.grid_height < _MIN_GRID:
            msg = (
                f"grid must be at least {_MIN_GRID}x{_MIN_GRID}, "
                f"got {self.grid_width}x{self.grid_height}"
            )
            raise ValueError(msg)
        if self.turns_per_day <= 0 or self.days_per_year <= 0:
            msg = "turns_per_day and days_per_year must be positive"
            raise ValueError(msg)
        for name in ("food_spawn_chance", "enemy_spawn_chance", "attack_hit_chance"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                msg = f"{name} must be within [0, 1], got {value}"
                raise ValueError(msg)
        if not 0 <= self.food_spawn_min <= self.food_spawn_max:
            msg = (
                f"invalid food range {self.food_spawn_min}..{self.food_spawn_max}"
            )
            raise ValueError(msg)

    @property
    def turns_per_year(self) -> int:
        return self.turns_per_day * self.days_per_year

    @property
    def queen_max_age(self) -> int:
        return self.queen_lifespan_years * self.turns_per_year

    @property
    def worker_max_age(self) -> int:
        return self.worker_lifespan_years * self.turns_per_year

    @classmethod
    def from_yaml(cls, path: str | Path) -> SimulationConfig:
        """Load configuration from a YAML file.

        Unknown keys are ignored; missing keys keep their defaults.

        Args:
            path: Path to the YAML config file.

        Returns:
            A populated SimulationConfig instance.

        Raises:
            FileNotFoundError: If the config file does not exist.
            ValueError: If a loaded value is invalid.
        """
        path = Path(path)
        with path.open("r") as f:
            data = yaml.safe_load(f) or {}

        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
