"""Tests for antcolony.simulation - controller and config loading."""

from pathlib import Path

import pytest

from antcolony.__main__ import run_headless
from antcolony.colony.ant import AntKind
from antcolony.simulation.config import SimulationConfig
from antcolony.simulation.controller import Scenario, SimulationController
from antcolony.simulation.status import LoggingStatusSink

from conftest import RecordingSink

DEFAULT_YAML = Path(__file__).resolve().parent.parent / "config" / "default.yaml"


class TestSimulationConfig:
    """Tests for YAML config loading and validation."""

    def test_defaults(self) -> None:
        cfg = SimulationConfig()
        assert cfg.seed == 42
        assert cfg.grid_width == 27
        assert cfg.grid_height == 27
        assert cfg.turns_per_year == 3650
        assert cfg.queen_max_age == 73000
        assert cfg.worker_max_age == 3650

    def test_from_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("seed: 99\ngrid_width: 11\nenemy_spawn_chance: 0.5\n")
        cfg = SimulationConfig.from_yaml(yaml_file)
        assert cfg.seed == 99
        assert cfg.grid_width == 11
        assert cfg.grid_height == 27
        assert cfg.enemy_spawn_chance == 0.5

    def test_unknown_keys_ignored(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "test.yaml"
        yaml_file.write_text("seed: 3\nworld_width: 64\n")
        assert SimulationConfig.from_yaml(yaml_file).seed == 3

    def test_empty_file_gives_defaults(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")
        assert SimulationConfig.from_yaml(yaml_file) == SimulationConfig()

    def test_shipped_default_matches_dataclass(self) -> None:
        assert SimulationConfig.from_yaml(DEFAULT_YAML) == SimulationConfig()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            SimulationConfig.from_yaml(tmp_path / "nope.yaml")

    @pytest.mark.parametrize(
        "overrides",
        [
            {"grid_width": 4},
            {"grid_height": 0},
            {"turns_per_day": 0},
            {"days_per_year": -1},
            {"enemy_spawn_chance": 1.5},
            {"attack_hit_chance": -0.1},
            {"food_spawn_min": 900, "food_spawn_max": 100},
        ],
    )
    def test_invalid_values_rejected(self, overrides: dict) -> None:
        with pytest.raises(ValueError):
            SimulationConfig(**overrides)


class TestLoggingStatusSink:
    """Tests for the default status sink."""

    def test_keeps_last_message(self, caplog: pytest.LogCaptureFixture) -> None:
        sink = LoggingStatusSink()
        with caplog.at_level("DEBUG", logger="antcolony"):
            sink.show_status("Day 1, turn 1")
        assert sink.last == "Day 1, turn 1"
        assert "Day 1, turn 1" in caplog.text


class TestSimulationController:
    """Tests for the host-facing control surface."""

    def test_stopped_until_set_up(self) -> None:
        controller = SimulationController(config=SimulationConfig())
        assert controller.stopped
        assert not controller.step()
        assert controller.turn == 0

    def test_step_advances_one_turn(self) -> None:
        controller = SimulationController(config=SimulationConfig(), status=RecordingSink())
        controller.setup()
        assert controller.step()
        assert controller.turn == 1

    def test_tick_only_while_running(self) -> None:
        controller = SimulationController(config=SimulationConfig(), status=RecordingSink())
        controller.setup()
        assert not controller.tick()
        controller.start()
        assert controller.tick()
        controller.pause()
        assert not controller.tick()
        assert controller.turn == 1

    def test_start_ignored_when_stopped(self) -> None:
        controller = SimulationController(config=SimulationConfig())
        controller.start()
        assert not controller.running

    @pytest.mark.parametrize("scenario", list(Scenario))
    def test_every_scenario_runs(self, scenario: Scenario) -> None:
        controller = SimulationController(config=SimulationConfig(), status=RecordingSink())
        controller.setup(scenario)
        assert controller.run(5) == 5

    def test_queen_death_stops_playback(self) -> None:
        config = SimulationConfig(queen_starting_food=1, enemy_spawn_chance=0.0)
        sink = RecordingSink()
        controller = SimulationController(config=config, status=sink)
        controller.setup(Scenario.QUEEN)
        controller.start()
        assert controller.run(10) == 2
        assert controller.queen_dead
        assert controller.stopped
        assert not controller.running
        assert not controller.step()
        assert sink.messages[-1] == "Queen is dead, simulation over!"

    def test_destroy_stops(self) -> None:
        controller = SimulationController(config=SimulationConfig(), status=RecordingSink())
        controller.setup()
        controller.destroy()
        assert controller.stopped
        assert not controller.step()
        assert sum(controller.colony.population().values()) == 0

    def test_end_restores_default_colony(self) -> None:
        controller = SimulationController(config=SimulationConfig(), status=RecordingSink())
        controller.setup(Scenario.SOLDIER)
        controller.run(3)
        controller.end()
        assert controller.stopped
        assert controller.colony.population()[AntKind.FORAGER] == 50
        assert controller.turn == 0

    def test_determinism(self) -> None:
        """Same seed must produce identical state after N turns."""
        snapshots = []
        for _ in range(2):
            controller = SimulationController(
                config=SimulationConfig(seed=777, enemy_spawn_chance=0.1),
                status=RecordingSink(),
            )
            controller.setup()
            controller.run(25)
            colony = controller.colony
            snapshots.append(
                (
                    [(a.kind, a.coords, a.age) for a in colony.agents()],
                    [(c.food, c.pheromone, c.revealed) for c in colony.grid],
                )
            )
        assert snapshots[0] == snapshots[1]


class TestRunHeadless:
    """Tests for the windowless entry point."""

    def test_runs_requested_turns(self, caplog: pytest.LogCaptureFixture) -> None:
        controller = SimulationController(config=SimulationConfig(), status=RecordingSink())
        controller.setup()
        with caplog.at_level("INFO", logger="antcolony"):
            assert run_headless(controller, 3) == 3
        assert "Processed 3 turns" in caplog.text
