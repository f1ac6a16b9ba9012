"""Entry point for ``python -m antcolony``.

Loads the default YAML config, seeds a colony, and either opens a
Pygame window to watch it or, with ``--headless``, runs a fixed number
of turns and logs a population summary.
"""

from __future__ import annotations

import argparse
import logging
import pathlib

from antcolony.simulation.config import SimulationConfig
from antcolony.simulation.controller import Scenario, SimulationController
from antcolony.ui.pygame_client import PygameRenderer

logger = logging.getLogger("antcolony")

_DEFAULT_CONFIG = (
    pathlib.Path(__file__).resolve().parent.parent / "config" / "default.yaml"
)


def _load_config(path: pathlib.Path) -> SimulationConfig:
    if path == _DEFAULT_CONFIG and not path.exists():
        return SimulationConfig()
    return SimulationConfig.from_yaml(path)


def run_headless(controller: SimulationController, turns: int) -> int:
    """Advance up to ``turns`` turns without a display and log the outcome.

    Returns:
        Number of turns processed.
    """
    controller.start()
    processed = controller.run(turns)
    population = controller.colony.population()
    summary = ", ".join(f"{k.name.lower()}={v}" for k, v in population.items())
    logger.info("Processed %d turns: %s", processed, summary)
    if controller.queen_dead:
        logger.info("The queen died on turn %d", controller.turn - 1)
    return processed


def main() -> None:
    """Parse CLI args, create the controller, run it."""
    parser = argparse.ArgumentParser(
        prog="antcolony",
        description="Ant colony simulator",
    )
    parser.add_argument(
        "-c",
        "--config",
        type=pathlib.Path,
        default=_DEFAULT_CONFIG,
        help="Path to YAML config file (default: config/default.yaml)",
    )
    parser.add_argument(
        "--scenario",
        choices=[s.value for s in Scenario],
        default=Scenario.NORMAL.value,
        help="How to seed the colony (default: normal)",
    )
    parser.add_argument(
        "--cell-size",
        type=int,
        default=24,
        help="Pixel size per grid cell (default: 24)",
    )
    parser.add_argument(
        "--fps",
        type=int,
        default=30,
        help="Target frames per second (default: 30)",
    )
    parser.add_argument(
        "--speed",
        type=float,
        default=8.0,
        help="Simulation turns per second (default: 8)",
    )
    parser.add_argument(
        "--headless",
        action="store_true",
        help="Run without a window",
    )
    parser.add_argument(
        "--turns",
        type=int,
        default=1000,
        help="Turns to run in headless mode (default: 1000)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: INFO)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = _load_config(args.config)
    controller = SimulationController(config=config)
    controller.setup(Scenario(args.scenario))

    if args.headless:
        run_headless(controller, args.turns)
        return

    renderer = PygameRenderer(
        controller=controller,
        cell_size=args.cell_size,
        turns_per_second=args.speed,
    )
    renderer.run(fps=args.fps)


if __name__ == "__main__":
    main()
