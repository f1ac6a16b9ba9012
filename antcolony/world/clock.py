"""TurnClock — turn counting and the day calendar.

The colony advances one turn at a time; ten turns make a day and the
day boundary drives both pheromone evaporation and the queen's hatching.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class TurnClock:
    """Tracks the current turn and converts it to days.

    Attributes:
        turns_per_day: Number of turns in one day.
        turn: Zero-based index of the turn about to be processed.
    """

    turns_per_day: int = 10
    turn: int = 0

    @property
    def day(self) -> int:
        """One-based day number of the current turn."""
        return self.turn // self.turns_per_day + 1

    @property
    def turn_of_day(self) -> int:
        """One-based position of the current turn within its day."""
        return self.turn % self.turns_per_day + 1

    @property
    def is_day_boundary(self) -> bool:
        """True on the first turn of every day except the very first."""
        return self.turn > 0 and self.turn % self.turns_per_day == 0

    @property
    def label(self) -> str:
        return f"Day {self.day}, turn {self.turn_of_day}"

    def advance(self) -> None:
        self.turn += 1

    def reset(self) -> None:
        self.turn = 0
