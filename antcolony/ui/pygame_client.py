"""Pygame 2D visualization for the colony simulation.

Renders the grid (hidden cells dark, revealed cells shaded by food and
pheromone), a marker per ant kind present on each cell, and a side panel
with the day label and population.  The renderer doubles as the
colony's status sink, and turns advance at a configurable rate while the
display refreshes at the Pygame frame rate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

import numpy as np
import pygame

if TYPE_CHECKING:
    from antcolony.simulation.controller import SimulationController
    from antcolony.world.cell import Cell

from antcolony.colony.ant import AntKind
from antcolony.simulation.controller import Scenario

# Colour palette
_BG = (30, 20, 10)
_HIDDEN = (15, 10, 5)
_GROUND = (80, 60, 40)
_QUEEN_CELL = (120, 90, 160)

_ANT_COLOURS: dict[AntKind, tuple[int, int, int]] = {
    AntKind.QUEEN: (200, 150, 255),
    AntKind.FORAGER: (255, 200, 50),
    AntKind.SCOUT: (100, 150, 255),
    AntKind.SOLDIER: (230, 230, 230),
    AntKind.ENEMY: (255, 60, 60),
}

# Marker position inside a cell, as a fraction of the cell size
_MARKER_SLOTS: dict[AntKind, tuple[float, float]] = {
    AntKind.FORAGER: (0.25, 0.25),
    AntKind.SCOUT: (0.75, 0.25),
    AntKind.SOLDIER: (0.25, 0.75),
    AntKind.ENEMY: (0.75, 0.75),
}

# Food colour range (dark green -> bright green)
_FOOD_LO = np.array([40, 70, 20], dtype=np.float64)
_FOOD_HI = np.array([50, 200, 30], dtype=np.float64)
_FOOD_FULL = 1000.0

# Trail pheromone colour (cyan glow)
_TRAIL_COLOUR = np.array([0, 180, 255], dtype=np.float64)

_SCENARIO_KEYS: dict[int, Scenario] = {
    pygame.K_n: Scenario.NORMAL,
    pygame.K_1: Scenario.QUEEN,
    pygame.K_2: Scenario.SCOUT,
    pygame.K_3: Scenario.FORAGER,
    pygame.K_4: Scenario.SOLDIER,
}


class PygameRenderer:
    """Renders a SimulationController's colony into a Pygame window.

    Attributes:
        controller: The simulation to visualise and drive.
        cell_size: Pixel size of each grid cell.
        screen: The Pygame display surface.
    """

    # Speed presets: turns per second at 30 fps
    _SPEED_STEPS: ClassVar[list[float]] = [
        0.5,
        1.0,
        2.0,
        4.0,
        8.0,
        15.0,
        30.0,
        60.0,
    ]

    def __init__(
        self,
        controller: SimulationController,
        cell_size: int = 24,
        turns_per_second: float = 8.0,
    ) -> None:
        """Initialise the renderer and attach it as the status sink.

        Args:
            controller: The simulation controller to render.
            cell_size: Pixel width/height per grid cell.
            turns_per_second: Simulation turns per real-time second.
        """
        self.controller = controller
        self.cell_size = cell_size
        self.turns_per_second = turns_per_second
        self._speed_index = self._nearest_speed(turns_per_second)
        self._turn_accumulator = 0.0
        self.status_line = ""
        controller.colony.status = self

        grid = controller.colony.grid
        self._panel_width = 240
        self._win_w = grid.width * cell_size + self._panel_width
        self._win_h = max(grid.height * cell_size, 360)

        pygame.init()
        self.screen = pygame.display.set_mode((self._win_w, self._win_h))
        pygame.display.set_caption("Ant Colony")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.SysFont("monospace", 14)
        self.quit_requested = False

    def show_status(self, message: str) -> None:
        """Status sink hook: remember the latest colony message."""
        self.status_line = message

    def _nearest_speed(self, tps: float) -> int:
        """Return the index of the closest speed preset."""
        return min(
            range(len(self._SPEED_STEPS)),
            key=lambda i: abs(self._SPEED_STEPS[i] - tps),
        )

    def run(self, fps: int = 30) -> None:
        """Main loop: handle events, advance turns, render.

        Args:
            fps: Target frames per second.
        """
        while not self.quit_requested:
            dt = self.clock.tick(fps) / 1000.0  # seconds elapsed
            self._handle_events()
            if self.controller.running:
                self._turn_accumulator += self.turns_per_second * dt
                steps = int(self._turn_accumulator)
                self._turn_accumulator -= steps
                for _ in range(steps):
                    if not self.controller.tick():
                        break
            self._draw()

        pygame.quit()

    def _handle_events(self) -> None:
        """Process Pygame input events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.quit_requested = True
            elif event.type == pygame.KEYDOWN:
                self._handle_key(event.key)

    def _handle_key(self, key: int) -> None:
        if key == pygame.K_ESCAPE:
            self.quit_requested = True
        elif key in _SCENARIO_KEYS:
            self.controller.setup(_SCENARIO_KEYS[key])
        elif key == pygame.K_SPACE:
            if self.controller.running:
                self.controller.pause()
            else:
                self.controller.start()
        elif key == pygame.K_s:
            self.controller.pause()
            self.controller.step()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._speed_index = min(len(self._SPEED_STEPS) - 1, self._speed_index + 1)
            self.turns_per_second = self._SPEED_STEPS[self._speed_index]
        elif key == pygame.K_MINUS:
            self._speed_index = max(0, self._speed_index - 1)
            self.turns_per_second = self._SPEED_STEPS[self._speed_index]

    def _draw(self) -> None:
        """Render one frame."""
        self.screen.fill(_BG)
        self._draw_cells()
        self._draw_ants()
        self._draw_info_panel()
        pygame.display.flip()

    def _draw_cells(self) -> None:
        """Draw terrain, food and pheromone for every cell."""
        cs = self.cell_size
        grid = self.controller.colony.grid
        max_pheromone = max((c.pheromone for c in grid), default=0)

        for cell in grid:
            rect = (cell.x * cs, cell.y * cs, cs - 1, cs - 1)
            if not cell.revealed:
                pygame.draw.rect(self.screen, _HIDDEN, rect)
                continue
            if cell.queen_present:
                colour = np.array(_QUEEN_CELL, dtype=np.float64)
            elif cell.food > 0:
                t = min(cell.food / _FOOD_FULL, 1.0)
                colour = _FOOD_LO + t * (_FOOD_HI - _FOOD_LO)
            else:
                colour = np.array(_GROUND, dtype=np.float64)
            if cell.pheromone > 0 and max_pheromone > 0:
                t = 0.6 * cell.pheromone / max_pheromone
                colour = colour + t * (_TRAIL_COLOUR - colour)
            pygame.draw.rect(self.screen, colour.astype(int).tolist(), rect)

    def _visible_markers(self) -> list[tuple[Cell, AntKind]]:
        """List the (cell, kind) markers to draw; hidden cells show none."""
        markers: list[tuple[Cell, AntKind]] = []
        for cell in self.controller.colony.grid:
            if not cell.revealed:
                continue
            if cell.queen_present:
                markers.append((cell, AntKind.QUEEN))
            markers.extend((cell, kind) for kind in _MARKER_SLOTS if cell.count(kind))
        return markers

    def _draw_ants(self) -> None:
        """Draw one marker per ant kind present on each revealed cell."""
        cs = self.cell_size
        radius = max(2, cs // 6)
        for cell, kind in self._visible_markers():
            if kind is AntKind.QUEEN:
                centre = (cell.x * cs + cs // 2, cell.y * cs + cs // 2)
                pygame.draw.circle(self.screen, _ANT_COLOURS[kind], centre, radius * 2)
                continue
            fx, fy = _MARKER_SLOTS[kind]
            centre = (int(cell.x * cs + fx * cs), int(cell.y * cs + fy * cs))
            pygame.draw.circle(self.screen, _ANT_COLOURS[kind], centre, radius)

    def _draw_info_panel(self) -> None:
        """Draw a stats panel on the right side of the window."""
        colony = self.controller.colony
        panel_x = colony.grid.width * self.cell_size + 10
        y = 10

        if self.controller.stopped:
            state = "STOPPED"
        elif self.controller.running:
            state = "RUNNING"
        else:
            state = "PAUSED"

        lines = [
            self.status_line or "-",
            f"Speed: {self.turns_per_second:.1f} t/s",
            state,
            "",
            "--- Colony ---",
        ]
        for kind, count in colony.population().items():
            lines.append(f"  {kind.name.title()}: {count}")
        if colony.queen is not None:
            lines.append(f"  Queen food: {colony.queen.cell.food}")

        lines += [
            "",
            "--- Controls ---",
            "N: normal setup",
            "1-4: queen/scout/",
            "     forager/soldier",
            "SPACE: run/pause",
            "S: step",
            "+/-: speed",
            "ESC: quit",
        ]

        for line in lines:
            surf = self.font.render(line, True, (200, 200, 200))
            self.screen.blit(surf, (panel_x, y))
            y += 18
