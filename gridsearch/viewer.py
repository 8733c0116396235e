"""
Interactive pygame viewer: shows a map, the search trace and the path found.
"""

from __future__ import annotations
import logging
import pygame
from typing import TYPE_CHECKING, List, Optional, Tuple

from .config import ALLOW_CORNER_CUTTING, CELL_SIZE, FPS, WINDOW_TITLE
from .input_handler import InputHandler
from .pathfinding import PathFinder
from .renderer import GridRenderer

if TYPE_CHECKING:
    from .maps import MapDefinition

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class Viewer:
    """Main viewer class: handles initialization, loop, and re-running the search."""

    def __init__(
        self,
        map_definition: MapDefinition,
        allow_corner_cutting: bool = ALLOW_CORNER_CUTTING,
        cell_size: int = CELL_SIZE,
        clock: Optional[pygame.time.Clock] = None,
    ) -> None:
        pygame.init()
        self.grid = map_definition.grid
        self.start = map_definition.start
        self.goal = map_definition.goal
        self.allow_corner_cutting = allow_corner_cutting
        self.renderer = GridRenderer(cell_size)
        self.screen = pygame.display.set_mode(self.renderer.surface_size(self.grid))
        pygame.display.set_caption(f"{WINDOW_TITLE} - {map_definition.name}")
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        self.input = InputHandler()
        self.show_trace = True
        self.path: List[Coord] = []
        self.closed: List[Coord] = []
        self.running = True
        self.solve()

    def solve(self) -> None:
        """Run a fresh search on the current grid and endpoints."""
        finder = PathFinder(
            self.grid,
            self.start,
            self.goal,
            allow_corner_cutting=self.allow_corner_cutting,
        )
        self.path = finder.find_path()
        self.closed = list(finder.closed)
        if self.path or self.start == self.goal:
            logger.info(
                "Path of %d steps found, %d nodes closed", len(self.path), len(self.closed)
            )
        else:
            logger.info("No path from %s to %s", self.start, self.goal)

    def handle_events(self) -> None:
        """Process input events via InputHandler and apply the requested actions."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False
            return
        if self.input.toggle_trace_pressed():
            self.show_trace = not self.show_trace
        if self.input.toggle_corner_cutting_pressed():
            self.allow_corner_cutting = not self.allow_corner_cutting
            logger.debug("Corner cutting %s", "on" if self.allow_corner_cutting else "off")
            self.solve()
        click = self.input.mouse_click()
        if click is not None:
            button, pos = click
            if self.edit_cell(button, self.renderer.cell_at(pos)):
                self.solve()
                return
        if self.input.rerun_pressed():
            self.solve()

    def edit_cell(self, button: int, cell: Coord) -> bool:
        """
        Left click toggles a wall, right click moves the goal to a walkable cell.
        Returns True if the map changed.
        """
        x, y = cell
        if not self.grid.is_in_bounds(x, y) or cell in (self.start, self.goal):
            return False
        if button == 1:
            self.grid = self.grid.with_cell(x, y, not self.grid.is_walkable(x, y))
            logger.debug("Toggled wall at %s", cell)
            return True
        if button == 3 and self.grid.is_walkable(x, y):
            self.goal = cell
            logger.debug("Moved goal to %s", cell)
            return True
        return False

    def render(self) -> None:
        """Render the entire scene."""
        self.renderer.draw(
            self.screen,
            self.grid,
            self.start,
            self.goal,
            path=self.path,
            closed=self.closed if self.show_trace else None,
        )
        pygame.display.flip()

    def run(self) -> None:
        """Main loop: handle events and render until quit."""
        while self.running:
            self.clock.tick(self.fps)
            self.handle_events()
            self.render()
        pygame.quit()
        # Return to caller instead of exiting process
        return
