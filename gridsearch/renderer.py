"""
Renderers for a grid and its search result: plain text for the console and
pygame surfaces for the viewer window.
"""

from __future__ import annotations
from typing import TYPE_CHECKING, Iterable, Optional, Tuple

import pygame

from .config import (
    CELL_SIZE,
    FLOOR_COLOR,
    WALL_COLOR,
    CLOSED_COLOR,
    PATH_COLOR,
    START_COLOR,
    GOAL_COLOR,
    GRID_LINE_COLOR,
    GLYPH_FLOOR,
    GLYPH_WALL,
    GLYPH_CLOSED,
    GLYPH_PATH,
    GLYPH_START,
    GLYPH_GOAL,
)

if TYPE_CHECKING:
    from .grid import Grid

Coord = Tuple[int, int]


def render_text(
    grid: Grid,
    start: Coord,
    goal: Coord,
    path: Iterable[Coord] = (),
    closed: Iterable[Coord] = (),
) -> str:
    """
    Render the grid as text, one line per row.
    Endpoints take precedence over the path, the path over closed cells.
    """
    path = set(path)
    closed = set(closed)
    lines = []
    for y in range(grid.height):
        chars = []
        for x in range(grid.width):
            cell = (x, y)
            if cell == start:
                chars.append(GLYPH_START)
            elif cell == goal:
                chars.append(GLYPH_GOAL)
            elif grid.is_wall(x, y):
                chars.append(GLYPH_WALL)
            elif cell in path:
                chars.append(GLYPH_PATH)
            elif cell in closed:
                chars.append(GLYPH_CLOSED)
            else:
                chars.append(GLYPH_FLOOR)
        lines.append("".join(chars))
    return "\n".join(lines)


class GridRenderer:
    """Draws a grid, the search trace and the path onto a pygame surface."""

    def __init__(self, cell_size: int = CELL_SIZE) -> None:
        self.cell_size = cell_size

    def surface_size(self, grid: Grid) -> Tuple[int, int]:
        """Pixel size needed to draw ``grid``."""
        return (grid.width * self.cell_size, grid.height * self.cell_size)

    def cell_rect(self, cell: Coord) -> pygame.Rect:
        x, y = cell
        return pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size, self.cell_size)

    def cell_at(self, pixel: Tuple[int, int]) -> Coord:
        """Map a pixel position (e.g. a mouse click) to a cell coordinate."""
        return (int(pixel[0]) // self.cell_size, int(pixel[1]) // self.cell_size)

    def draw(
        self,
        surface: pygame.Surface,
        grid: Grid,
        start: Coord,
        goal: Coord,
        path: Iterable[Coord] = (),
        closed: Optional[Iterable[Coord]] = None,
    ) -> None:
        """Draw the full scene; pass closed=None to hide the search trace."""
        surface.fill(FLOOR_COLOR)
        for cell in grid.blocked_cells():
            pygame.draw.rect(surface, WALL_COLOR, self.cell_rect(cell))
        if closed is not None:
            for cell in closed:
                pygame.draw.rect(surface, CLOSED_COLOR, self.cell_rect(cell))
        for cell in path:
            pygame.draw.rect(surface, PATH_COLOR, self.cell_rect(cell))
        pygame.draw.rect(surface, START_COLOR, self.cell_rect(start))
        pygame.draw.rect(surface, GOAL_COLOR, self.cell_rect(goal))
        # Grid lines on top
        width, height = self.surface_size(grid)
        for x in range(0, width + 1, self.cell_size):
            pygame.draw.line(surface, GRID_LINE_COLOR, (x, 0), (x, height))
        for y in range(0, height + 1, self.cell_size):
            pygame.draw.line(surface, GRID_LINE_COLOR, (0, y), (width, y))
