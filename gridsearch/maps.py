"""
Map definitions: JSON map loading and built-in sample maps.
"""

from __future__ import annotations
import os
import json
import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple, Union

from .config import MAP_FILE, TILE_EMPTY, GLYPH_WALL, GLYPH_START, GLYPH_GOAL
from .grid import Grid

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]


class MapDefinition:
    """A grid plus the start and goal cells to search between."""

    def __init__(self, grid: Grid, start: Coord, goal: Coord, name: str = "") -> None:
        self.grid = grid
        self.start = start
        self.goal = goal
        self.name = name

    def __repr__(self) -> str:
        return f"<MapDefinition {self.name!r} {self.grid!r} start={self.start} goal={self.goal}>"


def parse_rows(
    rows: Sequence[Union[str, Sequence[int]]],
) -> Tuple[Grid, Optional[Coord], Optional[Coord]]:
    """
    Parse map rows into a grid and optional start/goal markers.
    Rows are either strings ('#' blocked, 'S' start, 'G' goal, anything else
    walkable) or lists of tile codes (TILE_EMPTY walkable).
    """
    start = goal = None
    walkable: List[List[bool]] = []
    for y, row in enumerate(rows):
        if isinstance(row, str):
            cells = []
            for x, ch in enumerate(row):
                if ch == GLYPH_START:
                    start = (x, y)
                elif ch == GLYPH_GOAL:
                    goal = (x, y)
                cells.append(ch != GLYPH_WALL)
            walkable.append(cells)
        else:
            walkable.append([int(tile) == TILE_EMPTY for tile in row])
    return Grid(walkable), start, goal


def _parse_coord(value) -> Optional[Coord]:
    if value is None:
        return None
    if not (isinstance(value, (list, tuple)) and len(value) == 2):
        raise ValueError(f"expected an [x, y] pair, got {value!r}")
    return (int(value[0]), int(value[1]))


def load_map(path: str) -> MapDefinition:
    """
    Load a map from a JSON file with keys "map" (rows), optional "start",
    "goal" ([x, y]) and "name". Explicit start/goal override row markers.
    Raises RuntimeError if the file cannot be read or parsed.
    """
    try:
        with open(path, "r") as f:
            data = json.load(f)
        rows = data.get("map")
        if not isinstance(rows, list):
            raise ValueError('missing "map" rows')
        grid, start, goal = parse_rows(rows)
        start = _parse_coord(data.get("start")) or start
        goal = _parse_coord(data.get("goal")) or goal
        if start is None or goal is None:
            raise ValueError("map defines no start or goal")
        name = str(data.get("name") or os.path.splitext(os.path.basename(path))[0])
    except Exception as e:
        raise RuntimeError(f"Failed to load map from {path}: {e}") from e
    logger.info("Loaded map %r (%dx%d) from %s", name, grid.width, grid.height, path)
    return MapDefinition(grid, start, goal, name=name)


def load_default_map() -> MapDefinition:
    """Load the map bundled with the package (config.MAP_FILE)."""
    return load_map(os.path.join(os.path.dirname(__file__), MAP_FILE))


# 7x5 sample layouts, x to the right and y downwards
_WALL_WITH_GAP = [
    "S..#..G",
    "...#...",
    "...#...",
    "..####.",
    ".......",
]

_WALL_WITHOUT_GAP = [
    "S..#..G",
    "...#...",
    "...#...",
    "..####.",
    "..#....",
]


def _from_rows(rows: Sequence[str], name: str) -> MapDefinition:
    grid, start, goal = parse_rows(rows)
    return MapDefinition(grid, start, goal, name=name)


def open_map() -> MapDefinition:
    """Fully walkable 7x5 grid, start (0, 0), goal (4, 0)."""
    return MapDefinition(Grid([[True] * 7 for _ in range(5)]), (0, 0), (4, 0), name="open")


def wall_with_gap() -> MapDefinition:
    """L-shaped wall between start and goal; the only way round is the gap at (2, 4)."""
    return _from_rows(_WALL_WITH_GAP, "wall-with-gap")


def wall_without_gap() -> MapDefinition:
    """Same as wall_with_gap with the gap filled in: no path exists."""
    return _from_rows(_WALL_WITHOUT_GAP, "wall-without-gap")


SAMPLE_MAPS: Dict[str, Callable[[], MapDefinition]] = {
    "open": open_map,
    "wall-with-gap": wall_with_gap,
    "wall-without-gap": wall_without_gap,
}
