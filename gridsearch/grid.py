"""
Grid model: rectangular walkability matrix answering bounds and walkability queries.
"""

from __future__ import annotations
from typing import List, Sequence, Tuple, Union

import numpy as np

from .config import TILE_EMPTY

Coord = Tuple[int, int]


class Grid:
    """
    Immutable walkable/blocked grid built from a row-major matrix.
    Attributes:
        width (int): Number of columns (x axis).
        height (int): Number of rows (y axis).
    Cells are addressed as (x, y) and stored as ``cells[y, x]``.
    """

    def __init__(self, walkable: Union[np.ndarray, Sequence[Sequence[object]]]) -> None:
        if isinstance(walkable, np.ndarray):
            cells = walkable.astype(bool)
        else:
            rows = list(walkable)
            if any(isinstance(row, str) for row in rows):
                raise ValueError("string rows are map glyphs, parse them with maps.parse_rows")
            rows = [list(row) for row in rows]
            if not rows or any(len(row) != len(rows[0]) for row in rows):
                raise ValueError("walkability matrix must be rectangular and non-empty")
            cells = np.array(rows, dtype=bool)
        if cells.ndim != 2 or cells.size == 0:
            raise ValueError(
                f"walkability matrix must be a non-empty 2-D matrix, got shape {cells.shape}"
            )
        # Own a private read-only copy so callers cannot mutate the grid
        self._cells = cells.copy()
        self._cells.setflags(write=False)
        self.height, self.width = self._cells.shape

    @classmethod
    def from_tiles(cls, tiles: Sequence[Sequence[int]]) -> Grid:
        """Build a grid from tile codes: TILE_EMPTY is walkable, anything else blocked."""
        return cls([[tile == TILE_EMPTY for tile in row] for row in tiles])

    @property
    def cells(self) -> np.ndarray:
        """Read-only boolean matrix indexed as ``cells[y, x]``."""
        return self._cells

    def is_in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_walkable(self, x: int, y: int) -> bool:
        """
        Return True if the in-bounds cell (x, y) is walkable.
        Raises IndexError for out-of-bounds coordinates.
        """
        if not self.is_in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside the {self.width}x{self.height} grid")
        return bool(self._cells[y, x])

    def is_wall(self, x: int, y: int) -> bool:
        """Return True if (x, y) is blocked or out of bounds."""
        if not self.is_in_bounds(x, y):
            return True
        return not self._cells[y, x]

    def with_cell(self, x: int, y: int, walkable: bool) -> Grid:
        """Return a copy of this grid with one cell set to ``walkable``."""
        if not self.is_in_bounds(x, y):
            raise IndexError(f"cell ({x}, {y}) is outside the {self.width}x{self.height} grid")
        cells = self._cells.copy()
        cells[y, x] = walkable
        return Grid(cells)

    def blocked_cells(self) -> List[Coord]:
        """Blocked cells as (x, y) pairs in row-major order."""
        ys, xs = np.nonzero(~self._cells)
        return [(int(x), int(y)) for y, x in zip(ys, xs)]

    def __repr__(self) -> str:
        return f"<Grid {self.width}x{self.height} blocked={int((~self._cells).sum())}>"
