"""
Per-cell search bookkeeping: node records and the node store for one search.
"""

from __future__ import annotations
import enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple

from .costs import heuristic, total_cost

if TYPE_CHECKING:
    from .grid import Grid

Coord = Tuple[int, int]


class NodeState(enum.Enum):
    UNTESTED = "untested"
    OPEN = "open"
    CLOSED = "closed"


class Node:
    """
    Search record for one grid cell.
    Attributes:
        location: (x, y) cell coordinate, set once.
        is_walkable: Walkability copied from the grid.
        g: Cost from the start along the best known route.
        h: Straight-line distance to the goal, fixed for the search.
        state: Untested, Open or Closed.
        parent: Coordinate of the node this one was best reached from, or None.
    """

    __slots__ = ("location", "is_walkable", "g", "h", "state", "parent")

    def __init__(self, location: Coord, is_walkable: bool, h: float) -> None:
        self.location = location
        self.is_walkable = is_walkable
        self.g = 0.0
        self.h = h
        self.state = NodeState.UNTESTED
        self.parent: Optional[Coord] = None

    @property
    def f(self) -> float:
        return total_cost(self.g, self.h)

    def __repr__(self) -> str:
        return (
            f"<Node {self.location} {self.state.value} "
            f"g={self.g:.2f} h={self.h:.2f} parent={self.parent}>"
        )


class NodeStore:
    """
    Arena of nodes for a single search, indexed by coordinate.
    Nodes live in a flat list of width * height entries (index y * width + x);
    parents are stored as coordinates, not references.
    """

    def __init__(self, grid: Grid, goal: Coord) -> None:
        self.width = grid.width
        self.height = grid.height
        self._nodes: List[Node] = [
            Node((x, y), grid.is_walkable(x, y), heuristic((x, y), goal))
            for y in range(grid.height)
            for x in range(grid.width)
        ]

    def node(self, location: Coord) -> Node:
        x, y = location
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"no node for {location}")
        return self._nodes[y * self.width + x]

    __getitem__ = node

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(self._nodes)

    def closed_locations(self) -> List[Coord]:
        """Locations of all closed nodes in row-major order."""
        return [n.location for n in self._nodes if n.state is NodeState.CLOSED]
