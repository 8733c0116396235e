"""
Pathfinding: depth-first "best neighbour first" grid search with backtracking.

Each visited node is closed, its admissible neighbours are ranked by
F = G + H and descended into in that order. Closed nodes are never reopened,
so the route found is not guaranteed to be the shortest one.
"""

from __future__ import annotations
import logging
from typing import Iterator, List, Optional, Sequence, Tuple, Union

from .config import ALLOW_CORNER_CUTTING
from .costs import step_cost
from .grid import Grid
from .node import Node, NodeState, NodeStore

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

# Expansion order of the 8 neighbours; equal-F candidates keep this order
NEIGHBOUR_OFFSETS = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
    (1, 0),
    (1, -1),
    (0, -1),
)


class InvalidEndpointError(ValueError):
    """Start or goal is out of bounds or not walkable."""


class PathFinder:
    """
    Finds a path between two cells of a grid.
    A fresh NodeStore is built for every call to find_path, so one PathFinder
    can be reused, but a single search is never shared between threads.
    """

    def __init__(
        self,
        grid: Grid,
        start: Coord,
        goal: Coord,
        allow_corner_cutting: bool = ALLOW_CORNER_CUTTING,
    ) -> None:
        self.grid = grid
        self.start = self._as_cell("start", start)
        self.goal = self._as_cell("goal", goal)
        self.allow_corner_cutting = allow_corner_cutting
        self._check_endpoint("start", self.start)
        self._check_endpoint("goal", self.goal)
        self.nodes: NodeStore | None = None
        # Locations in the order the search closed them
        self.closed: List[Coord] = []

    @staticmethod
    def _as_cell(name: str, location) -> Coord:
        """Return location as an integer cell; fractional coordinates are rejected."""
        x, y = location
        if int(x) != x or int(y) != y:
            raise InvalidEndpointError(f"{name} {tuple(location)} is not an integer cell")
        return (int(x), int(y))

    def _check_endpoint(self, name: str, location: Coord) -> None:
        x, y = location
        if not self.grid.is_in_bounds(x, y):
            raise InvalidEndpointError(
                f"{name} {location} is outside the {self.grid.width}x{self.grid.height} grid"
            )
        if not self.grid.is_walkable(x, y):
            raise InvalidEndpointError(f"{name} {location} is not walkable")

    def reset(self) -> None:
        """Build a fresh node store and clear the closed trace."""
        self.nodes = NodeStore(self.grid, self.goal)
        self.closed = []

    def find_path(self) -> List[Coord]:
        """
        Run a search and return the cells from the first step after start up to
        and including goal. Returns an empty list if start equals goal or no
        path exists.
        """
        self.reset()
        if self.start == self.goal:
            return []
        logger.debug("Searching %s -> %s on %r", self.start, self.goal, self.grid)
        found = self.search()
        logger.debug(
            "Search %s after closing %d nodes",
            "succeeded" if found else "failed",
            len(self.closed),
        )
        if not found:
            return []
        return self.reconstruct(self.nodes[self.goal])

    def expand(self, from_node: Node) -> List[Node]:
        """
        Return the neighbours of from_node worth visiting, in discovery order.
        Untested neighbours are opened; open neighbours are re-parented only if
        the route through from_node is strictly cheaper. Both are returned.
        """
        if self.nodes is None:
            self.reset()
        candidates = []
        fx, fy = from_node.location
        for dx, dy in NEIGHBOUR_OFFSETS:
            x, y = fx + dx, fy + dy
            if not self.grid.is_in_bounds(x, y):
                continue
            node = self.nodes[(x, y)]
            if not node.is_walkable:
                continue
            if node.state is NodeState.CLOSED:
                continue
            if dx and dy and not self.allow_corner_cutting:
                if self.grid.is_wall(fx + dx, fy) or self.grid.is_wall(fx, fy + dy):
                    continue
            g = from_node.g + step_cost(from_node.location, node.location)
            if node.state is NodeState.OPEN:
                if g < node.g:
                    node.parent = from_node.location
                    node.g = g
                    candidates.append(node)
            else:
                node.parent = from_node.location
                node.g = g
                node.state = NodeState.OPEN
                candidates.append(node)
        return candidates

    def _enter(self, node: Node) -> Tuple[Node, Iterator[Node]]:
        """Close node and return its stack frame of ranked candidates."""
        node.state = NodeState.CLOSED
        self.closed.append(node.location)
        # sorted() is stable: equal F keeps discovery order
        candidates = sorted(self.expand(node), key=lambda n: n.f)
        return node, iter(candidates)

    def search(self, start_node: Optional[Node] = None) -> bool:
        """
        Depth-first traversal from start_node (default: the start cell).
        Returns True once the goal is reached from some closed node, False when
        every branch is exhausted. Uses an explicit stack of
        (node, remaining candidates) frames. Builds the node store if no
        search has run yet.
        """
        if self.nodes is None:
            self.reset()
        if start_node is None:
            start_node = self.nodes[self.start]
        stack = [self._enter(start_node)]
        while stack:
            _, candidates = stack[-1]
            for candidate in candidates:
                if candidate.location == self.goal:
                    return True
                # Already explored from a deeper frame
                if candidate.state is NodeState.CLOSED:
                    continue
                stack.append(self._enter(candidate))
                break
            else:
                # Dead end: fall back to the previous frame
                stack.pop()
        return False

    def reconstruct(self, goal_node: Node) -> List[Coord]:
        """Walk parent links from goal_node back to the start; start excluded."""
        path = []
        node = goal_node
        while node.parent is not None:
            path.append(node.location)
            node = self.nodes[node.parent]
        path.reverse()
        return path


def find_path(
    start: Coord,
    goal: Coord,
    grid: Union[Grid, Sequence[Sequence[bool]]],
    allow_corner_cutting: bool = ALLOW_CORNER_CUTTING,
) -> List[Coord]:
    """
    Find a path on a grid from start to goal.
    start, goal: (x, y) integer grid coordinates.
    grid: Grid or a row-major walkability matrix (truthy = walkable).
    Returns the list of (x, y) steps after start up to goal inclusive, or an
    empty list if no path exists. Raises InvalidEndpointError if start or goal
    is out of bounds or blocked.
    """
    if not isinstance(grid, Grid):
        grid = Grid(grid)
    finder = PathFinder(grid, start, goal, allow_corner_cutting=allow_corner_cutting)
    return finder.find_path()
