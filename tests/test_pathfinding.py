import math

import pytest

from gridsearch.grid import Grid
from gridsearch.maps import load_default_map, wall_with_gap, wall_without_gap
from gridsearch.node import Node, NodeState, NodeStore
from gridsearch.pathfinding import (
    NEIGHBOUR_OFFSETS,
    InvalidEndpointError,
    PathFinder,
    find_path,
)


def open_grid(width=7, height=5):
    return Grid([[True] * width for _ in range(height)])


def assert_walkable_steps(grid, start, path):
    """Every step moves to an adjacent walkable cell."""
    previous = start
    for cell in path:
        dx, dy = cell[0] - previous[0], cell[1] - previous[1]
        assert max(abs(dx), abs(dy)) == 1
        assert grid.is_walkable(*cell)
        previous = cell


def test_start_equals_goal_is_empty():
    assert find_path((2, 2), (2, 2), open_grid()) == []


def test_open_grid_straight_line():
    path = find_path((0, 0), (4, 0), open_grid())
    assert path == [(1, 0), (2, 0), (3, 0), (4, 0)]
    assert len(path) <= 5


@pytest.mark.parametrize(
    "start,goal",
    [((0, 0), (6, 4)), ((0, 0), (6, 0)), ((0, 0), (0, 4)), ((6, 4), (0, 0)), ((0, 4), (3, 2))],
)
def test_open_grid_paths_are_adjacent_and_short(start, goal):
    grid = open_grid()
    path = find_path(start, goal, grid)
    assert path[-1] == goal
    assert start not in path
    assert_walkable_steps(grid, start, path)
    chebyshev = max(abs(goal[0] - start[0]), abs(goal[1] - start[1]))
    assert len(path) <= 2 * chebyshev


def test_accepts_raw_matrix():
    assert find_path((0, 0), (2, 0), [[True, True, True]]) == [(1, 0), (2, 0)]


def test_wall_with_gap_routes_through_gap():
    m = wall_with_gap()
    path = find_path(m.start, m.goal, m.grid)
    assert path
    assert path[-1] == m.goal
    assert (2, 4) in path
    blocked = set(m.grid.blocked_cells())
    assert not blocked.intersection(path)
    assert_walkable_steps(m.grid, m.start, path)


def test_wall_without_gap_has_no_path():
    m = wall_without_gap()
    finder = PathFinder(m.grid, m.start, m.goal)
    assert finder.find_path() == []
    # Every cell reachable from the start was explored exactly once
    left_region = {(x, y) for x in range(3) for y in range(3)}
    left_region |= {(0, 3), (1, 3), (0, 4), (1, 4)}
    assert len(finder.closed) == len(left_region)
    assert set(finder.closed) == left_region


def test_enclosed_goal_has_no_path():
    walkable = [[True] * 7 for _ in range(5)]
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx or dy:
                walkable[2 + dy][3 + dx] = False
    assert find_path((0, 0), (3, 2), walkable) == []


def test_repeated_searches_are_identical():
    m = load_default_map()
    first = PathFinder(m.grid, m.start, m.goal)
    second = PathFinder(m.grid, m.start, m.goal)
    assert first.find_path() == second.find_path()
    assert first.closed == second.closed
    # Reusing one finder builds a fresh node store each time
    path = first.find_path()
    assert path == second.find_path()


@pytest.mark.parametrize("factory", [load_default_map, wall_with_gap, wall_without_gap])
def test_closed_trace_has_no_duplicates(factory):
    m = factory()
    finder = PathFinder(m.grid, m.start, m.goal)
    path = finder.find_path()
    assert finder.closed[0] == m.start
    assert len(finder.closed) == len(set(finder.closed))
    assert all(m.grid.is_walkable(*cell) for cell in finder.closed)
    assert sorted(finder.closed) == sorted(finder.nodes.closed_locations())
    if path:
        # The goal is recognised before it would be descended into
        assert m.goal not in finder.closed


def test_equal_f_keeps_discovery_order():
    # (0,1) and (2,1) tie on F; (0,1) is discovered first and wins
    grid = Grid([[True, True, True], [True, False, True], [True, True, True]])
    assert find_path((1, 0), (1, 2), grid) == [(0, 1), (1, 2)]


def test_corner_cutting_policy():
    grid = Grid([[True, True, True], [True, False, True], [True, True, True]])
    path = find_path((1, 0), (1, 2), grid, allow_corner_cutting=False)
    assert path == [(0, 0), (0, 1), (0, 2), (1, 2)]


def test_diagonal_squeeze_between_blocked_cells():
    grid = Grid([[True, False], [False, True]])
    assert find_path((0, 0), (1, 1), grid) == [(1, 1)]
    assert find_path((0, 0), (1, 1), grid, allow_corner_cutting=False) == []


@pytest.mark.parametrize(
    "start,goal",
    [
        ((-1, 0), (6, 0)),
        ((0, 0), (7, 0)),
        ((0, 5), (6, 0)),
        ((3, 0), (6, 0)),
        ((0, 0), (3, 1)),
        # Fractional coordinates are not truncated into the grid
        ((-0.5, 0), (6, 0)),
        ((0, -0.9), (6, 0)),
        ((0, 0), (5.5, 0)),
    ],
)
def test_invalid_endpoints_rejected_before_search(start, goal):
    m = wall_with_gap()
    with pytest.raises(InvalidEndpointError):
        PathFinder(m.grid, start, goal)
    with pytest.raises(ValueError):
        find_path(start, goal, m.grid)


@pytest.mark.parametrize("factory", [load_default_map, wall_with_gap, wall_without_gap])
def test_node_bookkeeping_after_search(factory):
    m = factory()
    finder = PathFinder(m.grid, m.start, m.goal)
    finder.find_path()
    for node in finder.nodes:
        assert node.f == node.g + node.h
        if node.location == m.start or node.state is NodeState.UNTESTED:
            continue
        assert node.parent is not None
        # g matches the step costs along the parent chain
        total = 0.0
        current = node
        while current.parent is not None:
            parent = finder.nodes[current.parent]
            total += math.hypot(
                current.location[0] - parent.location[0],
                current.location[1] - parent.location[1],
            )
            current = parent
        assert current.location == m.start
        assert node.g == pytest.approx(total)


def test_expand_visits_neighbours_in_fixed_order():
    grid = open_grid(3, 3)
    finder = PathFinder(grid, (1, 1), (2, 2))
    finder.nodes = NodeStore(grid, (2, 2))
    center = finder.nodes[(1, 1)]
    center.state = NodeState.CLOSED
    candidates = finder.expand(center)
    assert [n.location for n in candidates] == [
        (1 + dx, 1 + dy) for dx, dy in NEIGHBOUR_OFFSETS
    ]
    assert all(n.state is NodeState.OPEN and n.parent == (1, 1) for n in candidates)


def test_expand_reparents_open_nodes_only_when_cheaper():
    grid = open_grid(3, 3)
    finder = PathFinder(grid, (1, 0), (2, 2))
    finder.nodes = NodeStore(grid, (2, 2))
    cheaper = finder.nodes[(0, 0)]
    cheaper.state = NodeState.OPEN
    cheaper.g = 5.0
    cheaper.parent = (0, 1)
    unchanged = finder.nodes[(0, 1)]
    unchanged.state = NodeState.OPEN
    unchanged.g = 1.0
    unchanged.parent = (0, 2)
    closed = finder.nodes[(2, 0)]
    closed.state = NodeState.CLOSED

    from_node = finder.nodes[(1, 0)]
    from_node.state = NodeState.CLOSED
    from_node.g = 1.0
    candidates = [n.location for n in finder.expand(from_node)]

    assert (0, 0) in candidates
    assert cheaper.g == 2.0 and cheaper.parent == (1, 0)
    # Not cheaper: left untouched and not returned
    assert (0, 1) not in candidates
    assert unchanged.g == 1.0 and unchanged.parent == (0, 2)
    assert (2, 0) not in candidates
    # Untested neighbours become open
    assert finder.nodes[(1, 1)].state is NodeState.OPEN
    assert finder.nodes[(2, 1)].parent == (1, 0)


def test_large_grid_does_not_exhaust_call_stack():
    size = 120
    walkable = [[True] * size for _ in range(size)]
    goal = (size // 2, size // 2)
    for dx in (-1, 0, 1):
        for dy in (-1, 0, 1):
            if dx or dy:
                walkable[goal[1] + dy][goal[0] + dx] = False
    finder = PathFinder(Grid(walkable), (0, 0), goal)
    assert finder.find_path() == []
    # Exhaustive failure closes every reachable cell exactly once
    assert len(finder.closed) == size * size - 9
    assert len(set(finder.closed)) == len(finder.closed)


def test_integral_float_endpoints_accepted():
    assert find_path((0.0, 0.0), (2.0, 0.0), [[True, True, True]]) == [(1, 0), (2, 0)]


def test_search_on_fresh_finder_builds_node_store():
    m = wall_with_gap()
    finder = PathFinder(m.grid, m.start, m.goal)
    assert finder.nodes is None
    assert finder.search() is True
    assert finder.closed[0] == m.start
    assert m.goal not in finder.closed
    assert finder.reconstruct(finder.nodes[m.goal])[-1] == m.goal


def test_expand_on_fresh_finder_builds_node_store():
    finder = PathFinder(open_grid(3, 3), (1, 1), (2, 2))
    start = Node((1, 1), True, 0.0)
    start.state = NodeState.CLOSED
    candidates = finder.expand(start)
    assert len(candidates) == 8
    assert finder.nodes is not None
