import math

import pytest

from gridsearch.costs import heuristic, step_cost, total_cost


def test_heuristic_euclidean():
    # Straight-line distance, not Manhattan
    assert heuristic((0, 0), (3, 4)) == 5.0
    assert heuristic((3, 4), (0, 0)) == 5.0
    assert heuristic((2, 2), (2, 2)) == 0.0


@pytest.mark.parametrize(
    "a,b,expected",
    [
        ((1, 1), (2, 1), 1.0),
        ((1, 1), (1, 0), 1.0),
        ((1, 1), (2, 2), math.sqrt(2)),
        ((1, 1), (0, 2), math.sqrt(2)),
    ],
)
def test_step_cost_axis_and_diagonal(a, b, expected):
    assert math.isclose(step_cost(a, b), expected, rel_tol=1e-12)


def test_total_cost_is_sum():
    assert total_cost(1.5, 2.25) == 3.75
