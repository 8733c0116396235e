"""
Cost helpers for grid search: Euclidean heuristic and step costs.
"""

import math


def heuristic(a, b):
    """Straight-line (Euclidean) distance from a to b, used as H."""
    return math.hypot(a[0] - b[0], a[1] - b[1])


def step_cost(a, b):
    """
    Cost of moving between adjacent cells a and b.
    1.0 for axis-aligned moves, sqrt(2) for diagonal moves.
    """
    return math.hypot(a[0] - b[0], a[1] - b[1])


def total_cost(g, h):
    """Total estimated cost F = G + H."""
    return g + h
