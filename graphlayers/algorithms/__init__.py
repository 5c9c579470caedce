"""Algorithms built on directed acyclic graphs.

Components:
- CoffmanGraham: Factory for width-bounded layering solvers
- CoffmanGrahamSolver: Priority labeling and layer assignment
- Layering: Immutable result of a solve
- Layering exceptions: Error hierarchy rooted at LayeringError
"""

from graphlayers.algorithms.coffman_graham import (
    CoffmanGraham,
    CoffmanGrahamSolver,
    Layering,
    layer_graph,
)
from graphlayers.algorithms.exceptions import (
    GraphNotAcyclicError,
    InvalidWidthError,
    LayeringError,
)

__all__ = [
    "CoffmanGraham",
    "CoffmanGrahamSolver",
    "GraphNotAcyclicError",
    "InvalidWidthError",
    "Layering",
    "LayeringError",
    "layer_graph",
]
