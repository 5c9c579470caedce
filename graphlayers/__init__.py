"""graphlayers.

Immutable directed graphs, transitive reduction, and Coffman-Graham
width-bounded layering.
"""

from graphlayers.algorithms import (
    CoffmanGraham,
    CoffmanGrahamSolver,
    GraphNotAcyclicError,
    InvalidWidthError,
    Layering,
    LayeringError,
    layer_graph,
)
from graphlayers.core.exceptions import GraphLayersError
from graphlayers.graphs import (
    CycleDetector,
    CyclicGraphError,
    DirectedAcyclicGraph,
    DirectedGraph,
    DirectedGraphBuilder,
    DuplicateArrowError,
    DuplicateElementError,
    GraphError,
    NullElementError,
    SelfArrowError,
    TransitiveReducer,
    UnknownArrowError,
    UnknownElementError,
)

__version__ = "0.1.0"

__all__ = [
    "CoffmanGraham",
    "CoffmanGrahamSolver",
    "CycleDetector",
    "CyclicGraphError",
    "DirectedAcyclicGraph",
    "DirectedGraph",
    "DirectedGraphBuilder",
    "DuplicateArrowError",
    "DuplicateElementError",
    "GraphError",
    "GraphLayersError",
    "GraphNotAcyclicError",
    "InvalidWidthError",
    "Layering",
    "LayeringError",
    "NullElementError",
    "SelfArrowError",
    "TransitiveReducer",
    "UnknownArrowError",
    "UnknownElementError",
    "__version__",
    "layer_graph",
]
