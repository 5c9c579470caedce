"""Directed graph construction, validation, and reduction.

Components:
- DirectedGraphBuilder: Mutable staging area, freezes into immutable graphs
- DirectedGraph / DirectedAcyclicGraph: Read-only query surface
- CycleDetector: Depth-first cycle detection used when freezing a DAG
- TransitiveReducer: Removes arrows implied by longer paths
- Graph exceptions: Error hierarchy rooted at GraphError

Example:
    >>> from graphlayers.graphs import DirectedGraphBuilder
    >>> dag = (
    ...     DirectedGraphBuilder.new_builder()
    ...     .add_element("a")
    ...     .add_element("b")
    ...     .add_arrow("a", "b")
    ...     .create_acyclic_graph()
    ... )
    >>> dag.count
    2
"""

from graphlayers.graphs.builder import DirectedGraphBuilder
from graphlayers.graphs.cycles import CycleDetector
from graphlayers.graphs.exceptions import (
    CyclicGraphError,
    DuplicateArrowError,
    DuplicateElementError,
    GraphError,
    NullElementError,
    SelfArrowError,
    UnknownArrowError,
    UnknownElementError,
)
from graphlayers.graphs.graph import DirectedAcyclicGraph, DirectedGraph
from graphlayers.graphs.reduction import TransitiveReducer

__all__ = [
    # Data structures
    "DirectedAcyclicGraph",
    "DirectedGraph",
    "DirectedGraphBuilder",
    # Algorithms
    "CycleDetector",
    "TransitiveReducer",
    # Exceptions
    "CyclicGraphError",
    "DuplicateArrowError",
    "DuplicateElementError",
    "GraphError",
    "NullElementError",
    "SelfArrowError",
    "UnknownArrowError",
    "UnknownElementError",
]
