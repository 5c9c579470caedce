"""Graph construction and query exceptions.

This module defines the exceptions raised while staging, freezing, and
querying directed graphs. All of them inherit from :class:`GraphError`.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import Any

from graphlayers.core.exceptions import GraphLayersError


def _describe(element: Any) -> str:
    text = repr(element)
    return text if len(text) <= 40 else f"{text[:37]}..."


class GraphError(GraphLayersError):
    """Base exception for graph construction and query errors."""


class NullElementError(GraphError):
    """Raised when ``None`` is passed where a graph element is expected.

    Attributes:
        argument: Name of the offending argument.
    """

    def __init__(self, argument: str = "element") -> None:
        super().__init__(
            message=f"Graph elements cannot be None (argument: {argument})",
            error_code="NULL_ELEMENT",
            details={"argument": argument},
        )
        self.argument = argument


class DuplicateElementError(GraphError):
    """Raised when an element is added to a graph twice.

    Attributes:
        element: The element that is already present.
    """

    def __init__(self, element: Hashable) -> None:
        super().__init__(
            message=f"Element already in graph: {_describe(element)}",
            error_code="DUPLICATE_ELEMENT",
            details={"element": repr(element)},
        )
        self.element = element


class UnknownElementError(GraphError):
    """Raised when an element that was never added is referenced.

    Attributes:
        element: The element that was not found.
    """

    def __init__(self, element: Hashable) -> None:
        super().__init__(
            message=f"Element not in graph: {_describe(element)}",
            error_code="UNKNOWN_ELEMENT",
            details={"element": repr(element)},
        )
        self.element = element


class DuplicateArrowError(GraphError):
    """Raised when the same ordered arrow is added twice.

    Attributes:
        source: Tail of the arrow.
        target: Head of the arrow.
    """

    def __init__(self, source: Hashable, target: Hashable) -> None:
        super().__init__(
            message=f"Arrow already in graph: {_describe(source)} -> {_describe(target)}",
            error_code="DUPLICATE_ARROW",
            details={"source": repr(source), "target": repr(target)},
        )
        self.source = source
        self.target = target


class UnknownArrowError(GraphError):
    """Raised when removing an arrow that is not in the graph.

    Attributes:
        source: Tail of the arrow.
        target: Head of the arrow.
    """

    def __init__(self, source: Hashable, target: Hashable) -> None:
        super().__init__(
            message=f"Arrow not in graph: {_describe(source)} -> {_describe(target)}",
            error_code="UNKNOWN_ARROW",
            details={"source": repr(source), "target": repr(target)},
        )
        self.source = source
        self.target = target


class SelfArrowError(GraphError):
    """Raised when an arrow from an element to itself is added.

    Attributes:
        element: The element on both ends of the rejected arrow.
    """

    def __init__(self, element: Hashable) -> None:
        super().__init__(
            message=f"Self-arrows are not allowed: {_describe(element)}",
            error_code="SELF_ARROW",
            details={"element": repr(element)},
        )
        self.element = element


class CyclicGraphError(GraphError):
    """Raised when an acyclic graph is requested but a cycle exists.

    Attributes:
        cycle_path: Elements forming the cycle; first and last are equal.
    """

    def __init__(self, cycle_path: Sequence[Hashable]) -> None:
        cycle_str = " -> ".join(_describe(e) for e in cycle_path)
        super().__init__(
            message=f"Cannot create a directed acyclic graph with cycles: {cycle_str}",
            error_code="CYCLIC_GRAPH",
            details={"cycle_path": [repr(e) for e in cycle_path]},
        )
        self.cycle_path = list(cycle_path)


__all__ = [
    "CyclicGraphError",
    "DuplicateArrowError",
    "DuplicateElementError",
    "GraphError",
    "NullElementError",
    "SelfArrowError",
    "UnknownArrowError",
    "UnknownElementError",
]
