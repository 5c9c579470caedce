"""Layering exceptions."""

from __future__ import annotations

from typing import Any

from graphlayers.core.exceptions import GraphLayersError


class LayeringError(GraphLayersError):
    """Base exception for layering errors."""


class InvalidWidthError(LayeringError):
    """Raised when a solver is requested with a layer width below one.

    Attributes:
        max_layer_size: The rejected width.
    """

    def __init__(self, max_layer_size: Any) -> None:
        super().__init__(
            message=f"Maximum layer size must be an integer of at least 1, got {max_layer_size!r}",
            error_code="INVALID_WIDTH",
            details={"max_layer_size": repr(max_layer_size)},
        )
        self.max_layer_size = max_layer_size


class GraphNotAcyclicError(LayeringError):
    """Raised when priority labeling stalls on a graph that has a cycle.

    Attributes:
        labeled: Number of elements labeled before the stall.
        total: Number of elements in the graph.
    """

    def __init__(self, labeled: int, total: int) -> None:
        super().__init__(
            message=(
                f"Graph is not acyclic: labeling stalled after {labeled} of {total} elements"
            ),
            error_code="GRAPH_NOT_ACYCLIC",
            details={"labeled": labeled, "total": total},
        )
        self.labeled = labeled
        self.total = total


__all__ = [
    "GraphNotAcyclicError",
    "InvalidWidthError",
    "LayeringError",
]
