"""Transitive reduction of directed acyclic graphs.

An arrow ``u -> x`` is redundant when ``x`` can also be reached from ``u``
through another direct successor ``c`` of ``u``. Dropping every redundant
arrow leaves the unique edge-minimal DAG with the same reachability.

Time Complexity: O(V * (V + E)) to enumerate descendants, plus the pruning
Space Complexity: O(V^2) for the cached descendant sets
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TypeVar

from graphlayers.core.logging import get_logger
from graphlayers.graphs.builder import DirectedGraphBuilder
from graphlayers.graphs.graph import DirectedAcyclicGraph, DirectedGraph

logger = get_logger(__name__)

T = TypeVar("T", bound=Hashable)


class TransitiveReducer:
    """Removes arrows that are implied by longer paths.

    Example:
        >>> dag = (
        ...     DirectedGraphBuilder.new_builder()
        ...     .add_element(1).add_element(2).add_element(3)
        ...     .add_arrow(1, 2).add_arrow(2, 3).add_arrow(1, 3)
        ...     .create_acyclic_graph()
        ... )
        >>> reduced = TransitiveReducer.reduce_graph(dag)
        >>> sorted(reduced.arrows())
        [(1, 2), (2, 3)]
    """

    @staticmethod
    def reduce_graph(graph: DirectedAcyclicGraph[T]) -> DirectedAcyclicGraph[T]:
        """Compute the transitive reduction of a DAG.

        The input is not modified. The result holds the same elements in the
        same order.

        Args:
            graph: The DAG to reduce.

        Returns:
            A new DAG with only non-redundant arrows.
        """
        descendants: dict[T, frozenset[T]] = {}

        def cached_descendants_of(element: T) -> frozenset[T]:
            if element not in descendants:
                descendants[element] = TransitiveReducer.descendants_of(graph, element)
            return descendants[element]

        builder: DirectedGraphBuilder[T] = DirectedGraphBuilder.new_builder()
        for element in graph.elements:
            builder.add_element(element)

        removed = 0
        for element in graph.elements:
            children = graph.get_direct_successors_of(element)
            kept = set(children)
            for child in children:
                # Everything below a direct child is already reachable through it
                kept -= cached_descendants_of(child) - {child}
            removed += len(children) - len(kept)
            for child in kept:
                builder.add_arrow(element, child)

        reduced = builder.create_acyclic_graph_unsafe()
        logger.debug(
            f"Transitive reduction removed {removed} of {graph.arrow_count} arrows",
            extra={
                "context": {
                    "elements": graph.count,
                    "arrows_before": graph.arrow_count,
                    "arrows_after": reduced.arrow_count,
                }
            },
        )
        return reduced

    @staticmethod
    def descendants_of(graph: DirectedGraph[T], start: T) -> frozenset[T]:
        """Collect every element reachable from start, start included.

        Uses an explicit stack, so the depth of the graph is not limited by
        the recursion limit.

        Raises:
            UnknownElementError: If start is not in the graph.
        """
        reached: set[T] = {start}
        stack: list[T] = [start]

        while stack:
            current = stack.pop()
            for successor in graph.get_direct_successors_of(current):
                if successor not in reached:
                    reached.add(successor)
                    stack.append(successor)

        return frozenset(reached)


__all__ = [
    "TransitiveReducer",
]
