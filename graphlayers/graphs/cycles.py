"""Cycle detection for directed graphs.

Depth-first search with path tracking. The traversal keeps an explicit stack
of successor iterators instead of recursing, so arbitrarily deep chains do not
hit the interpreter's recursion limit.

Time Complexity: O(V + E)
Space Complexity: O(V)
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable, Iterator
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from graphlayers.graphs.graph import DirectedGraph

T = TypeVar("T", bound=Hashable)


class CycleDetector:
    """Depth-first cycle detection.

    Works on anything that can enumerate its elements and their direct
    successors, which lets the builder validate its staging state before
    anything is frozen.

    Example:
        >>> successors = {"a": {"b"}, "b": {"c"}, "c": {"a"}}
        >>> CycleDetector.find_cycle(successors, successors.__getitem__)
        ['a', 'b', 'c', 'a']
    """

    @staticmethod
    def find_cycle(
        elements: Iterable[T],
        successors_of: Callable[[T], Iterable[T]],
    ) -> list[T] | None:
        """Find one directed cycle, if any.

        Roots are tried in the order ``elements`` yields them, and the search
        stops at the first cycle found.

        Args:
            elements: Every element of the graph.
            successors_of: Returns the direct successors of an element.

        Returns:
            The cycle as ``[a, ..., a]`` (first and last equal), or None when
            the graph is acyclic. A self-arrow yields ``[a, a]``.
        """
        visited: set[T] = set()
        on_path: set[T] = set()
        path: list[T] = []

        for root in elements:
            if root in visited:
                continue

            visited.add(root)
            on_path.add(root)
            path.append(root)
            stack: list[tuple[T, Iterator[T]]] = [(root, iter(successors_of(root)))]

            while stack:
                node, successors = stack[-1]
                for successor in successors:
                    if successor in on_path:
                        cycle_start = path.index(successor)
                        return [*path[cycle_start:], successor]
                    if successor not in visited:
                        visited.add(successor)
                        on_path.add(successor)
                        path.append(successor)
                        stack.append((successor, iter(successors_of(successor))))
                        break
                else:
                    # All successors explored
                    stack.pop()
                    on_path.remove(node)
                    path.pop()

        return None

    @staticmethod
    def has_cycle(
        elements: Iterable[T],
        successors_of: Callable[[T], Iterable[T]],
    ) -> bool:
        """Check whether any directed cycle exists."""
        return CycleDetector.find_cycle(elements, successors_of) is not None

    @staticmethod
    def find_cycle_in_graph(graph: DirectedGraph[T]) -> list[T] | None:
        """Find one directed cycle in a frozen graph."""
        return CycleDetector.find_cycle(graph.elements, graph.get_direct_successors_of)


__all__ = [
    "CycleDetector",
]
