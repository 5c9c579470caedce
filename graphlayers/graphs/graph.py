"""Immutable directed graph data structures.

This module provides the read-only query surface produced by
:class:`~graphlayers.graphs.builder.DirectedGraphBuilder`. Instances are never
mutated after construction and may be shared freely across threads.

Time Complexity:
- Successor/predecessor lookup: O(1)
- Membership test: O(1)
- Element enumeration: O(V)

Space Complexity: O(V + E)
"""

from __future__ import annotations

from collections.abc import Hashable, Iterator, Mapping
from types import MappingProxyType
from typing import TYPE_CHECKING, Generic, TypeVar

from graphlayers.graphs.exceptions import NullElementError, UnknownElementError

if TYPE_CHECKING:
    from graphlayers.graphs.builder import DirectedGraphBuilder

T = TypeVar("T", bound=Hashable)


class DirectedGraph(Generic[T]):
    """Immutable directed graph with adjacency-set representation.

    Both forward and reverse adjacency are kept so that successor and
    predecessor lookups are constant time. Elements are enumerated in the
    order they were originally added to the builder.

    Type Parameters:
        T: Hashable element type.

    Example:
        >>> from graphlayers.graphs.builder import DirectedGraphBuilder
        >>> graph = (
        ...     DirectedGraphBuilder[str].new_builder()
        ...     .add_element("a")
        ...     .add_element("b")
        ...     .add_arrow("a", "b")
        ...     .create_graph()
        ... )
        >>> graph.get_direct_successors_of("a")
        frozenset({'b'})
    """

    __slots__ = ("_arrow_count", "_direct_predecessors", "_direct_successors", "_elements")

    def __init__(
        self,
        elements: tuple[T, ...],
        direct_successors: Mapping[T, frozenset[T]],
        direct_predecessors: Mapping[T, frozenset[T]],
    ) -> None:
        """Wrap already-copied adjacency data.

        Use :class:`DirectedGraphBuilder` rather than calling this directly;
        the builder guarantees the two adjacency maps mirror each other.
        """
        self._elements = elements
        self._direct_successors = MappingProxyType(dict(direct_successors))
        self._direct_predecessors = MappingProxyType(dict(direct_predecessors))
        self._arrow_count = sum(len(s) for s in self._direct_successors.values())

    @property
    def elements(self) -> tuple[T, ...]:
        """All elements in insertion order."""
        return self._elements

    @property
    def count(self) -> int:
        """Get the number of elements in the graph."""
        return len(self._elements)

    @property
    def arrow_count(self) -> int:
        """Get the number of arrows in the graph."""
        return self._arrow_count

    def get_direct_successors_of(self, element: T) -> frozenset[T]:
        """Get the elements this element has an arrow to.

        Args:
            element: A member of the graph.

        Returns:
            The (possibly empty) set of direct successors.

        Raises:
            NullElementError: If element is None.
            UnknownElementError: If element is not in the graph.
        """
        return self._lookup(self._direct_successors, element)

    def get_direct_predecessors_of(self, element: T) -> frozenset[T]:
        """Get the elements that have an arrow to this element.

        Args:
            element: A member of the graph.

        Returns:
            The (possibly empty) set of direct predecessors.

        Raises:
            NullElementError: If element is None.
            UnknownElementError: If element is not in the graph.
        """
        return self._lookup(self._direct_predecessors, element)

    def get_in_degree(self, element: T) -> int:
        """Get the number of incoming arrows for an element."""
        return len(self.get_direct_predecessors_of(element))

    def get_out_degree(self, element: T) -> int:
        """Get the number of outgoing arrows for an element."""
        return len(self.get_direct_successors_of(element))

    def has_arrow(self, source: T, target: T) -> bool:
        """Check if an arrow exists from source to target.

        Unknown endpoints simply yield False.
        """
        return target in self._direct_successors.get(source, frozenset())

    def arrows(self) -> Iterator[tuple[T, T]]:
        """Iterate over all arrows as (source, target) pairs.

        Sources are visited in insertion order; targets of one source are
        unordered.
        """
        for source in self._elements:
            for target in self._direct_successors[source]:
                yield source, target

    def sources(self) -> tuple[T, ...]:
        """Elements without predecessors, in insertion order."""
        return tuple(e for e in self._elements if not self._direct_predecessors[e])

    def sinks(self) -> tuple[T, ...]:
        """Elements without successors, in insertion order."""
        return tuple(e for e in self._elements if not self._direct_successors[e])

    def to_builder(self) -> DirectedGraphBuilder[T]:
        """Create a new builder pre-populated with this graph."""
        from graphlayers.graphs.builder import DirectedGraphBuilder

        return DirectedGraphBuilder.from_existing_graph(self)

    @staticmethod
    def _lookup(adjacency: Mapping[T, frozenset[T]], element: T) -> frozenset[T]:
        if element is None:
            raise NullElementError()
        try:
            return adjacency[element]
        except KeyError:
            raise UnknownElementError(element) from None

    def __contains__(self, element: object) -> bool:
        return element in self._direct_successors

    def __iter__(self) -> Iterator[T]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __eq__(self, other: object) -> bool:
        """Graphs are equal when they hold the same elements and arrows.

        Insertion order and the acyclic/general distinction are ignored.
        """
        if not isinstance(other, DirectedGraph):
            return NotImplemented
        return dict(self._direct_successors) == dict(other._direct_successors)

    def __hash__(self) -> int:
        return hash((frozenset(self._elements), frozenset(self.arrows())))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(elements={self.count}, arrows={self.arrow_count})"


class DirectedAcyclicGraph(DirectedGraph[T]):
    """Immutable directed graph without directed cycles.

    Acyclicity is checked by
    :meth:`DirectedGraphBuilder.create_acyclic_graph`, or asserted by the
    caller through :meth:`DirectedGraphBuilder.create_acyclic_graph_unsafe`.
    """

    __slots__ = ()

    def transitive_reduction(self) -> DirectedAcyclicGraph[T]:
        """Return a new DAG without arrows implied by longer paths.

        See :class:`~graphlayers.graphs.reduction.TransitiveReducer`.
        """
        from graphlayers.graphs.reduction import TransitiveReducer

        return TransitiveReducer.reduce_graph(self)


__all__ = [
    "DirectedAcyclicGraph",
    "DirectedGraph",
]
