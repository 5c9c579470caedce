"""Mutable staging area for directed graphs.

The builder collects elements and arrows in plain dicts and sets, validates
every mutation eagerly, and copies its state into an immutable
:class:`~graphlayers.graphs.graph.DirectedGraph` or
:class:`~graphlayers.graphs.graph.DirectedAcyclicGraph` on every freeze. The
builder stays usable afterwards; later mutations never affect graphs that
were already created.

Builders are not safe for concurrent mutation.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import Generic, TypeVar

from graphlayers.core.logging import get_logger
from graphlayers.graphs.cycles import CycleDetector
from graphlayers.graphs.exceptions import (
    CyclicGraphError,
    DuplicateArrowError,
    DuplicateElementError,
    NullElementError,
    SelfArrowError,
    UnknownArrowError,
    UnknownElementError,
)
from graphlayers.graphs.graph import DirectedAcyclicGraph, DirectedGraph

logger = get_logger(__name__)

T = TypeVar("T", bound=Hashable)


class DirectedGraphBuilder(Generic[T]):
    """Fluent builder for immutable directed graphs.

    Example:
        >>> dag = (
        ...     DirectedGraphBuilder.new_builder()
        ...     .add_element("compile")
        ...     .add_element("test")
        ...     .add_arrow("compile", "test")
        ...     .create_acyclic_graph()
        ... )
        >>> dag.get_direct_predecessors_of("test")
        frozenset({'compile'})
    """

    __slots__ = ("_direct_predecessors", "_direct_successors", "_elements")

    def __init__(self) -> None:
        # dict keys keep insertion order for element enumeration
        self._elements: dict[T, None] = {}
        self._direct_successors: dict[T, set[T]] = {}
        self._direct_predecessors: dict[T, set[T]] = {}

    @classmethod
    def new_builder(cls) -> DirectedGraphBuilder[T]:
        """Create an empty builder."""
        return cls()

    @classmethod
    def from_existing_graph(cls, graph: DirectedGraph[T]) -> DirectedGraphBuilder[T]:
        """Create a builder holding the elements and arrows of a graph.

        Element order is preserved.
        """
        builder = cls()
        for element in graph.elements:
            builder._elements[element] = None
            builder._direct_successors[element] = set(graph.get_direct_successors_of(element))
            builder._direct_predecessors[element] = set(graph.get_direct_predecessors_of(element))
        return builder

    @classmethod
    def empty_graph(cls) -> DirectedAcyclicGraph[T]:
        """Create an empty directed acyclic graph."""
        return cls().create_acyclic_graph_unsafe()

    def add_element(self, element: T) -> DirectedGraphBuilder[T]:
        """Add an element without any arrows.

        Raises:
            NullElementError: If element is None.
            DuplicateElementError: If element was already added.
        """
        if element is None:
            raise NullElementError("element")
        if element in self._elements:
            raise DuplicateElementError(element)

        self._elements[element] = None
        self._direct_successors[element] = set()
        self._direct_predecessors[element] = set()

        return self

    def add_arrow(self, source: T, target: T) -> DirectedGraphBuilder[T]:
        """Add an arrow from source to target.

        Raises:
            NullElementError: If either endpoint is None.
            UnknownElementError: If either endpoint was never added.
            SelfArrowError: If source and target are the same element.
            DuplicateArrowError: If the arrow was already added.
        """
        self._require_element(source, "source")
        self._require_element(target, "target")
        if source == target:
            raise SelfArrowError(source)
        if target in self._direct_successors[source]:
            raise DuplicateArrowError(source, target)

        self._direct_successors[source].add(target)
        self._direct_predecessors[target].add(source)

        return self

    def remove_arrow(self, source: T, target: T) -> DirectedGraphBuilder[T]:
        """Remove the arrow from source to target.

        Raises:
            NullElementError: If either endpoint is None.
            UnknownElementError: If either endpoint was never added.
            UnknownArrowError: If there is no such arrow.
        """
        self._require_element(source, "source")
        self._require_element(target, "target")
        if target not in self._direct_successors[source]:
            raise UnknownArrowError(source, target)

        self._direct_successors[source].remove(target)
        self._direct_predecessors[target].remove(source)

        return self

    def remove_element(self, element: T) -> DirectedGraphBuilder[T]:
        """Remove an element together with every arrow touching it.

        Raises:
            NullElementError: If element is None.
            UnknownElementError: If element was never added.
        """
        self._require_element(element, "element")

        for successor in self._direct_successors.pop(element):
            self._direct_predecessors[successor].discard(element)
        for predecessor in self._direct_predecessors.pop(element):
            self._direct_successors[predecessor].discard(element)
        del self._elements[element]

        return self

    def has_element(self, element: T) -> bool:
        """Check whether an element was added."""
        return element in self._elements

    def has_arrow(self, source: T, target: T) -> bool:
        """Check whether an arrow was added."""
        return target in self._direct_successors.get(source, ())

    def create_graph(self) -> DirectedGraph[T]:
        """Create an immutable directed graph.

        No acyclicity check is performed.
        """
        graph = DirectedGraph(*self._freeze())
        logger.debug(
            f"Created directed graph: {graph.count} elements, {graph.arrow_count} arrows",
            extra={"context": {"elements": graph.count, "arrows": graph.arrow_count}},
        )
        return graph

    def create_acyclic_graph(self) -> DirectedAcyclicGraph[T]:
        """Create an immutable directed acyclic graph.

        Raises:
            CyclicGraphError: If the staged arrows contain a directed cycle.
        """
        cycle = CycleDetector.find_cycle(self._elements, self._direct_successors.__getitem__)
        if cycle is not None:
            logger.warning(
                f"Refusing to create acyclic graph, cycle of length {len(cycle) - 1} found",
                extra={"context": {"cycle_length": len(cycle) - 1}},
            )
            raise CyclicGraphError(cycle)

        return self.create_acyclic_graph_unsafe()

    def create_acyclic_graph_unsafe(self) -> DirectedAcyclicGraph[T]:
        """Create an immutable directed acyclic graph without checking for cycles.

        The caller guarantees the staged arrows are acyclic.
        """
        graph = DirectedAcyclicGraph(*self._freeze())
        logger.debug(
            f"Created directed acyclic graph: {graph.count} elements, {graph.arrow_count} arrows",
            extra={"context": {"elements": graph.count, "arrows": graph.arrow_count}},
        )
        return graph

    def _freeze(
        self,
    ) -> tuple[tuple[T, ...], dict[T, frozenset[T]], dict[T, frozenset[T]]]:
        return (
            tuple(self._elements),
            {e: frozenset(s) for e, s in self._direct_successors.items()},
            {e: frozenset(p) for e, p in self._direct_predecessors.items()},
        )

    def _require_element(self, element: T, argument: str) -> None:
        if element is None:
            raise NullElementError(argument)
        if element not in self._elements:
            raise UnknownElementError(element)

    def __len__(self) -> int:
        return len(self._elements)

    def __repr__(self) -> str:
        arrows = sum(len(s) for s in self._direct_successors.values())
        return f"DirectedGraphBuilder(elements={len(self._elements)}, arrows={arrows})"


__all__ = [
    "DirectedGraphBuilder",
]
