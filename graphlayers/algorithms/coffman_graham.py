"""Coffman-Graham width-bounded layering.

Splits a partially ordered set of elements, given as a directed acyclic graph
with an arrow from x to y whenever x must come before y, into a sequence of
layers such that:

1. If there is an arrow from x to y, y is in a later layer than x.
2. Every layer holds at most W elements.

The algorithm runs in two phases on a transitively reduced graph:

- Phase 1 assigns every element a priority label ``1..n``. Labels are handed
  out one at a time to an element whose predecessors are all labeled already.
  Among those candidates, the one whose predecessor labels, sorted from high
  to low, form the lexicographically smallest sequence wins. A sequence that
  is a proper prefix of another is smaller, and remaining ties go to the
  element that was added to the graph first.
- Phase 2 walks the elements in label order and puts each one in the first
  layer after all of its predecessors that still has room.

Labeling takes O(n^2) comparisons of predecessor sequences. The transitive
reduction done by :meth:`CoffmanGraham.solver_for_arbitrary_graphs` is not
included in that bound.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Iterator, Mapping, Sequence
from types import MappingProxyType
from typing import Generic, TypeVar, overload

from graphlayers.algorithms.exceptions import GraphNotAcyclicError, InvalidWidthError
from graphlayers.core.config import settings
from graphlayers.core.logging import get_logger
from graphlayers.graphs.exceptions import NullElementError, UnknownElementError
from graphlayers.graphs.graph import DirectedAcyclicGraph
from graphlayers.graphs.reduction import TransitiveReducer

logger = get_logger(__name__)

T = TypeVar("T", bound=Hashable)


class Layering(Sequence[frozenset[T]], Generic[T]):
    """Immutable, ordered sequence of layers.

    Layer 0 comes first. Each layer is a frozenset, so the order of elements
    within a layer is unspecified.

    Example:
        >>> from graphlayers.graphs.builder import DirectedGraphBuilder
        >>> dag = (
        ...     DirectedGraphBuilder.new_builder()
        ...     .add_element("fetch").add_element("compile")
        ...     .add_element("lint").add_element("test")
        ...     .add_arrow("fetch", "compile").add_arrow("fetch", "lint")
        ...     .add_arrow("compile", "test")
        ...     .create_acyclic_graph()
        ... )
        >>> layering = CoffmanGraham.solver_for_arbitrary_graphs(2).solve(dag)
        >>> len(layering)
        3
        >>> layering.layer_index_of("test")
        2
    """

    __slots__ = ("_layer_of", "_layers")

    def __init__(self, layers: Iterable[Iterable[T]]) -> None:
        self._layers: tuple[frozenset[T], ...] = tuple(frozenset(layer) for layer in layers)
        self._layer_of: Mapping[T, int] = MappingProxyType(
            {element: index for index, layer in enumerate(self._layers) for element in layer}
        )

    @property
    def layers(self) -> tuple[frozenset[T], ...]:
        """All layers, first to last."""
        return self._layers

    @property
    def element_count(self) -> int:
        """Total number of elements over all layers."""
        return len(self._layer_of)

    @property
    def max_layer_size(self) -> int:
        """Size of the largest layer, 0 for an empty layering."""
        return max((len(layer) for layer in self._layers), default=0)

    def layer_index_of(self, element: T) -> int:
        """Get the index of the layer holding an element.

        Raises:
            NullElementError: If element is None.
            UnknownElementError: If element is in no layer.
        """
        if element is None:
            raise NullElementError()
        try:
            return self._layer_of[element]
        except KeyError:
            raise UnknownElementError(element) from None

    @overload
    def __getitem__(self, index: int) -> frozenset[T]: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[frozenset[T], ...]: ...

    def __getitem__(self, index: int | slice) -> frozenset[T] | tuple[frozenset[T], ...]:
        return self._layers[index]

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[frozenset[T]]:
        return iter(self._layers)

    def __contains__(self, value: object) -> bool:
        return value in self._layers

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Layering):
            return self._layers == other._layers
        if isinstance(other, Sequence) and not isinstance(other, (str, bytes)):
            return len(other) == len(self._layers) and all(
                frozenset(mine) == frozenset(theirs)
                for mine, theirs in zip(self._layers, other, strict=True)
            )
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._layers)

    def __repr__(self) -> str:
        sizes = [len(layer) for layer in self._layers]
        return f"Layering(layers={len(self._layers)}, sizes={sizes})"


class CoffmanGrahamSolver:
    """Stateless Coffman-Graham solver bound to a maximum layer size.

    Create instances through :class:`CoffmanGraham`. A solver holds no state
    between calls and can be shared across threads.
    """

    __slots__ = ("_max_layer_size", "_reduce_first")

    def __init__(self, max_layer_size: int, reduce_first: bool = True) -> None:
        """Initialize the solver.

        Args:
            max_layer_size: Maximum number of elements per layer.
            reduce_first: Transitively reduce every input before labeling.

        Raises:
            InvalidWidthError: If max_layer_size is not an integer of at least 1.
        """
        if isinstance(max_layer_size, bool) or not isinstance(max_layer_size, int):
            raise InvalidWidthError(max_layer_size)
        if max_layer_size < 1:
            raise InvalidWidthError(max_layer_size)

        self._max_layer_size = max_layer_size
        self._reduce_first = reduce_first

    @property
    def max_layer_size(self) -> int:
        """Maximum number of elements per layer."""
        return self._max_layer_size

    @property
    def reduces_input(self) -> bool:
        """Whether inputs are transitively reduced before labeling."""
        return self._reduce_first

    def solve(self, graph: DirectedAcyclicGraph[T]) -> Layering[T]:
        """Split a DAG into width-bounded, precedence-respecting layers.

        Args:
            graph: The DAG to layer. It is not modified.

        Returns:
            The layering, layer 0 first. An empty graph gives an empty layering.

        Raises:
            GraphNotAcyclicError: If the graph turns out to contain a cycle.
        """
        if graph.count == 0:
            return Layering(())

        working_graph = self._prepare(graph)
        ordering = self._create_priority_ordering(working_graph)
        layering = self._create_layers(working_graph, ordering)

        logger.debug(
            f"Layered {graph.count} elements into {len(layering)} layers "
            f"(max layer size {self._max_layer_size})",
            extra={
                "context": {
                    "elements": graph.count,
                    "layers": len(layering),
                    "max_layer_size": self._max_layer_size,
                    "reduced": self._reduce_first,
                }
            },
        )
        return layering

    def label(self, graph: DirectedAcyclicGraph[T]) -> Mapping[T, int]:
        """Compute the phase 1 priority labels.

        Args:
            graph: The DAG to label.

        Returns:
            A read-only mapping from every element to its label in ``1..n``.

        Raises:
            GraphNotAcyclicError: If the graph turns out to contain a cycle.
        """
        ordering = self._create_priority_ordering(self._prepare(graph))
        return MappingProxyType({element: i for i, element in enumerate(ordering, start=1)})

    def _prepare(self, graph: DirectedAcyclicGraph[T]) -> DirectedAcyclicGraph[T]:
        if self._reduce_first:
            # Reduction can drop the arrows of a cycle, so check the input as given
            self._require_acyclic(graph)
            return TransitiveReducer.reduce_graph(graph)
        return graph

    @staticmethod
    def _require_acyclic(graph: DirectedAcyclicGraph[T]) -> None:
        """Kahn pass over the unreduced graph.

        Raises:
            GraphNotAcyclicError: If some elements can never lose all
                their predecessors.
        """
        remaining = {element: graph.get_in_degree(element) for element in graph.elements}
        ready = [element for element, degree in remaining.items() if degree == 0]
        ordered = 0

        while ready:
            element = ready.pop()
            ordered += 1
            for successor in graph.get_direct_successors_of(element):
                remaining[successor] -= 1
                if remaining[successor] == 0:
                    ready.append(successor)

        if ordered < graph.count:
            logger.warning(
                f"Input graph has a cycle, only {ordered} of {graph.count} elements can be ordered",
                extra={"context": {"labeled": ordered, "total": graph.count}},
            )
            raise GraphNotAcyclicError(labeled=ordered, total=graph.count)

    @staticmethod
    def _create_priority_ordering(graph: DirectedAcyclicGraph[T]) -> list[T]:
        """Order elements by priority label, lowest label first."""
        insertion_index = {element: i for i, element in enumerate(graph.elements)}
        unlabeled_predecessors = {
            element: len(graph.get_direct_predecessors_of(element)) for element in graph.elements
        }
        label_of: dict[T, int] = {}
        ordering: list[T] = []

        # Predecessor labels never change once an element becomes a candidate,
        # so each candidate's sort key is computed exactly once.
        candidates: dict[T, tuple[tuple[int, ...], int]] = {}

        def add_candidate(element: T) -> None:
            predecessor_labels = sorted(
                (label_of[p] for p in graph.get_direct_predecessors_of(element)),
                reverse=True,
            )
            candidates[element] = (tuple(predecessor_labels), insertion_index[element])

        for element in graph.elements:
            if unlabeled_predecessors[element] == 0:
                add_candidate(element)

        while candidates:
            # Tuples compare lexicographically and a proper prefix sorts first
            chosen = min(candidates, key=candidates.__getitem__)
            del candidates[chosen]

            ordering.append(chosen)
            label_of[chosen] = len(ordering)

            for successor in graph.get_direct_successors_of(chosen):
                unlabeled_predecessors[successor] -= 1
                if unlabeled_predecessors[successor] == 0:
                    add_candidate(successor)

        if len(ordering) < graph.count:
            logger.warning(
                f"Priority labeling stalled after {len(ordering)} of {graph.count} elements",
                extra={"context": {"labeled": len(ordering), "total": graph.count}},
            )
            raise GraphNotAcyclicError(labeled=len(ordering), total=graph.count)

        return ordering

    def _create_layers(self, graph: DirectedAcyclicGraph[T], ordering: list[T]) -> Layering[T]:
        layers: list[list[T]] = []
        layer_of: dict[T, int] = {}

        for element in ordering:
            # Requirement (1): after every predecessor
            candidate_layer = 1 + max(
                (layer_of[p] for p in graph.get_direct_predecessors_of(element)),
                default=-1,
            )

            # Requirement (2): room left in the layer
            while (
                candidate_layer < len(layers)
                and len(layers[candidate_layer]) >= self._max_layer_size
            ):
                candidate_layer += 1

            if candidate_layer == len(layers):
                layers.append([])

            layers[candidate_layer].append(element)
            layer_of[element] = candidate_layer

        return Layering(layers)

    def __repr__(self) -> str:
        return (
            f"CoffmanGrahamSolver(max_layer_size={self._max_layer_size}, "
            f"reduce_first={self._reduce_first})"
        )


class CoffmanGraham:
    """Factory for Coffman-Graham solvers.

    Example:
        >>> solver = CoffmanGraham.solver_for_arbitrary_graphs(3)
        >>> solver
        CoffmanGrahamSolver(max_layer_size=3, reduce_first=True)
    """

    @staticmethod
    def solver_for_arbitrary_graphs(max_layer_size: int) -> CoffmanGrahamSolver:
        """Create a solver that transitively reduces its input first.

        Raises:
            InvalidWidthError: If max_layer_size is not an integer of at least 1.
        """
        return CoffmanGrahamSolver(max_layer_size, reduce_first=True)

    @staticmethod
    def solver_for_reduced_graphs(max_layer_size: int) -> CoffmanGrahamSolver:
        """Create a solver for inputs that are already transitively reduced.

        Layer bounds and precedence still hold for unreduced input, but the
        labeling loses the ancestry clustering that keeps the layer count low.

        Raises:
            InvalidWidthError: If max_layer_size is not an integer of at least 1.
        """
        return CoffmanGrahamSolver(max_layer_size, reduce_first=False)


def layer_graph(
    graph: DirectedAcyclicGraph[T],
    max_layer_size: int | None = None,
) -> Layering[T]:
    """Layer a DAG with the default arbitrary-graph solver.

    Args:
        graph: The DAG to layer.
        max_layer_size: Maximum layer size. Defaults to
            settings.DEFAULT_MAX_LAYER_SIZE.

    Raises:
        InvalidWidthError: If the width is not an integer of at least 1.
        GraphNotAcyclicError: If the graph turns out to contain a cycle.
    """
    if max_layer_size is None:
        max_layer_size = settings.DEFAULT_MAX_LAYER_SIZE
    return CoffmanGraham.solver_for_arbitrary_graphs(max_layer_size).solve(graph)


__all__ = [
    "CoffmanGraham",
    "CoffmanGrahamSolver",
    "Layering",
    "layer_graph",
]
