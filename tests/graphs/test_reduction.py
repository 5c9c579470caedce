"""Tests for TransitiveReducer."""

from hypothesis import given

from graphlayers.graphs.builder import DirectedGraphBuilder
from graphlayers.graphs.graph import DirectedAcyclicGraph
from graphlayers.graphs.reduction import TransitiveReducer
from strategies import acyclic_graphs, has_path_of_length_two_or_more, reachable_from


class TestReduceGraph:
    """Scenario tests for reduce_graph."""

    def test_does_not_remove_elements(self, shortcut_triangle: DirectedAcyclicGraph[str]) -> None:
        reduced = TransitiveReducer.reduce_graph(shortcut_triangle)

        assert reduced.elements == shortcut_triangle.elements

    def test_removes_transitive_arrow(self, shortcut_triangle: DirectedAcyclicGraph[str]) -> None:
        reduced = TransitiveReducer.reduce_graph(shortcut_triangle)

        assert "three" not in reduced.get_direct_successors_of("one")
        assert "one" not in reduced.get_direct_predecessors_of("three")

    def test_keeps_required_arrows(self, shortcut_triangle: DirectedAcyclicGraph[str]) -> None:
        reduced = TransitiveReducer.reduce_graph(shortcut_triangle)

        assert reduced.get_direct_successors_of("one") == {"two"}
        assert reduced.get_direct_predecessors_of("two") == {"one"}
        assert reduced.get_direct_successors_of("two") == {"three"}
        assert reduced.get_direct_predecessors_of("three") == {"two"}

    def test_does_not_modify_input(self, shortcut_triangle: DirectedAcyclicGraph[str]) -> None:
        TransitiveReducer.reduce_graph(shortcut_triangle)

        assert shortcut_triangle.has_arrow("one", "three")
        assert shortcut_triangle.arrow_count == 3

    def test_handles_multiple_paths(self) -> None:
        """
        ----------|
        |         V
        1 -> 2 -> 3 -> 4
             |         ^
             ----------|
        """
        graph = (
            DirectedGraphBuilder.new_builder()
            .add_element("one")
            .add_element("two")
            .add_element("three")
            .add_element("four")
            .add_arrow("one", "two")
            .add_arrow("two", "three")
            .add_arrow("three", "four")
            .add_arrow("one", "three")
            .add_arrow("two", "four")
            .create_acyclic_graph()
        )

        reduced = TransitiveReducer.reduce_graph(graph)

        assert set(reduced.arrows()) == {("one", "two"), ("two", "three"), ("three", "four")}

    def test_empty_graph(self) -> None:
        reduced = TransitiveReducer.reduce_graph(DirectedGraphBuilder.empty_graph())

        assert reduced.count == 0

    def test_result_is_acyclic_graph(self, shortcut_triangle: DirectedAcyclicGraph[str]) -> None:
        assert isinstance(TransitiveReducer.reduce_graph(shortcut_triangle), DirectedAcyclicGraph)


class TestDescendantsOf:
    """Tests for descendants_of."""

    def test_includes_start(self, shortcut_triangle: DirectedAcyclicGraph[str]) -> None:
        assert TransitiveReducer.descendants_of(shortcut_triangle, "three") == {"three"}

    def test_collects_everything_below(self, shortcut_triangle: DirectedAcyclicGraph[str]) -> None:
        assert TransitiveReducer.descendants_of(shortcut_triangle, "one") == {
            "one",
            "two",
            "three",
        }

    def test_deep_chain(self) -> None:
        builder = DirectedGraphBuilder.new_builder()
        depth = 10_000
        for i in range(depth):
            builder.add_element(i)
            if i > 0:
                builder.add_arrow(i - 1, i)

        assert len(TransitiveReducer.descendants_of(builder.create_acyclic_graph(), 0)) == depth


class TestProperties:
    """Randomized invariants of the reduction."""

    @given(acyclic_graphs())
    def test_preserves_reachability(self, graph: DirectedAcyclicGraph[int]) -> None:
        reduced = TransitiveReducer.reduce_graph(graph)

        for element in graph.elements:
            assert reachable_from(reduced, element) == reachable_from(graph, element)

    @given(acyclic_graphs())
    def test_is_idempotent(self, graph: DirectedAcyclicGraph[int]) -> None:
        reduced = TransitiveReducer.reduce_graph(graph)

        assert TransitiveReducer.reduce_graph(reduced) == reduced

    @given(acyclic_graphs())
    def test_leaves_no_shadowed_arrow(self, graph: DirectedAcyclicGraph[int]) -> None:
        reduced = TransitiveReducer.reduce_graph(graph)

        for source, target in reduced.arrows():
            assert not has_path_of_length_two_or_more(reduced, source, target)

    @given(acyclic_graphs())
    def test_only_removes_arrows(self, graph: DirectedAcyclicGraph[int]) -> None:
        reduced = TransitiveReducer.reduce_graph(graph)

        assert reduced.elements == graph.elements
        assert set(reduced.arrows()) <= set(graph.arrows())
