"""pytest configuration and shared graph fixtures.

Fixtures build the small named graphs that several test modules use:
the three-element "diamond" with a shortcut arrow, a ten element chain,
isolated elements, and a root with many children.
"""

import logging
from collections.abc import Iterator

import pytest
from hypothesis import HealthCheck, settings

from graphlayers.graphs.builder import DirectedGraphBuilder
from graphlayers.graphs.graph import DirectedAcyclicGraph

settings.register_profile(
    "graphlayers",
    max_examples=100,
    deadline=None,
    suppress_health_check=[HealthCheck.too_slow, HealthCheck.function_scoped_fixture],
)
settings.register_profile("ci", parent=settings.get_profile("graphlayers"), max_examples=300)
settings.load_profile("graphlayers")


# =============================================================================
# LOGGING ISOLATION
# =============================================================================


@pytest.fixture(autouse=True)
def restore_graphlayers_logger() -> Iterator[None]:
    """Undo handler and level changes made to the library logger by a test."""
    logger = logging.getLogger("graphlayers")
    handlers = list(logger.handlers)
    level = logger.level
    try:
        yield
    finally:
        for handler in list(logger.handlers):
            if handler not in handlers:
                logger.removeHandler(handler)
                handler.close()
        logger.setLevel(level)


# =============================================================================
# GRAPH FIXTURES
# =============================================================================


@pytest.fixture
def builder() -> DirectedGraphBuilder[str]:
    """Create an empty builder for testing."""
    return DirectedGraphBuilder.new_builder()


@pytest.fixture
def shortcut_triangle() -> DirectedAcyclicGraph[str]:
    """Create one -> two -> three plus the shortcut one -> three.

    ----------|
    |         V
    1 -> 2 -> 3
    """
    return (
        DirectedGraphBuilder.new_builder()
        .add_element("one")
        .add_element("two")
        .add_element("three")
        .add_arrow("one", "two")
        .add_arrow("two", "three")
        .add_arrow("one", "three")
        .create_acyclic_graph()
    )


@pytest.fixture
def chain() -> DirectedAcyclicGraph[int]:
    """Create the chain 0 -> 1 -> ... -> 9."""
    builder = DirectedGraphBuilder.new_builder()
    for i in range(10):
        builder.add_element(i)
        if i > 0:
            builder.add_arrow(i - 1, i)
    return builder.create_acyclic_graph()


def create_graph_without_arrows(count: int) -> DirectedAcyclicGraph[int]:
    builder = DirectedGraphBuilder.new_builder()
    for i in range(count):
        builder.add_element(i)
    return builder.create_acyclic_graph_unsafe()


def create_graph_with_many_children(count: int) -> DirectedAcyclicGraph[int]:
    builder = DirectedGraphBuilder.new_builder().add_element(-1)
    for i in range(count):
        builder.add_element(i).add_arrow(-1, i)
    return builder.create_acyclic_graph_unsafe()


@pytest.fixture
def graph_without_arrows():
    """Factory fixture for graphs of isolated elements 0..count-1."""
    return create_graph_without_arrows


@pytest.fixture
def graph_with_many_children():
    """Factory fixture for a root -1 with arrows to children 0..count-1."""
    return create_graph_with_many_children
