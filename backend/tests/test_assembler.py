import pytest

from topicmap.core.errors import GraphAssemblyError
from topicmap.models import Edge, Position3D, TopicVector
from topicmap.services.assembler import assemble_graph, build_neighbor_sets


def _topics(count: int) -> list[TopicVector]:
    return [
        TopicVector(text=f"topic {index}", importance=float(index + 1), context=f"context {index}", embedding=(1.0, 0.0))
        for index in range(count)
    ]


def _origin(count: int) -> list[Position3D]:
    return [Position3D(float(index), 0.0, 0.0) for index in range(count)]


def test_fully_connected_graph_has_full_neighbor_sets():
    edges = [Edge(0, 1, 0.9), Edge(0, 2, 0.9), Edge(1, 2, 0.9)]
    graph = assemble_graph(_topics(3), _origin(3), edges)
    assert len(graph.edges) == 3
    for node in graph.nodes:
        assert node.neighbors == frozenset({0, 1, 2})
        assert len(node.neighbors) == 3


def test_isolated_node_only_neighbors_itself():
    edges = [Edge(0, 1, 0.9), Edge(1, 2, 0.95), Edge(2, 3, 0.88)]
    graph = assemble_graph(_topics(5), _origin(5), edges)
    assert graph.neighbors(4) == frozenset({4})
    assert graph.incident_edges(4) == ()
    assert graph.degree(4) == 0


def test_neighbor_sets_are_symmetric_and_reflexive():
    edges = [Edge(0, 3, 0.9), Edge(1, 2, 0.9), Edge(2, 3, 0.9), Edge(0, 5, 0.83)]
    neighbors = build_neighbor_sets(6, edges)
    for a in range(6):
        assert a in neighbors[a]
        for b in range(6):
            assert (b in neighbors[a]) == (a in neighbors[b])


def test_nodes_carry_topic_metadata_and_positions():
    topics = _topics(2)
    positions = [Position3D(1.0, 2.0, 3.0), Position3D(-1.0, -2.0, -3.0)]
    graph = assemble_graph(topics, positions, [Edge(0, 1, 0.91)])
    node = graph.node(1)
    assert node.id == 1
    assert node.text == "topic 1"
    assert node.size == 2.0
    assert node.context == "context 1"
    assert node.position == positions[1]
    assert graph.nodes[0].is_related(1)


def test_mismatched_lengths_are_fatal():
    with pytest.raises(GraphAssemblyError):
        assemble_graph(_topics(3), _origin(2), [])


def test_edge_outside_graph_is_fatal():
    with pytest.raises(GraphAssemblyError):
        assemble_graph(_topics(2), _origin(2), [Edge(0, 2, 0.9)])


def test_graph_lookup_rejects_unknown_ids():
    graph = assemble_graph(_topics(2), _origin(2), [])
    assert 1 in graph
    assert 2 not in graph
    with pytest.raises(KeyError):
        graph.node(2)


def test_edge_requires_ordered_endpoints():
    with pytest.raises(ValueError):
        Edge(2, 1, 0.9)
    with pytest.raises(ValueError):
        Edge(1, 1, 0.9)
