"""Graph snapshot assembly.

Functions:
    build_neighbor_sets(node_count, edges): Reflexive, symmetric neighbour sets per node id.
    assemble_graph(topics, positions, edges): Join topic metadata, positions, and edges into a Graph.
"""

from __future__ import annotations

from typing import Sequence

from topicmap.core.errors import GraphAssemblyError
from topicmap.models import Edge, Graph, Node, Position3D, TopicVector


def build_neighbor_sets(node_count: int, edges: Sequence[Edge]) -> list[frozenset[int]]:
    neighbors: list[set[int]] = [{index} for index in range(node_count)]
    for edge in edges:
        if not (0 <= edge.source_index < node_count and 0 <= edge.target_index < node_count):
            raise GraphAssemblyError(
                f"edge {edge.source_index}-{edge.target_index} references a node outside 0..{node_count - 1}"
            )
        neighbors[edge.source_index].add(edge.target_index)
        neighbors[edge.target_index].add(edge.source_index)
    return [frozenset(items) for items in neighbors]


def assemble_graph(
    topics: Sequence[TopicVector],
    positions: Sequence[Position3D],
    edges: Sequence[Edge],
) -> Graph:
    if len(topics) != len(positions):
        raise GraphAssemblyError(f"received {len(topics)} topics but {len(positions)} positions")
    neighbor_sets = build_neighbor_sets(len(topics), edges)
    nodes = tuple(
        Node(
            id=index,
            text=topic.text,
            size=topic.importance,
            context=topic.context,
            position=position,
            neighbors=neighbor_sets[index],
        )
        for index, (topic, position) in enumerate(zip(topics, positions))
    )
    return Graph(nodes=nodes, edges=tuple(edges))


__all__ = ["assemble_graph", "build_neighbor_sets"]
