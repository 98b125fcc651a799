"""Assembled topic graph snapshot.

Classes:
    Node: Topic metadata joined with its final position and neighbour set.
    Graph: Immutable collection of nodes (index == id) and similarity edges.
"""

from __future__ import annotations

from dataclasses import dataclass

from .edge import Edge
from .position import Position3D


@dataclass(frozen=True, slots=True)
class Node:
    id: int
    text: str
    size: float
    context: str
    position: Position3D
    neighbors: frozenset[int]

    def is_related(self, other_id: int) -> bool:
        return other_id in self.neighbors


@dataclass(frozen=True, slots=True)
class Graph:
    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return isinstance(node_id, int) and 0 <= node_id < len(self.nodes)

    def node(self, node_id: int) -> Node:
        if node_id not in self:
            raise KeyError(node_id)
        return self.nodes[node_id]

    def neighbors(self, node_id: int) -> frozenset[int]:
        return self.node(node_id).neighbors

    def degree(self, node_id: int) -> int:
        return len(self.neighbors(node_id)) - 1

    def incident_edges(self, node_id: int) -> tuple[Edge, ...]:
        return tuple(edge for edge in self.edges if edge.touches(node_id))
