"""Convenience exports for domain records.

Surface the graph, topic, and interaction dataclasses so calling code can import them from a single module.
"""

from .topic import DEFAULT_IMPORTANCE, MAX_IMPORTANCE, MIN_IMPORTANCE, TopicVector
from .edge import Edge
from .position import Position3D
from .graph import Graph, Node
from .interaction import EdgeVisualAttributes, InteractionState, NodeDetail, VisualAttributes

__all__ = [
    "DEFAULT_IMPORTANCE",
    "MAX_IMPORTANCE",
    "MIN_IMPORTANCE",
    "TopicVector",
    "Edge",
    "Position3D",
    "Graph",
    "Node",
    "InteractionState",
    "VisualAttributes",
    "EdgeVisualAttributes",
    "NodeDetail",
]
