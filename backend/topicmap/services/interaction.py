"""Hover/selection state machine and per-frame visual rules.

Classes:
    InteractionController: Applies pointer and click events to an InteractionState for one viewing session.

Functions:
    importance_color(size): Palette band for a node when nothing is hovered.
    similarity_color(similarity): Edge colour scaled by similarity when nothing is hovered.
    label_size(size): Font size for a node label.
    node_visual_state(node, state, graph): Visual attributes for one node this frame.
    edge_visual_state(edge, state, graph): Visual attributes for one edge this frame.

Hover and selection are independent: selecting a node survives hover changes, and
only a pointer miss (or a new graph) clears the selection.
"""

from __future__ import annotations

import logging
from typing import Optional

from topicmap.models import (
    DEFAULT_IMPORTANCE,
    Edge,
    EdgeVisualAttributes,
    Graph,
    InteractionState,
    Node,
    NodeDetail,
    VisualAttributes,
)

_LOGGER = logging.getLogger(__name__)

FOCUS_COLOR = "#ff6b35"
RELATED_COLOR = "#4ecdc4"
MUTED_COLOR = "#cccccc"
IMPORTANCE_BANDS: tuple[tuple[float, str], ...] = (
    (8.0, "#e74c3c"),
    (6.0, "#f39c12"),
    (4.0, "#3498db"),
)
LOW_IMPORTANCE_COLOR = "#2ecc71"

EDGE_WIDTH = 1.5
EDGE_HIGHLIGHT_COLOR = "#34495e"
EDGE_HIGHLIGHT_WIDTH = 3.0
EDGE_MUTED_COLOR = "#e0e0e0"
EDGE_MUTED_WIDTH = 0.75
EDGE_MIN_INTENSITY = 0.3


def importance_color(size: Optional[float]) -> str:
    importance = size if size else DEFAULT_IMPORTANCE
    for floor, color in IMPORTANCE_BANDS:
        if importance >= floor:
            return color
    return LOW_IMPORTANCE_COLOR


def similarity_color(similarity: float) -> str:
    intensity = int(255 * min(1.0, max(EDGE_MIN_INTENSITY, similarity)))
    return f"rgb(160, 160, {intensity})"


def label_size(size: float) -> float:
    return round(0.5 + (size / 10.0) * 1.2, 4)


def node_visual_state(node: Node, state: InteractionState, graph: Graph) -> VisualAttributes:
    selected = state.selected_id == node.id
    size = label_size(node.size)
    hovered = state.hovered_id
    if hovered is None or hovered not in graph:
        return VisualAttributes(color=importance_color(node.size), emphasis="default", label_size=size, selected=selected)
    if hovered == node.id:
        return VisualAttributes(color=FOCUS_COLOR, emphasis="focus", label_size=size, selected=selected)
    if hovered in node.neighbors:
        return VisualAttributes(color=RELATED_COLOR, emphasis="related", label_size=size, selected=selected)
    return VisualAttributes(color=MUTED_COLOR, emphasis="muted", label_size=size, selected=selected)


def edge_visual_state(edge: Edge, state: InteractionState, graph: Graph) -> EdgeVisualAttributes:
    hovered = state.hovered_id
    if hovered is None or hovered not in graph:
        return EdgeVisualAttributes(color=similarity_color(edge.similarity), width=EDGE_WIDTH, emphasis="default")
    if edge.touches(hovered):
        return EdgeVisualAttributes(color=EDGE_HIGHLIGHT_COLOR, width=EDGE_HIGHLIGHT_WIDTH, emphasis="highlight")
    return EdgeVisualAttributes(color=EDGE_MUTED_COLOR, width=EDGE_MUTED_WIDTH, emphasis="muted")


class InteractionController:
    def __init__(self, graph: Graph | None = None) -> None:
        self._graph = graph
        self._state = InteractionState()

    @property
    def graph(self) -> Graph | None:
        return self._graph

    @property
    def state(self) -> InteractionState:
        return self._state

    def reset(self, graph: Graph | None = None) -> None:
        """Swap in a new graph snapshot and return to the idle state."""

        self._graph = graph
        self._state = InteractionState()

    def _known(self, node_id: int, event: str) -> bool:
        if self._graph is not None and node_id in self._graph:
            return True
        _LOGGER.debug("Ignoring %s for unknown node %r", event, node_id)
        return False

    def pointer_over(self, node_id: int) -> None:
        if self._known(node_id, "pointer_over"):
            self._state.hovered_id = node_id

    def pointer_out(self, node_id: int) -> None:
        if self._state.hovered_id == node_id:
            self._state.hovered_id = None

    def pointer_missed(self) -> None:
        self._state.hovered_id = None
        self._state.selected_id = None

    def click(self, node_id: int) -> Optional[NodeDetail]:
        if not self._known(node_id, "click"):
            return None
        self._state.selected_id = node_id
        return self.selected_detail()

    def selected_detail(self) -> Optional[NodeDetail]:
        selected = self._state.selected_id
        if selected is None or self._graph is None or selected not in self._graph:
            return None
        node = self._graph.node(selected)
        return NodeDetail(id=node.id, text=node.text, context=node.context)

    def node_visuals(self) -> list[VisualAttributes]:
        if self._graph is None:
            return []
        return [node_visual_state(node, self._state, self._graph) for node in self._graph.nodes]

    def edge_visuals(self) -> list[EdgeVisualAttributes]:
        if self._graph is None:
            return []
        return [edge_visual_state(edge, self._state, self._graph) for edge in self._graph.edges]


__all__ = [
    "InteractionController",
    "edge_visual_state",
    "importance_color",
    "label_size",
    "node_visual_state",
    "similarity_color",
]
