"""Interaction state and per-frame visual attribute records.

Classes:
    InteractionState: Hovered and selected node ids for one viewing session.
    VisualAttributes: Colour, emphasis, and label size for a rendered node.
    EdgeVisualAttributes: Colour, width, and emphasis for a rendered edge.
    NodeDetail: Payload shown in the detail panel for the selected node.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

NodeEmphasis = Literal["default", "focus", "related", "muted"]
EdgeEmphasis = Literal["default", "highlight", "muted"]


@dataclass(slots=True)
class InteractionState:
    hovered_id: Optional[int] = None
    selected_id: Optional[int] = None

    @property
    def is_idle(self) -> bool:
        return self.hovered_id is None and self.selected_id is None


@dataclass(frozen=True, slots=True)
class VisualAttributes:
    color: str
    emphasis: NodeEmphasis
    label_size: float
    selected: bool = False


@dataclass(frozen=True, slots=True)
class EdgeVisualAttributes:
    color: str
    width: float
    emphasis: EdgeEmphasis


@dataclass(frozen=True, slots=True)
class NodeDetail:
    id: int
    text: str
    context: str
