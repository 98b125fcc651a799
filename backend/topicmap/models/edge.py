"""Similarity edge record.

Classes:
    Edge: Undirected link between two topics whose embeddings are closely aligned.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Edge:
    source_index: int
    target_index: int
    similarity: float

    def __post_init__(self) -> None:
        if self.source_index >= self.target_index:
            raise ValueError(
                f"edge endpoints must satisfy source < target, got {self.source_index} -> {self.target_index}"
            )

    def touches(self, node_id: int) -> bool:
        return self.source_index == node_id or self.target_index == node_id
