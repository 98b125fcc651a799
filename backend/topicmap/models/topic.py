"""Topic input record.

Classes:
    TopicVector: One extracted topic with its importance, context sentence, and embedding.
"""

from __future__ import annotations

from dataclasses import dataclass

DEFAULT_IMPORTANCE = 5.0
MIN_IMPORTANCE = 1.0
MAX_IMPORTANCE = 10.0


@dataclass(frozen=True, slots=True)
class TopicVector:
    text: str
    importance: float
    context: str
    embedding: tuple[float, ...]

    @property
    def dim(self) -> int:
        return len(self.embedding)
