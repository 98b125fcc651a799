"""3D coordinate value.

Classes:
    Position3D: Immutable point in layout space.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence


@dataclass(frozen=True, slots=True)
class Position3D:
    x: float
    y: float
    z: float

    @classmethod
    def from_sequence(cls, values: Sequence[float]) -> "Position3D":
        if len(values) != 3:
            raise ValueError(f"expected 3 coordinates, got {len(values)}")
        return cls(float(values[0]), float(values[1]), float(values[2]))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)
