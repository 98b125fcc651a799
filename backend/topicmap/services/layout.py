"""Force-directed refinement of 3D seed positions.

Classes:
    ForceSimulation: Stepwise link/charge/center simulation under a decaying alpha.

Functions:
    relax(positions, edges, config): Run a simulation to completion and return the settled positions.

Each tick decays alpha toward ``alpha_target``, accumulates link, charge, and center
forces into per-node velocities, damps the velocities, and advances positions.
Ticks are strictly sequential; ``iter_ticks`` lets a render loop interleave its own
work between ticks without changing their order.
"""

from __future__ import annotations

import logging
from typing import Iterator, Sequence

import numpy as np

from topicmap.core.config import LayoutConfig
from topicmap.models import Edge, Position3D

_LOGGER = logging.getLogger(__name__)
_COINCIDENT_EPS = 1e-12
_JIGGLE = 1e-6


class ForceSimulation:
    def __init__(
        self,
        positions: Sequence[Position3D],
        edges: Sequence[Edge],
        config: LayoutConfig | None = None,
    ) -> None:
        self._config = config or LayoutConfig()
        self._rng = np.random.default_rng(self._config.seed)
        coords = np.array([position.as_tuple() for position in positions], dtype=np.float64).reshape(-1, 3)
        if not np.all(np.isfinite(coords)):
            _LOGGER.warning("Replacing non-finite seed coordinates with the origin")
            coords = np.nan_to_num(coords, nan=0.0, posinf=0.0, neginf=0.0)
        self._positions = coords
        self._velocities = np.zeros_like(coords)
        n = coords.shape[0]

        sources = np.array([edge.source_index for edge in edges], dtype=np.intp)
        targets = np.array([edge.target_index for edge in edges], dtype=np.intp)
        if sources.size and (min(sources.min(), targets.min()) < 0 or max(sources.max(), targets.max()) >= n):
            raise ValueError(f"edge endpoints must index into {n} positions")
        self._sources = sources
        self._targets = targets
        counts = np.bincount(np.concatenate([sources, targets]), minlength=n).astype(np.float64)
        if sources.size:
            self._bias = counts[sources] / (counts[sources] + counts[targets])
        else:
            self._bias = np.zeros(0, dtype=np.float64)

        self._alpha = float(self._config.alpha)
        self._ticks = 0

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def ticks(self) -> int:
        return self._ticks

    @property
    def coords(self) -> np.ndarray:
        return self._positions.copy()

    @property
    def positions(self) -> tuple[Position3D, ...]:
        return tuple(Position3D.from_sequence(row) for row in self._positions.tolist())

    @property
    def kinetic_energy(self) -> float:
        if self._velocities.size == 0:
            return 0.0
        return float(np.mean(np.sum(self._velocities**2, axis=1)))

    @property
    def done(self) -> bool:
        config = self._config
        if self._ticks >= config.max_ticks:
            return True
        if self._alpha < config.alpha_min:
            return True
        if config.min_kinetic_energy > 0 and self._ticks > 0 and self.kinetic_energy < config.min_kinetic_energy:
            return True
        return False

    def _jiggle(self, shape: tuple[int, ...]) -> np.ndarray:
        return (self._rng.random(shape) - 0.5) * _JIGGLE

    def _apply_link_force(self, alpha: float) -> None:
        if self._sources.size == 0:
            return
        config = self._config
        s, t = self._sources, self._targets
        ahead = self._positions + self._velocities
        delta = ahead[t] - ahead[s]
        degenerate = np.all(delta == 0.0, axis=1)
        if degenerate.any():
            delta[degenerate] = self._jiggle((int(degenerate.sum()), 3))
        length = np.linalg.norm(delta, axis=1)
        factor = (length - config.link_distance) / length * alpha * config.link_strength
        delta *= factor[:, None]
        np.add.at(self._velocities, t, -delta * self._bias[:, None])
        np.add.at(self._velocities, s, delta * (1.0 - self._bias)[:, None])

    def _apply_charge_force(self, alpha: float) -> None:
        n = self._positions.shape[0]
        if n < 2 or self._config.charge_strength == 0:
            return
        diff = self._positions[None, :, :] - self._positions[:, None, :]
        dist2 = np.sum(diff**2, axis=2)
        off_diagonal = ~np.eye(n, dtype=bool)
        coincident = (dist2 <= _COINCIDENT_EPS) & off_diagonal
        if coincident.any():
            # antisymmetric so each coincident pair is pushed apart equally
            jitter = self._jiggle((n, n, 3))
            jitter = jitter - jitter.transpose(1, 0, 2)
            diff = np.where(coincident[:, :, None], jitter, diff)
            dist2 = np.sum(diff**2, axis=2)
        min2 = self._config.distance_min**2
        dist2 = np.where(dist2 < min2, np.sqrt(min2 * dist2), dist2)
        np.fill_diagonal(dist2, np.inf)
        weights = self._config.charge_strength * alpha / dist2
        self._velocities += np.einsum("ij,ijk->ik", weights, diff)

    def _apply_center_force(self) -> None:
        strength = self._config.center_strength
        if strength == 0 or self._positions.shape[0] == 0:
            return
        shift = self._positions.mean(axis=0) * strength
        self._positions -= shift

    def tick(self) -> None:
        config = self._config
        self._alpha += (config.alpha_target - self._alpha) * config.alpha_decay
        previous = self._positions.copy()
        self._apply_link_force(self._alpha)
        self._apply_charge_force(self._alpha)
        self._apply_center_force()
        self._velocities *= 1.0 - config.velocity_decay
        if not np.all(np.isfinite(self._velocities)):
            _LOGGER.debug("Resetting non-finite velocities at tick %d", self._ticks)
            self._velocities = np.nan_to_num(self._velocities, nan=0.0, posinf=0.0, neginf=0.0)
        self._positions += self._velocities
        if not np.all(np.isfinite(self._positions)):
            self._positions = previous
            self._velocities = np.zeros_like(self._velocities)
        self._ticks += 1

    def iter_ticks(self) -> Iterator[tuple[Position3D, ...]]:
        while not self.done:
            self.tick()
            yield self.positions

    def run(self) -> tuple[Position3D, ...]:
        while not self.done:
            self.tick()
        _LOGGER.debug(
            "Force layout settled after %d ticks (alpha=%.5f, energy=%.6f)",
            self._ticks,
            self._alpha,
            self.kinetic_energy,
        )
        return self.positions


def relax(
    positions: Sequence[Position3D],
    edges: Sequence[Edge],
    config: LayoutConfig | None = None,
) -> tuple[Position3D, ...]:
    return ForceSimulation(positions, edges, config).run()


__all__ = ["ForceSimulation", "relax"]
