"""Dimensionality reduction from embedding space to 3D seed coordinates.

Classes:
    ProjectionResult: 3D coordinates plus the method and parameters that produced them.

Functions:
    resolve_perplexity(configured, sample_count): Clamp perplexity into the range t-SNE accepts.
    compute_tsne(data, ...): Run exact t-SNE into three dimensions.
    compute_pca_projection(data): Deterministic PCA projection padded to three dimensions.
    compute_trustworthiness(data, coords): Neighbourhood preservation score of a projection.
    scale_coordinates(coords, scale): Centre a point cloud and fit it into [-scale, scale].
    reduce_to_3d(vectors, config): Full reducer with degenerate-input and non-finite fallbacks.

t-SNE is stochastic. With ``seed=None`` two runs over the same embeddings produce
different absolute coordinates; only the neighbourhood structure is comparable.
Pass a seed for reproducible output.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
from numpy.typing import ArrayLike
from scipy.spatial.distance import pdist
from sklearn.decomposition import PCA
from sklearn.manifold import TSNE, trustworthiness

from topicmap.core.config import ProjectionConfig
from topicmap.models import Position3D

_LOGGER = logging.getLogger(__name__)
_EPS = 1e-9
_TSNE_MIN_ITER = 250
_TRUSTWORTHINESS_NEIGHBORS = 5


@dataclass(slots=True)
class ProjectionResult:
    coords_3d: np.ndarray
    method: str
    resolved_params: dict[str, Any] = field(default_factory=dict)
    trustworthiness: Optional[float] = None
    warnings: list[str] = field(default_factory=list)

    @property
    def positions(self) -> tuple[Position3D, ...]:
        return tuple(Position3D.from_sequence(row) for row in self.coords_3d.tolist())


def _as_matrix(data: ArrayLike) -> np.ndarray:
    matrix = np.asarray(data, dtype=np.float64)
    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    return matrix


def resolve_perplexity(configured: float, sample_count: int) -> float:
    if sample_count < 2:
        return 1.0
    return float(max(1.0, min(configured, sample_count - 1)))


def compute_tsne(
    data: ArrayLike,
    *,
    random_state: Optional[int] = None,
    perplexity: float = 15.0,
    early_exaggeration: float = 4.0,
    learning_rate: float = 10.0,
    max_iter: int = 1000,
) -> np.ndarray:
    matrix = _as_matrix(data)
    n = matrix.shape[0]
    if n < 2:
        return np.zeros((n, 3), dtype=np.float64)
    tsne = TSNE(
        n_components=3,
        perplexity=resolve_perplexity(perplexity, n),
        early_exaggeration=max(1.0, early_exaggeration),
        learning_rate=max(1.0, learning_rate),
        max_iter=max(_TSNE_MIN_ITER, int(max_iter)),
        metric="euclidean",
        init="random",
        method="exact",
        random_state=random_state,
    )
    return np.asarray(tsne.fit_transform(matrix), dtype=np.float64)


def compute_pca_projection(data: ArrayLike) -> np.ndarray:
    matrix = _as_matrix(data)
    n = matrix.shape[0]
    coords = np.zeros((n, 3), dtype=np.float64)
    if n < 2 or matrix.shape[1] == 0:
        return coords
    n_components = min(3, n, matrix.shape[1])
    centred = matrix - matrix.mean(axis=0, keepdims=True)
    if not np.any(np.abs(centred) > _EPS):
        return coords
    reduced = PCA(n_components=n_components, svd_solver="full").fit_transform(centred)
    coords[:, :n_components] = np.nan_to_num(reduced, nan=0.0, posinf=0.0, neginf=0.0)
    return coords


def compute_trustworthiness(data: ArrayLike, coords: ArrayLike) -> Optional[float]:
    matrix = _as_matrix(data)
    embedded = _as_matrix(coords)
    n = matrix.shape[0]
    n_neighbors = min(_TRUSTWORTHINESS_NEIGHBORS, (n - 1) // 2)
    if n_neighbors < 1 or embedded.shape[0] != n:
        return None
    try:
        score = trustworthiness(matrix, embedded, n_neighbors=n_neighbors)
    except ValueError:
        _LOGGER.debug("Trustworthiness unavailable for %d points", n, exc_info=True)
        return None
    if not np.isfinite(score):
        return None
    return float(np.clip(score, 0.0, 1.0))


def scale_coordinates(coords: ArrayLike, scale: float) -> np.ndarray:
    points = _as_matrix(coords)
    if points.size == 0:
        return points.reshape(0, 3)
    centred = points - points.mean(axis=0, keepdims=True)
    extent = float(np.max(np.abs(centred)))
    if not np.isfinite(extent) or extent <= _EPS:
        return np.zeros_like(centred)
    return centred * (scale / extent)


def _jitter_cloud(n: int, config: ProjectionConfig) -> np.ndarray:
    rng = np.random.default_rng(config.seed)
    return rng.uniform(-1.0, 1.0, size=(n, 3)) * config.jitter * config.seed_scale


def _has_spread(matrix: np.ndarray) -> bool:
    if matrix.shape[0] < 2 or matrix.shape[1] == 0:
        return False
    return bool(np.max(pdist(matrix)) > _EPS)


def reduce_to_3d(vectors: ArrayLike, config: ProjectionConfig | None = None) -> ProjectionResult:
    config = config or ProjectionConfig()
    matrix = _as_matrix(vectors)
    n = matrix.shape[0]
    params: dict[str, Any] = {
        "perplexity": resolve_perplexity(config.perplexity, n),
        "early_exaggeration": config.early_exaggeration,
        "learning_rate": config.learning_rate,
        "max_iter": max(_TSNE_MIN_ITER, int(config.max_iter)),
        "seed": config.seed,
        "seed_scale": config.seed_scale,
    }
    warnings: list[str] = []

    if not _has_spread(matrix):
        _LOGGER.debug("All %d embeddings coincide; seeding layout with a jitter cloud", n)
        warnings.append("degenerate-embeddings")
        return ProjectionResult(
            coords_3d=_jitter_cloud(n, config),
            method="jitter",
            resolved_params=params,
            warnings=warnings,
        )

    method = "tsne"
    coords = compute_tsne(
        matrix,
        random_state=config.seed,
        perplexity=params["perplexity"],
        early_exaggeration=config.early_exaggeration,
        learning_rate=config.learning_rate,
        max_iter=params["max_iter"],
    )
    if not np.all(np.isfinite(coords)):
        _LOGGER.warning("t-SNE produced non-finite coordinates for %d points; falling back to PCA", n)
        warnings.append("tsne-non-finite")
        method = "pca"
        coords = compute_pca_projection(matrix)

    scaled = scale_coordinates(coords, config.seed_scale)
    if not np.any(np.abs(scaled) > _EPS):
        warnings.append("collapsed-projection")
        method = "jitter"
        scaled = _jitter_cloud(n, config)

    return ProjectionResult(
        coords_3d=scaled,
        method=method,
        resolved_params=params,
        trustworthiness=compute_trustworthiness(matrix, scaled),
        warnings=warnings,
    )


__all__ = [
    "ProjectionResult",
    "compute_pca_projection",
    "compute_trustworthiness",
    "compute_tsne",
    "reduce_to_3d",
    "resolve_perplexity",
    "scale_coordinates",
]
