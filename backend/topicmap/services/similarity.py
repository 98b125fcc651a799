"""Cosine similarity graph construction.

Functions:
    cosine_similarity_matrix(vectors): Symmetric pairwise cosine similarity, zero for zero-magnitude rows.
    build_similarity_edges(vectors, threshold): Emit one Edge per pair whose similarity exceeds the threshold.
"""

from __future__ import annotations

import logging

import numpy as np
from numpy.typing import ArrayLike

from topicmap.models import Edge

_LOGGER = logging.getLogger(__name__)
_EPS = 1e-12

DEFAULT_THRESHOLD = 0.82


def _as_matrix(vectors: ArrayLike) -> np.ndarray:
    matrix = np.asarray(vectors, dtype=np.float64)
    if matrix.ndim == 1:
        matrix = matrix.reshape(-1, 1)
    return matrix


def cosine_similarity_matrix(vectors: ArrayLike) -> np.ndarray:
    matrix = _as_matrix(vectors)
    if matrix.shape[0] == 0:
        return np.zeros((0, 0), dtype=np.float64)
    norms = np.linalg.norm(matrix, axis=1)
    zero_rows = norms <= _EPS
    if zero_rows.any():
        _LOGGER.debug("Treating %d zero-magnitude embedding(s) as dissimilar to everything", int(zero_rows.sum()))
    safe_norms = np.where(zero_rows, 1.0, norms)
    unit = matrix / safe_norms[:, None]
    unit[zero_rows] = 0.0
    similarity = unit @ unit.T
    similarity = 0.5 * (similarity + similarity.T)
    return np.clip(similarity, -1.0, 1.0)


def build_similarity_edges(vectors: ArrayLike, threshold: float = DEFAULT_THRESHOLD) -> list[Edge]:
    similarity = cosine_similarity_matrix(vectors)
    n = similarity.shape[0]
    if n < 2:
        return []
    rows, cols = np.triu_indices(n, k=1)
    scores = similarity[rows, cols]
    mask = scores > threshold
    edges = [
        Edge(source_index=int(i), target_index=int(j), similarity=float(score))
        for i, j, score in zip(rows[mask], cols[mask], scores[mask])
    ]
    _LOGGER.debug("Built %d similarity edges from %d pairs at threshold %.3f", len(edges), scores.size, threshold)
    return edges


__all__ = ["DEFAULT_THRESHOLD", "build_similarity_edges", "cosine_similarity_matrix"]
