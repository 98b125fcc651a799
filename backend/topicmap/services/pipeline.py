"""Topic graph pipeline orchestration.

Classes:
    PipelineResult: Assembled graph plus projection diagnostics and stage timings.
    GraphPipeline: Validates topic payloads and runs similarity, projection, layout, and assembly in order.

Functions:
    prepare_topics(raw_topics, embeddings): Convert extractor output into validated TopicVector records.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

import numpy as np

from topicmap.core.config import PipelineConfig
from topicmap.core.errors import InvalidInputError
from topicmap.core.timing import StageTimer
from topicmap.models import DEFAULT_IMPORTANCE, MAX_IMPORTANCE, MIN_IMPORTANCE, Graph, TopicVector
from topicmap.services.assembler import assemble_graph
from topicmap.services.layout import ForceSimulation
from topicmap.services.projection import ProjectionResult, reduce_to_3d
from topicmap.services.similarity import build_similarity_edges
from topicmap.utils.text import normalise_label

_LOGGER = logging.getLogger(__name__)


@dataclass(slots=True)
class PipelineResult:
    graph: Graph
    projection: ProjectionResult
    layout_ticks: int
    config: PipelineConfig
    timings: dict[str, Any] = field(default_factory=dict)


def _coerce_importance(value: Any, index: int) -> float:
    if value is None:
        return DEFAULT_IMPORTANCE
    try:
        importance = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Topic {index} has a non-numeric importance: {value!r}") from exc
    if not math.isfinite(importance):
        raise InvalidInputError(f"Topic {index} has a non-finite importance")
    return min(MAX_IMPORTANCE, max(MIN_IMPORTANCE, importance))


def prepare_topics(
    raw_topics: Sequence[Mapping[str, Any]],
    embeddings: Sequence[Sequence[float]],
    *,
    min_topics: int = 2,
) -> list[TopicVector]:
    if len(raw_topics) != len(embeddings):
        raise InvalidInputError(
            f"Received {len(raw_topics)} topics but {len(embeddings)} embeddings; counts must match."
        )
    topics: list[TopicVector] = []
    for index, (raw, vector) in enumerate(zip(raw_topics, embeddings)):
        text = normalise_label(raw.get("topic") or raw.get("text"))
        if not text:
            raise InvalidInputError(f"Topic {index} has no text.")
        try:
            embedding = tuple(float(value) for value in vector)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Embedding for topic {index} is not a numeric vector.") from exc
        topics.append(
            TopicVector(
                text=text,
                importance=_coerce_importance(raw.get("importance"), index),
                context=normalise_label(raw.get("context")),
                embedding=embedding,
            )
        )
    validate_topics(topics, min_topics=min_topics)
    return topics


def validate_topics(topics: Sequence[TopicVector], *, min_topics: int = 2) -> np.ndarray:
    """Check pipeline preconditions and return the embedding matrix."""

    if len(topics) < min_topics:
        raise InvalidInputError(
            f"At least {min_topics} topics are required to build a map; received {len(topics)}."
        )
    dims = {topic.dim for topic in topics}
    if 0 in dims:
        empty = next(index for index, topic in enumerate(topics) if topic.dim == 0)
        raise InvalidInputError(f"Embedding for topic {empty} is empty.")
    if len(dims) != 1:
        raise InvalidInputError(f"Embeddings must share one dimension; found {sorted(dims)}.")
    matrix = np.asarray([topic.embedding for topic in topics], dtype=np.float64)
    if not np.all(np.isfinite(matrix)):
        bad_rows = np.flatnonzero(~np.all(np.isfinite(matrix), axis=1)).tolist()
        raise InvalidInputError(f"Embeddings contain non-finite values for topics {bad_rows}.")
    return matrix


class GraphPipeline:
    def __init__(self, config: PipelineConfig | None = None) -> None:
        self._config = config or PipelineConfig()

    @property
    def config(self) -> PipelineConfig:
        return self._config

    def run_payload(
        self,
        raw_topics: Sequence[Mapping[str, Any]],
        embeddings: Sequence[Sequence[float]],
    ) -> PipelineResult:
        topics = prepare_topics(raw_topics, embeddings, min_topics=self._config.min_topics)
        return self.run(topics)

    def run(self, topics: Sequence[TopicVector]) -> PipelineResult:
        config = self._config
        matrix = validate_topics(topics, min_topics=config.min_topics)
        timer = StageTimer()

        with timer.track("similarity"):
            edges = build_similarity_edges(matrix, config.similarity.threshold)
        with timer.track("projection"):
            projection = reduce_to_3d(matrix, config.projection)
        with timer.track("layout"):
            simulation = ForceSimulation(projection.positions, edges, config.layout)
            positions = simulation.run()
        with timer.track("assembly"):
            graph = assemble_graph(topics, positions, edges)

        timings = timer.snapshot()
        _LOGGER.info(
            "Built topic graph with %d nodes and %d edges (projection=%s, ticks=%d) in %.1f ms",
            len(graph.nodes),
            len(graph.edges),
            projection.method,
            simulation.ticks,
            timings["total_duration_ms"],
        )
        for warning in projection.warnings:
            _LOGGER.warning("Projection warning for %d topics: %s", len(topics), warning)
        return PipelineResult(
            graph=graph,
            projection=projection,
            layout_ticks=simulation.ticks,
            config=config,
            timings=timings,
        )


__all__ = ["GraphPipeline", "PipelineResult", "prepare_topics", "validate_topics"]
