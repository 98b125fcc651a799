"""Topic graph endpoint turning extractor output into a positioned, connected 3D map.

Endpoints:
    build_graph(payload, settings): Validate topics/embeddings, run the pipeline, and serialise the graph.

Helpers:
    _to_graph_response(result): Convert a PipelineResult into its response schema.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool

from topicmap.core.config import PipelineConfig, Settings, get_settings
from topicmap.core.errors import InvalidInputError
from topicmap.schemas import (
    EdgeLink,
    GraphRequest,
    GraphResponse,
    NodePoint,
    ProjectionSummary,
    StageTiming,
)
from topicmap.services.pipeline import GraphPipeline, PipelineResult

router = APIRouter(prefix="/graph", tags=["graph"])


def _to_graph_response(result: PipelineResult) -> GraphResponse:
    graph = result.graph
    projection = result.projection
    return GraphResponse(
        nodes=[
            NodePoint(
                id=node.id,
                text=node.text,
                position=list(node.position.as_tuple()),
                size=node.size,
                context=node.context,
            )
            for node in graph.nodes
        ],
        edges=[
            EdgeLink(from_=edge.source_index, to=edge.target_index, similarity=edge.similarity)
            for edge in graph.edges
        ],
        node_count=len(graph.nodes),
        edge_count=len(graph.edges),
        similarity_threshold=result.config.similarity.threshold,
        projection=ProjectionSummary(
            method=projection.method,
            params=dict(projection.resolved_params),
            trustworthiness=projection.trustworthiness,
            warnings=list(projection.warnings),
        ),
        layout_ticks=result.layout_ticks,
        processing_time_ms=result.timings.get("total_duration_ms"),
        stage_timings=[
            StageTiming(
                name=stage["name"],
                duration_ms=stage["duration_ms"],
                offset_ms=stage.get("offset_ms"),
                started_at=stage.get("started_at"),
                finished_at=stage.get("finished_at"),
            )
            for stage in result.timings.get("stages", [])
        ],
    )


@router.post("", response_model=GraphResponse)
async def build_graph(
    payload: GraphRequest,
    settings: Settings = Depends(get_settings),
) -> GraphResponse:
    overrides = payload.options.model_dump(exclude_none=True) if payload.options else None
    pipeline = GraphPipeline(PipelineConfig.from_settings(settings, overrides))
    raw_topics = [topic.model_dump() for topic in payload.topics]
    try:
        result = await run_in_threadpool(pipeline.run_payload, raw_topics, payload.embeddings)
    except InvalidInputError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    return _to_graph_response(result)
