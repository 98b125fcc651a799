"""Pydantic schemas for the topic graph request and response payloads.
Classes:
    TopicPayload, GraphOptions, GraphRequest: Extractor output plus per-request tuning overrides.
    NodePoint, EdgeLink: Visualisation payload primitives consumed by the renderer.
    ProjectionSummary, StageTiming: Diagnostics describing how the layout was produced.
    GraphResponse: Complete positioned graph returned by the graph endpoint.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TopicPayload(BaseModel):
    topic: str = Field(min_length=1, max_length=500)
    importance: Optional[float] = None
    context: str = Field(default="", max_length=4000)

    @field_validator("topic")
    @classmethod
    def trim_topic(cls, value: str) -> str:
        text = value.strip()
        if not text:
            raise ValueError("topic must not be blank")
        return text

    @field_validator("context", mode="before")
    @classmethod
    def normalise_context(cls, value: Optional[str]) -> str:
        if value is None:
            return ""
        return str(value).strip()


class GraphOptions(BaseModel):
    similarity_threshold: Optional[float] = Field(default=None, ge=-1.0, le=1.0)
    seed: Optional[int] = Field(default=None, ge=0)
    perplexity: Optional[float] = Field(default=None, gt=0.0, le=100.0)
    max_iter: Optional[int] = Field(default=None, ge=250, le=5000)
    max_ticks: Optional[int] = Field(default=None, ge=1, le=5000)


class GraphRequest(BaseModel):
    topics: list[TopicPayload]
    embeddings: list[list[float]]
    options: Optional[GraphOptions] = None


class NodePoint(BaseModel):
    id: int
    text: str
    position: list[float]
    size: float
    context: str = ""


class EdgeLink(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    from_: int = Field(alias="from")
    to: int
    similarity: float


class ProjectionSummary(BaseModel):
    method: str
    params: dict[str, Any] = Field(default_factory=dict)
    trustworthiness: Optional[float] = None
    warnings: list[str] = Field(default_factory=list)


class StageTiming(BaseModel):
    name: str
    duration_ms: float
    offset_ms: Optional[float] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None


class GraphResponse(BaseModel):
    nodes: list[NodePoint]
    edges: list[EdgeLink]
    node_count: int
    edge_count: int
    similarity_threshold: float
    projection: ProjectionSummary
    layout_ticks: int
    processing_time_ms: Optional[float] = None
    stage_timings: list[StageTiming] = Field(default_factory=list)
