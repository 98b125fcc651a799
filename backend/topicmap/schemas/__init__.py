"""Convenience exports for API schemas.

Re-exports the pydantic models used across the backend so consumers can import from one module.
"""

from .graph import (
    EdgeLink,
    GraphOptions,
    GraphRequest,
    GraphResponse,
    NodePoint,
    ProjectionSummary,
    StageTiming,
    TopicPayload,
)

__all__ = [
    "TopicPayload",
    "GraphOptions",
    "GraphRequest",
    "NodePoint",
    "EdgeLink",
    "ProjectionSummary",
    "StageTiming",
    "GraphResponse",
]
