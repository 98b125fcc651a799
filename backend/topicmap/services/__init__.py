"""Service layer exports.

Expose the graph pipeline stages and the interaction controller for easy importing.
"""

from .similarity import build_similarity_edges, cosine_similarity_matrix
from .projection import ProjectionResult, reduce_to_3d
from .layout import ForceSimulation, relax
from .assembler import assemble_graph
from .interaction import InteractionController, edge_visual_state, node_visual_state
from .pipeline import GraphPipeline, PipelineResult

__all__ = [
    "build_similarity_edges",
    "cosine_similarity_matrix",
    "ProjectionResult",
    "reduce_to_3d",
    "ForceSimulation",
    "relax",
    "assemble_graph",
    "InteractionController",
    "edge_visual_state",
    "node_visual_state",
    "GraphPipeline",
    "PipelineResult",
]
