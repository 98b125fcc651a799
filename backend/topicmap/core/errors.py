"""Domain exceptions raised by the graph pipeline.

Classes:
    InvalidInputError: Caller supplied topics/embeddings the pipeline cannot process.
    GraphAssemblyError: Internal precondition violated while assembling a graph snapshot.
"""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when the topic/embedding payload fails validation."""


class GraphAssemblyError(RuntimeError):
    """Raised when pipeline stages hand the assembler inconsistent data."""


__all__ = ["GraphAssemblyError", "InvalidInputError"]
