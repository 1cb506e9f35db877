"""
labgraph

In-memory labeled graphs (directed or undirected, weighted or unweighted)
with a line-oriented text format for loading and saving them.
"""

from labgraph.errors import (
    ConsistencyError,
    DuplicateEdgeError,
    EdgeNotFoundError,
    FileFormatError,
    GraphError,
    VertexNotFoundError,
)
from labgraph.graph import Graph
from labgraph.models import DEFAULT_WEIGHT, Edge, ParseResult, ParseWarning, SaveFormat

__all__ = [
    "ConsistencyError",
    "DEFAULT_WEIGHT",
    "DuplicateEdgeError",
    "Edge",
    "EdgeNotFoundError",
    "FileFormatError",
    "Graph",
    "GraphError",
    "ParseResult",
    "ParseWarning",
    "SaveFormat",
    "VertexNotFoundError",
]
__version__ = "0.1.0"
