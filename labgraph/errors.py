"""
Exceptions raised by labgraph.

All graph-level failures derive from GraphError so callers (the CLI shell,
the codec's per-line loop) can catch them in one place. Missing files and
other I/O failures are left as the builtin FileNotFoundError / OSError.
"""

from typing import Any


class GraphError(Exception):
    """Base class for every error raised by the graph and the codec."""


class VertexNotFoundError(GraphError, KeyError):
    """An edge operation referenced a vertex that is not in the graph."""

    def __init__(self, vertex: Any) -> None:
        super().__init__(vertex)
        self.vertex = vertex

    def __str__(self) -> str:
        return f"Vertex {self.vertex} does not exist."


class EdgeNotFoundError(GraphError, KeyError):
    """A query referenced an edge that is not stored."""

    def __init__(self, source: Any, target: Any) -> None:
        super().__init__(source, target)
        self.source = source
        self.target = target

    def __str__(self) -> str:
        return f"Edge from {self.source} to {self.target} does not exist."


class DuplicateEdgeError(GraphError):
    """The edge being added is already stored in that direction."""

    def __init__(self, source: Any, target: Any) -> None:
        super().__init__(f"Edge from {source} to {target} already exists.")
        self.source = source
        self.target = target


class ConsistencyError(GraphError):
    """
    An undirected graph holds a mirror entry without its forward entry.

    This only happens if the adjacency store was corrupted; no repair is
    attempted.
    """

    def __init__(self, source: Any, target: Any) -> None:
        super().__init__(
            f"Edge from {target} to {source} already exists (consistency error)."
        )
        self.source = source
        self.target = target


class FileFormatError(GraphError, ValueError):
    """Graph text is missing its header or vertex line."""
