"""
Graph module for labgraph.

This module provides the in-memory Graph class built on a NetworkX
adjacency store.
"""

from labgraph.graph.core import Graph

__all__ = [
    "Graph",
]
