"""
Codec module for labgraph.

This module provides parsing and serialization of the line-oriented graph
text format, plus file load/save helpers.
"""

from labgraph.codec.text import (
    DEFAULT_FORMAT,
    load_graph,
    load_graph_with_warnings,
    parse,
    parse_with_warnings,
    save_graph,
    serialize,
)

__all__ = [
    "DEFAULT_FORMAT",
    "load_graph",
    "load_graph_with_warnings",
    "parse",
    "parse_with_warnings",
    "save_graph",
    "serialize",
]
