"""
Test fixtures for labgraph.

This module provides sample graph texts and helper functions
for testing the graph and the codec.
"""

from labgraph.graph import Graph

DIRECTED_WEIGHTED = """\
DIRECTED WEIGHTED
A B
A B 2.5
"""

UNDIRECTED_UNWEIGHTED = """\
UNDIRECTED UNWEIGHTED
A B C D
A B
B C
"""

# Header tokens in any case and order, blank lines scattered around
MIXED_CASE_HEADER = """\

weighted   Directed

X Y Z

X Y 3
Y Z 0.5

"""

# One good line surrounded by lines that must only produce warnings
WITH_BAD_LINES = """\
UNDIRECTED WEIGHTED
A B C
A B 4
A Q 1
B A 7
A
C C heavy
"""

ADJACENCY_WEIGHTED = """\
UNDIRECTED WEIGHTED
A B C D
A: B(2.0) C(0.5)
B: A(2.0)
C: A(0.5)
D
"""

HEADER_ONLY = """\
DIRECTED WEIGHTED

"""


def make_graph(
    directed: bool = False,
    weighted: bool = False,
    vertices: str = "ABC",
    edges: tuple = (),
) -> Graph:
    """Build a graph from single-character vertex labels and (u, v[, w]) edges."""
    graph = Graph.from_vertices(vertices, directed=directed, weighted=weighted)
    for edge in edges:
        graph.add_edge(*edge)
    return graph
