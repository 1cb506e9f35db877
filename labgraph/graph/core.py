"""
Graph Core for labgraph

This module provides the Graph class: a labeled graph that is either
directed or undirected, weighted or unweighted, held entirely in memory.

Design Decisions:
    - Uses a NetworkX DiGraph as the adjacency store for both variants
    - Undirected edges are stored as two explicit entries (u -> v, v -> u)
      so the mirror invariant can be checked rather than assumed
    - Self-loops are stored once
    - Edge weights live in the "weight" edge attribute
    - Every check runs before the store is touched; forward and mirror
      entries are written and removed by a single routine

Graph Properties:
    - directed / weighted are fixed at construction
    - Unweighted graphs store 1.0 for every edge, whatever the caller passes
    - Vertices and neighbors enumerate in insertion order
    - Labels must be hashable and totally ordered (ordering is only used to
      report each undirected edge once)
"""

import logging
from typing import Generic, Iterable, Iterator

import networkx as nx

from labgraph.errors import (
    ConsistencyError,
    DuplicateEdgeError,
    EdgeNotFoundError,
    VertexNotFoundError,
)
from labgraph.models import DEFAULT_WEIGHT, Edge, V

logger = logging.getLogger(__name__)


class Graph(Generic[V]):
    """
    A directed or undirected, weighted or unweighted labeled graph.

    Wraps a NetworkX DiGraph and enforces the invariants between the
    variants:
    - Every adjacency entry references existing vertices
    - Undirected edges exist in both directions with the same weight
    - Unweighted graphs only store the default weight
    - An edge can be added at most once per direction
    - Removing a vertex removes every entry that references it

    Attributes:
        directed: True if edges are one-way
        weighted: True if edges carry caller-supplied weights

    Usage:
        graph = Graph(directed=False, weighted=True)
        graph.add_vertex("A")
        graph.add_vertex("B")
        graph.add_edge("A", "B", 2.5)
        for edge in graph.get_edge_list():
            print(edge)
    """

    def __init__(self, directed: bool = False, weighted: bool = False) -> None:
        """
        Initialize an empty graph.

        Args:
            directed: Whether edges are one-way
            weighted: Whether edges keep the weight passed to add_edge
        """
        self._directed = directed
        self._weighted = weighted
        self._store: nx.DiGraph = nx.DiGraph()

    @classmethod
    def from_vertices(
        cls,
        vertices: Iterable[V],
        directed: bool = False,
        weighted: bool = False,
    ) -> "Graph[V]":
        """
        Create an edgeless graph holding the given vertices.

        Duplicate labels are ignored.
        """
        graph = cls(directed=directed, weighted=weighted)
        for vertex in vertices:
            graph.add_vertex(vertex)
        return graph

    @property
    def directed(self) -> bool:
        """Whether edges are one-way."""
        return self._directed

    @property
    def weighted(self) -> bool:
        """Whether edges keep caller-supplied weights."""
        return self._weighted

    @property
    def vertices(self) -> list[V]:
        """All vertex labels in insertion order."""
        return list(self._store.nodes)

    @property
    def vertex_count(self) -> int:
        """Return the number of vertices in the graph."""
        return self._store.number_of_nodes()

    @property
    def edge_count(self) -> int:
        """Return the number of edges, counting each undirected edge once."""
        return len(self.get_edge_list())

    # Vertex operations

    def add_vertex(self, vertex: V) -> bool:
        """
        Add a vertex with no neighbors.

        Args:
            vertex: Label of the new vertex

        Returns:
            True if the vertex was added, False if it was already present
        """
        if vertex in self._store:
            return False
        self._store.add_node(vertex)
        logger.debug("Added vertex %s", vertex)
        return True

    def remove_vertex(self, vertex: V) -> bool:
        """
        Remove a vertex and every edge that touches it.

        Args:
            vertex: Label of the vertex to remove

        Returns:
            True if the vertex was removed, False if it was not present
        """
        if vertex not in self._store:
            return False
        # Drops both outgoing and incoming entries, so mirrors go too.
        self._store.remove_node(vertex)
        logger.debug("Removed vertex %s", vertex)
        return True

    def contains_vertex(self, vertex: V) -> bool:
        """Check whether a vertex is in the graph."""
        return vertex in self._store

    # Edge operations

    def add_edge(self, source: V, target: V, weight: float = DEFAULT_WEIGHT) -> None:
        """
        Add an edge between two existing vertices.

        In an undirected graph the mirror entry (target -> source) is added
        as well, unless the edge is a self-loop. In an unweighted graph the
        weight argument is ignored and 1.0 is stored.

        Args:
            source: Label of the start vertex
            target: Label of the end vertex
            weight: Edge weight (only kept by weighted graphs)

        Raises:
            VertexNotFoundError: If either endpoint is missing
            DuplicateEdgeError: If source -> target already exists
            ConsistencyError: If an undirected graph already holds
                target -> source without source -> target
        """
        if source not in self._store:
            raise VertexNotFoundError(source)
        if target not in self._store:
            raise VertexNotFoundError(target)

        weight = float(weight) if self._weighted else DEFAULT_WEIGHT

        if self._store.has_edge(source, target):
            raise DuplicateEdgeError(source, target)
        if self._mirrors(source, target) and self._store.has_edge(target, source):
            raise ConsistencyError(source, target)

        self._link(source, target, weight)
        logger.debug("Added edge %s -> %s (%s)", source, target, weight)

    def remove_edge(self, source: V, target: V) -> bool:
        """
        Remove an edge (and its mirror in an undirected graph).

        Returns:
            True if the edge was removed, False if source or the edge
            is missing
        """
        if source not in self._store:
            return False
        if not self._store.has_edge(source, target):
            return False

        self._unlink(source, target)
        logger.debug("Removed edge %s -> %s", source, target)
        return True

    def has_edge(self, source: V, target: V) -> bool:
        """Check whether the entry source -> target is stored."""
        return self._store.has_edge(source, target)

    def get_weight(self, source: V, target: V) -> float:
        """
        Get the weight of the entry source -> target.

        Raises:
            VertexNotFoundError: If source is missing
            EdgeNotFoundError: If the entry is not stored
        """
        if source not in self._store:
            raise VertexNotFoundError(source)
        if not self._store.has_edge(source, target):
            raise EdgeNotFoundError(source, target)
        return self._store[source][target]["weight"]

    def neighbors(self, vertex: V) -> dict[V, float]:
        """
        Get the adjacency set of a vertex.

        Args:
            vertex: The vertex label

        Returns:
            A new dict mapping each neighbor to the edge weight

        Raises:
            VertexNotFoundError: If the vertex is missing
        """
        if vertex not in self._store:
            raise VertexNotFoundError(vertex)
        return {
            neighbor: attrs["weight"]
            for neighbor, attrs in self._store[vertex].items()
        }

    def degree(self, vertex: V) -> int:
        """Return the number of adjacency entries leaving a vertex."""
        if vertex not in self._store:
            raise VertexNotFoundError(vertex)
        return len(self._store[vertex])

    def get_edge_list(self) -> list[Edge]:
        """
        Enumerate every edge once.

        Directed graphs report every stored entry. Undirected graphs report
        only entries with source <= target, so each mirrored pair (and each
        self-loop) appears exactly once.

        Returns:
            List of Edges in vertex insertion order
        """
        edges = []
        for source, adjacency in self._store.adjacency():
            for target, attrs in adjacency.items():
                # source <= target
                if self._directed or not target < source:
                    edges.append(Edge(source, target, attrs["weight"]))
        return edges

    # Copying and conversion

    def copy(self) -> "Graph[V]":
        """Return an independent copy with the same flags, vertices and edges."""
        clone = type(self)(directed=self._directed, weighted=self._weighted)
        clone._store = self._store.copy()
        return clone

    def __copy__(self) -> "Graph[V]":
        return self.copy()

    def to_networkx(self) -> nx.Graph:
        """
        Export the graph as a standalone NetworkX graph.

        Returns:
            A DiGraph for directed graphs, a Graph otherwise, with each
            edge's weight in the "weight" attribute
        """
        if self._directed:
            return self._store.copy()

        exported = nx.Graph()
        exported.add_nodes_from(self._store.nodes)
        for edge in self.get_edge_list():
            exported.add_edge(edge.source, edge.target, weight=edge.weight)
        return exported

    # Description

    def describe(self) -> str:
        """
        Render a human-readable dump of the graph.

        Lists the flags, the vertex count and one line per vertex with its
        neighbors, or "(isolated)" when it has none.
        """
        lines = [
            f"Graph (directed: {self._directed}, weighted: {self._weighted})",
            f"Vertices: {self.vertex_count}",
        ]
        for vertex, adjacency in self._store.adjacency():
            if not adjacency:
                lines.append(f"{vertex}: (isolated)")
                continue
            if self._weighted:
                labels = [f"{n}({attrs['weight']})" for n, attrs in adjacency.items()]
            else:
                labels = [str(n) for n in adjacency]
            lines.append(f"{vertex}: {', '.join(labels)}")
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return (
            f"Graph(directed={self._directed}, weighted={self._weighted}, "
            f"vertices={self.vertex_count}, edges={self.edge_count})"
        )

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._store

    def __iter__(self) -> Iterator[V]:
        return iter(self._store.nodes)

    def __len__(self) -> int:
        return self.vertex_count

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Graph):
            return NotImplemented
        return (
            self._directed == other._directed
            and self._weighted == other._weighted
            and set(self._store.nodes) == set(other._store.nodes)
            and self._entries() == other._entries()
        )

    # Internal helpers

    def _mirrors(self, source: V, target: V) -> bool:
        """Whether an edge between source and target needs a mirror entry."""
        return not self._directed and source != target

    def _link(self, source: V, target: V, weight: float) -> None:
        """Write the forward entry and, when needed, its mirror."""
        entries = [(source, target, {"weight": weight})]
        if self._mirrors(source, target):
            entries.append((target, source, {"weight": weight}))
        self._store.add_edges_from(entries)

    def _unlink(self, source: V, target: V) -> None:
        """Delete the forward entry and, when present, its mirror."""
        entries = [(source, target)]
        if self._mirrors(source, target):
            entries.append((target, source))
        # remove_edges_from skips entries that are already gone
        self._store.remove_edges_from(entries)

    def _entries(self) -> dict[tuple[V, V], float]:
        return {
            (source, target): weight
            for source, target, weight in self._store.edges(data="weight")
        }
