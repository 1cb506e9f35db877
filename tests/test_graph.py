"""
Tests for the graph module.

Tests Graph mutations, queries and the directed/undirected invariants.
"""

import copy

import networkx as nx
import pytest

from labgraph.errors import (
    ConsistencyError,
    DuplicateEdgeError,
    EdgeNotFoundError,
    VertexNotFoundError,
)
from labgraph.graph import Graph
from labgraph.models import Edge
from tests.fixtures import make_graph


class TestVertices:
    """Tests for adding, removing and querying vertices."""

    def test_add_vertex_is_idempotent(self):
        """Test that adding the same label twice returns True then False."""
        graph = Graph()

        assert graph.add_vertex("A") is True
        before = graph.copy()
        assert graph.add_vertex("A") is False

        assert graph == before
        assert graph.vertices == ["A"]

    def test_vertices_keep_insertion_order(self):
        """Test that vertices enumerate in the order they were added."""
        graph = Graph.from_vertices(["C", "A", "B", "A"])

        assert graph.vertices == ["C", "A", "B"]
        assert len(graph) == 3

    def test_contains_vertex(self):
        """Test membership queries."""
        graph = make_graph(vertices="AB")

        assert graph.contains_vertex("A")
        assert "B" in graph
        assert not graph.contains_vertex("Z")

    def test_remove_missing_vertex(self):
        """Test that removing an absent vertex returns False."""
        graph = make_graph(vertices="AB")

        assert graph.remove_vertex("Z") is False
        assert graph.vertex_count == 2

    def test_remove_vertex_cascades_undirected(self):
        """Test that removing a vertex strips it from every neighbor set."""
        graph = make_graph(vertices="ABC", edges=[("A", "B"), ("B", "C"), ("A", "C")])

        assert graph.remove_vertex("B") is True

        assert "B" not in graph
        for vertex in graph.vertices:
            assert "B" not in graph.neighbors(vertex)
        assert graph.get_edge_list() == [Edge("A", "C", 1.0)]

    def test_remove_vertex_cascades_directed(self):
        """Test that incoming and outgoing entries both disappear."""
        graph = make_graph(
            directed=True,
            vertices="ABC",
            edges=[("A", "B"), ("B", "C"), ("C", "B")],
        )

        graph.remove_vertex("B")

        assert graph.get_edge_list() == []
        assert graph.neighbors("A") == {}
        assert graph.neighbors("C") == {}

    def test_non_string_labels(self):
        """Test that any hashable, ordered label type works."""
        graph = Graph.from_vertices([3, 1, 2])
        graph.add_edge(3, 1)
        graph.add_edge(2, 2)

        assert graph.get_edge_list() == [Edge(1, 3, 1.0), Edge(2, 2, 1.0)]


class TestUndirectedEdges:
    """Tests for mirrored edges in undirected graphs."""

    def test_add_edge_creates_mirror(self):
        """Test that both directions report the same weight."""
        graph = make_graph(weighted=True, vertices="AB")

        graph.add_edge("A", "B", 2.5)

        assert graph.get_weight("A", "B") == 2.5
        assert graph.get_weight("B", "A") == 2.5

    def test_remove_edge_removes_mirror(self):
        """Test that neither direction survives removal."""
        graph = make_graph(vertices="AB", edges=[("A", "B")])

        assert graph.remove_edge("B", "A") is True

        assert not graph.has_edge("A", "B")
        assert not graph.has_edge("B", "A")

    def test_readding_mirror_is_duplicate(self):
        """Test that adding the reverse of an existing edge is rejected."""
        graph = make_graph(vertices="AB", edges=[("A", "B")])

        with pytest.raises(DuplicateEdgeError):
            graph.add_edge("B", "A")

    def test_self_loop_stored_once(self):
        """Test that a self-loop is a single entry and listed once."""
        graph = make_graph(vertices="A", edges=[("A", "A")])

        assert graph.neighbors("A") == {"A": 1.0}
        assert graph.degree("A") == 1
        assert graph.get_edge_list() == [Edge("A", "A", 1.0)]

        assert graph.remove_edge("A", "A") is True
        assert graph.get_edge_list() == []

    def test_edge_list_scenario(self):
        """Test the edge list of a small undirected, unweighted graph."""
        graph = make_graph(vertices="ABC", edges=[("A", "B"), ("B", "C")])

        edges = graph.get_edge_list()

        assert [edge.as_tuple() for edge in edges] == [("A", "B", 1.0), ("B", "C", 1.0)]
        assert graph.edge_count == 2

    def test_edge_list_reports_lower_label_first(self):
        """Test that an edge added as (C, A) is listed as (A, C)."""
        graph = make_graph(vertices="ABC", edges=[("C", "A")])

        assert graph.get_edge_list() == [Edge("A", "C", 1.0)]

    def test_consistency_error_on_orphan_mirror(self):
        """Test that a mirror without its forward entry is detected."""
        graph = make_graph(vertices="AB")
        # Corrupt the store directly: only B -> A exists.
        graph._store.add_edge("B", "A", weight=1.0)

        with pytest.raises(ConsistencyError):
            graph.add_edge("A", "B")

        assert not graph.has_edge("A", "B")


class TestDirectedEdges:
    """Tests for one-way edges in directed graphs."""

    def test_add_edge_is_one_way(self):
        """Test that adding u -> v never creates v -> u."""
        graph = make_graph(directed=True, weighted=True, vertices="AB")

        graph.add_edge("A", "B", 3.0)

        assert graph.has_edge("A", "B")
        assert not graph.has_edge("B", "A")

    def test_both_directions_are_independent(self):
        """Test that u -> v and v -> u may carry different weights."""
        graph = make_graph(directed=True, weighted=True, vertices="AB")

        graph.add_edge("A", "B", 3.0)
        graph.add_edge("B", "A", 4.0)

        assert graph.get_edge_list() == [Edge("A", "B", 3.0), Edge("B", "A", 4.0)]

        graph.remove_edge("A", "B")
        assert graph.get_edge_list() == [Edge("B", "A", 4.0)]

    def test_duplicate_forward_edge_rejected(self):
        """Test that the same direction cannot be added twice."""
        graph = make_graph(directed=True, vertices="AB", edges=[("A", "B")])

        with pytest.raises(DuplicateEdgeError):
            graph.add_edge("A", "B")


class TestEdgeErrors:
    """Tests for failing edge operations."""

    def test_missing_target_leaves_graph_unchanged(self):
        """Test that VertexNotFoundError is raised before any mutation."""
        graph = make_graph(vertices="AB", edges=[("A", "B")])
        before = graph.copy()

        with pytest.raises(VertexNotFoundError) as exc_info:
            graph.add_edge("A", "Z")

        assert exc_info.value.vertex == "Z"
        assert graph == before

    def test_missing_source(self):
        """Test that a missing source vertex is reported."""
        graph = make_graph(vertices="AB")

        with pytest.raises(VertexNotFoundError):
            graph.add_edge("Z", "A")

    def test_remove_edge_missing(self):
        """Test that removing absent edges returns False."""
        graph = make_graph(vertices="AB")

        assert graph.remove_edge("Z", "A") is False
        assert graph.remove_edge("A", "B") is False

    def test_get_weight_missing_edge(self):
        """Test that missing edges raise a KeyError-compatible error."""
        graph = make_graph(vertices="AB")

        with pytest.raises(EdgeNotFoundError):
            graph.get_weight("A", "B")
        with pytest.raises(KeyError):
            graph.get_weight("Z", "B")

    def test_neighbors_missing_vertex(self):
        """Test that neighbors() rejects unknown vertices."""
        with pytest.raises(VertexNotFoundError):
            Graph().neighbors("A")


class TestWeights:
    """Tests for weighted and unweighted storage."""

    def test_unweighted_coerces_weight(self):
        """Test that unweighted graphs always store 1.0."""
        graph = make_graph(vertices="AB")

        graph.add_edge("A", "B", 5.0)

        assert graph.get_weight("A", "B") == 1.0
        assert graph.get_weight("B", "A") == 1.0

    def test_weighted_keeps_weight_as_float(self):
        """Test that integer weights are stored as floats."""
        graph = make_graph(directed=True, weighted=True, vertices="AB")

        graph.add_edge("A", "B", 7)

        weight = graph.get_weight("A", "B")
        assert weight == 7.0
        assert isinstance(weight, float)

    def test_weighted_default_weight(self):
        """Test that omitting the weight stores 1.0."""
        graph = make_graph(weighted=True, vertices="AB")

        graph.add_edge("A", "B")

        assert graph.get_weight("A", "B") == 1.0


class TestCopying:
    """Tests for graph copies."""

    def test_copy_is_independent(self):
        """Test that mutating a copy leaves the original untouched."""
        graph = make_graph(directed=True, weighted=True, vertices="ABC", edges=[("A", "B", 2.0)])

        clone = graph.copy()
        clone.add_edge("B", "C", 1.5)
        clone.remove_vertex("A")

        assert clone.directed and clone.weighted
        assert graph.vertices == ["A", "B", "C"]
        assert graph.get_edge_list() == [Edge("A", "B", 2.0)]

    def test_copy_module_support(self):
        """Test that copy.copy produces an equal, separate graph."""
        graph = make_graph(vertices="AB", edges=[("A", "B")])

        clone = copy.copy(graph)

        assert clone == graph
        assert clone is not graph
        clone.remove_edge("A", "B")
        assert graph.has_edge("A", "B")

    def test_equality_respects_flags(self):
        """Test that graphs with different flags are not equal."""
        assert make_graph(directed=True) != make_graph(directed=False)
        assert make_graph(weighted=True) != make_graph(weighted=False)


class TestDescribe:
    """Tests for the human-readable dump."""

    def test_describe_unweighted(self):
        """Test the dump of an undirected, unweighted graph."""
        graph = make_graph(vertices="ABCD", edges=[("A", "B"), ("B", "C")])

        assert graph.describe() == (
            "Graph (directed: False, weighted: False)\n"
            "Vertices: 4\n"
            "A: B\n"
            "B: A, C\n"
            "C: B\n"
            "D: (isolated)\n"
        )

    def test_describe_weighted(self):
        """Test that weights are shown next to neighbors."""
        graph = make_graph(directed=True, weighted=True, vertices="AB", edges=[("A", "B", 2.5)])

        text = str(graph)

        assert "A: B(2.5)" in text
        assert "B: (isolated)" in text


class TestNetworkxExport:
    """Tests for to_networkx()."""

    def test_undirected_export(self):
        """Test that undirected graphs export as nx.Graph."""
        graph = make_graph(weighted=True, vertices="ABC", edges=[("A", "B", 2.0)])

        exported = graph.to_networkx()

        assert isinstance(exported, nx.Graph)
        assert not exported.is_directed()
        assert exported.number_of_nodes() == 3
        assert exported["B"]["A"]["weight"] == 2.0

    def test_directed_export_is_independent(self):
        """Test that the exported DiGraph is a separate object."""
        graph = make_graph(directed=True, vertices="AB", edges=[("A", "B")])

        exported = graph.to_networkx()
        exported.remove_edge("A", "B")

        assert exported.is_directed()
        assert graph.has_edge("A", "B")
