"""
Core Data Models for labgraph

This module defines the plain records shared by the graph and the codec:
- Edge: One stored adjacency entry (source, target, weight)
- SaveFormat: Body layout used when serializing a graph
- ParseWarning: A non-fatal problem found on one line of a graph file
- ParseResult: A parsed graph together with its warnings

These models are designed to be:
- Immutable where possible (using frozen dataclasses)
- Free of graph logic (the Graph class owns all invariants)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Protocol, TypeVar


DEFAULT_WEIGHT = 1.0


class SupportsOrdering(Protocol):
    """A vertex label: hashable, equality-comparable and totally ordered."""

    def __lt__(self, other: Any) -> bool: ...


V = TypeVar("V", bound=SupportsOrdering)


class SaveFormat(Enum):
    """
    Body layout of a serialized graph.

    States:
        EDGE_LIST: One "from to [weight]" line per edge.

        ADJACENCY_LIST: One "label: n1(w1) n2(w2)" line per vertex.
    """

    EDGE_LIST = "edge-list"
    ADJACENCY_LIST = "adjacency-list"


@dataclass(frozen=True)
class Edge:
    """
    A single adjacency entry of a graph.

    For undirected graphs the reverse entry is implied, and the graph's
    edge list reports each such pair once (with source <= target).

    Attributes:
        source: Label of the vertex the edge leaves
        target: Label of the vertex the edge enters
        weight: Numeric weight (always 1.0 in unweighted graphs)
    """

    source: Any
    target: Any
    weight: float = DEFAULT_WEIGHT

    def __str__(self) -> str:
        return f"{self.source} -> {self.target} : {self.weight}"

    def as_tuple(self) -> tuple[Any, Any, float]:
        """Return the edge as a (source, target, weight) tuple."""
        return (self.source, self.target, self.weight)


@dataclass(frozen=True)
class ParseWarning:
    """
    A line of a graph file that could not be applied.

    Attributes:
        line_number: 1-indexed line number in the original text
        line: The raw line content
        message: Why the line was rejected or adjusted
    """

    line_number: int
    line: str
    message: str

    def __str__(self) -> str:
        return f"line {self.line_number}: {self.message}"


@dataclass
class ParseResult:
    """
    Result of parsing a graph file.

    Attributes:
        graph: The graph built from every line that succeeded
        warnings: Per-line problems, in file order
    """

    graph: Any
    warnings: list[ParseWarning] = field(default_factory=list)

    @property
    def warning_count(self) -> int:
        """Number of lines that produced a warning."""
        return len(self.warnings)
