"""
Line-oriented Text Codec for labgraph

This module converts Graph instances to and from the plain text format
used for graph files:

    <DIRECTED|UNDIRECTED> <WEIGHTED|UNWEIGHTED>
    <vertex1> <vertex2> ... <vertexN>
    <from> <to> [<weight>]
    ...

Key Components:
    - parse / parse_with_warnings: Build a Graph from text
    - serialize: Render a Graph as text (edge list or adjacency list body)
    - load_graph / save_graph: File-based wrappers around the above

Design Decisions:
    - Blank lines are ignored everywhere
    - Header tokens are case-insensitive and order-independent;
      unknown tokens are ignored
    - The body may mix edge lines ("A B 2.5") and adjacency lines
      ("A: B(2.5) C"), so both dump formats parse back
    - A bad edge line never aborts the parse: it is recorded as a
      ParseWarning and the remaining lines are still applied
    - Only the public Graph API is used
"""

import logging
import re
from pathlib import Path
from typing import Callable, Optional

from labgraph.errors import FileFormatError, GraphError
from labgraph.graph import Graph
from labgraph.models import DEFAULT_WEIGHT, ParseResult, ParseWarning, SaveFormat

logger = logging.getLogger(__name__)

DEFAULT_FORMAT = SaveFormat.EDGE_LIST

LabelParser = Callable[[str], object]

_DIRECTED = "DIRECTED"
_UNDIRECTED = "UNDIRECTED"
_WEIGHTED = "WEIGHTED"
_UNWEIGHTED = "UNWEIGHTED"
_KNOWN_HEADER_TOKENS = {_DIRECTED, _UNDIRECTED, _WEIGHTED, _UNWEIGHTED}

# "B" or "B(2.5)" inside an adjacency line
_ADJACENCY_ENTRY = re.compile(r"^(?P<label>[^()]+)(?:\((?P<weight>[^()]*)\))?$")


def parse(text: str, label_parser: LabelParser = str) -> Graph:
    """
    Build a Graph from its text representation.

    Per-line problems are logged and otherwise ignored; use
    parse_with_warnings to inspect them.

    Args:
        text: Graph text (header line, vertex line, edge lines)
        label_parser: Converts each label token to a vertex label

    Returns:
        The graph built from every line that succeeded

    Raises:
        FileFormatError: If the text has fewer than two non-blank lines

    Example:
        >>> graph = parse("DIRECTED WEIGHTED\\nA B\\nA B 2.5\\n")
        >>> graph.get_weight("A", "B")
        2.5
    """
    return parse_with_warnings(text, label_parser).graph


def parse_with_warnings(text: str, label_parser: LabelParser = str) -> ParseResult:
    """
    Build a Graph from text and collect the lines that could not be applied.

    Args:
        text: Graph text
        label_parser: Converts each label token to a vertex label

    Returns:
        ParseResult holding the graph and one ParseWarning per problem

    Raises:
        FileFormatError: If the header or vertex line is missing, or a
            vertex label cannot be parsed
    """
    lines = [
        (number, line)
        for number, line in enumerate(text.splitlines(), start=1)
        if line.strip()
    ]
    if len(lines) < 2:
        raise FileFormatError(
            f"Invalid graph format: expected a header and a vertex line, "
            f"found {len(lines)} non-blank line(s)"
        )

    directed, weighted = _parse_header(lines[0][1])
    graph: Graph = Graph(directed=directed, weighted=weighted)
    result = ParseResult(graph=graph)

    vertex_line_number, vertex_line = lines[1]
    for token in vertex_line.split():
        try:
            label = label_parser(token)
        except (TypeError, ValueError) as e:
            raise FileFormatError(
                f"line {vertex_line_number}: invalid vertex label {token!r}: {e}"
            ) from e
        graph.add_vertex(label)

    for number, line in lines[2:]:
        tokens = line.split()
        if len(tokens) < 2:
            continue

        def report(message: str, number: int = number, line: str = line) -> None:
            warning = ParseWarning(line_number=number, line=line, message=message)
            logger.warning("Skipping part of graph text: %s", warning)
            result.warnings.append(warning)

        if tokens[0].endswith(":"):
            _apply_adjacency_line(graph, tokens, label_parser, report)
        else:
            _apply_edge_line(graph, tokens, label_parser, report)

    logger.debug(
        "Parsed graph: %d vertices, %d edges, %d warnings",
        graph.vertex_count,
        graph.edge_count,
        result.warning_count,
    )
    return result


def serialize(graph: Graph, fmt: SaveFormat = DEFAULT_FORMAT) -> str:
    """
    Render a Graph in the text format.

    Args:
        graph: The graph to render
        fmt: EDGE_LIST for one line per edge, ADJACENCY_LIST for one line
             per vertex

    Returns:
        The graph text, newline-terminated
    """
    kind = _DIRECTED if graph.directed else _UNDIRECTED
    weighting = _WEIGHTED if graph.weighted else _UNWEIGHTED
    lines = [
        f"{kind} {weighting}",
        " ".join(str(vertex) for vertex in graph.vertices),
    ]

    if fmt is SaveFormat.EDGE_LIST:
        for edge in graph.get_edge_list():
            line = f"{edge.source} {edge.target}"
            if graph.weighted:
                line += f" {_format_weight(edge.weight)}"
            lines.append(line)
    elif fmt is SaveFormat.ADJACENCY_LIST:
        for vertex in graph.vertices:
            neighbors = graph.neighbors(vertex)
            if not neighbors:
                lines.append(str(vertex))
                continue
            if graph.weighted:
                entries = [f"{n}({_format_weight(w)})" for n, w in neighbors.items()]
            else:
                entries = [str(n) for n in neighbors]
            lines.append(f"{vertex}: {' '.join(entries)}")
    else:
        raise ValueError(f"Unknown save format: {fmt!r}")

    return "\n".join(lines) + "\n"


def load_graph(path: Path | str, label_parser: LabelParser = str) -> Graph:
    """
    Load a graph file.

    Args:
        path: Path to the graph file
        label_parser: Converts each label token to a vertex label

    Returns:
        The parsed Graph

    Raises:
        FileNotFoundError: If the file does not exist
        FileFormatError: If the file is not UTF-8 or is missing its header
            or vertex line
    """
    return load_graph_with_warnings(path, label_parser).graph


def load_graph_with_warnings(
    path: Path | str,
    label_parser: LabelParser = str,
) -> ParseResult:
    """Load a graph file and return it with its per-line warnings."""
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Graph file not found: {path}")

    with path.open("r", encoding="utf-8") as handle:
        try:
            text = handle.read()
        except UnicodeDecodeError as e:
            raise FileFormatError(f"Graph file is not valid UTF-8: {path}: {e}") from e

    return parse_with_warnings(text, label_parser)


def save_graph(
    graph: Graph,
    path: Path | str,
    fmt: SaveFormat = DEFAULT_FORMAT,
) -> Path:
    """
    Write a graph file, creating parent directories as needed.

    Args:
        graph: The graph to save
        path: Destination file (overwritten if it exists)
        fmt: Body layout

    Returns:
        The path written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as handle:
        handle.write(serialize(graph, fmt))

    logger.debug("Saved graph to %s (%s)", path, fmt.value)
    return path


def _parse_header(line: str) -> tuple[bool, bool]:
    """
    Read the directed/weighted flags from the header line.

    Returns:
        (directed, weighted); both default to False
    """
    tokens = {token.upper() for token in line.split()}
    unknown = tokens - _KNOWN_HEADER_TOKENS
    if unknown:
        logger.debug("Ignoring unknown header tokens: %s", sorted(unknown))
    return _DIRECTED in tokens, _WEIGHTED in tokens


def _parse_weight(token: Optional[str], report: Callable[[str], None]) -> float:
    if token is None:
        return DEFAULT_WEIGHT
    try:
        return float(token)
    except ValueError:
        report(f"invalid weight {token!r}, using {DEFAULT_WEIGHT}")
        return DEFAULT_WEIGHT


def _apply_edge_line(
    graph: Graph,
    tokens: list[str],
    label_parser: LabelParser,
    report: Callable[[str], None],
) -> None:
    """Add the edge from a "from to [weight]" line."""
    try:
        source = label_parser(tokens[0])
        target = label_parser(tokens[1])
    except (TypeError, ValueError) as e:
        report(f"invalid vertex label: {e}")
        return

    weight = DEFAULT_WEIGHT
    if graph.weighted and len(tokens) > 2:
        weight = _parse_weight(tokens[2], report)

    try:
        graph.add_edge(source, target, weight)
    except GraphError as e:
        report(str(e))


def _apply_adjacency_line(
    graph: Graph,
    tokens: list[str],
    label_parser: LabelParser,
    report: Callable[[str], None],
) -> None:
    """Add one edge per neighbor entry of a "label: n1(w1) n2(w2)" line."""
    try:
        source = label_parser(tokens[0][:-1])
    except (TypeError, ValueError) as e:
        report(f"invalid vertex label: {e}")
        return

    seen = set()
    for entry in tokens[1:]:
        match = _ADJACENCY_ENTRY.match(entry)
        if match is None:
            report(f"malformed adjacency entry {entry!r}")
            continue

        try:
            target = label_parser(match.group("label"))
        except (TypeError, ValueError) as e:
            report(f"invalid vertex label: {e}")
            continue

        weight = DEFAULT_WEIGHT
        if graph.weighted:
            weight = _parse_weight(match.group("weight"), report)

        # Undirected adjacency dumps list every edge from both ends; only
        # entries mirrored by an earlier line are skipped
        repeated = target in seen
        seen.add(target)
        if (
            not graph.directed
            and not repeated
            and graph.has_edge(source, target)
            and graph.get_weight(source, target) == weight
        ):
            continue

        try:
            graph.add_edge(source, target, weight)
        except GraphError as e:
            report(str(e))


def _format_weight(weight: float) -> str:
    return repr(float(weight))
