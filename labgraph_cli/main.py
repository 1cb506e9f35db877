"""
labgraph CLI

Command-line interface for building, inspecting and converting graph files.

Commands:
    labgraph show <file>                 Print a summary and the adjacency dump
    labgraph edges <file>                Print the edge list as a table
    labgraph convert <src> <dst>         Re-save a graph in another format
    labgraph shell [file]                Edit a graph from an interactive menu

Usage:
    $ labgraph show roads.txt
    $ labgraph convert roads.txt roads-adj.txt --format adjacency-list
    $ labgraph shell roads.txt
"""

import logging
from pathlib import Path
from typing import Callable, Optional

import typer
from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table

from labgraph import __version__
from labgraph.codec import load_graph_with_warnings, save_graph
from labgraph.errors import FileFormatError, GraphError
from labgraph.graph import Graph
from labgraph.models import DEFAULT_WEIGHT, ParseResult, SaveFormat

# Initialize Typer app and Rich console
app = typer.Typer(
    name="labgraph",
    help="labgraph: build, inspect and convert labeled graph files",
    add_completion=False,
)
console = Console()

# Warnings are printed by the commands themselves
DEFAULT_LOG_LEVEL = logging.ERROR
MAX_WARNINGS_SHOWN = 5


@app.command()
def show(
    path: Path = typer.Argument(..., help="Path to the graph file"),
) -> None:
    """
    Print a summary of a graph file and its adjacency dump.
    """
    result = _load_or_exit(path)

    _print_graph_summary(result.graph, path)
    console.print()
    console.print(result.graph.describe(), markup=False, highlight=False)
    _print_warnings(result)


@app.command()
def edges(
    path: Path = typer.Argument(..., help="Path to the graph file"),
) -> None:
    """
    Print every edge of a graph file, undirected edges once.
    """
    result = _load_or_exit(path)
    graph = result.graph

    edge_list = graph.get_edge_list()
    if not edge_list:
        console.print("[yellow]No edges in graph.[/yellow]")
        _print_warnings(result)
        return

    arrow = "→" if graph.directed else "—"
    table = Table(title=f"Edges ({len(edge_list)})", box=box.ROUNDED)
    table.add_column("From", style="cyan")
    table.add_column("", justify="center", style="dim")
    table.add_column("To", style="cyan")
    if graph.weighted:
        table.add_column("Weight", justify="right")

    for edge in edge_list:
        row = [str(edge.source), arrow, str(edge.target)]
        if graph.weighted:
            row.append(f"{edge.weight:g}")
        table.add_row(*row)

    console.print(table)
    _print_warnings(result)


@app.command()
def convert(
    source: Path = typer.Argument(..., help="Graph file to read"),
    destination: Path = typer.Argument(..., help="Graph file to write"),
    fmt: SaveFormat = typer.Option(
        SaveFormat.EDGE_LIST,
        "--format",
        "-f",
        envvar="LABGRAPH_FORMAT",
        case_sensitive=False,
        help="Body layout of the written file",
    ),
) -> None:
    """
    Load a graph file and save it again in the requested format.
    """
    result = _load_or_exit(source)

    try:
        written = save_graph(result.graph, destination, fmt)
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    _print_warnings(result)
    console.print(
        f"[green]✓[/green] Saved {result.graph.vertex_count} vertices and "
        f"{result.graph.edge_count} edges to {written} ({fmt.value})"
    )


@app.command()
def shell(
    path: Optional[Path] = typer.Argument(
        None,
        help="Graph file to start from (default: empty undirected, unweighted graph)",
    ),
) -> None:
    """
    Edit a graph from an interactive menu.
    """
    graph: Graph = Graph(directed=False, weighted=False)
    if path is not None:
        result = _load_or_exit(path)
        _print_warnings(result)
        graph = result.graph

    GraphShell(console, graph).run()


class GraphShell:
    """
    Menu-driven editor around a single Graph.

    Only calls the Graph's public operations and the codec's file helpers.
    Errors from one action are reported and the menu is shown again.

    Usage:
        GraphShell(Console()).run()
    """

    def __init__(self, console: Console, graph: Optional[Graph] = None) -> None:
        self.console = console
        self.graph: Graph = graph if graph is not None else Graph()
        self._actions: dict[str, tuple[str, Callable[[], None]]] = {
            "1": ("Create a new empty graph", self.new_graph),
            "2": ("Load graph from file", self.load),
            "3": ("Add vertex", self.add_vertex),
            "4": ("Remove vertex", self.remove_vertex),
            "5": ("Add edge", self.add_edge),
            "6": ("Remove edge", self.remove_edge),
            "7": ("Show adjacency list", self.show),
            "8": ("Save to file", self.save),
        }

    def run(self) -> None:
        """Show the menu until the user exits or input ends."""
        while True:
            self._print_menu()
            try:
                choice = self._ask("Choose an option").strip()
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                return

            if choice == "9":
                return
            if choice not in self._actions:
                self.console.print("[yellow]Unknown option.[/yellow]")
                continue

            _, action = self._actions[choice]
            try:
                action()
            except (EOFError, KeyboardInterrupt):
                self.console.print()
                return
            except (GraphError, OSError) as e:
                self.console.print(f"[bold red]Error:[/bold red] {e}")

    def new_graph(self) -> None:
        directed = Confirm.ask("Directed?", console=self.console, default=False)
        weighted = Confirm.ask("Weighted?", console=self.console, default=False)
        self.graph = Graph(directed=directed, weighted=weighted)
        self.console.print("[green]✓[/green] New empty graph created.")

    def load(self) -> None:
        path = Path(self._ask("Path to graph file"))
        result = load_graph_with_warnings(path)
        self.graph = result.graph
        _print_warnings(result, self.console)
        self.console.print(f"[green]✓[/green] Graph loaded from {path}.")

    def save(self) -> None:
        path = Path(self._ask("Path to graph file"))
        choice = Prompt.ask(
            "Format",
            console=self.console,
            choices=[fmt.value for fmt in SaveFormat],
            default=SaveFormat.EDGE_LIST.value,
        )
        written = save_graph(self.graph, path, SaveFormat(choice))
        self.console.print(f"[green]✓[/green] Graph saved to {written}.")

    def add_vertex(self) -> None:
        vertex = self._ask("Vertex name").strip()
        if not vertex:
            return
        if self.graph.add_vertex(vertex):
            self.console.print(f"[green]✓[/green] Vertex '{escape(vertex)}' added.")
        else:
            self.console.print(f"[yellow]Vertex '{escape(vertex)}' already exists.[/yellow]")

    def remove_vertex(self) -> None:
        vertex = self._ask("Vertex name").strip()
        if self.graph.remove_vertex(vertex):
            self.console.print(f"[green]✓[/green] Vertex '{escape(vertex)}' removed.")
        else:
            self.console.print(f"[yellow]Vertex '{escape(vertex)}' not found.[/yellow]")

    def add_edge(self) -> None:
        source = self._ask("Source vertex").strip()
        target = self._ask("Target vertex").strip()

        weight = DEFAULT_WEIGHT
        if self.graph.weighted:
            raw = self._ask("Weight").strip()
            try:
                weight = float(raw)
            except ValueError:
                self.console.print(
                    f"[yellow]Invalid weight {raw!r}, using {DEFAULT_WEIGHT}.[/yellow]"
                )

        self.graph.add_edge(source, target, weight)
        self.console.print("[green]✓[/green] Edge added.")

    def remove_edge(self) -> None:
        source = self._ask("Source vertex").strip()
        target = self._ask("Target vertex").strip()
        if self.graph.remove_edge(source, target):
            self.console.print("[green]✓[/green] Edge removed.")
        else:
            self.console.print("[yellow]Edge not found.[/yellow]")

    def show(self) -> None:
        self.console.print(self.graph.describe(), markup=False, highlight=False)

    def _ask(self, prompt: str) -> str:
        return Prompt.ask(prompt, console=self.console, default="", show_default=False)

    def _print_menu(self) -> None:
        self.console.print("\n[bold blue]--- Graph Shell ---[/bold blue]")
        for key, (label, _) in self._actions.items():
            self.console.print(f"{key}. {label}")
        self.console.print("9. Exit")


# Helper functions for loading and output formatting

def _load_or_exit(path: Path) -> ParseResult:
    """Load a graph file, turning load failures into exit code 1."""
    try:
        return load_graph_with_warnings(path)
    except (OSError, FileFormatError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


def _print_graph_summary(graph: Graph, path: Path) -> None:
    """Print a summary panel for a loaded graph."""
    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", style="bold")

    table.add_row("File", str(path))
    table.add_row("Type", "directed" if graph.directed else "undirected")
    table.add_row("Weights", "weighted" if graph.weighted else "unweighted")
    table.add_row("Vertices", str(graph.vertex_count))
    table.add_row("Edges", str(graph.edge_count))

    panel = Panel(table, title="[bold green]✓ Graph Loaded[/bold green]", border_style="green")
    console.print(panel)


def _print_warnings(result: ParseResult, out: Optional[Console] = None) -> None:
    """Print the first few parse warnings, if any."""
    out = out or console
    if not result.warnings:
        return

    out.print(f"\n[yellow]⚠️  {result.warning_count} line(s) had parse warnings:[/yellow]")
    for warning in result.warnings[:MAX_WARNINGS_SHOWN]:
        out.print(f"   • {warning}", markup=False)
    if result.warning_count > MAX_WARNINGS_SHOWN:
        out.print(f"   ... and {result.warning_count - MAX_WARNINGS_SHOWN} more")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else DEFAULT_LOG_LEVEL,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]labgraph[/bold] version {__version__}")
        raise typer.Exit()


# Version and logging options
@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Log graph operations at DEBUG level",
    ),
) -> None:
    """
    labgraph: build, inspect and convert labeled graph files.
    """
    _configure_logging(verbose)


if __name__ == "__main__":
    app()
