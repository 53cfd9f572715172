from __future__ import annotations

import json
import logging
import sys
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from graph_builder.core.equations.equation_graph import Equation, Swap, solve_equations
from graph_builder.core.errors import GraphError
from graph_builder.core.generate.settings_config import SettingsConfigError, load_and_merge
from graph_builder.core.model import GenerateSettings, Graph

app = typer.Typer(add_completion=False, no_args_is_help=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
FORMATS = ("text", "json", "table")


@app.callback()
def _callback() -> None:
    """Graph builder CLI."""
    return


@app.command("equations")
def equations(
    n: int = typer.Argument(3, help="Number of terms in the equation"),
    solution_terms: int = typer.Argument(1, help="Number of terms on the right side"),
    format: str = typer.Option("text", "--format", help="Output format: text|json|table"),
    settings_file: Optional[str] = typer.Option(
        None, "--settings-file", help="Optional YAML file with max_nodes/max_edges"
    ),
    max_nodes: Optional[int] = typer.Option(None, "--max-nodes", help="Override max_nodes"),
    max_edges: Optional[int] = typer.Option(None, "--max-edges", help="Override max_edges"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log generation progress"),
) -> None:
    """Generate all solutions of x0 + ... + xn-2 = xn-1 and the term moves between them."""
    _init_logging(verbose)

    if format not in FORMATS:
        _print_errors(
            [
                GraphError(
                    code="E_EQUATIONS_UNKNOWN_FORMAT",
                    message=f"unknown format: {format} (choose one of: {', '.join(FORMATS)})",
                )
            ]
        )
        raise typer.Exit(code=2)

    if n < 0 or solution_terms < 0:
        _print_errors(
            [
                GraphError(
                    code="E_EQUATIONS_NEGATIVE_ARGUMENT",
                    message=f"n and solution_terms must be >= 0, got n={n}, solution_terms={solution_terms}",
                )
            ]
        )
        raise typer.Exit(code=2)

    settings = _load_settings(settings_file, max_nodes=max_nodes, max_edges=max_edges)

    graph, error = solve_equations(n, solution_terms, settings)

    if format == "json":
        typer.echo(json.dumps(_to_payload(graph, error, settings), indent=2, sort_keys=True))
    elif format == "table":
        _print_table(graph)
    else:
        for i, eq in enumerate(graph.nodes):
            typer.echo(f"{i}: {eq}")
        for e in graph.edges:
            typer.echo(f"({e.ends}, {list(e.label.terms)})")
        typer.echo(f"(nodes, edges): ({len(graph.nodes)}, {len(graph.edges)})")

    # The partial graph is still valid output; a hit limit is only a warning.
    if error is not None:
        typer.echo(f"WARN: {error}", err=True)


@app.command("settings")
def settings_cmd(
    settings_file: Optional[str] = typer.Option(
        None, "--settings-file", help="Optional YAML file with max_nodes/max_edges"
    ),
) -> None:
    """Show the effective generation settings."""
    settings = _load_settings(settings_file)
    typer.echo("Settings:")
    typer.echo(f"- max_nodes: {settings.max_nodes}")
    typer.echo(f"- max_edges: {settings.max_edges}")


def _load_settings(settings_file: Optional[str], **overrides: Any) -> GenerateSettings:
    try:
        return load_and_merge(settings_file, **overrides)
    except FileNotFoundError:
        _print_errors(
            [
                GraphError(
                    code="E_SETTINGS_FILE_NOT_FOUND",
                    message=f"settings file not found: {settings_file}",
                )
            ]
        )
        raise typer.Exit(code=1)
    except SettingsConfigError as e:
        _print_errors([GraphError(code="E_SETTINGS_INVALID", message=str(e))])
        raise typer.Exit(code=2)


def _to_payload(
    graph: Graph[Equation, Swap], error: Optional[GraphError], settings: GenerateSettings
) -> dict[str, Any]:
    return {
        "tool": "graph-builder",
        "command": "equations",
        "ok": error is None,
        "error": None if error is None else {"code": error.code, "message": error.message},
        "settings": {"max_nodes": settings.max_nodes, "max_edges": settings.max_edges},
        "node_count": len(graph.nodes),
        "edge_count": len(graph.edges),
        "nodes": [str(eq) for eq in graph.nodes],
        "edges": [
            {"from": e.ends[0], "to": e.ends[1], "terms": list(e.label.terms)}
            for e in graph.edges
        ],
    }


def _print_table(graph: Graph[Equation, Swap]) -> None:
    console = Console()

    nodes = Table(title="Solutions")
    nodes.add_column("#")
    nodes.add_column("Equation")
    for i, eq in enumerate(graph.nodes):
        nodes.add_row(str(i), str(eq))
    console.print(nodes)

    edges = Table(title="Moves")
    edges.add_column("From")
    edges.add_column("To")
    edges.add_column("Terms")
    for e in graph.edges:
        edges.add_row(str(e.ends[0]), str(e.ends[1]), ", ".join(f"x{t}" for t in e.label.terms))
    console.print(edges)
    console.print(f"(nodes, edges): ({len(graph.nodes)}, {len(graph.edges)})")


def _init_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format=LOG_FORMAT, stream=sys.stderr)


def _print_errors(errors: list[GraphError]) -> None:
    for e in sorted(errors, key=lambda e: e.code):
        typer.echo(str(e), err=True)


def main() -> None:
    app(prog_name="graph-builder")


cli = typer.main.get_command(app)

if __name__ == "__main__":
    main()
