"""Command line interface for docindex."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from docindex.config import AppConfig
from docindex.index.cache import DocumentIndex, IndexUnavailableError
from docindex.index.search import Searcher
from docindex.models import DocumentNode

console = Console()
app = typer.Typer(help="docindex - browse and search Markdown documentation trees")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _build_index(root: Optional[Path], include_unpublished: bool = False) -> DocumentIndex:
    config = AppConfig(docs_root=root, include_unpublished=include_unpublished)
    return DocumentIndex.from_config(config, base_dir=Path.cwd())


def _add_branch(branch: Tree, nodes: Iterable[DocumentNode]) -> None:
    for node in nodes:
        label = f"[bold]{escape(node.title)}[/bold] [dim]({escape(node.path)})[/dim]"
        if node.icon:
            label = f"{escape(node.icon)} {label}"
        _add_branch(branch.add(label), node.children)


def _print_nodes(nodes: list[DocumentNode], as_json: bool, heading: str) -> None:
    if as_json:
        typer.echo(json.dumps([node.to_dict() for node in nodes], indent=2))
        return
    tree = Tree(heading)
    _add_branch(tree, nodes)
    console.print(tree)


@app.command()
def tree(
    root: Path = typer.Argument(None, help="Documentation root directory."),
    as_json: bool = typer.Option(False, "--json", help="Print the hierarchy as JSON"),
    include_unpublished: bool = typer.Option(False, help="Include unpublished documents"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Print the documentation hierarchy."""
    _setup_logging(verbose)
    index = _build_index(root, include_unpublished)
    try:
        nodes = index.get_documents()
    except IndexUnavailableError as exc:
        console.print(f"[red]Documentation unavailable: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    if not nodes:
        console.print("[yellow]No documents found.[/yellow]")
        return
    _print_nodes(nodes, as_json, "Documentation")


@app.command()
def search(
    query: str = typer.Argument(..., help="Query text"),
    root: Path = typer.Option(None, "--root", help="Documentation root directory"),
    as_json: bool = typer.Option(False, "--json", help="Print the results as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Search titles and content, printing the matching branches."""
    _setup_logging(verbose)
    searcher = Searcher(_build_index(root))
    try:
        results = searcher.search(query)
    except IndexUnavailableError as exc:
        console.print(f"[red]Documentation unavailable: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    if not results:
        console.print("[yellow]No matches found.[/yellow]")
        return
    _print_nodes(results, as_json, f"Results for '{query}'")


@app.command()
def stats(
    root: Path = typer.Argument(None, help="Documentation root directory."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logging"),
) -> None:
    """Build the index and report what was loaded."""
    _setup_logging(verbose)
    index = _build_index(root)
    try:
        index.ensure_ready()
    except IndexUnavailableError as exc:
        console.print(f"[red]Documentation unavailable: {escape(str(exc))}[/red]")
        raise typer.Exit(code=1) from exc

    result = index.stats
    console.print(
        f"Loaded: {result.loaded}, skipped: {result.skipped}, failed: {result.failed}"
    )
    if result.failures:
        table = Table(show_header=True, header_style="bold magenta")
        table.add_column("Document")
        table.add_column("Error")
        for path, error in result.failures.items():
            table.add_row(path, error[:180])
        console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8000, help="Server port"),
    root: Path = typer.Option(None, "--root", help="Documentation root directory"),
) -> None:
    """Start the documentation API server."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - defensive
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from docindex.web.app import create_app

    config = AppConfig(docs_root=root)
    resolved_root = config.resolve_docs_root(Path.cwd())
    if not resolved_root.is_dir():
        console.print("[yellow]Warning: documentation root not found, requests will fail.[/yellow]")

    console.print(f"Serving {resolved_root} on http://{host}:{port}")
    uvicorn.run(
        create_app(config=config),
        host=host,
        port=port,
        reload=False,
        log_level="info",
    )
