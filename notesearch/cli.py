"""Typer-based CLI for searching the notes workspace."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from . import __version__, config
from .config_manager import Settings, load_settings
from .indexer import build_index
from .models import IndexedCorpus, SearchResult
from .search import search, search_in_file

logger = logging.getLogger(__name__)

console = Console(highlight=False, emoji=False, soft_wrap=True)
err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

USAGE = (
    'Usage: notesearch "<query>" [limit]\n'
    '       notesearch file "<filepath>" "<query>"'
)

app = typer.Typer(
    help="🔍 Keyword search across your local notes.",
    rich_markup_mode="rich",
    add_completion=False,
)


def version_callback(value: bool):
    """Print version and exit."""
    if value:
        typer.echo(f"notesearch v{__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _parse_limit(raw: Optional[str]) -> int:
    if raw is None:
        return config.DEFAULT_LIMIT
    try:
        return int(raw)
    except ValueError:
        err_console.print(
            f"[yellow]Invalid limit '{escape(raw)}', using {config.DEFAULT_LIMIT}.[/yellow]"
        )
        return config.DEFAULT_LIMIT


def _load_corpus(workspace: Optional[Path]) -> IndexedCorpus:
    try:
        settings: Settings = load_settings(workspace)
    except (OSError, RuntimeError) as exc:
        err_console.print(f"[red]Cannot resolve workspace root:[/red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    if not settings.workspace_root.is_dir():
        logger.warning("Workspace root %s does not exist; nothing to search", settings.workspace_root)

    return build_index(
        settings.roots,
        exclude_patterns=settings.exclude_patterns,
        workspace_root=settings.workspace_root,
        extensions=settings.extensions,
    )


def _print_results(results: List[SearchResult], file_scoped: bool) -> None:
    for result in results:
        score = result.relevance if file_scoped else f"score: {result.relevance:.1f}"
        console.print(f"[bold]┌─ {escape(result.file)}:{result.line_number} ({score})[/bold]")
        console.print(f"│  {escape(result.snippet)}")
        console.print("└─ Context:")
        for line in result.context.split("\n"):
            console.print(f"   {escape(line)}")
        console.print()


def _print_json(query: str, results: List[SearchResult], file_path: Optional[str] = None) -> None:
    payload = {
        "query": query,
        "file": file_path,
        "count": len(results),
        "results": [r.to_dict() for r in results],
    }
    typer.echo(json.dumps(payload, indent=2, ensure_ascii=False))


@app.command(context_settings={"ignore_unknown_options": True})
def main(
    args: Optional[List[str]] = typer.Argument(
        None,
        help='"<query>" [limit], or: file "<filepath>" "<query>"',
        show_default=False,
    ),
    workspace: Optional[Path] = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Workspace root to index (defaults to $NOTESEARCH_WORKSPACE or ~/clawd).",
        file_okay=False,
    ),
    as_json: bool = typer.Option(False, "--json", help="Print results as JSON."),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Log indexing details to stderr."),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
):
    """Search notes for the best-matching lines, corpus-wide or in one file."""
    if not args:
        typer.echo(USAGE)
        raise typer.Exit(code=1)

    _configure_logging(verbose)

    if args[0] == "file" and len(args) >= 3:
        file_path, query = args[1], args[2]
        corpus = _load_corpus(workspace)
        results = search_in_file(corpus, file_path, query)

        if as_json:
            _print_json(query, results, file_path=file_path)
            return

        console.print(f'\n🔍 SEARCH: "{escape(query)}" in {escape(file_path)}')
        console.print(f"📝 Found {len(results)} results\n")
        _print_results(results, file_scoped=True)
        return

    query = args[0]
    limit = _parse_limit(args[1] if len(args) > 1 else None)
    corpus = _load_corpus(workspace)
    results = search(corpus, query, limit)

    if as_json:
        _print_json(query, results)
        return

    console.print(f'\n🔍 SEARCH: "{escape(query)}"')
    console.print(f"📝 Found {len(results)} results\n")
    _print_results(results, file_scoped=False)


if __name__ == "__main__":
    app()
