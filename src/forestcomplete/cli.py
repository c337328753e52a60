"""Command line interface for forestcomplete."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from forestcomplete.completion.provider import complete as complete_text
from forestcomplete.config import DEFAULT_EXECUTABLE, ForesterSettings
from forestcomplete.diagnostics import ConsoleReporter
from forestcomplete.forest.cache import ForestCache
from forestcomplete.forest.create import create_tree
from forestcomplete.forest.project import (
    ProjectError,
    available_templates,
    configured_prefixes,
    resolve_prefix,
    resolve_root,
    resolve_template,
    root_tree_directory,
    validate_prefix,
)
from forestcomplete.forest.query import ForestQuery
from forestcomplete.models import Success
from forestcomplete.process.command import SubprocessExecutor
from forestcomplete.process.runner import SubprocessRunner


console = Console()
app = typer.Typer(help="forestcomplete - forester tree completion and authoring")

RootOption = typer.Option(None, "--root", help="Project root (defaults to the current directory)")
PathOption = typer.Option(
    DEFAULT_EXECUTABLE, "--path", envvar="FORESTER_PATH", help="forester executable"
)
ConfigOption = typer.Option(
    None, "--config", envvar="FORESTER_CONFIG", help="forester config file (forest.toml)"
)
VerboseOption = typer.Option(False, "--verbose", "-v", help="Verbose logging")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


def _project_root(root: Optional[Path]) -> Path:
    try:
        return resolve_root([root if root is not None else Path.cwd()])
    except ProjectError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def query(
    root: Optional[Path] = RootOption,
    path: str = PathOption,
    config: Optional[str] = ConfigOption,
    as_json: bool = typer.Option(False, "--json", help="Print the forest as JSON"),
    verbose: bool = VerboseOption,
) -> None:
    """List every tree in the forest."""
    _setup_logging(verbose)
    settings = ForesterSettings(path=path, config=config)
    forest_query = ForestQuery(settings, _project_root(root), ConsoleReporter(), SubprocessRunner())

    outcome = asyncio.run(forest_query.run())
    if not isinstance(outcome, Success):
        raise typer.Exit(code=1)

    if as_json:
        console.print_json(json.dumps([entry.to_dict() for entry in outcome.forest]))
        return

    if not outcome.forest:
        console.print("[yellow]The forest is empty.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Tree")
    table.add_column("Title")
    table.add_column("Taxon")
    table.add_column("Route")
    for entry in outcome.forest:
        table.add_row(entry.identifier, entry.title or "", entry.taxon or "", entry.route)
    console.print(table)


@app.command()
def complete(
    text: str = typer.Argument(..., help="Line text up to (or past) the cursor"),
    cursor: Optional[int] = typer.Option(None, help="Cursor offset, defaults to end of text"),
    show_id: bool = typer.Option(
        False, "--show-id", envvar="FORESTER_SHOW_ID", help="Show tree ids in labels"
    ),
    root: Optional[Path] = RootOption,
    path: str = PathOption,
    config: Optional[str] = ConfigOption,
    as_json: bool = typer.Option(False, "--json", help="Print candidates as JSON"),
    verbose: bool = VerboseOption,
) -> None:
    """Show completion candidates for a cross-reference being typed."""
    _setup_logging(verbose)
    settings = ForesterSettings(path=path, config=config, show_id=show_id)
    forest_query = ForestQuery(settings, _project_root(root), ConsoleReporter(), SubprocessRunner())
    cache = ForestCache(forest_query)

    candidates = asyncio.run(
        complete_text(text, cache, cursor=cursor, show_id=settings.show_id)
    )
    if as_json:
        console.print_json(json.dumps([candidate.to_dict() for candidate in candidates]))
        return

    if not candidates:
        console.print("[yellow]No completions.[/yellow]")
        return

    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Label")
    table.add_column("Insert")
    table.add_column("Detail")
    for candidate in candidates:
        table.add_row(candidate.label, candidate.insert_text, candidate.detail)
    console.print(table)


@app.command()
def new(
    dest: Optional[Path] = typer.Argument(
        None, help="Destination folder (defaults to the first trees directory)", resolve_path=True
    ),
    prefix: Optional[str] = typer.Option(None, envvar="FORESTER_DEFAULT_PREFIX", help="Tree id prefix"),
    template: Optional[str] = typer.Option(
        None, envvar="FORESTER_DEFAULT_TEMPLATE", help="Template name from templates/"
    ),
    random: bool = typer.Option(
        False, "--random", envvar="FORESTER_CREATE_RANDOM", help="Use a random tree id"
    ),
    root: Optional[Path] = RootOption,
    path: str = PathOption,
    config: Optional[str] = ConfigOption,
    verbose: bool = VerboseOption,
) -> None:
    """Create a new tree and print its path."""
    _setup_logging(verbose)
    project_root = _project_root(root)
    settings = ForesterSettings(path=path, config=config, random=random)

    chosen = resolve_prefix(settings, prefix)
    if chosen is None:
        try:
            prefixes = configured_prefixes(project_root, settings)
        except ProjectError:
            prefixes = []
        hint = f" (configured: {', '.join(prefixes)})" if prefixes else ""
        chosen = typer.prompt(f"Prefix{hint}")
    problem = validate_prefix(chosen)
    if problem:
        raise typer.BadParameter(problem, param_hint="--prefix")

    destination = dest if dest is not None else root_tree_directory(project_root, settings)
    created = asyncio.run(
        create_tree(
            SubprocessExecutor(ConsoleReporter()),
            settings,
            project_root,
            destination,
            chosen,
            resolve_template(settings, template),
        )
    )
    if created is None:
        raise typer.Exit(code=1)
    console.print(str(created), highlight=False, soft_wrap=True)


@app.command()
def templates(root: Optional[Path] = RootOption) -> None:
    """List templates available to ``new``."""
    for name in available_templates(_project_root(root)):
        console.print(name, highlight=False, markup=False, soft_wrap=True)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", help="Host interface"),
    port: int = typer.Option(8765, help="Server port"),
    root: Optional[Path] = RootOption,
    path: str = PathOption,
    config: Optional[str] = ConfigOption,
    show_id: bool = typer.Option(False, "--show-id", envvar="FORESTER_SHOW_ID"),
    random: bool = typer.Option(
        False, "--random", envvar="FORESTER_CREATE_RANDOM", help="Use random tree ids for new trees"
    ),
    default_prefix: Optional[str] = typer.Option(
        None, "--default-prefix", envvar="FORESTER_DEFAULT_PREFIX", help="Prefix for new trees"
    ),
    default_template: Optional[str] = typer.Option(
        None, "--default-template", envvar="FORESTER_DEFAULT_TEMPLATE", help="Template for new trees"
    ),
) -> None:
    """Start the HTTP bridge editors talk to."""
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional dependency
        raise typer.BadParameter(
            "uvicorn is not installed. Install the web extras with \"python -m pip install '.[web]'\""
        ) from exc

    from forestcomplete.web.app import app as web_app, configure

    project_root = _project_root(root)
    settings = ForesterSettings(
        path=path,
        config=config,
        show_id=show_id,
        random=random,
        default_prefix=default_prefix,
        default_template=default_template,
    )
    configure(web_app, settings, project_root)
    console.print(f"Serving {project_root} on http://{host}:{port}")
    uvicorn.run(web_app, host=host, port=port, reload=False, log_level="info")
