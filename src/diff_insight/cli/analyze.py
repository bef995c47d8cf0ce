"""Analyze command: what a source ref changes relative to a target ref."""

import json
from pathlib import Path
from typing import Optional

import typer

from ..changes import ChangeAnalyzer, build_filters
from ..exceptions import DiffInsightError
from ..logging_config import setup_logging
from ..revision import GitRevisionSource
from . import app
from ._common import console, resolve_config
from ._output import output_json, output_rich


@app.command()
def analyze(
    source: str = typer.Argument(..., help="Branch or commit being reviewed"),
    target: str = typer.Argument(..., help="Branch or commit it merges into"),
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        "-C",
        help="Path inside the git repository",
        file_okay=False,
        dir_okay=True,
    ),
    commit: Optional[str] = typer.Option(None, "--commit", help="Only this commit (hash prefix)"),
    from_commit: Optional[str] = typer.Option(
        None, "--from-commit", help="First commit of a range (hash prefix)"
    ),
    to_commit: Optional[str] = typer.Option(
        None, "--to-commit", help="Last commit of a range (hash prefix)"
    ),
    since: Optional[str] = typer.Option(None, "--since", help="Commits after this date"),
    until: Optional[str] = typer.Option(None, "--until", help="Commits before this date"),
    author: Optional[str] = typer.Option(None, "--author", help="Author name substring"),
    file: Optional[str] = typer.Option(None, "--file", help="Single path or pathspec"),
    files: Optional[str] = typer.Option(
        None, "--files", help="Comma-separated pathspecs to include"
    ),
    exclude: Optional[str] = typer.Option(
        None, "--exclude", help="Comma-separated globs to exclude (* and ?)"
    ),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Output in machine-readable JSON format",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Show functional changes per file and debug logging",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        "-w",
        help="Parallel workers",
        min=1,
        max=32,
    ),
) -> None:
    """Analyze the changes SOURCE brings relative to TARGET.

    Diffs are taken over TARGET...SOURCE: what SOURCE has that TARGET lacks.

    [bold cyan]Examples:[/bold cyan]

      diff-insight analyze feature/login main

      diff-insight analyze feature/login main --author alice --exclude "*.lock"

      diff-insight analyze HEAD origin/main --json
    """
    quiet = json_output and not verbose
    logger = setup_logging("verbose" if verbose else "quiet" if quiet else "normal")

    try:
        settings = resolve_config(config=config, workers=workers, verbose=verbose, quiet=quiet)
        setup_logging(settings.verbosity)
        filters = build_filters(
            commit=commit,
            from_commit=from_commit,
            to_commit=to_commit,
            since=since,
            until=until,
            author=author,
            file=file,
            files=files,
            exclude=exclude,
        )
        revision_source = GitRevisionSource(str(repo), timeout=settings.git_timeout_seconds)
        result = ChangeAnalyzer(revision_source, settings).analyze_branch_diff(
            source, target, filters
        )

        if json_output:
            output_json(result)
        else:
            output_rich(console, result, verbose=verbose)

    except DiffInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        if json_output:
            print(json.dumps({"error": e.to_dict()}, indent=2))
        else:
            console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    except KeyboardInterrupt:
        logger.info("Analysis interrupted by user")
        console.print("\n[yellow]Analysis interrupted[/yellow]")
        raise typer.Exit(130)
