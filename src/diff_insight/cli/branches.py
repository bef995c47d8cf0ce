"""List branches of a repository."""

from pathlib import Path

import typer

from ..exceptions import DiffInsightError
from ..logging_config import setup_logging
from ..revision import GitRevisionSource
from . import app
from ._common import console


@app.command()
def branches(
    repo: Path = typer.Option(
        Path("."),
        "--repo",
        "-C",
        help="Path inside the git repository",
        file_okay=False,
        dir_okay=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """List local and remote branches, in git's order."""
    logger = setup_logging("verbose" if verbose else "normal")
    try:
        names = GitRevisionSource(str(repo)).list_branches()
    except DiffInsightError as e:
        logger.error(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if not names:
        console.print("[yellow]No branches found.[/yellow]")
        return
    for name in names:
        console.print(name, highlight=False)
