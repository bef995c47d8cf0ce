"""CLI entry point: registers all subcommands."""

import typer

from .. import __version__
from ._common import console

app = typer.Typer(
    name="diff-insight",
    help="diff-insight - Branch Change Analysis",
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"diff-insight {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Explain what a branch changes relative to another."""


# Import subcommands to register them
from .analyze import analyze as _analyze  # noqa: F401, E402
from .branches import branches as _branches  # noqa: F401, E402
