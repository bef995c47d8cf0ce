"""
Logging configuration for diff-insight.

Library modules log through ``get_logger(__name__)``; the CLI decides how
much of it reaches the terminal by picking one of three verbosity levels.
Log records go to stderr so ``--json`` output on stdout stays parseable.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

# quiet keeps errors only; normal shows degraded files (warnings).
VERBOSITY_LEVELS = {
    "quiet": logging.ERROR,
    "normal": logging.WARNING,
    "verbose": logging.DEBUG,
}


def setup_logging(verbosity: str = "normal", log_file: Optional[str] = None) -> logging.Logger:
    """
    Route diff_insight logging through a rich handler on stderr.

    Args:
        verbosity: One of ``quiet``, ``normal`` or ``verbose``
        log_file: Optional file that receives a plain-text copy of every record

    Returns:
        The package root logger
    """
    try:
        level = VERBOSITY_LEVELS[verbosity]
    except KeyError:
        raise ValueError(f"Unknown verbosity {verbosity!r}") from None
    verbose = verbosity == "verbose"

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            rich_tracebacks=True,
            tracebacks_show_locals=verbose,
            markup=False,
            show_path=verbose,
        )
    ]
    if log_file:
        file_handler = logging.FileHandler(log_file, mode="a")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)-8s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=handlers, force=True)

    logger = logging.getLogger("diff_insight")
    logger.setLevel(level)
    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a logger under the ``diff_insight`` namespace."""
    if name is None:
        return logging.getLogger("diff_insight")
    if not name.startswith("diff_insight"):
        name = f"diff_insight.{name}"
    return logging.getLogger(name)
