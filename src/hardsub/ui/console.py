"""
Shared Rich console and logging setup.

Log records and the progress bar go through the same Console so that log
lines are printed above a live bar instead of breaking it.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console(stderr=True)


def setup_logging(debug: bool = False) -> None:
    """Attach a RichHandler on the shared console to the hardsub logger."""
    handler = RichHandler(console=console, show_path=debug, markup=False, rich_tracebacks=debug)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    package_logger = logging.getLogger("hardsub")
    for old in list(package_logger.handlers):
        package_logger.removeHandler(old)
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if debug else logging.INFO)
