"""
User interface components for hardsub.

Provides the shared Rich console, logging setup and the progress bar.
"""

from hardsub.ui.console import console, setup_logging
from hardsub.ui.simple_rich import SimpleRichUI

__all__ = [
    "console",
    "setup_logging",
    "SimpleRichUI",
]
