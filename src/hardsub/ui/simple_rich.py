"""
Simple Rich-based progress UI for hardsub.

Shows one progress bar, in seconds of encoded media, while ffmpeg runs.

Respects:
- NO_COLOR environment variable (handled by Rich)
- --no-progress / [ui] progress = false
- console.is_terminal for automatic detection
"""

import contextlib
from typing import Callable, Iterator, Optional

from rich.console import Console
from rich.progress import (
    BarColumn,
    MofNCompleteColumn,
    Progress,
    TextColumn,
    TimeElapsedColumn,
    TimeRemainingColumn,
)

from hardsub.ui.console import console as shared_console


class SimpleRichUI:
    """Rich UI for a single transcode."""

    def __init__(self, progress_enabled: bool = True, console: Optional[Console] = None):
        self.console = console or shared_console
        self.enabled = progress_enabled and self.console.is_terminal

    def _make_progress(self) -> Progress:
        return Progress(
            TextColumn("[bold blue]{task.description}[/bold blue]"),
            BarColumn(bar_width=40),
            MofNCompleteColumn(),
            TextColumn("•"),
            TimeElapsedColumn(),
            TextColumn("→"),
            TimeRemainingColumn(),
            console=self.console,
            disable=not self.enabled,
        )

    @contextlib.contextmanager
    def progress_bar(self, total: int, description: str = "Processing video...") -> Iterator[Callable[[int], None]]:
        """
        Show a progress bar for the duration of the block.

        Yields a function taking the absolute number of seconds processed.
        A total of 0 (duration unknown) gives an indeterminate bar.
        """
        progress = self._make_progress()
        task_id = progress.add_task(description, total=total or None)

        def set_completed(seconds: int) -> None:
            progress.update(task_id, completed=seconds)

        with progress:
            yield set_completed
