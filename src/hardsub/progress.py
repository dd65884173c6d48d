"""
Progress monitoring for a running ffmpeg.

ffmpeg is started with "-progress <file>" and keeps writing key=value blocks
to that file, one "out_time=HH:MM:SS.ffffff" per block. A background thread
re-reads the whole file every interval and reports the elapsed seconds of
every out_time line it finds. There is no lock between ffmpeg and the reader:
reading the file from the top each time copes with a half-written last line.
"""

import contextlib
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional

from hardsub.errors import FormatError, HardsubError
from hardsub.timecode import parse_time_to_seconds

logger = logging.getLogger(__name__)

# Receives absolute elapsed seconds
ProgressCallback = Callable[[int], None]


@contextlib.contextmanager
def progress_file(directory: Optional[Path] = None) -> Iterator[Path]:
    """Create an empty ffmpeg progress file and remove it when the block exits."""
    try:
        fd, name = tempfile.mkstemp(prefix="ffmpeg_progress_", suffix=".txt", dir=directory)
    except OSError as e:
        raise HardsubError(f"error creating temp file: {e}") from e
    os.close(fd)
    path = Path(name)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


def scan_progress_lines(lines: Iterable[str], on_update: ProgressCallback) -> None:
    """Report the value of every out_time= line, in file order."""
    for line in lines:
        if "out_time=" not in line:
            continue
        parts = line.split("=")
        if len(parts) != 2:
            continue
        value = parts[1].strip()
        try:
            seconds = parse_time_to_seconds(value)
        except FormatError as e:
            # ffmpeg writes out_time=N/A until the first frame is out
            logger.debug("Error parsing time: %s", e)
            continue
        on_update(seconds)


class ProgressMonitor(threading.Thread):
    """
    Daemon thread polling an ffmpeg progress file.

    The thread stops when stop() is called, when the file cannot be opened
    (logged, the transcode itself carries on), or when the interpreter exits.
    """

    def __init__(self, path: Path, on_update: ProgressCallback, interval: float = 1.0):
        super().__init__(name="hardsub-progress", daemon=True)
        self.path = path
        self.on_update = on_update
        self.interval = interval
        self._stop_event = threading.Event()

    def poll_once(self) -> bool:
        """Read the file once. Returns False if it could not be opened."""
        try:
            f = self.path.open("r", encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning("Error opening progress file: %s", e)
            return False
        with f:
            scan_progress_lines(f, self.on_update)
        return True

    def run(self) -> None:
        while self.poll_once():
            if self._stop_event.wait(self.interval):
                break

    def stop(self) -> None:
        """Ask the thread to finish after its current poll."""
        self._stop_event.set()
