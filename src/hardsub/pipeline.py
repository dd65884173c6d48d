"""
Transcode pipeline for hardsub.

Runs the steps in order: probe, select tracks, build the ffmpeg command,
start ffmpeg, follow its progress file, wait for it. Errors are not caught
here; the first one aborts the run and reaches the CLI.
"""

import datetime
import logging
import re
import shlex
import time
from pathlib import Path
from typing import Optional

from hardsub.config import Config
from hardsub.converter import build_transcode_cmd, start_transcode, wait_for_transcode
from hardsub.errors import HardsubError
from hardsub.probe import probe_streams
from hardsub.progress import ProgressMonitor, progress_file
from hardsub.selection import select_tracks
from hardsub.timecode import fmt_hms
from hardsub.ui.simple_rich import SimpleRichUI

logger = logging.getLogger(__name__)


def get_log_path(logs_dir: Path, inp: Path) -> Path:
    """Generate the ffmpeg log path for an input file, creating the logs directory."""
    try:
        logs_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise HardsubError(f"error creating log directory {logs_dir}: {e}") from e
    date_str = datetime.date.today().isoformat()
    safe_name = re.sub(r"[^\w\-.]", "_", inp.stem)[:80]
    return logs_dir / f"{date_str}_{safe_name}.log"


def run(
    source: Path,
    destination: Path,
    cfg: Config,
    ui: Optional[SimpleRichUI] = None,
    log_path: Optional[Path] = None,
) -> None:
    """
    Transcode source into destination.

    Args:
        source: Input video file.
        destination: Output file, overwritten if present.
        cfg: Config instance.
        ui: Progress UI (a disabled one is used if not provided).
        log_path: File receiving ffmpeg's own output, if any.

    Raises:
        HardsubError: On the first failing step.
    """
    if ui is None:
        ui = SimpleRichUI(progress_enabled=False)

    start_time = time.time()

    streams = probe_streams(source)
    selection = select_tracks(streams, cfg.audio_lang, cfg.subtitle_lang)

    logger.info("Processing video with the selected audio track and hardcoded subtitles")
    logger.info("Output file path: %s", destination)

    with progress_file() as progress_path:
        cmd = build_transcode_cmd(source, destination, selection.audio_index, progress_path)
        logger.info("Executing command: %s", shlex.join(cmd))

        if cfg.dryrun:
            logger.info("Dry run, ffmpeg not started")
            return

        process = start_transcode(cmd, log_path)

        with ui.progress_bar(selection.total_duration_seconds) as set_progress:
            monitor = ProgressMonitor(progress_path, set_progress, interval=cfg.poll_interval)
            monitor.start()
            try:
                wait_for_transcode(process, log_path)
            finally:
                monitor.stop()
                # Let an in-flight poll finish before the progress file goes away
                monitor.join(timeout=cfg.poll_interval)
            # Pick up the last out_time ffmpeg wrote before exiting
            monitor.poll_once()

    logger.info("Video processing completed successfully in %s", fmt_hms(time.time() - start_time))
