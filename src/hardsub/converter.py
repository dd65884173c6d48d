"""
ffmpeg invocation for hardsub.

Contains:
- Fixed encoder settings (NVENC video, AAC audio)
- FFmpeg command building
- Process start / wait with error reporting
- Encoder availability check
"""

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Optional

from hardsub.errors import ExternalToolError

logger = logging.getLogger(__name__)

# -------------------- ENCODER SETTINGS --------------------

VIDEO_ENCODER = "h264_nvenc"
VIDEO_CRF = "28"
VIDEO_PRESET = "slow"
AUDIO_ENCODER = "aac"
AUDIO_BITRATE = "128k"


# -------------------- UTILITY FUNCTIONS --------------------


def have_encoder(name: str) -> bool:
    """Check if ffmpeg has the specified encoder."""
    try:
        result = subprocess.run(["ffmpeg", "-hide_banner", "-encoders"], capture_output=True, text=True, timeout=4.0)
    except (OSError, subprocess.TimeoutExpired):
        return False
    # Format is like: " V....D h264_nvenc    NVIDIA NVENC H.264 encoder"
    for line in result.stdout.split("\n"):
        parts = line.split()
        if len(parts) >= 2 and parts[1] == name:
            return True
    return False


# -------------------- FFMPEG COMMAND BUILDING --------------------


def build_transcode_cmd(source: Path, destination: Path, audio_index: int, progress_path: Path) -> List[str]:
    """
    Build the ffmpeg command.

    The first video stream and the selected audio stream are mapped. The
    subtitles filter reads the subtitles back from the source file itself, so
    ffmpeg burns in the source's default subtitle stream, not a specific index.

    Args:
        source: Input file path.
        destination: Output file path.
        audio_index: ffprobe index of the audio stream to keep.
        progress_path: File ffmpeg writes its key=value progress lines to.

    Returns:
        Command argument list.
    """
    return [
        "ffmpeg",
        "-i",
        str(source),
        "-y",
        "-map",
        "0:v",
        "-map",
        f"0:{audio_index}",
        "-vf",
        f"subtitles={source}",
        "-c:v",
        VIDEO_ENCODER,
        "-crf",
        VIDEO_CRF,
        "-preset",
        VIDEO_PRESET,
        "-c:a",
        AUDIO_ENCODER,
        "-b:a",
        AUDIO_BITRATE,
        "-progress",
        str(progress_path),
        str(destination),
    ]


# -------------------- PROCESS CONTROL --------------------


def start_transcode(cmd: List[str], log_path: Optional[Path] = None) -> subprocess.Popen:
    """
    Start ffmpeg without waiting for it.

    ffmpeg's console output is appended to log_path when given, discarded
    otherwise; progress is read from the -progress file instead.

    Raises:
        ExternalToolError: If the process cannot be started.
    """
    try:
        if log_path is None:
            return subprocess.Popen(
                cmd,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        with log_path.open("a", encoding="utf-8", errors="replace") as lf:
            lf.write("CMD: " + shlex.join(cmd) + "\n")
            lf.flush()
            return subprocess.Popen(cmd, stdin=subprocess.DEVNULL, stdout=lf, stderr=subprocess.STDOUT)
    except OSError as e:
        raise ExternalToolError("ffmpeg", f"error starting command: {e}") from e


def wait_for_transcode(process: subprocess.Popen, log_path: Optional[Path] = None) -> None:
    """
    Block until ffmpeg exits.

    Raises:
        ExternalToolError: If ffmpeg exits with a non-zero status.
    """
    returncode = process.wait()
    if returncode != 0:
        message = f"error during video processing: exit status {returncode}"
        if log_path is not None:
            message += f" (see {log_path})"
        raise ExternalToolError("ffmpeg", message, returncode=returncode)
    logger.debug("ffmpeg exited cleanly")
