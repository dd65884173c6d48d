"""
hardsub - Burn subtitles into a video with NVIDIA hardware encoding.

Picks the audio track and checks the subtitle track by language tag using
ffprobe, then re-encodes the file with ffmpeg (h264_nvenc + AAC) while the
subtitles are burned into the picture. Progress is read from ffmpeg's
-progress side channel and shown as a terminal progress bar.

Example usage:
    # As a command-line tool
    $ hardsub -path episode.mkv
    $ hardsub -path episode.mkv -output episode.fr.mp4

    # As a Python module
    from hardsub import Config, probe_streams, select_tracks

    cfg = Config()
    streams = probe_streams(Path("episode.mkv"))
    selection = select_tracks(streams, cfg.audio_lang, cfg.subtitle_lang)
"""

__version__ = "1.0.0"
__description__ = "Burn subtitles into a video with NVIDIA hardware encoding"

# Public API exports
from hardsub.config import Config, get_app_dirs, load_config_file
from hardsub.converter import build_transcode_cmd, start_transcode, wait_for_transcode
from hardsub.errors import (
    ArgumentError,
    ExternalToolError,
    FormatError,
    HardsubError,
    ParseError,
    TrackNotFoundError,
)
from hardsub.probe import CodecType, StreamDescriptor, parse_probe_output, probe_streams
from hardsub.progress import ProgressMonitor, progress_file
from hardsub.selection import TrackSelection, select_tracks
from hardsub.timecode import parse_time_to_seconds

__all__ = [
    # Version info
    "__version__",
    # Config
    "Config",
    "get_app_dirs",
    "load_config_file",
    # Errors
    "HardsubError",
    "ArgumentError",
    "ExternalToolError",
    "ParseError",
    "FormatError",
    "TrackNotFoundError",
    # Probe / selection
    "CodecType",
    "StreamDescriptor",
    "parse_probe_output",
    "probe_streams",
    "TrackSelection",
    "select_tracks",
    "parse_time_to_seconds",
    # Transcode
    "build_transcode_cmd",
    "start_transcode",
    "wait_for_transcode",
    "ProgressMonitor",
    "progress_file",
]
