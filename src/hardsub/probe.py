"""
Stream probing via ffprobe.

Runs ffprobe once on the input file and turns its JSON stream list into
StreamDescriptor records. Only the fields track selection needs are kept:
the stream index, its codec type and the language/DURATION tags.
"""

import json
import logging
import subprocess
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List

from hardsub.errors import ExternalToolError, ParseError

logger = logging.getLogger(__name__)


class CodecType(str, Enum):
    """Kind of elementary stream, as reported by ffprobe's codec_type."""

    AUDIO = "audio"
    VIDEO = "video"
    SUBTITLE = "subtitle"
    OTHER = "other"

    @classmethod
    def from_ffprobe(cls, value: str) -> "CodecType":
        """Map an ffprobe codec_type string; data/attachment/... become OTHER."""
        try:
            return cls(value)
        except ValueError:
            return cls.OTHER


@dataclass(frozen=True)
class StreamDescriptor:
    """One stream of the probed file."""

    index: int
    codec_type: CodecType
    language: str = ""  # tags.language, e.g. "jpn"
    duration: str = ""  # tags.DURATION, e.g. "00:23:40.042000000"


def run_ffprobe(path: Path) -> bytes:
    """
    Run ffprobe on a file and return its combined stdout/stderr.

    Raises:
        ExternalToolError: If ffprobe cannot be started or exits non-zero.
    """
    cmd = ["ffprobe", "-v", "quiet", "-print_format", "json", "-show_streams", str(path)]
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.STDOUT)
    except OSError as e:
        raise ExternalToolError("ffprobe", f"cannot execute: {e}") from e

    if result.returncode != 0:
        raise ExternalToolError(
            "ffprobe",
            f"exited with status {result.returncode}",
            output=result.stdout.decode("utf-8", errors="replace"),
            returncode=result.returncode,
        )
    return result.stdout


def _string_field(obj: Dict[str, Any], key: str, where: str) -> str:
    value = obj.get(key, "")
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(f"{where}: '{key}' should be a string, got {type(value).__name__}")
    return value


def _parse_stream(raw: Any, position: int) -> StreamDescriptor:
    where = f"stream #{position}"
    if not isinstance(raw, dict):
        raise ParseError(f"{where}: expected an object, got {type(raw).__name__}")

    index = raw.get("index", 0)
    # bool is an int subclass; ffprobe never emits one here
    if not isinstance(index, int) or isinstance(index, bool):
        raise ParseError(f"{where}: 'index' should be an integer, got {index!r}")

    codec_type = _string_field(raw, "codec_type", where)

    tags = raw.get("tags")
    if tags is None:
        tags = {}
    if not isinstance(tags, dict):
        raise ParseError(f"{where}: 'tags' should be an object, got {type(tags).__name__}")

    return StreamDescriptor(
        index=index,
        codec_type=CodecType.from_ffprobe(codec_type),
        language=_string_field(tags, "language", where),
        duration=_string_field(tags, "DURATION", where),
    )


def parse_probe_output(raw: bytes) -> List[StreamDescriptor]:
    """
    Parse ffprobe's JSON output into stream descriptors.

    Streams keep the order ffprobe reported them in.

    Raises:
        ParseError: If the output is not JSON or is not shaped like
            {"streams": [{...}, ...]}.
    """
    try:
        data = json.loads(raw)
    except (UnicodeDecodeError, ValueError) as e:
        raise ParseError(f"Error parsing ffprobe output: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(f"Error parsing ffprobe output: expected an object, got {type(data).__name__}")
    if "streams" not in data:
        raise ParseError("Error parsing ffprobe output: no 'streams' field")

    # "streams": null means no streams
    streams = data["streams"] if data["streams"] is not None else []
    if not isinstance(streams, list):
        raise ParseError(f"Error parsing ffprobe output: 'streams' should be a list, got {type(streams).__name__}")

    return [_parse_stream(s, i) for i, s in enumerate(streams)]


def probe_streams(path: Path) -> List[StreamDescriptor]:
    """Probe a media file and return its streams."""
    logger.info("Getting stream list via ffprobe")
    streams = parse_probe_output(run_ffprobe(path))
    logger.debug("ffprobe reported %d stream(s)", len(streams))
    return streams
