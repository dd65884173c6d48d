"""
Track selection.

Finds the audio track to keep and checks that a subtitle track exists in the
wanted language. The languages are fixed per installation (see Config), not
derived from the file.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional

from hardsub.errors import TrackNotFoundError
from hardsub.probe import CodecType, StreamDescriptor
from hardsub.timecode import parse_time_to_seconds

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackSelection:
    """Result of a successful selection."""

    audio_index: int  # ffprobe stream index of the audio track to map
    subtitle_index: int  # ffprobe stream index of the matching subtitle track
    total_duration_seconds: int  # from the last stream carrying a DURATION tag


def select_tracks(streams: List[StreamDescriptor], audio_lang: str, subtitle_lang: str) -> TrackSelection:
    """
    Scan the streams once and pick the tracks to use.

    Rules:
    1. The first audio stream tagged exactly audio_lang is used.
    2. The first subtitle stream tagged exactly subtitle_lang is used.
    3. The total duration comes from the last stream (of any type) with a
       non-empty DURATION tag.

    Args:
        streams: Streams in ffprobe order.
        audio_lang: Wanted audio language tag (e.g. "jpn").
        subtitle_lang: Wanted subtitle language tag (e.g. "fre").

    Returns:
        TrackSelection.

    Raises:
        TrackNotFoundError: If no audio or no subtitle stream matches.
        FormatError: If a DURATION tag is not a valid timecode.
    """
    logger.info("Searching for audio track (%s) and subtitle track (%s)", audio_lang, subtitle_lang)

    audio_index: Optional[int] = None
    subtitle_index: Optional[int] = None
    total_duration = 0

    for stream in streams:
        if audio_index is None and stream.codec_type == CodecType.AUDIO and stream.language == audio_lang:
            logger.info("Found audio track %d (%s)", stream.index, audio_lang)
            audio_index = stream.index
        if subtitle_index is None and stream.codec_type == CodecType.SUBTITLE and stream.language == subtitle_lang:
            logger.info("Found subtitle track %d (%s)", stream.index, subtitle_lang)
            subtitle_index = stream.index
        if stream.duration:
            total_duration = parse_time_to_seconds(stream.duration)

    if audio_index is None:
        raise TrackNotFoundError("audio", audio_lang)
    if subtitle_index is None:
        raise TrackNotFoundError("subtitle", subtitle_lang)

    logger.debug("Total duration: %ds", total_duration)
    return TrackSelection(
        audio_index=audio_index,
        subtitle_index=subtitle_index,
        total_duration_seconds=total_duration,
    )
