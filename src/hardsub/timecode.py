"""
Timecode helpers.

ffprobe reports stream durations in Matroska tags as "HH:MM:SS.fffffffff"
and ffmpeg's -progress output carries "out_time=HH:MM:SS.ffffff". Both go
through parse_time_to_seconds to get whole seconds.
"""

from hardsub.errors import FormatError


def _parse_field(name: str, text: str) -> int:
    """Parse one non-negative integer field of a timecode."""
    if not text or not text.isascii() or not text.isdigit():
        raise FormatError(f"error parsing {name}: {text!r} is not a number")
    return int(text)


def parse_time_to_seconds(time_str: str) -> int:
    """
    Convert a "H+:MM:SS[.ffffff]" timecode to whole seconds.

    The fractional part is read as an integer count of microseconds and
    scaled by 1e-6 before truncation, so "00:00:10.500000" gives 10. A
    fraction that is not a number, or is too long to convert, is ignored.

    Args:
        time_str: Timecode string.

    Returns:
        Number of whole seconds.

    Raises:
        FormatError: If the string does not have three colon-separated
            fields or a field is not a number.
    """
    parts = time_str.split(":")
    if len(parts) != 3:
        raise FormatError(f"invalid time format: {time_str!r}")

    hours = _parse_field("hours", parts[0])
    minutes = _parse_field("minutes", parts[1])

    seconds_parts = parts[2].split(".")
    seconds = _parse_field("seconds", seconds_parts[0])

    total_seconds = hours * 3600 + minutes * 60 + seconds

    if len(seconds_parts) > 1:
        fraction = seconds_parts[1]
        if fraction.isascii() and fraction.isdigit():
            try:
                # Microseconds -> seconds
                total_seconds += int(int(fraction) * 1e-6)
            except (OverflowError, ValueError):
                # Too many digits for int/float conversion, ignored like any bad fraction
                pass

    return total_seconds


def fmt_hms(seconds: float) -> str:
    """Format seconds as HH:MM:SS."""
    if seconds < 0:
        seconds = 0
    s = int(round(seconds))
    h = s // 3600
    m = (s % 3600) // 60
    r = s % 60
    return f"{h:02d}:{m:02d}:{r:02d}"
