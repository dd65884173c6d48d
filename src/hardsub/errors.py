"""
Exception types raised by hardsub.

Every error is fatal: library code raises, and only the CLI entry point
catches HardsubError to print it and exit non-zero.
"""

from typing import Optional


class HardsubError(Exception):
    """Base class for all hardsub errors."""


class ArgumentError(HardsubError):
    """A required command-line input is missing."""


class ExternalToolError(HardsubError):
    """ffprobe or ffmpeg could not be started or exited with a failure."""

    def __init__(self, tool: str, message: str, output: str = "", returncode: Optional[int] = None):
        self.tool = tool
        self.output = output
        self.returncode = returncode
        super().__init__(f"{tool}: {message}")

    def __str__(self) -> str:
        text = super().__str__()
        if self.output:
            text += "\n" + self.output.rstrip()
        return text


class ParseError(HardsubError):
    """ffprobe output is not the JSON document we expect."""


class FormatError(HardsubError, ValueError):
    """A timecode string is not HH:MM:SS[.ffffff]."""


class TrackNotFoundError(HardsubError):
    """No stream of the wanted kind carries the wanted language tag."""

    def __init__(self, kind: str, language: str):
        self.kind = kind
        self.language = language
        super().__init__(f"No {kind} track found with language '{language}'")
