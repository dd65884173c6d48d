"""
Pytest configuration and shared fixtures for hardsub tests.
"""

import json
import subprocess
import sys
import tempfile
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional

import pytest

# Add src to path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


def make_stream(index: int, codec_type: str, language: Optional[str] = None, duration: Optional[str] = None) -> dict:
    """Build one ffprobe stream object."""
    stream: Dict[str, Any] = {"index": index, "codec_type": codec_type}
    tags = {}
    if language is not None:
        tags["language"] = language
    if duration is not None:
        tags["DURATION"] = duration
    if tags:
        stream["tags"] = tags
    return stream


def probe_json(streams: List[dict]) -> bytes:
    """Encode streams the way ffprobe -print_format json does."""
    return json.dumps({"streams": streams}).encode("utf-8")


class FakeProcess:
    """Stand-in for subprocess.Popen returned by a mocked ffmpeg start."""

    def __init__(self, cmd: List[str], returncode: int = 0, progress_text: str = ""):
        self.args = cmd
        self.returncode = None
        self._final_returncode = returncode
        if progress_text:
            progress_path = Path(cmd[cmd.index("-progress") + 1])
            progress_path.write_text(progress_text)

    def wait(self, timeout=None) -> int:
        self.returncode = self._final_returncode
        return self.returncode

    def poll(self):
        return self.returncode


@pytest.fixture
def anime_streams() -> List[dict]:
    """A typical fansub MKV: video, English and Japanese audio, French and English subs."""
    return [
        make_stream(0, "video", language="und", duration="00:23:40.042000000"),
        make_stream(1, "audio", language="eng", duration="00:23:40.010000000"),
        make_stream(2, "audio", language="jpn", duration="00:23:40.010000000"),
        make_stream(3, "subtitle", language="eng", duration="00:23:20.000000000"),
        make_stream(4, "subtitle", language="fre", duration="00:23:20.000000000"),
        make_stream(5, "attachment"),
    ]


@pytest.fixture
def fake_ffprobe(monkeypatch):
    """
    Replace subprocess.run so ffprobe returns the given output.

    Returns a function taking (output_bytes, returncode) and returning the
    list of recorded commands.
    """

    def install(output: bytes, returncode: int = 0) -> List[List[str]]:
        calls: List[List[str]] = []

        def fake_run(cmd, *args, **kwargs):
            calls.append(list(cmd))
            return subprocess.CompletedProcess(cmd, returncode, stdout=output, stderr=None)

        monkeypatch.setattr("hardsub.probe.subprocess.run", fake_run)
        return calls

    return install


@pytest.fixture
def fake_ffmpeg(monkeypatch):
    """
    Replace subprocess.Popen so ffmpeg "runs" instantly.

    Returns a function taking (returncode, progress_text) and returning the
    list of FakeProcess instances created.
    """

    def install(returncode: int = 0, progress_text: str = "") -> List[FakeProcess]:
        procs: List[FakeProcess] = []

        def fake_popen(cmd, *args, **kwargs):
            proc = FakeProcess(list(cmd), returncode=returncode, progress_text=progress_text)
            procs.append(proc)
            return proc

        monkeypatch.setattr("hardsub.converter.subprocess.Popen", fake_popen)
        return procs

    return install


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for test outputs."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def temp_config_dir(temp_dir: Path) -> Path:
    """Create a temporary config directory."""
    config_dir = temp_dir / "config"
    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


@pytest.fixture
def mock_xdg_dirs(temp_dir: Path, monkeypatch):
    """Mock XDG directories to use temporary paths."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(temp_dir / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(temp_dir / "state"))


@pytest.fixture
def default_config():
    """Return a default Config instance for testing."""
    from hardsub.config import Config

    return Config(progress=False, poll_interval=0.01)
