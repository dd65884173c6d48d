"""
Command-line interface for hardsub.

This is the main entry point for the application.
"""

import argparse
import logging
import shutil
import subprocess
import sys
from pathlib import Path
from typing import List, Optional, Set, Tuple

from hardsub import __version__
from hardsub.config import Config, apply_config_to_args, get_app_dirs, load_config_file
from hardsub.converter import VIDEO_ENCODER, have_encoder
from hardsub.errors import ArgumentError, HardsubError
from hardsub.pipeline import get_log_path, run
from hardsub.ui import SimpleRichUI, console, setup_logging

logger = logging.getLogger(__name__)


# -------------------- ARGUMENT PARSING --------------------


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="hardsub",
        description="Transcode a video with NVENC, keeping the configured audio language "
        "and burning in subtitles.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s -path episode.mkv                    # Write output.mp4
  %(prog)s -path episode.mkv -output ep01.mp4   # Choose the output file
  %(prog)s -path episode.mkv --dryrun           # Show the ffmpeg command only
  %(prog)s --check-requirements                 # Check ffmpeg/ffprobe/NVENC
        """,
    )

    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {__version__}")

    parser.add_argument("-path", "--path", dest="path", default=None, help="Path to the input video file")
    parser.add_argument(
        "-output", "--output", dest="output", default=None, help="Output filename (default: output.mp4)"
    )

    debug_group = parser.add_argument_group("Debug/test")
    debug_group.add_argument("-d", "--debug", action="store_true", help="Enable debug output")
    debug_group.add_argument("-n", "--dryrun", action="store_true", help="Print the ffmpeg command, don't run it")

    ui_group = parser.add_argument_group("UI settings")
    ui_group.add_argument("--no-progress", action="store_false", dest="progress", help="Disable the progress bar")

    util_group = parser.add_argument_group("Utility commands")
    util_group.add_argument("--check-requirements", action="store_true")

    return parser


def parse_args(args: Optional[List[str]] = None) -> Tuple[Config, argparse.Namespace, Set[str]]:
    """Parse command-line arguments. Returns config, raw namespace and the options given explicitly."""
    parsed_args = build_parser().parse_args(args)

    cfg = Config(debug=parsed_args.debug, dryrun=parsed_args.dryrun, progress=parsed_args.progress)
    explicit: Set[str] = set()
    if parsed_args.output is not None:
        cfg.output = parsed_args.output
        explicit.add("output")
    if not parsed_args.progress:
        explicit.add("progress")

    return cfg, parsed_args, explicit


# -------------------- UTILITY COMMANDS --------------------


def check_requirements() -> int:
    """Check system requirements."""
    console.print(f"hardsub v{__version__} - Requirements Check")
    console.print("=" * 50)

    all_ok = True
    for tool in ("ffmpeg", "ffprobe"):
        if shutil.which(tool) is None:
            console.print(f"  [red]✗[/red] {tool}: NOT FOUND")
            all_ok = False
            continue
        try:
            result = subprocess.run([tool, "-version"], capture_output=True, text=True, timeout=5)
        except (OSError, subprocess.TimeoutExpired) as e:
            console.print(f"  [red]✗[/red] {tool}: error - {e}")
            all_ok = False
            continue
        if result.returncode == 0:
            version_line = result.stdout.split("\n")[0] if result.stdout else "unknown"
            console.print(f"  [green]✓[/green] {tool}: {version_line}")
        else:
            console.print(f"  [red]✗[/red] {tool}: installed but returned error")
            all_ok = False

    if have_encoder(VIDEO_ENCODER):
        console.print(f"  [green]✓[/green] {VIDEO_ENCODER} encoder: available")
    else:
        console.print(f"  [red]✗[/red] {VIDEO_ENCODER} encoder: not available")
        all_ok = False

    console.print()
    if all_ok:
        console.print("[green]✓ All requirements satisfied[/green]")
        return 0
    console.print("[red]✗ Some requirements missing[/red]")
    return 1


# -------------------- MAIN --------------------


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit status."""
    cfg, args, explicit = parse_args(argv)
    setup_logging(cfg.debug)

    if args.check_requirements:
        return check_requirements()

    try:
        if not args.path:
            raise ArgumentError("-path argument is required")

        app_dirs = get_app_dirs()
        file_config = load_config_file(app_dirs["config"])
        if file_config:
            apply_config_to_args(file_config, cfg, explicit)

        source = Path(args.path).expanduser()
        destination = Path(cfg.output).expanduser()
        logger.info("Starting video processing. Path: %s, Output: %s", source, destination)

        log_path = get_log_path(app_dirs["logs"], source) if cfg.keep_log and not cfg.dryrun else None
        run(source, destination, cfg, SimpleRichUI(cfg.progress), log_path)
    except HardsubError as e:
        logger.error("Error: %s", e)
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
