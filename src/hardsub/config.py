"""
Configuration management for hardsub.

Handles:
- XDG Base Directory compliance
- TOML configuration file loading
- Config dataclass with all options
- Configuration merging (system -> user -> CLI)
"""

import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Set

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

logger = logging.getLogger(__name__)

SYSTEM_CONFIG_DIR = Path("/etc/hardsub")


# -------------------- XDG DIRECTORIES --------------------


def get_xdg_config_home() -> Path:
    """Get XDG config home directory."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def get_xdg_state_home() -> Path:
    """Get XDG state home directory."""
    return Path(os.environ.get("XDG_STATE_HOME", Path.home() / ".local" / "state"))


def get_app_dirs() -> Dict[str, Path]:
    """Return all application directories. Nothing is created here."""
    return {
        "config": get_xdg_config_home() / "hardsub",
        "state": get_xdg_state_home() / "hardsub",
        "logs": get_xdg_state_home() / "hardsub" / "logs",
    }


# -------------------- CONFIGURATION DATACLASS --------------------


@dataclass
class Config:
    """All configuration options for hardsub."""

    # Track selection (fixed per installation)
    audio_lang: str = "jpn"
    subtitle_lang: str = "fre"

    # Output settings
    output: str = "output.mp4"

    # Debug/test
    debug: bool = False
    dryrun: bool = False

    # UI settings
    progress: bool = True
    poll_interval: float = 1.0  # Seconds between progress file reads

    # Keep ffmpeg's console output in the logs directory
    keep_log: bool = True


# -------------------- CONFIG FILE LOADING --------------------


def _load_single_config(config_dir: Path) -> Dict[str, Any]:
    """Load config.toml from a single directory."""
    toml_path = config_dir / "config.toml"
    try:
        with toml_path.open("rb") as f:
            return dict(tomllib.load(f))
    except (FileNotFoundError, NotADirectoryError):
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Failed to load %s: %s", toml_path, e)
        return {}


def _deep_merge_dicts(base: dict, override: dict) -> dict:
    """Deep merge two dicts, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge_dicts(result[key], value)
        else:
            result[key] = value
    return result


def load_config_file(config_dir: Path, system_config_dir: Path = SYSTEM_CONFIG_DIR) -> dict:
    """
    Load config with priority:
    1. User config: ~/.config/hardsub/config.toml (highest priority)
    2. System config: /etc/hardsub/config.toml (lowest priority, optional)

    User config values override system config values.
    """
    system_config: Dict[str, Any] = {}
    if system_config_dir.exists():
        system_config = _load_single_config(system_config_dir)

    user_config = _load_single_config(config_dir)

    return _deep_merge_dicts(system_config, user_config)


# Map config file keys to Config attribute names and accepted types
_MAPPINGS = {
    ("tracks", "audio_lang"): ("audio_lang", (str,)),
    ("tracks", "subtitle_lang"): ("subtitle_lang", (str,)),
    ("output", "default"): ("output", (str,)),
    ("ui", "progress"): ("progress", (bool,)),
    ("ui", "poll_interval"): ("poll_interval", (int, float)),
    ("logging", "keep_log"): ("keep_log", (bool,)),
}


def apply_config_to_args(file_config: dict, cfg: Config, cli_explicit: Optional[Set[str]] = None) -> None:
    """
    Apply file config values to Config instance.

    Values named in cli_explicit were given on the command line and keep
    priority over the file. Values of the wrong type are reported and skipped.

    Args:
        file_config: Dict from config file.
        cfg: Config instance with CLI-parsed values.
        cli_explicit: Attribute names explicitly set on the command line.
    """
    cli_explicit = cli_explicit or set()

    for (section, key), (attr_name, types) in _MAPPINGS.items():
        section_values = file_config.get(section)
        if not isinstance(section_values, dict) or key not in section_values:
            continue
        if attr_name in cli_explicit:
            continue

        file_val = section_values[key]
        # bool is an int subclass, don't let `true` pass as a poll interval
        if not isinstance(file_val, types) or (isinstance(file_val, bool) and bool not in types):
            logger.warning("Ignoring [%s] %s = %r: wrong type", section, key, file_val)
            continue
        setattr(cfg, attr_name, float(file_val) if attr_name == "poll_interval" else file_val)
