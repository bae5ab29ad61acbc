"""
Configuration loader — reads wavu.conf.json into a typed model.

The file is optional.  When present it overrides the computed
defaults (home directory, OS user-cache directory); when absent the
defaults are used; when present but broken, loading fails loudly
rather than silently falling back.

    {
        "home_dir": "~/somewhere",
        "cache_dir": "/var/cache/me",
        "mirrors": {"wasmer": "https://mirror.example/wasmer/releases"}
    }
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from wavu.core.context import TOOL_DIR
from wavu.core.errors import ConfigError

logger = logging.getLogger(__name__)

# Default config filename
CONFIG_FILE = "wavu.conf.json"


class WavuConfig(BaseModel):
    """Contents of wavu.conf.json — every key is optional."""

    model_config = ConfigDict(extra="forbid")

    home_dir: Path | None = None     # where .wavu/bin lives
    cache_dir: Path | None = None    # where .wavu/runtimes lives
    mirrors: dict[str, str] = Field(default_factory=dict)  # runtime → release base URL


def default_config_path(home: Path | None = None) -> Path:
    """Return ``<home>/.wavu/wavu.conf.json``."""
    return (home or Path.home()) / TOOL_DIR / CONFIG_FILE


def default_cache_dir(home: Path | None = None) -> Path:
    """Return the OS user-cache directory.

    linux:   $XDG_CACHE_HOME, else ~/.cache
    darwin:  ~/Library/Caches
    windows: %LOCALAPPDATA%, else ~/AppData/Local
    """
    home = home or Path.home()
    if sys.platform == "darwin":
        return home / "Library" / "Caches"
    if sys.platform.startswith("win"):
        local = os.environ.get("LOCALAPPDATA")
        return Path(local) if local else home / "AppData" / "Local"
    xdg = os.environ.get("XDG_CACHE_HOME")
    return Path(xdg) if xdg else home / ".cache"


def load_config(path: Path | None = None, home: Path | None = None) -> WavuConfig:
    """Load and validate the configuration file.

    Args:
        path: Explicit config path (``--config``).  Must exist.
        home: Home directory used to find the default config path.

    Returns:
        Validated WavuConfig (all defaults when no file is present).

    Raises:
        ConfigError: If the file is unreadable, not JSON, or invalid.
    """
    explicit = path is not None
    if path is None:
        path = default_config_path(home)

    if not path.is_file():
        if explicit:
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("No config file at %s, using defaults", path)
        return WavuConfig()

    logger.debug("Loading config from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Expected a JSON object in {path}, got {type(data).__name__}")

    try:
        config = WavuConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {path}: {e}") from e

    logger.info("Loaded config from %s", path)
    return config


def resolve_dirs(config: WavuConfig, home: Path | None = None) -> tuple[Path, Path]:
    """Return ``(home_dir, cache_dir)`` with config overrides applied."""
    home = home or Path.home()
    home_dir = config.home_dir.expanduser() if config.home_dir else home
    cache_dir = config.cache_dir.expanduser() if config.cache_dir else default_cache_dir(home)
    return home_dir, cache_dir
