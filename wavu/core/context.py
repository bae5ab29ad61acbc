"""
Install context — the single source of truth for "where do things go."

Built ONCE at startup by the entry point and passed by reference into
every plugin call:

    - CLI:    main.py → InstallContext.from_dirs(home, cache, platform)
    - Tests:  InstallContext.from_dirs(tmp_path / "home", tmp_path / "cache")

Design notes:
    - Frozen pydantic model.  Tasks share it read-only across threads.
    - No component looks up $HOME or the OS cache dir by itself.
    - Each runtime writes only below its own ``<root>/<name>`` pair,
      which keeps concurrent tasks from touching each other's files.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from wavu.core.errors import FilesystemError

logger = logging.getLogger(__name__)

TOOL_DIR = ".wavu"


class InstallContext(BaseModel):
    """Immutable install configuration shared by all tasks."""

    model_config = ConfigDict(frozen=True)

    install_root: Path              # <home_dir>/.wavu/bin
    cache_root: Path                # <cache_dir>/.wavu/runtimes
    platform: str = "linux-amd64"   # "<os>-<arch>" artifact key

    @classmethod
    def from_dirs(
        cls,
        home_dir: Path,
        cache_dir: Path,
        platform: str = "linux-amd64",
    ) -> InstallContext:
        """Build the standard layout below a home and a cache directory."""
        return cls(
            install_root=Path(home_dir) / TOOL_DIR / "bin",
            cache_root=Path(cache_dir) / TOOL_DIR / "runtimes",
            platform=platform,
        )

    def runtime_cache_dir(self, name: str) -> Path:
        """Where a runtime's downloaded artifact is staged."""
        return self.cache_root / name

    def runtime_install_dir(self, name: str) -> Path:
        """Where a runtime's executables end up."""
        return self.install_root / name

    def ensure_roots(self) -> None:
        """Create both roots (mkdir -p).

        Raises:
            FilesystemError: If either directory cannot be created.
        """
        for root in (self.install_root, self.cache_root):
            try:
                root.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise FilesystemError(f"Cannot create directory {root}: {e}") from e
            logger.debug("Ensured directory %s", root)
