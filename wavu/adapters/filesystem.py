"""
Filesystem helpers — merge-copy and permission fixes.

``merge_copy`` is ``cp -r source/* target/``: the target directory is
populated, never replaced; files already there are overwritten only
when the source has the same path.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from pathlib import Path

from wavu.core.errors import FilesystemError

logger = logging.getLogger(__name__)


def merge_copy(source_dir: Path, target_dir: Path) -> int:
    """Recursively copy the contents of ``source_dir`` into ``target_dir``.

    Returns:
        Number of files copied.

    Raises:
        FilesystemError: If the source is missing or a copy fails.
    """
    if not source_dir.is_dir():
        raise FilesystemError(f"Not a directory: {source_dir}")

    copied: list[str] = []

    def _copy(src: str, dst: str) -> str:
        copied.append(dst)
        return shutil.copy2(src, dst)

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source_dir, target_dir, copy_function=_copy, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        raise FilesystemError(f"Cannot copy {source_dir} to {target_dir}: {e}") from e

    logger.debug("Copied %d files from %s to %s", len(copied), source_dir, target_dir)
    return len(copied)


def make_executable(path: Path) -> None:
    """Add the execute bits wherever the read bits are set (``chmod +x``)."""
    try:
        mode = path.stat().st_mode
        exec_bits = (mode & (stat.S_IRUSR | stat.S_IRGRP | stat.S_IROTH)) >> 2
        os.chmod(path, mode | exec_bits)
    except OSError as e:
        raise FilesystemError(f"Cannot make {path} executable: {e}") from e
