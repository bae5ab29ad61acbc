"""
Archive extractor — unpack tar.gz, tar.xz and zip into a directory.

One entry point, ``extract``, dispatching on the archive format.
Existing files at conflicting paths are overwritten.  Extraction is
not atomic: a failure part-way leaves whatever was already written.
"""

from __future__ import annotations

import gzip
import logging
import lzma
import os
import tarfile
import zipfile
import zlib
from enum import Enum
from pathlib import Path, PurePosixPath

from pydantic import BaseModel

from wavu.core.errors import ExtractError

logger = logging.getLogger(__name__)

# Decoder failures that mean "bad archive bytes", not "bad disk".
# gzip.BadGzipFile is an OSError, so it must be checked before OSError.
_DECODE_ERRORS = (
    tarfile.TarError,
    zipfile.BadZipFile,
    gzip.BadGzipFile,
    lzma.LZMAError,
    zlib.error,
    EOFError,
)


class ArchiveFormat(str, Enum):
    TAR_GZ = "tar.gz"
    TAR_XZ = "tar.xz"
    ZIP = "zip"

    @classmethod
    def from_filename(cls, filename: str) -> ArchiveFormat | None:
        """Infer the format from a filename suffix, or None if not an archive."""
        lower = filename.lower()
        if lower.endswith((".tar.gz", ".tgz")):
            return cls.TAR_GZ
        if lower.endswith((".tar.xz", ".txz")):
            return cls.TAR_XZ
        if lower.endswith(".zip"):
            return cls.ZIP
        return None


class ArchiveReference(BaseModel):
    """A downloaded archive waiting to be unpacked."""

    path: Path
    format: ArchiveFormat


def extract(archive: ArchiveReference, target_dir: Path) -> list[str]:
    """Unpack ``archive`` into ``target_dir``.

    Args:
        archive: The archive file and its format.
        target_dir: Destination directory (created if missing).

    Returns:
        Names of the extracted members.

    Raises:
        ExtractError: ``kind="corrupt"`` if the archive cannot be decoded
            or holds members escaping ``target_dir``; ``kind="io"`` if the
            archive cannot be read or the target cannot be written.
    """
    if not archive.path.is_file():
        raise ExtractError(f"Archive not found: {archive.path}", kind="io")

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ExtractError(f"Cannot create {target_dir}: {e}", kind="io") from e

    logger.debug("Extracting %s (%s) into %s", archive.path, archive.format.value, target_dir)

    try:
        if archive.format is ArchiveFormat.ZIP:
            members = _extract_zip(archive.path, target_dir)
        else:
            mode = "r:gz" if archive.format is ArchiveFormat.TAR_GZ else "r:xz"
            members = _extract_tar(archive.path, mode, target_dir)
    except ExtractError:
        raise
    except _DECODE_ERRORS as e:
        raise ExtractError(f"Corrupt archive {archive.path.name}: {e}") from e
    except OSError as e:
        raise ExtractError(f"Cannot extract {archive.path.name}: {e}", kind="io") from e

    logger.info("Extracted %d members from %s", len(members), archive.path.name)
    return members


def _extract_tar(path: Path, mode: str, target_dir: Path) -> list[str]:
    with tarfile.open(path, mode) as tf:
        members = tf.getmembers()
        for member in members:
            _check_member_path(member.name, path)
        # "data" filter refuses links pointing outside target_dir and strips setuid bits
        tf.extractall(target_dir, members=members, filter="data")
    return [m.name for m in members]


def _extract_zip(path: Path, target_dir: Path) -> list[str]:
    with zipfile.ZipFile(path, "r") as zf:
        infos = zf.infolist()
        for info in infos:
            _check_member_path(info.filename, path)
        for info in infos:
            extracted = zf.extract(info, target_dir)
            # zipfile drops unix permissions; restore them so binaries stay executable
            mode = (info.external_attr >> 16) & 0o777
            if mode and not info.is_dir():
                os.chmod(extracted, mode)
    return [i.filename for i in infos]


def _check_member_path(name: str, archive: Path) -> None:
    member = PurePosixPath(name.replace("\\", "/"))
    if member.is_absolute() or ".." in member.parts:
        raise ExtractError(f"Unsafe member {name!r} in {archive.name}")
