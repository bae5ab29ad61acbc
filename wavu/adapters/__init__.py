"""Adapters — network, archive and filesystem side effects.

Public re-exports for convenient access.
"""

from wavu.adapters.archive import ArchiveFormat, ArchiveReference, extract
from wavu.adapters.filesystem import make_executable, merge_copy
from wavu.adapters.transfer import fetch

__all__ = [
    "ArchiveFormat",
    "ArchiveReference",
    "extract",
    "fetch",
    "make_executable",
    "merge_copy",
]
