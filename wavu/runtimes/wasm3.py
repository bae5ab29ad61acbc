"""
wasm3 — a single static ELF, no archive.

The download is the executable itself, so installing is a plain
copy of the cache directory plus ``chmod +x``.
"""

from __future__ import annotations

from pathlib import Path

from wavu.adapters.filesystem import make_executable
from wavu.runtimes.base import ReleaseRuntime

WASM3_RELEASES = "https://github.com/wasm3/wasm3/releases"


class Wasm3Runtime(ReleaseRuntime):
    runtime_name = "wasm3"
    releases = WASM3_RELEASES
    artifacts = {
        "linux-amd64": "download/v0.5.0/wasm3-linux-x64.elf",
    }
    artifact_name = "wasm3"

    def post_copy(self, install_dir: Path) -> None:
        make_executable(install_dir / self.artifact_name)
