"""wazero — tar.gz release from GitHub."""

from __future__ import annotations

from wavu.runtimes.base import ReleaseRuntime

WAZERO_RELEASES = "https://github.com/tetratelabs/wazero/releases"


class WazeroRuntime(ReleaseRuntime):
    runtime_name = "wazero"
    releases = WAZERO_RELEASES
    artifacts = {
        "linux-amd64": "download/v1.3.0/wazero_1.3.0_linux_amd64.tar.gz",
    }
    artifact_name = "wazero.tar.gz"
