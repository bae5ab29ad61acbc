"""wasmer — tar.gz release from GitHub."""

from __future__ import annotations

from wavu.runtimes.base import ReleaseRuntime

WASMER_RELEASES = "https://github.com/wasmerio/wasmer/releases"


class WasmerRuntime(ReleaseRuntime):
    runtime_name = "wasmer"
    releases = WASMER_RELEASES
    artifacts = {
        "linux-amd64": "download/v4.0.0/wasmer-linux-amd64.tar.gz",
    }
    artifact_name = "wasmer.tar.gz"
