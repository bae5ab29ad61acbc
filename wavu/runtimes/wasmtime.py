"""wasmtime — tar.xz release from GitHub."""

from __future__ import annotations

from wavu.runtimes.base import ReleaseRuntime

WASMTIME_RELEASES = "https://github.com/bytecodealliance/wasmtime/releases"


class WasmtimeRuntime(ReleaseRuntime):
    runtime_name = "wasmtime"
    releases = WASMTIME_RELEASES
    artifacts = {
        "linux-amd64": "download/v11.0.0/wasmtime-v11.0.0-x86_64-linux.tar.xz",
    }
    artifact_name = "wasmtime.tar.xz"
