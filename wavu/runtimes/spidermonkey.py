"""spidermonkey — the Firefox jsshell zip from archive.mozilla.org."""

from __future__ import annotations

from wavu.runtimes.base import ReleaseRuntime

SPIDERMONKEY_RELEASES = "https://archive.mozilla.org/pub/firefox/releases"


class SpidermonkeyRuntime(ReleaseRuntime):
    runtime_name = "spidermonkey"
    releases = SPIDERMONKEY_RELEASES
    artifacts = {
        "linux-amd64": "116.0/jsshell/jsshell-linux-x86_64.zip",
    }
    artifact_name = "spidermonkey.zip"
