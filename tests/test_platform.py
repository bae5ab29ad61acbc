"""
Tests for platform detection and the error taxonomy.
"""

import pytest

from wavu.core.errors import (
    ConfigError,
    ExtractError,
    FilesystemError,
    ResolutionError,
    TransferError,
    UnsupportedPlatformError,
    WavuError,
)
from wavu.core.platform import (
    Architecture,
    OperatingSystem,
    detect_arch,
    detect_os,
    ensure_supported,
    platform_key,
)

# ── Detection ────────────────────────────────────────────────────────


class TestDetection:
    def test_linux(self):
        assert detect_os("Linux") is OperatingSystem.LINUX

    def test_darwin(self):
        assert detect_os("Darwin") is OperatingSystem.DARWIN

    def test_unknown_os(self):
        with pytest.raises(UnsupportedPlatformError, match="operating system"):
            detect_os("Plan9")

    @pytest.mark.parametrize(
        ("machine", "expected"),
        [
            ("x86_64", Architecture.AMD64),
            ("AMD64", Architecture.AMD64),
            ("aarch64", Architecture.ARM64V8),
            ("arm64", Architecture.ARM64V8),
            ("armv7l", Architecture.ARM32V7),
            ("i686", Architecture.I386),
        ],
    )
    def test_arch(self, machine, expected):
        assert detect_arch(machine) is expected

    def test_unknown_arch(self):
        with pytest.raises(UnsupportedPlatformError, match="architecture"):
            detect_arch("sparc64")

    def test_platform_key(self):
        assert platform_key("Linux", "x86_64") == "linux-amd64"
        assert platform_key("Darwin", "arm64") == "darwin-arm64v8"


class TestSupported:
    def test_linux_amd64_supported(self):
        assert ensure_supported("linux-amd64") == "linux-amd64"

    def test_other_platform_rejected(self):
        with pytest.raises(UnsupportedPlatformError, match="linux-amd64"):
            ensure_supported("darwin-arm64v8")


# ── Errors ───────────────────────────────────────────────────────────


class TestErrors:
    def test_all_are_wavu_errors(self):
        for cls in (
            ConfigError,
            ResolutionError,
            UnsupportedPlatformError,
            TransferError,
            ExtractError,
            FilesystemError,
        ):
            assert issubclass(cls, WavuError)

    def test_kinds(self):
        assert ConfigError("x").kind == "config"
        assert TransferError("x").kind == "network"
        assert TransferError("x", kind="io").kind == "io"
        assert ExtractError("x").kind == "corrupt"
        assert FilesystemError("x").kind == "filesystem"

    def test_transfer_error_details(self):
        e = TransferError("boom", url="http://h/x", status_code=500)
        assert e.url == "http://h/x"
        assert e.status_code == 500
        assert e.message == "boom"

    def test_resolution_error_names(self):
        e = ResolutionError("unknown", names=["nope"])
        assert e.names == ["nope"]
        assert ResolutionError("x").names == []
