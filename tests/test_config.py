"""
Tests for configuration loading and the install context.
"""

import json
from pathlib import Path

import pytest

from wavu.core.config.loader import (
    WavuConfig,
    default_cache_dir,
    default_config_path,
    load_config,
    resolve_dirs,
)
from wavu.core.context import InstallContext
from wavu.core.errors import ConfigError, FilesystemError


class TestLoadConfig:
    def test_missing_default_file_uses_defaults(self, tmp_path: Path):
        config = load_config(home=tmp_path)
        assert config == WavuConfig()

    def test_default_path(self, tmp_path: Path):
        assert default_config_path(tmp_path) == tmp_path / ".wavu" / "wavu.conf.json"

    def test_explicit_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="not found"):
            load_config(tmp_path / "nope.json")

    def test_load_valid(self, tmp_path: Path):
        path = tmp_path / "wavu.conf.json"
        path.write_text(json.dumps({
            "home_dir": str(tmp_path / "h"),
            "cache_dir": str(tmp_path / "c"),
            "mirrors": {"wasmer": "http://mirror/wasmer"},
        }))
        config = load_config(path)
        assert config.home_dir == tmp_path / "h"
        assert config.cache_dir == tmp_path / "c"
        assert config.mirrors == {"wasmer": "http://mirror/wasmer"}

    def test_default_file_is_read(self, tmp_path: Path):
        path = default_config_path(tmp_path)
        path.parent.mkdir(parents=True)
        path.write_text('{"cache_dir": "/somewhere"}')
        assert load_config(home=tmp_path).cache_dir == Path("/somewhere")

    def test_invalid_json(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("{not json")
        with pytest.raises(ConfigError, match="Invalid JSON"):
            load_config(path)

    def test_not_an_object(self, tmp_path: Path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigError, match="JSON object"):
            load_config(path)

    def test_unknown_key_rejected(self, tmp_path: Path):
        path = tmp_path / "extra.json"
        path.write_text('{"homedir": "/typo"}')
        with pytest.raises(ConfigError, match="Invalid configuration"):
            load_config(path)


class TestResolveDirs:
    def test_defaults(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.delenv("XDG_CACHE_HOME", raising=False)
        home_dir, cache_dir = resolve_dirs(WavuConfig(), home=tmp_path)
        assert home_dir == tmp_path
        assert cache_dir == tmp_path / ".cache"

    def test_xdg_cache_home(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr("sys.platform", "linux")
        monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "xdg"))
        assert default_cache_dir(tmp_path) == tmp_path / "xdg"

    def test_darwin_cache(self, tmp_path: Path, monkeypatch):
        monkeypatch.setattr("sys.platform", "darwin")
        assert default_cache_dir(tmp_path) == tmp_path / "Library" / "Caches"

    def test_overrides(self, tmp_path: Path):
        config = WavuConfig(home_dir=tmp_path / "h", cache_dir=tmp_path / "c")
        assert resolve_dirs(config, home=tmp_path / "ignored") == (tmp_path / "h", tmp_path / "c")


# ── Install context ──────────────────────────────────────────────────


class TestInstallContext:
    def test_layout(self, tmp_path: Path):
        ctx = InstallContext.from_dirs(tmp_path / "home", tmp_path / "cache")
        assert ctx.install_root == tmp_path / "home" / ".wavu" / "bin"
        assert ctx.cache_root == tmp_path / "cache" / ".wavu" / "runtimes"
        assert ctx.runtime_install_dir("wasmer") == ctx.install_root / "wasmer"
        assert ctx.runtime_cache_dir("wasmer") == ctx.cache_root / "wasmer"

    def test_frozen(self, tmp_path: Path):
        ctx = InstallContext.from_dirs(tmp_path, tmp_path)
        with pytest.raises(Exception):
            ctx.platform = "darwin-arm64v8"

    def test_ensure_roots(self, tmp_path: Path):
        ctx = InstallContext.from_dirs(tmp_path / "home", tmp_path / "cache")
        ctx.ensure_roots()
        ctx.ensure_roots()  # idempotent
        assert ctx.install_root.is_dir()
        assert ctx.cache_root.is_dir()

    def test_ensure_roots_blocked(self, tmp_path: Path):
        blocker = tmp_path / "home"
        blocker.write_text("a file, not a directory")
        ctx = InstallContext.from_dirs(blocker, tmp_path / "cache")
        with pytest.raises(FilesystemError):
            ctx.ensure_roots()
