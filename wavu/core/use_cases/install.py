"""
Install use case — from requested names to an install report.

The full vertical slice behind ``wavu <runtimes...>``:

    load config → detect platform → resolve ALL names → create roots
                → run the pipeline → report

Everything before the pipeline is fail-fast: any error there is
fatal, and nothing has been downloaded or written when it happens.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path

from wavu.core.config.loader import load_config, resolve_dirs
from wavu.core.context import InstallContext
from wavu.core.engine.pipeline import install_all
from wavu.core.errors import ConfigError, WavuError
from wavu.core.models.outcome import InstallReport
from wavu.core.platform import ensure_supported, platform_key
from wavu.runtimes.base import RuntimePlugin
from wavu.runtimes.registry import RuntimeRegistry, default_registry
from wavu.ui.progress import ProgressDisplay

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of an install run."""

    requested: list[str] = field(default_factory=list)
    context: InstallContext | None = None
    report: InstallReport | None = None
    error: str | None = None
    error_kind: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.report is not None and self.report.all_ok

    def to_dict(self) -> dict:
        result: dict = {"requested": self.requested}
        if self.error:
            result["error"] = self.error
            result["error_kind"] = self.error_kind
            return result

        if self.context:
            result["install_root"] = str(self.context.install_root)
            result["cache_root"] = str(self.context.cache_root)
        if self.report:
            result["report"] = self.report.to_dict()
        return result


def prepare_install(
    runtimes: Iterable[str],
    config_path: Path | None = None,
    home: Path | None = None,
    registry: RuntimeRegistry | None = None,
    platform: str | None = None,
) -> tuple[InstallContext, dict[str, RuntimePlugin]]:
    """Validate the request and build the install context.

    Args:
        runtimes: Requested runtime names.
        config_path: Explicit config file (default: ~/.wavu/wavu.conf.json).
        home: Home directory override (default: ``Path.home()``).
        registry: Pre-built registry (default: built-ins + config mirrors).
        platform: Platform key override (default: detected host).

    Returns:
        ``(context, plugins)`` with both roots created.

    Raises:
        WavuError: Any fatal error (config, platform, resolution, roots).
    """
    if home is None:
        try:
            home = Path.home()
        except RuntimeError as e:
            raise ConfigError(f"Cannot resolve the home directory: {e}") from e

    config = load_config(config_path, home=home)

    key = ensure_supported(platform or platform_key())

    if registry is None:
        registry = default_registry(config.mirrors)
    for name in config.mirrors:
        if name not in registry:
            logger.warning("Ignoring mirror for unknown runtime '%s'", name)

    plugins = registry.resolve(runtimes, platform=key)

    home_dir, cache_dir = resolve_dirs(config, home=home)
    ctx = InstallContext.from_dirs(home_dir, cache_dir, platform=key)
    ctx.ensure_roots()

    logger.info("Install root %s, cache root %s", ctx.install_root, ctx.cache_root)
    return ctx, plugins


def run_install(
    runtimes: Iterable[str],
    config_path: Path | None = None,
    home: Path | None = None,
    registry: RuntimeRegistry | None = None,
    platform: str | None = None,
    display: ProgressDisplay | None = None,
) -> InstallResult:
    """Install the requested runtimes concurrently.

    Fatal errors are captured in ``result.error``; per-runtime failures
    are in ``result.report``.
    """
    result = InstallResult(requested=list(dict.fromkeys(runtimes)))

    try:
        ctx, plugins = prepare_install(
            result.requested,
            config_path=config_path,
            home=home,
            registry=registry,
            platform=platform,
        )
    except WavuError as e:
        logger.debug("Aborting before install: %s", e)
        result.error = str(e)
        result.error_kind = e.kind
        return result

    result.context = ctx

    display = display or ProgressDisplay(enabled=False)
    with display:
        display.println("Starting downloading runtimes!")
        result.report = install_all(ctx, plugins, display=display)

    return result
