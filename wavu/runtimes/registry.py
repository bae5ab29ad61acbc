"""
Runtime registry — the closed set of runtimes wavu can install.

Resolution turns the user's requested names into plugin objects in
one lookup per name.  The whole request is validated before anything
is returned, so an unknown name stops the run before any download.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping

from wavu.core.errors import ResolutionError
from wavu.runtimes.base import RuntimePlugin
from wavu.runtimes.spidermonkey import SpidermonkeyRuntime
from wavu.runtimes.wasm3 import Wasm3Runtime
from wavu.runtimes.wasmer import WasmerRuntime
from wavu.runtimes.wasmtime import WasmtimeRuntime
from wavu.runtimes.wazero import WazeroRuntime

logger = logging.getLogger(__name__)

BUILTIN_RUNTIMES = (
    WasmerRuntime,
    WasmtimeRuntime,
    Wasm3Runtime,
    WazeroRuntime,
    SpidermonkeyRuntime,
)


class RuntimeRegistry:
    """Name → RuntimePlugin lookup."""

    def __init__(self) -> None:
        self._plugins: dict[str, RuntimePlugin] = {}

    def register(self, plugin: RuntimePlugin) -> None:
        name = plugin.name
        if name in self._plugins:
            logger.warning("Overwriting existing runtime: %s", name)
        self._plugins[name] = plugin
        logger.debug("Registered runtime: %s", name)

    def get(self, name: str) -> RuntimePlugin | None:
        return self._plugins.get(name)

    def names(self) -> list[str]:
        return sorted(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    def __len__(self) -> int:
        return len(self._plugins)

    def resolve(
        self,
        names: Iterable[str],
        platform: str | None = None,
    ) -> dict[str, RuntimePlugin]:
        """Resolve requested names to plugins, all or nothing.

        Duplicates collapse to one entry (first occurrence wins the order).

        Args:
            names: Requested runtime names.
            platform: If given, every plugin must support this platform key.

        Returns:
            Ordered mapping name → plugin.

        Raises:
            ResolutionError: Naming every unknown (or unsupported) runtime.
        """
        requested = list(dict.fromkeys(names))
        unknown = [n for n in requested if n not in self._plugins]
        if unknown:
            raise ResolutionError(
                f"Unknown runtime{'s' if len(unknown) > 1 else ''} "
                f"{', '.join(repr(n) for n in unknown)} "
                f"(known: {', '.join(self.names())})",
                names=unknown,
            )

        resolved = {n: self._plugins[n] for n in requested}

        if platform is not None:
            unsupported = [n for n, p in resolved.items() if not p.supports(platform)]
            if unsupported:
                raise ResolutionError(
                    f"No {platform} release for: {', '.join(unsupported)}",
                    names=unsupported,
                )

        return resolved


def default_registry(mirrors: Mapping[str, str] | None = None) -> RuntimeRegistry:
    """Build the registry of built-in runtimes.

    Args:
        mirrors: Optional runtime name → release base URL overrides.
    """
    mirrors = mirrors or {}
    registry = RuntimeRegistry()
    for runtime_cls in BUILTIN_RUNTIMES:
        registry.register(runtime_cls(base_url=mirrors.get(runtime_cls.runtime_name)))
    return registry
