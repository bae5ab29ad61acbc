"""
Host platform detection — OS and CPU architecture as a fixed string key.

Runtime plugins pick their release artifact with the key
``"<os>-<arch>"`` (e.g. ``linux-amd64``). Detection happens once at
startup; nothing else in wavu queries the platform.

Feature matrix (which keys have artifacts):

    | target \\ runtime | wasmer | wasmtime | wasm3 | wazero | spidermonkey |
    |------------------+--------+----------+-------+--------+--------------|
    | linux amd64      | X      | X        | X     | X      | X            |
"""

from __future__ import annotations

import logging
import platform
from enum import Enum

from wavu.core.errors import UnsupportedPlatformError

logger = logging.getLogger(__name__)


class OperatingSystem(str, Enum):
    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"


class Architecture(str, Enum):
    AMD64 = "amd64"
    I386 = "i386"
    ARM32V6 = "arm32v6"
    ARM32V7 = "arm32v7"
    ARM64V8 = "arm64v8"
    PPC64LE = "ppc64le"


# platform.machine() → Architecture
_ARCH_MAP: dict[str, Architecture] = {
    "x86_64": Architecture.AMD64,
    "amd64": Architecture.AMD64,       # Windows / WSL2
    "i386": Architecture.I386,
    "i686": Architecture.I386,
    "armv6l": Architecture.ARM32V6,
    "armv7l": Architecture.ARM32V7,
    "aarch64": Architecture.ARM64V8,
    "arm64": Architecture.ARM64V8,     # macOS reports arm64
    "ppc64le": Architecture.PPC64LE,
}

SUPPORTED_PLATFORMS: frozenset[str] = frozenset({"linux-amd64"})


def detect_os(system: str | None = None) -> OperatingSystem:
    """Map ``platform.system()`` to an OperatingSystem.

    Raises:
        UnsupportedPlatformError: If the OS is not one wavu knows.
    """
    name = (system if system is not None else platform.system()).lower()
    try:
        return OperatingSystem(name)
    except ValueError:
        raise UnsupportedPlatformError(f"Unsupported operating system: {name!r}") from None


def detect_arch(machine: str | None = None) -> Architecture:
    """Map ``platform.machine()`` to an Architecture.

    Raises:
        UnsupportedPlatformError: If the architecture is not one wavu knows.
    """
    name = (machine if machine is not None else platform.machine()).lower()
    arch = _ARCH_MAP.get(name)
    if arch is None:
        raise UnsupportedPlatformError(f"Unsupported architecture: {name!r}")
    return arch


def platform_key(system: str | None = None, machine: str | None = None) -> str:
    """Return the ``"<os>-<arch>"`` key for the host (or the given values)."""
    key = f"{detect_os(system).value}-{detect_arch(machine).value}"
    logger.debug("Detected platform %s", key)
    return key


def ensure_supported(key: str) -> str:
    """Return ``key`` if wavu ships artifacts for it, else raise."""
    if key not in SUPPORTED_PLATFORMS:
        supported = ", ".join(sorted(SUPPORTED_PLATFORMS))
        raise UnsupportedPlatformError(
            f"Platform {key} is not supported yet (supported: {supported})"
        )
    return key
