"""Runtimes — one plugin per installable WebAssembly runtime.

Public re-exports for convenient access.
"""

from wavu.runtimes.base import ReleaseRuntime, RuntimePlugin
from wavu.runtimes.registry import RuntimeRegistry, default_registry

__all__ = [
    "ReleaseRuntime",
    "RuntimePlugin",
    "RuntimeRegistry",
    "default_registry",
]
