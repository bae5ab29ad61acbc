"""
Error taxonomy — every failure wavu knows how to report.

Two families:

    Fatal   — ConfigError, ResolutionError, UnsupportedPlatformError.
              Raised before any runtime work starts; the CLI aborts.
    Scoped  — TransferError, ExtractError, FilesystemError.
              Raised inside one runtime's task; the pipeline converts
              them into that runtime's TaskOutcome.

FilesystemError is fatal when it hits the shared roots (the CLI
creates them up front) and scoped when it hits a runtime subdirectory.
"""

from __future__ import annotations


class WavuError(Exception):
    """Base class for all wavu errors.

    ``kind`` is a short machine-readable tag carried into outcomes
    and JSON output (e.g. ``network``, ``corrupt``).
    """

    kind: str = "error"

    def __init__(self, message: str, *, kind: str | None = None):
        super().__init__(message)
        if kind is not None:
            self.kind = kind

    @property
    def message(self) -> str:
        return str(self)


class ConfigError(WavuError):
    """Raised when the configuration file is unreadable or invalid."""

    kind = "config"


class ResolutionError(WavuError):
    """Raised when requested runtime names cannot be resolved."""

    kind = "resolution"

    def __init__(self, message: str, names: list[str] | None = None):
        super().__init__(message)
        self.names = names or []


class UnsupportedPlatformError(WavuError):
    """Raised when the host OS/architecture has no release artifacts."""

    kind = "platform"


class TransferError(WavuError):
    """Raised when downloading an artifact fails.

    kind:
        network — connection failure, timeout or non-2xx status.
        io      — the destination file could not be created or written.
    """

    kind = "network"

    def __init__(
        self,
        message: str,
        *,
        kind: str = "network",
        url: str = "",
        status_code: int | None = None,
    ):
        super().__init__(message, kind=kind)
        self.url = url
        self.status_code = status_code


class ExtractError(WavuError):
    """Raised when unpacking an archive fails.

    kind:
        corrupt — the archive could not be decoded, or holds unsafe members.
        io      — the archive could not be read or the target written.
    """

    kind = "corrupt"

    def __init__(self, message: str, *, kind: str = "corrupt"):
        super().__init__(message, kind=kind)


class FilesystemError(WavuError):
    """Raised when creating directories or copying files fails."""

    kind = "filesystem"
