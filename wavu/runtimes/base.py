"""
Runtime plugin base — the contract between the pipeline and runtimes.

The pipeline only talks to runtimes through this protocol: two
operations, always called in order for one runtime, never in
parallel with each other:

    download(ctx, progress)   → artifact staged under ctx.cache_root/<name>
    install(ctx, progress)    → executables placed under ctx.install_root/<name>

Both raise WavuError subclasses on failure; the pipeline turns them
into a TaskOutcome.  Progress messages are observational only.

To add a runtime:
    1. Subclass ReleaseRuntime and fill in the class attributes
       (or subclass RuntimePlugin directly for a custom layout)
    2. Register it in wavu.runtimes.registry.default_registry
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from wavu.adapters.archive import ArchiveFormat, ArchiveReference, extract
from wavu.adapters.filesystem import merge_copy
from wavu.adapters.transfer import fetch
from wavu.core.context import InstallContext
from wavu.core.errors import FilesystemError, ResolutionError
from wavu.ui.progress import ProgressHandle

logger = logging.getLogger(__name__)


class RuntimePlugin(ABC):
    """Abstract base class for all installable runtimes."""

    @property
    @abstractmethod
    def name(self) -> str:
        """The runtime identifier (e.g., 'wasmer', 'wasm3')."""

    @abstractmethod
    def supports(self, platform: str) -> bool:
        """Whether this runtime has a release artifact for ``platform``."""

    @abstractmethod
    def download(self, ctx: InstallContext, progress: ProgressHandle) -> Path:
        """Fetch the release artifact into the runtime's cache directory.

        Returns:
            Path of the downloaded artifact.
        """

    @abstractmethod
    def install(self, ctx: InstallContext, progress: ProgressHandle) -> Path:
        """Place the runtime's files into its install directory.

        Requires a successful ``download`` first.

        Returns:
            The runtime's install directory.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class ReleaseRuntime(RuntimePlugin):
    """A runtime shipped as one downloadable release file.

    Subclasses declare where the file lives and what it is:

        runtime_name    unique key, also the cache/install subdirectory
        releases        release base URL
        artifacts       platform key → path below ``releases``
        artifact_name   filename in the cache directory
                        (its suffix picks the archive format, if any)
    """

    runtime_name: ClassVar[str]
    releases: ClassVar[str]
    artifacts: ClassVar[dict[str, str]]
    artifact_name: ClassVar[str]

    def __init__(self, base_url: str | None = None):
        self.base_url = (base_url or self.releases).rstrip("/")

    @property
    def name(self) -> str:
        return self.runtime_name

    @property
    def archive_format(self) -> ArchiveFormat | None:
        """None when the artifact is the executable itself."""
        return ArchiveFormat.from_filename(self.artifact_name)

    def supports(self, platform: str) -> bool:
        return platform in self.artifacts

    def url_for(self, platform: str) -> str:
        """Full download URL for ``platform``."""
        try:
            binary = self.artifacts[platform]
        except KeyError:
            raise ResolutionError(
                f"{self.name} has no release for {platform}", names=[self.name]
            ) from None
        return f"{self.base_url}/{binary}"

    def artifact_path(self, ctx: InstallContext) -> Path:
        return ctx.runtime_cache_dir(self.name) / self.artifact_name

    def download(self, ctx: InstallContext, progress: ProgressHandle) -> Path:
        prefix = f"Downloading {self.name}"
        progress.set_message(prefix)

        url = self.url_for(ctx.platform)
        download_dir = ctx.runtime_cache_dir(self.name)

        progress.set_message(f"{prefix}: Creating the target directory")
        try:
            download_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FilesystemError(f"Cannot create {download_dir}: {e}") from e

        progress.set_message(f"{prefix}: getting {url}")
        target = self.artifact_path(ctx)
        fetch(url, target, on_progress=progress.show_bytes)

        progress.set_message(f"Downloaded {self.name}")
        return target

    def install(self, ctx: InstallContext, progress: ProgressHandle) -> Path:
        prefix = f"Installing {self.name}"
        progress.set_message(prefix)

        artifact = self.artifact_path(ctx)
        install_dir = ctx.runtime_install_dir(self.name)
        if not artifact.is_file():
            raise FilesystemError(f"{self.name} has not been downloaded: {artifact} is missing")

        archive_format = self.archive_format
        if archive_format is not None:
            progress.set_message(f"{prefix}: Unzipping the archive")
            extract(ArchiveReference(path=artifact, format=archive_format), install_dir)
        else:
            progress.set_message(f"{prefix}: Copying the contents")
            merge_copy(ctx.runtime_cache_dir(self.name), install_dir)
            self.post_copy(install_dir)

        logger.info("Installed %s into %s", self.name, install_dir)
        progress.finish(f"Installed {self.name}")
        return install_dir

    def post_copy(self, install_dir: Path) -> None:
        """Hook run after a plain (non-archive) copy."""
