"""
Transfer client — blocking HTTP GET streamed to a local file.

The caller owns the destination directory: ``fetch`` never creates
parents.  There are no retries; a failure is terminal for the
calling task.  A failed transfer removes the partially written file,
so the cache never holds a truncated artifact.
"""

from __future__ import annotations

import http.client
import logging
import urllib.error
import urllib.request
from collections.abc import Callable
from pathlib import Path

from wavu import __version__
from wavu.core.errors import TransferError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 8192
DEFAULT_TIMEOUT = 60
USER_AGENT = f"wavu/{__version__}"

ProgressCallback = Callable[[int, int | None], None]


def fetch(
    url: str,
    destination: Path,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    on_progress: ProgressCallback | None = None,
) -> int:
    """Download ``url`` into ``destination`` (created or truncated).

    Args:
        url: Source URL (http, https or file).
        destination: Target file.  Its parent directory must exist.
        timeout: Socket timeout in seconds.
        on_progress: Called after each chunk with
            ``(bytes_downloaded, total_bytes_or_None)``.

    Returns:
        Number of bytes written.

    Raises:
        TransferError: ``kind="network"`` for connection failures,
            timeouts and non-2xx statuses; ``kind="io"`` when the
            file cannot be created or written.
    """
    destination = Path(destination)
    if not destination.parent.is_dir():
        raise TransferError(
            f"Destination directory does not exist: {destination.parent}",
            kind="io",
            url=url,
        )

    logger.info("Downloading %s", url)
    req = urllib.request.Request(url, headers={"User-Agent": USER_AGENT})

    try:
        resp = urllib.request.urlopen(req, timeout=timeout)
    except urllib.error.HTTPError as e:
        e.close()
        raise TransferError(
            f"HTTP {e.code} {e.reason} for {url}",
            url=url,
            status_code=e.code,
        ) from e
    except urllib.error.URLError as e:
        raise TransferError(f"Cannot reach {url}: {e.reason}", url=url) from e
    except (http.client.HTTPException, OSError) as e:
        raise TransferError(f"Cannot reach {url}: {e}", url=url) from e

    with resp:
        total = _content_length(resp)
        try:
            downloaded = _stream_to_file(resp, destination, url, total, on_progress)
        except TransferError:
            destination.unlink(missing_ok=True)
            raise

    logger.info("Downloaded %s (%d bytes) to %s", url, downloaded, destination)
    return downloaded


def _stream_to_file(
    resp: http.client.HTTPResponse,
    destination: Path,
    url: str,
    total: int | None,
    on_progress: ProgressCallback | None,
) -> int:
    try:
        fh = open(destination, "wb")
    except OSError as e:
        raise TransferError(f"Cannot create {destination}: {e}", kind="io", url=url) from e

    downloaded = 0
    with fh:
        while True:
            try:
                chunk = resp.read(CHUNK_SIZE)
            except (http.client.HTTPException, OSError) as e:
                raise TransferError(f"Connection lost while reading {url}: {e}", url=url) from e
            if not chunk:
                break
            try:
                fh.write(chunk)
            except OSError as e:
                raise TransferError(f"Cannot write {destination}: {e}", kind="io", url=url) from e
            downloaded += len(chunk)
            if on_progress:
                on_progress(downloaded, total)

    # read() returns b"" when the peer closes early; it does not raise
    if total is not None and downloaded != total:
        raise TransferError(
            f"Incomplete download of {url}: {downloaded}/{total} bytes",
            url=url,
        )

    return downloaded


def _content_length(resp: http.client.HTTPResponse) -> int | None:
    raw = resp.headers.get("Content-Length")
    try:
        value = int(raw) if raw else 0
    except ValueError:
        return None
    return value if value > 0 else None
