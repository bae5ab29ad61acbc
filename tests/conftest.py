"""
Shared test fixtures and configuration.

``release_server`` is a throwaway HTTP server on localhost that plays
the part of every release host.  Register bodies with ``serve``;
anything unregistered is a 404, ``fail`` makes a path return 500, and
``truncate`` sends fewer bytes than its Content-Length announces.
"""

from __future__ import annotations

import io
import tarfile
import threading
import zipfile
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

from wavu.core.context import InstallContext


class ReleaseServer:
    def __init__(self) -> None:
        self.files: dict[str, bytes] = {}
        self.failures: dict[str, int] = {}
        self.declared: dict[str, int] = {}
        self.requests: list[str] = []
        self._httpd: ThreadingHTTPServer | None = None

    @property
    def url(self) -> str:
        assert self._httpd is not None
        host, port = self._httpd.server_address[:2]
        return f"http://{host}:{port}"

    def serve(self, path: str, body: bytes) -> str:
        """Publish ``body`` at ``path`` and return its full URL."""
        self.files["/" + path.lstrip("/")] = body
        return f"{self.url}/{path.lstrip('/')}"

    def fail(self, path: str, status: int = 500) -> str:
        self.failures["/" + path.lstrip("/")] = status
        return f"{self.url}/{path.lstrip('/')}"

    def truncate(self, path: str, body: bytes, declared: int) -> str:
        """Announce ``declared`` bytes, send ``body``, then hang up."""
        self.files["/" + path.lstrip("/")] = body
        self.declared["/" + path.lstrip("/")] = declared
        return f"{self.url}/{path.lstrip('/')}"

    def start(self) -> None:
        server = self

        class Handler(BaseHTTPRequestHandler):
            def do_GET(self) -> None:
                server.requests.append(self.path)
                status = server.failures.get(self.path)
                if status is not None:
                    self.send_error(status)
                    return
                body = server.files.get(self.path)
                if body is None:
                    self.send_error(404)
                    return
                self.send_response(200)
                self.send_header("Content-Type", "application/octet-stream")
                length = server.declared.get(self.path, len(body))
                self.send_header("Content-Length", str(length))
                self.end_headers()
                self.wfile.write(body)

            def log_message(self, format: str, *args: object) -> None:
                pass

        self._httpd = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
        threading.Thread(target=self._httpd.serve_forever, daemon=True).start()

    def stop(self) -> None:
        if self._httpd is not None:
            self._httpd.shutdown()
            self._httpd.server_close()


@pytest.fixture
def release_server():
    server = ReleaseServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def ctx(tmp_path: Path) -> InstallContext:
    """A context rooted in tmp_path, with both roots created."""
    context = InstallContext.from_dirs(tmp_path / "home", tmp_path / "cache")
    context.ensure_roots()
    return context


# ── Archive builders ────────────────────────────────────────────────


def make_tar(files: dict[str, bytes], mode: str = "w:gz", exec_names: tuple[str, ...] = ()) -> bytes:
    """Build a tar archive in memory (``mode`` is ``w:gz`` or ``w:xz``)."""
    buf = io.BytesIO()
    with tarfile.open(fileobj=buf, mode=mode) as tf:
        for name, data in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(data)
            info.mode = 0o755 if name in exec_names else 0o644
            tf.addfile(info, io.BytesIO(data))
    return buf.getvalue()


def make_zip(files: dict[str, bytes], exec_names: tuple[str, ...] = ()) -> bytes:
    buf = io.BytesIO()
    with zipfile.ZipFile(buf, "w") as zf:
        for name, data in files.items():
            info = zipfile.ZipInfo(name)
            mode = 0o755 if name in exec_names else 0o644
            info.external_attr = (0o100000 | mode) << 16
            zf.writestr(info, data)
    return buf.getvalue()
