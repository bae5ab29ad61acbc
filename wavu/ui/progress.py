"""
Progress display — one live spinner line per runtime.

The display is the only mutable object shared between pipeline
tasks.  Each task gets its own ProgressHandle and is the only writer
of it; rich serializes the redraws.

    with ProgressDisplay() as display:
        handle = display.add("wasmer")
        handle.set_message("Downloading wasmer")
        handle.finish("Installed wasmer")
"""

from __future__ import annotations

import logging
import threading

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn

logger = logging.getLogger(__name__)


class ProgressHandle:
    """Status sink for one runtime task.

    Keeps every message it received so callers (and tests) can see
    the phase history after the run.
    """

    def __init__(self, name: str, display: ProgressDisplay, task_id: TaskID):
        self.name = name
        self.messages: list[str] = []
        self.finished = False
        self.failed = False
        self.bytes_downloaded = 0
        self._display = display
        self._task_id = task_id

    @property
    def message(self) -> str:
        """The latest message, or an empty string."""
        return self.messages[-1] if self.messages else ""

    def set_message(self, text: str) -> None:
        self.messages.append(text)
        logger.debug("[%s] %s", self.name, text)
        self._display._render(self._task_id, escape(text))

    def show_bytes(self, downloaded: int, total: int | None) -> None:
        """Append a byte counter to the current message line.

        Not recorded in ``messages``; called once per downloaded chunk.
        """
        self.bytes_downloaded = downloaded
        counter = f"{downloaded}/{total}" if total else str(downloaded)
        self._display._render(self._task_id, f"{escape(self.message)} ({counter} bytes)")

    def finish(self, text: str) -> None:
        """Mark the task done with a final message."""
        self.messages.append(text)
        self.finished = True
        logger.debug("[%s] %s", self.name, text)
        self._display._render(self._task_id, f"[green]✓[/green] {escape(text)}", done=True)

    def fail(self, text: str) -> None:
        """Mark the task failed with a final message."""
        self.messages.append(text)
        self.finished = True
        self.failed = True
        logger.debug("[%s] %s", self.name, text)
        self._display._render(self._task_id, f"[red]✗ {escape(text)}[/red]", done=True)

    def __repr__(self) -> str:
        return f"<ProgressHandle name={self.name!r} message={self.message!r}>"


class ProgressDisplay:
    """Multi-line live display backed by ``rich.progress.Progress``.

    Args:
        console: Console to draw on (default: stderr).
        enabled: When False nothing is drawn, but handles still record
            their messages.  Used for ``--quiet``, ``--json`` and tests.
    """

    def __init__(self, console: Console | None = None, enabled: bool = True):
        self.enabled = enabled
        self.console = console or Console(stderr=True)
        self._progress = Progress(
            SpinnerColumn(finished_text=" "),
            TextColumn("{task.description}"),
            console=self.console,
            disable=not enabled,
        )
        self._handles: dict[str, ProgressHandle] = {}
        self._lock = threading.Lock()

    def __enter__(self) -> ProgressDisplay:
        self._progress.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self._progress.stop()

    @property
    def handles(self) -> dict[str, ProgressHandle]:
        with self._lock:
            return dict(self._handles)

    def add(self, name: str) -> ProgressHandle:
        """Register a new line for ``name`` and return its handle."""
        with self._lock:
            task_id = self._progress.add_task(escape(name), total=None)
            handle = ProgressHandle(name, self, task_id)
            self._handles[name] = handle
        return handle

    def println(self, text: str) -> None:
        """Print a line above the live spinners."""
        if self.enabled:
            self._progress.console.print(text)

    def _render(self, task_id: TaskID, description: str, done: bool = False) -> None:
        if done:
            self._progress.update(task_id, description=description, total=1, completed=1)
        else:
            self._progress.update(task_id, description=description)
