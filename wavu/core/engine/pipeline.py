"""
Install pipeline — the central fork-join loop.

Takes resolved runtime plugins, runs one thread per runtime, and
collects exactly one TaskOutcome per runtime into an InstallReport.

Flow per task:
    add progress line → download → install → outcome

Failure domains are isolated: a task that fails records its outcome
and stops; siblings keep running; the pipeline itself never raises
because of a task.
"""

from __future__ import annotations

import concurrent.futures
import logging
import time
from collections.abc import Mapping
from typing import Literal

from wavu.core.context import InstallContext
from wavu.core.errors import WavuError
from wavu.core.models.outcome import InstallReport, TaskOutcome, now_iso
from wavu.runtimes.base import RuntimePlugin
from wavu.ui.progress import ProgressDisplay, ProgressHandle

logger = logging.getLogger(__name__)


def run_task(
    ctx: InstallContext,
    plugin: RuntimePlugin,
    progress: ProgressHandle,
) -> TaskOutcome:
    """Download then install one runtime.  Never raises.

    ``install`` is only attempted after ``download`` succeeded.
    """
    started_at = now_iso()
    start = time.monotonic()
    phase: Literal["download", "install"] = "download"

    try:
        plugin.download(ctx, progress)
        phase = "install"
        install_dir = plugin.install(ctx, progress)
    except WavuError as e:
        logger.error("✗ %s (%s): %s", plugin.name, phase, e)
        progress.fail(f"Failed to {phase} {plugin.name}: {e}")
        outcome = TaskOutcome.failure(
            name=plugin.name,
            error=str(e),
            error_kind=e.kind,
            phase=phase,
            started_at=started_at,
        )
    except Exception as e:
        # Plugins should only raise WavuError, but a bug must not kill the run
        logger.exception("Unexpected error while %sing %s", phase, plugin.name)
        progress.fail(f"Failed to {phase} {plugin.name}: {e}")
        outcome = TaskOutcome.failure(
            name=plugin.name,
            error=f"Unexpected error: {e}",
            error_kind="unexpected",
            phase=phase,
            started_at=started_at,
        )
    else:
        if not progress.finished:
            progress.finish(f"Installed {plugin.name}")
        outcome = TaskOutcome.success(
            name=plugin.name,
            install_dir=str(install_dir),
            started_at=started_at,
        )

    outcome.duration_ms = int((time.monotonic() - start) * 1000)
    return outcome


def install_all(
    ctx: InstallContext,
    plugins: Mapping[str, RuntimePlugin],
    display: ProgressDisplay | None = None,
) -> InstallReport:
    """Install every plugin concurrently and wait for all of them.

    Args:
        ctx: Shared, read-only install context.
        plugins: Resolved name → plugin mapping (names are unique).
        display: Progress display; a silent one is used if None.

    Returns:
        InstallReport with one outcome per entry in ``plugins``.
    """
    report = InstallReport()
    if not plugins:
        return report

    display = display or ProgressDisplay(enabled=False)
    handles = {name: display.add(name) for name in plugins}

    logger.info("Installing %d runtimes: %s", len(plugins), ", ".join(plugins))

    with concurrent.futures.ThreadPoolExecutor(
        max_workers=len(plugins),
        thread_name_prefix="wavu",
    ) as pool:
        futures = {
            pool.submit(run_task, ctx, plugin, handles[name]): name
            for name, plugin in plugins.items()
        }
        for future in concurrent.futures.as_completed(futures):
            name = futures[future]
            outcome = future.result()
            report.outcomes[name] = outcome

            status_marker = "✓" if outcome.ok else "✗"
            logger.info("%s %s → %s (%dms)", status_marker, name, outcome.status, outcome.duration_ms)

    return report
