"""
wavu — CLI entrypoint.

Usage:
    wavu --help
    wavu wasmer wasmtime wasm3
    wavu --list

Exit codes:
    0  every requested runtime was installed
    1  at least one runtime failed (the others were still attempted)
    2  fatal error before any work started (config, platform, unknown name)
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click
from rich.console import Console

from wavu import __version__
from wavu.core.observability.logging_config import resolve_level, setup_logging

EXIT_OK = 0
EXIT_PARTIAL = 1
EXIT_FATAL = 2


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="wavu")
@click.argument("runtimes", nargs=-1)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress progress output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Path to wavu.conf.json (default: ~/.wavu/wavu.conf.json).",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option("--list", "list_runtimes", is_flag=True, help="List installable runtimes and exit.")
def cli(
    runtimes: tuple[str, ...],
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: Path | None,
    as_json: bool,
    list_runtimes: bool,
) -> None:
    """wavu — install WebAssembly runtimes side by side.

    Examples:

        wavu wasmer wasmtime wasm3

        wavu --config ./wavu.conf.json wazero
    """
    # Logs and spinners share one stderr console
    console = Console(stderr=True)

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(
            debug=debug,
            verbose=verbose,
            quiet=quiet,
            env_level=os.environ.get("WAVU_LOG_LEVEL"),
        ),
        log_file=os.environ.get("WAVU_LOG_FILE"),
        log_file_level=os.environ.get("WAVU_LOG_FILE_LEVEL"),
        console=console,
    )

    if list_runtimes:
        from wavu.runtimes.registry import default_registry

        names = default_registry().names()
        if as_json:
            click.echo(json.dumps({"runtimes": names}, indent=2))
        else:
            for name in names:
                click.echo(name)
        return

    if not runtimes:
        raise click.UsageError("No runtimes given. Example: wavu wasmer wasmtime")

    from wavu.core.use_cases.install import run_install
    from wavu.ui.progress import ProgressDisplay

    display = ProgressDisplay(console=console, enabled=not (quiet or as_json))
    result = run_install(runtimes, config_path=config_path, display=display)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(_exit_code(result))

    if result.error:
        click.secho(f"❌ {result.error}", fg="red", err=True)
        sys.exit(EXIT_FATAL)

    report = result.report
    assert report is not None  # guaranteed after error check above

    # Per-runtime results
    click.echo()
    for name in result.requested:
        outcome = report.outcomes[name]
        if outcome.ok:
            click.secho(f"   ✓ {name}", fg="green", nl=False)
            click.echo(f"  → {outcome.install_dir}")
        else:
            click.secho(f"   ✗ {name}", fg="red", nl=False)
            click.echo(f"  — {outcome.error_kind}: {outcome.error}")

    # Summary
    click.echo()
    status_color = {"ok": "green", "partial": "yellow", "failed": "red"}.get(
        report.status, "white"
    )
    click.secho(
        f"   Result: {report.succeeded}/{report.total} installed",
        fg=status_color,
        bold=True,
    )
    if report.failed:
        click.echo(f"   Failed: {', '.join(report.failed_names)}")

    sys.exit(_exit_code(result))


def _exit_code(result) -> int:
    if result.error:
        return EXIT_FATAL
    if result.report is not None and result.report.failed:
        return EXIT_PARTIAL
    return EXIT_OK


if __name__ == "__main__":
    cli()
