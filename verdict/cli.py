#!/usr/bin/env python3
"""
Verdict CLI - Test Run Report Renderer

Usage:
    verdict render <events.yaml> [OPTIONS]
    verdict validate <events.yaml>
    verdict formats
    verdict --version
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from . import __version__
from .config import DEFAULT_MAX_DIFF_SIZE, DEFAULT_SLOW_MS, ReporterOptions
from .errors import VerdictError
from .replay import load_event_log, replay
from .reporting import FORMATS, Reporter

app = typer.Typer(
    name="verdict",
    help="⚖️  Verdict - render test run results as reports",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool):
    if value:
        console.print(f"⚖️  Verdict v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit"
    ),
):
    """
    ⚖️  Verdict - render test run results as reports

    Replay a recorded test run through any report format.
    """
    pass


def configure_logging(verbose: bool) -> None:
    """Send diagnostics to stderr through rich when --verbose is given."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )


@app.command()
def render(
    event_log: Path = typer.Argument(
        ...,
        help="Path to the recorded event log (YAML or JSON)",
        exists=True,
        readable=True,
    ),
    format: str = typer.Option(
        "dot", "--format", "-f",
        help=f"Report format: {', '.join(FORMATS)}"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o",
        help="Write the report to this file (json and xunit only)"
    ),
    inline_diffs: bool = typer.Option(
        False, "--inline-diffs",
        help="Show word-level inline diffs instead of unified diffs"
    ),
    max_diff_size: int = typer.Option(
        DEFAULT_MAX_DIFF_SIZE, "--max-diff-size",
        min=0,
        help="Truncate diffed values to this many characters (0 = no limit)"
    ),
    slow: float = typer.Option(
        DEFAULT_SLOW_MS, "--slow", "-s",
        min=0,
        help="Default slow threshold in milliseconds"
    ),
    colors: Optional[bool] = typer.Option(
        None, "--colors/--no-colors", "-c/-C",
        help="Force colors on or off (detected by default)"
    ),
    suite_name: Optional[str] = typer.Option(
        None, "--suite-name",
        help="Name of the root <testsuite> in xunit output"
    ),
    relative_paths: bool = typer.Option(
        False, "--relative-paths",
        help="Show test file paths relative to the current directory"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-V",
        help="Log diagnostics to stderr"
    ),
):
    """
    Render a recorded test run.

    Replays every event of the log through the chosen format and exits
    with status 1 if any test failed.
    """
    configure_logging(verbose)

    log, validation = load_event_log(event_log)
    if not validation.is_valid:
        err_console.print(f"\n[red]❌ Invalid event log:[/red]")
        err_console.print(str(validation), markup=False)
        raise typer.Exit(code=2)

    options = ReporterOptions(
        use_colors=colors,
        inline_diffs=inline_diffs,
        max_diff_size=max_diff_size,
        slow=slow,
        output=output,
        suite_name=suite_name,
        show_relative_paths=relative_paths,
    )

    try:
        reporter = Reporter(format, options)
    except VerdictError as e:
        err_console.print(f"[red]❌ {e}[/red]", markup=True, highlight=False)
        raise typer.Exit(code=2)

    replay(log, reporter)
    failures = asyncio.run(reporter.done())
    raise typer.Exit(code=1 if failures else 0)


@app.command()
def validate(
    event_log: Path = typer.Argument(
        ...,
        help="Path to the recorded event log (YAML or JSON)",
        exists=True,
        readable=True,
    ),
):
    """
    Validate an event log without rendering it.
    """
    console.print(f"\n📄 Validating: {event_log}")

    log, validation = load_event_log(event_log)

    if validation.is_valid:
        console.print(f"\n[green]✅ Valid event log:[/green] {log.name or event_log.name}")
        console.print(f"   Tests: {log.root.count_tests()}")
        raise typer.Exit(code=0)
    else:
        console.print(f"\n[red]❌ Validation failed:[/red]")
        console.print(str(validation), markup=False)
        raise typer.Exit(code=1)


@app.command()
def formats():
    """
    List the available report formats.
    """
    table = Table(title="Formats")
    table.add_column("Tag", style="cyan")
    table.add_column("Description")
    table.add_column("File output", style="magenta")

    for descriptor in FORMATS.values():
        table.add_row(
            descriptor.tag,
            descriptor.description,
            "yes" if descriptor.writes_files else "no",
        )

    console.print(table)


if __name__ == "__main__":
    app()
