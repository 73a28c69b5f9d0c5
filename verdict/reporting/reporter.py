"""
Reporter for turning a run's lifecycle events into report output.

This module provides the Reporter class: the shared rendering core that
every output format holds by reference. It owns the run configuration,
the terminal themes, the stats tracker and the presenter, and it enforces
the run lifecycle.
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections import defaultdict
from pathlib import Path
from typing import Any, Callable

from rich.console import Console

from ..config import ReporterOptions
from ..errors import ContractViolation, UnsupportedError
from ..models import EventType, RunPhase, RunStats, Suite, TestResult
from ..rendering import DiffEngine, Presenter
from ..terminal import ColorTheme, Cursor, SymbolTheme, TerminalCapabilities, process_capabilities
from .stats import Clock, StatsTracker, _utc_now

logger = logging.getLogger(__name__)

Callback = Callable[..., Any]

# Phase in which each event is accepted
_VALID_PHASE = {
    EventType.RUN_BEGIN: RunPhase.IDLE,
    EventType.RUN_END: RunPhase.RUNNING,
}


class Reporter:
    """
    Builds report output from a run's lifecycle events.

    The runner calls the event methods in temporal order. The stats
    tracker sees every event first; the selected output format sees it
    afterwards, so speed and failure bookkeeping are always complete
    before anything is rendered.

    Example:
        from verdict.reporting import Reporter, Suite, TestResult

        reporter = Reporter("dot")
        reporter.run_begin(total=1)

        suite = Suite("math")
        test = TestResult("adds", parent=suite, duration=3)
        reporter.suite_begin(suite)
        reporter.test_begin(test)
        reporter.test_pass(test)
        reporter.test_end(test)
        reporter.suite_end(suite)

        reporter.run_end()
        failures = asyncio.run(reporter.done())
    """

    def __init__(
        self,
        format: str = "dot",
        options: ReporterOptions | None = None,
        console: Console | None = None,
        error_console: Console | None = None,
        capabilities: TerminalCapabilities | None = None,
        clock: Clock = _utc_now,
    ):
        """
        Initialize the reporter and its output format.

        Args:
            format: Tag of the output format (see verdict.reporting.FORMATS)
            options: Run configuration; defaults are used when omitted
            console: Console for report output (stdout by default)
            error_console: Console for diagnostics (stderr by default)
            capabilities: Terminal capabilities; detected when omitted
            clock: Source of run start/end timestamps

        Raises:
            ConfigError: If the format tag is unknown
            UnsupportedError: If file output cannot work for this format or location
        """
        from .formats import get_format

        self.options = options or ReporterOptions()
        self.console = console or Console()
        self.error_console = error_console or Console(stderr=True)

        if capabilities is None:
            if console is None and error_console is None:
                capabilities = process_capabilities()
            else:
                capabilities = TerminalCapabilities.detect(self.console, self.error_console)
        self.capabilities = capabilities

        self.theme = ColorTheme.for_terminal(
            capabilities, self.options.use_colors, overrides=self.options.color_overrides
        )
        self.symbols = SymbolTheme.for_terminal(capabilities)
        self.cursor = Cursor(self.console.file, capabilities.interactive)
        self.diff_engine = DiffEngine(
            self.theme,
            max_diff_size=self.options.max_diff_size,
            inline=self.options.inline_diffs,
        )
        self.presenter = Presenter(self.theme, self.diff_engine, hide_diff=self.options.hide_diff)
        self.tracker = StatsTracker(slow=self.options.slow, clock=clock)

        self.phase = RunPhase.IDLE
        self._subscribers: dict[EventType, list[Callback]] = defaultdict(list)
        self._outputs: list[str] = []

        self.on(EventType.RUN_BEGIN, self.tracker.run_begin)
        self.on(EventType.SUITE_BEGIN, self.tracker.suite_begin)
        self.on(EventType.TEST_PASS, self.tracker.test_pass)
        self.on(EventType.TEST_FAIL, self.tracker.test_fail)
        self.on(EventType.TEST_PENDING, self.tracker.test_pending)
        self.on(EventType.TEST_END, self.tracker.test_end)

        self.descriptor = get_format(format)
        if self.options.output is not None:
            self._check_output_supported(self.options.output)
        self.handler = self.descriptor.factory(self)

    # ─────────────────────────────────────────────────────────────────────
    # Subscriptions
    # ─────────────────────────────────────────────────────────────────────

    def on(self, event: EventType, callback: Callback) -> None:
        """Call callback every time event is emitted."""
        self._subscribers[event].append(callback)

    def once(self, event: EventType, callback: Callback) -> None:
        """Call callback the first time event is emitted only."""
        def wrapper(*args: Any) -> Any:
            self._subscribers[event].remove(wrapper)
            return callback(*args)

        self.on(event, wrapper)

    def _accept(self, event: EventType) -> bool:
        expected = _VALID_PHASE.get(event, RunPhase.RUNNING)
        if self.phase == expected:
            return True

        violation = ContractViolation(event.value, self.phase.value)
        if self.options.strict:
            raise violation
        logger.warning(f"Ignoring event: {violation}")
        return False

    def _dispatch(self, event: EventType, *args: Any) -> None:
        for callback in list(self._subscribers[event]):
            callback(*args)

    def _emit(self, event: EventType, *args: Any) -> None:
        if self._accept(event):
            self._dispatch(event, *args)

    # ─────────────────────────────────────────────────────────────────────
    # Lifecycle events
    # ─────────────────────────────────────────────────────────────────────

    def run_begin(self, total: int = 0) -> None:
        """Start the run; total is the number of tests the runner plans to run."""
        if self._accept(EventType.RUN_BEGIN):
            self.phase = RunPhase.RUNNING
            self._dispatch(EventType.RUN_BEGIN, total)

    def suite_begin(self, suite: Suite) -> None:
        self._emit(EventType.SUITE_BEGIN, suite)

    def suite_end(self, suite: Suite) -> None:
        self._emit(EventType.SUITE_END, suite)

    def test_begin(self, test: TestResult) -> None:
        self._emit(EventType.TEST_BEGIN, test)

    def test_pass(self, test: TestResult) -> None:
        self._emit(EventType.TEST_PASS, test)

    def test_fail(self, test: TestResult, error: Any) -> None:
        """
        Record a failure.

        Args:
            test: The failing test
            error: An exception, a FailureInfo, or any other thrown value
        """
        self._emit(EventType.TEST_FAIL, test, error)

    def test_pending(self, test: TestResult) -> None:
        self._emit(EventType.TEST_PENDING, test)

    def test_end(self, test: TestResult) -> None:
        self._emit(EventType.TEST_END, test)

    def run_end(self, duration: float | None = None) -> RunStats | None:
        """
        End the run: freeze the stats and let the format render.

        Args:
            duration: Run duration in ms; measured from the clock when omitted

        Returns:
            The frozen RunStats, or None if the event was rejected
        """
        if not self._accept(EventType.RUN_END):
            return None

        self.tracker.run_end(duration)
        self.phase = RunPhase.REPORTING
        self._dispatch(EventType.RUN_END)
        return self.tracker.stats

    async def done(self) -> int:
        """
        Flush all pending output and finish the reporter.

        Returns:
            The number of failures in the run
        """
        if self.phase != RunPhase.REPORTING:
            violation = ContractViolation("done", self.phase.value)
            if self.options.strict:
                raise violation
            logger.warning(f"Ignoring call: {violation}")
            return self.tracker.stats.failures

        outputs, self._outputs = self._outputs, []
        for text in outputs:
            if self.options.output is not None:
                await asyncio.to_thread(self._write_file, self.options.output, text)
            else:
                self.write(text)
        self.console.file.flush()
        self.phase = RunPhase.DONE
        return self.tracker.stats.failures

    # ─────────────────────────────────────────────────────────────────────
    # Output
    # ─────────────────────────────────────────────────────────────────────

    @property
    def stats(self) -> RunStats:
        return self.tracker.stats

    @property
    def failures(self) -> list[TestResult]:
        return self.tracker.failures

    def write(self, text: str) -> None:
        """Write raw text to the report console."""
        self.console.file.write(text)

    def epilogue(self) -> None:
        """Write the end-of-run summary."""
        self.write(self.render_epilogue())

    def render_epilogue(self) -> str:
        return self.presenter.epilogue(self.stats, self.failures)

    def deliver(self, text: str) -> None:
        """
        Queue a complete report for the configured destination.

        The report is written to the output file (or the console when no
        file is configured) when done() is awaited.
        """
        self._outputs.append(text)

    def _write_file(self, path: Path, text: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
            logger.info(f"Report written to {path}")
        except OSError as e:
            logger.error(f"Writing report to {path} failed: {e}")
            self.error_console.file.write(
                f'{self.symbols.err} [verdict] writing output to "{path}" failed: {e}\n'
            )
            self.write(text)

    def _check_output_supported(self, path: Path) -> None:
        if not self.descriptor.writes_files:
            raise UnsupportedError(f"file output not supported by the '{self.descriptor.tag}' format")

        ancestor = path.parent.absolute()
        while not ancestor.exists() and ancestor != ancestor.parent:
            ancestor = ancestor.parent
        if not ancestor.is_dir() or not os.access(ancestor, os.W_OK):
            raise UnsupportedError(f"file output not supported: '{ancestor}' is not a writable directory")
