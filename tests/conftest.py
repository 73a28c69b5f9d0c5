"""Shared fixtures for verdict tests."""

from datetime import datetime, timedelta, timezone
from io import StringIO
from pathlib import Path
from typing import Callable, Iterator, Protocol

import pytest
from rich.console import Console

from verdict.config import ReporterOptions
from verdict.models import FailureInfo, RunStats, Suite, TestResult
from verdict.reporting import Reporter
from verdict.terminal import ColorTheme, TerminalCapabilities

PLAIN_TERMINAL = TerminalCapabilities(interactive=False, width=75, supports_color=False, unicode=True)


class ReporterFactory(Protocol):
    """Protocol for the reporter factory fixture."""

    def __call__(
        self,
        format: str = "dot",
        capabilities: TerminalCapabilities = PLAIN_TERMINAL,
        **options: object,
    ) -> Reporter:
        """Create a reporter writing to the captured console."""


@pytest.fixture
def out() -> StringIO:
    """Captured report output."""
    return StringIO()


@pytest.fixture
def err() -> StringIO:
    """Captured diagnostic output."""
    return StringIO()


@pytest.fixture
def plain_theme() -> ColorTheme:
    """Color theme with colors disabled."""
    return ColorTheme(enabled=False)


@pytest.fixture
def fixed_clock() -> Callable[[], datetime]:
    """Clock that advances 135ms per call, starting at a fixed instant."""
    start = datetime(2026, 10, 18, 9, 0, tzinfo=timezone.utc)
    ticks: Iterator[int] = iter(range(1000))

    def clock() -> datetime:
        return start + timedelta(milliseconds=135 * next(ticks))

    return clock


@pytest.fixture
def make_reporter(
    out: StringIO,
    err: StringIO,
    fixed_clock: Callable[[], datetime],
) -> ReporterFactory:
    """Create reporters with colors off and captured output."""

    def factory(format: str = "dot", capabilities: TerminalCapabilities = PLAIN_TERMINAL, **options: object) -> Reporter:
        options.setdefault("use_colors", False)
        return Reporter(
            format,
            ReporterOptions(**options),
            console=Console(file=out, width=120),
            error_console=Console(file=err, width=120),
            capabilities=capabilities,
            clock=fixed_clock,
        )

    return factory


@pytest.fixture
def sample_log(tmp_path: Path) -> Path:
    """A small recorded run: two passes, one pending, one failure."""
    path = tmp_path / "run.yaml"
    path.write_text(
        """
version: 1
name: sample run
duration: 250
suites:
  - title: strings
    file: tests/test_strings.py
    tests:
      - title: joins words
        state: passed
        duration: 10
      - title: pads slowly
        state: passed
        duration: 120
      - title: translates
        state: pending
      - title: compares
        state: failed
        duration: 5
        errors:
          - message: expected 'foo' to equal 'bar'
            name: AssertionError
            stack: |-
              AssertionError: expected 'foo' to equal 'bar'
                  at tests/test_strings.py:42
            actual: foo
            expected: bar
""",
        encoding="utf-8",
    )
    return path


def sample_failure() -> FailureInfo:
    return FailureInfo(
        message="expected 'foo' to equal 'bar'",
        name="AssertionError",
        stack="AssertionError: expected 'foo' to equal 'bar'\n    at tests/test_strings.py:42",
        actual="foo",
        expected="bar",
    )


@pytest.fixture
def play_sample() -> Callable[[Reporter], RunStats | None]:
    """Drive a reporter through the same run the sample log records."""

    def play(reporter: Reporter) -> RunStats | None:
        root = Suite()
        suite = Suite("strings", file="tests/test_strings.py", parent=root)
        passing = [
            TestResult("joins words", parent=suite, duration=10),
            TestResult("pads slowly", parent=suite, duration=120),
        ]
        pending = TestResult("translates", parent=suite)
        failing = TestResult("compares", parent=suite, duration=5)

        reporter.run_begin(total=4)
        reporter.suite_begin(root)
        reporter.suite_begin(suite)
        for test in passing:
            reporter.test_begin(test)
            reporter.test_pass(test)
            reporter.test_end(test)
        reporter.test_pending(pending)
        reporter.test_end(pending)
        reporter.test_begin(failing)
        reporter.test_fail(failing, sample_failure())
        reporter.test_end(failing)
        reporter.suite_end(suite)
        reporter.suite_end(root)
        return reporter.run_end(250)

    return play
