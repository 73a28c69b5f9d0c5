"""End-to-end run through the public API."""

import asyncio
from io import StringIO

from rich.console import Console

from verdict import Reporter, ReporterOptions, Suite, TestResult


class ComparisonError(AssertionError):
    def __init__(self, message: str, actual: object, expected: object):
        super().__init__(message)
        self.actual = actual
        self.expected = expected


def test_dot_run_with_real_exceptions() -> None:
    """Two passes and one failed comparison produce the classic summary."""
    out, err = StringIO(), StringIO()
    reporter = Reporter(
        "dot",
        ReporterOptions(use_colors=False),
        console=Console(file=out),
        error_console=Console(file=err),
    )
    suite = Suite("strings", parent=Suite())
    tests = [
        TestResult("joins", parent=suite, duration=4),
        TestResult("splits", parent=suite, duration=90),
        TestResult("compares", parent=suite, duration=2),
    ]

    reporter.run_begin(total=3)
    reporter.suite_begin(suite)
    for test in tests[:2]:
        reporter.test_begin(test)
        reporter.test_pass(test)
        reporter.test_end(test)
    reporter.test_begin(tests[2])
    try:
        raise ComparisonError("expected 'foo' to equal 'bar'", "foo", "bar")
    except ComparisonError as e:
        reporter.test_fail(tests[2], e)
    reporter.test_end(tests[2])
    reporter.suite_end(suite)
    reporter.run_end()

    failures = asyncio.run(reporter.done())

    text = out.getvalue()
    assert failures == 1
    assert "\n  ..!\n" in text
    assert "  2 passing (" in text
    assert "  1 failing\n" in text
    assert "  1) strings\n       compares:\n" in text
    assert "      ComparisonError: expected 'foo' to equal 'bar'\n" in text
    assert "      + expected - actual\n\n      -foo\n      +bar\n" in text
    assert "test_end_to_end.py" in text
    assert err.getvalue() == ""
