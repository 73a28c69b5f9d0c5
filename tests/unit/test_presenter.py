"""Tests for the end-of-run epilogue."""

import pytest

from verdict.models import FailureInfo, RunStats, Suite, TestResult
from verdict.rendering import DiffEngine, Presenter
from verdict.terminal import ColorTheme


@pytest.fixture
def presenter(plain_theme: ColorTheme) -> Presenter:
    return Presenter(plain_theme, DiffEngine(plain_theme, max_diff_size=8192))


def _failed(title: str, *errors: FailureInfo, suite: str = "suite") -> TestResult:
    test = TestResult(title, parent=Suite(suite, parent=Suite()))
    test.err = errors[0]
    test.err.multiple.extend(errors[1:])
    return test


def test_summary_lines(presenter: Presenter) -> None:
    stats = RunStats(passes=2, pending=1, duration=250)

    assert presenter.epilogue(stats, []) == "\n  2 passing (250ms)\n  1 pending\n\n"


def test_zero_passing_is_always_shown(presenter: Presenter) -> None:
    assert presenter.epilogue(RunStats(), []) == "\n  0 passing (0ms)\n\n"


def test_failure_block(presenter: Presenter) -> None:
    test = _failed("works", FailureInfo(message="boom", stack="Error: boom\n    at a.py:1"))

    text = presenter.epilogue(RunStats(failures=1, duration=5), [test])

    assert text == (
        "\n  0 passing (5ms)\n"
        "  1 failing\n"
        "\n"
        "  1) suite\n"
        "       works:\n"
        "     Error: boom\n"
        "      at a.py:1\n"
        "\n"
        "\n"
        "\n"
    )


def test_failure_with_diff(presenter: Presenter) -> None:
    err = FailureInfo(
        message="expected 'foo' to equal 'bar'",
        stack="AssertionError: expected 'foo' to equal 'bar'\n    at t.py:1",
        actual="foo",
        expected="bar",
    )

    block = presenter.failure_block(1, _failed("compares", err), err)

    assert block == (
        "  1) suite\n"
        "       compares:\n"
        "\n"
        "      AssertionError: expected 'foo' to equal 'bar'\n"
        "      + expected - actual\n"
        "\n"
        "      -foo\n"
        "      +bar\n"
        "      at t.py:1\n"
        "\n"
    )


def test_assertion_prefix_shortens_message(presenter: Presenter) -> None:
    """A 'Name: expected ...' message shows only the name above the diff."""
    err = FailureInfo(message="Compare: expected 1 to be 2", stack="", actual="1", expected="2")

    block = presenter.failure_block(1, _failed("t", err), err)

    assert "\n      Compare\n      + expected - actual" in block
    assert "to be 2" not in block


def test_hide_diff(plain_theme: ColorTheme) -> None:
    presenter = Presenter(plain_theme, DiffEngine(plain_theme), hide_diff=True)
    err = FailureInfo(message="m", stack="m", actual="foo", expected="bar")

    block = presenter.failure_block(1, _failed("t", err), err)

    assert "+ expected" not in block
    assert "     m\n" in block


def test_uncaught_prefix(presenter: Presenter) -> None:
    err = FailureInfo(message="boom", stack="Error: boom", uncaught=True)

    block = presenter.failure_block(1, _failed("t", err), err)

    assert "     Uncaught Error: boom" in block


def test_chained_errors_get_their_own_numbers(presenter: Presenter) -> None:
    """Each failure entry shows the next error of its test's chain."""
    first = FailureInfo(message="first", stack="first")
    second = FailureInfo(message="second", stack="second")
    other = FailureInfo(message="other", stack="other")
    a = _failed("a", first, second)
    b = _failed("b", other)

    text = presenter.list_failures([a, b, a])

    assert "1) suite\n       a:\n     first" in text
    assert "2) suite\n       b:\n     other" in text
    assert "3) suite\n       a:\n     second" in text


def test_rendering_is_idempotent(presenter: Presenter) -> None:
    err = FailureInfo(message="boom", stack="boom", actual="x", expected="y")
    failures = [_failed("t", err)]
    stats = RunStats(failures=1, duration=3)

    assert presenter.epilogue(stats, failures) == presenter.epilogue(stats, failures)


def test_format_title_indents_levels() -> None:
    assert Presenter.format_title(["a", "b", "c"]) == "a\n       b\n         c"
