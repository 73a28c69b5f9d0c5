"""Tests for error stack flattening."""

from verdict.models import FailureInfo
from verdict.rendering import CIRCULAR_MARKER, flatten_error_stack


def test_error_without_cause_splits_at_message() -> None:
    """Leading message becomes msg, the rest of the stack follows."""
    err = FailureInfo(message="boom", stack="boom\n    at a.py:1\n    at b.py:2")

    flat = flatten_error_stack(err)

    assert flat.message == "boom"
    assert flat.msg == "boom"
    assert flat.stack == "    at a.py:1\n    at b.py:2"


def test_msg_includes_text_before_message() -> None:
    """Everything up to and including the message is the msg."""
    err = FailureInfo(message="boom", stack="ValueError: boom\n  frame")

    flat = flatten_error_stack(err)

    assert flat.msg == "ValueError: boom"
    assert flat.stack == "  frame"


def test_message_missing_from_stack_keeps_whole_stack() -> None:
    """Falls back to the unsplit stack when the message is not found."""
    err = FailureInfo(message="boom", stack="something else\n  frame")

    flat = flatten_error_stack(err)

    assert flat.msg == "boom"
    assert flat.stack == "something else\n  frame"


def test_empty_stack_uses_message() -> None:
    """An error without a stack renders its message only."""
    flat = flatten_error_stack(FailureInfo(message="boom", stack=""))

    assert flat.msg == "boom"
    assert flat.stack == ""


def test_custom_display_preferred_over_message() -> None:
    """A custom string representation wins over the plain message."""
    err = FailureInfo(message="plain", display="custom view", stack="custom view\n  frame")

    flat = flatten_error_stack(err)

    assert flat.message == "custom view"
    assert flat.msg == "custom view"


def test_cause_is_appended() -> None:
    """Causes are appended to the stack with a 'Caused by' line."""
    root = FailureInfo(message="disk full", stack="disk full\n  at io.py:9")
    err = FailureInfo(message="save failed", stack="save failed\n  at app.py:3", cause=root)

    flat = flatten_error_stack(err)

    assert flat.msg == "save failed"
    assert flat.stack == "  at app.py:3\n   Caused by: disk full\n  at io.py:9"


def test_cause_without_stack_adds_no_trailing_line() -> None:
    """A cause whose remaining stack is empty contributes only its message."""
    err = FailureInfo(message="outer", stack="outer", cause=FailureInfo(message="inner", stack=""))

    flat = flatten_error_stack(err)

    assert flat.stack == "\n   Caused by: inner"


def test_nested_causes() -> None:
    """Every level of a cause chain is flattened."""
    c = FailureInfo(message="c", stack="c\n  at c")
    b = FailureInfo(message="b", stack="b\n  at b", cause=c)
    a = FailureInfo(message="a", stack="a\n  at a", cause=b)

    flat = flatten_error_stack(a)

    assert flat.stack == "  at a\n   Caused by: b\n  at b\n   Caused by: c\n  at c"


def test_self_referential_cause_terminates() -> None:
    """An error that is its own cause renders one circular marker."""
    err = FailureInfo(message="loop", stack="loop\n  at x")
    err.cause = err

    flat = flatten_error_stack(err)

    assert flat.stack == f"  at x\n   Caused by: {CIRCULAR_MARKER}"
    assert flat.stack.count(CIRCULAR_MARKER) == 1


def test_mutual_cause_cycle_terminates() -> None:
    """Two errors causing each other produce exactly one circular marker."""
    a = FailureInfo(message="a", stack="a\n  at a")
    b = FailureInfo(message="b", stack="b\n  at b", cause=a)
    a.cause = b

    flat = flatten_error_stack(a)

    assert flat.stack == f"  at a\n   Caused by: b\n  at b\n   Caused by: {CIRCULAR_MARKER}"
    assert flat.stack.count(CIRCULAR_MARKER) == 1


def test_cycle_entering_mid_chain() -> None:
    """A cycle that loops back to the middle of the chain is cut where it re-enters."""
    a = FailureInfo(message="a", stack="a")
    b = FailureInfo(message="b", stack="b")
    c = FailureInfo(message="c", stack="c")
    a.cause, b.cause, c.cause = b, c, b

    flat = flatten_error_stack(a)

    assert flat.stack.count(CIRCULAR_MARKER) == 1
    assert flat.stack.endswith(f"Caused by: {CIRCULAR_MARKER}")


def test_flattening_is_repeatable() -> None:
    """Visited state never leaks between calls."""
    err = FailureInfo(message="loop", stack="loop")
    err.cause = err

    assert flatten_error_stack(err) == flatten_error_stack(err)
