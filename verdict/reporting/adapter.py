"""
Adapter from native Python values to FailureInfo.

Runners hand the reporter whatever was raised: usually an exception,
sometimes an arbitrary value. This is the single place where those values
are inspected; everything downstream works with FailureInfo only.
"""

from __future__ import annotations

import traceback
from typing import Any

from ..models import MISSING, FailureInfo


def as_failure(value: Any) -> FailureInfo:
    """
    Convert a raised value into a FailureInfo.

    Exceptions keep their message, a stack text that starts with the
    "Type: message" header followed by the traceback frames, any
    `actual`/`expected`/`show_diff`/`uncaught` attributes, and their
    `__cause__` chain. Cyclic cause chains map to cyclic FailureInfo
    chains; the flattener deals with them at render time.

    Args:
        value: An exception, an existing FailureInfo, or any thrown value

    Returns:
        FailureInfo describing the value
    """
    if isinstance(value, FailureInfo):
        return value
    if isinstance(value, BaseException):
        return _from_exception(value, {})
    return FailureInfo(
        message=_describe_thrown(value),
        stack="",
        name=type(value).__name__,
        is_error=False,
    )


def _from_exception(exc: BaseException, seen: dict[int, FailureInfo]) -> FailureInfo:
    if id(exc) in seen:
        return seen[id(exc)]

    message = _exception_message(exc)
    display = str(exc) if type(exc).__str__ is not BaseException.__str__ else None
    header = f"{type(exc).__name__}: {message}" if message else type(exc).__name__
    frames = "".join(traceback.format_tb(exc.__traceback__)) if exc.__traceback__ else ""

    failure = FailureInfo(
        message=message,
        stack=f"{header}\n{frames}".rstrip("\n"),
        name=type(exc).__name__,
        display=display,
        actual=getattr(exc, "actual", MISSING),
        expected=getattr(exc, "expected", MISSING),
        show_diff=bool(getattr(exc, "show_diff", True)),
        uncaught=bool(getattr(exc, "uncaught", False)),
    )
    seen[id(exc)] = failure

    if exc.__cause__ is not None:
        failure.cause = _from_exception(exc.__cause__, seen)
    return failure


def _exception_message(exc: BaseException) -> str:
    if len(exc.args) == 1 and isinstance(exc.args[0], str):
        return exc.args[0]
    return BaseException.__str__(exc)


def _describe_thrown(value: Any) -> str:
    if isinstance(value, str):
        return f"the string {value!r} was thrown, raise an exception instead"
    return f"the {type(value).__name__} {value!r} was thrown, raise an exception instead"
