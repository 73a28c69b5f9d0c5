"""
Error stack flattening.

Reduces a FailureInfo and its `cause` chain to a single printable message
and stack. Each error is visited at most once, so cyclic chains terminate
with a "<circular>" marker.
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models import FailureInfo

CIRCULAR_MARKER = "<circular>"


@dataclass(frozen=True)
class FullErrorStack:
    """
    Flattened view of an error chain.

    Attributes:
        message: The error's own message (or custom representation)
        msg: The leading part of the stack, up to and including the message
        stack: Everything after the message, with causes appended
    """
    message: str
    msg: str
    stack: str


def flatten_error_stack(err: FailureInfo, seen: set[int] | None = None) -> FullErrorStack:
    """
    Flatten err and its causes into one message and stack.

    Args:
        err: The failure to flatten
        seen: Identities of errors already visited higher up the chain

    Returns:
        FullErrorStack for err
    """
    if seen is not None and id(err) in seen:
        return FullErrorStack(message="", msg=CIRCULAR_MARKER, stack="")

    if err.display is not None:
        message = err.display
    else:
        message = err.message or ""

    raw_stack = err.stack or message
    index = raw_stack.find(message) if message else -1

    if index == -1:
        msg = message
        stack = raw_stack
    else:
        index += len(message)
        msg = raw_stack[:index]
        # drop the separator that follows the message
        stack = raw_stack[index + 1:]

    if err.cause is not None:
        seen = set() if seen is None else seen
        seen.add(id(err))
        cause = flatten_error_stack(err.cause, seen)
        stack += "\n   Caused by: " + cause.msg + ("\n" + cause.stack if cause.stack else "")

    return FullErrorStack(message=message, msg=msg, stack=stack)
