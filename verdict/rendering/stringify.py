"""
Stable stringification and cycle cleaning.

`stringify` produces the canonical text that diffs compare, so two equal
structures always render identically regardless of key order. `clean_cycles`
prepares arbitrary error payloads for JSON serialization.
"""

from __future__ import annotations

import json
import math
from dataclasses import fields, is_dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any

from ..models import MISSING, FailureInfo

CIRCULAR = "[Circular]"


def stringify(value: Any) -> str:
    """
    Render value as canonical, pretty-printed JSON-like text.

    Mapping keys are sorted, sets are sorted, tuples render as lists and
    back-references render as "[Circular]". Values JSON cannot represent
    fall back to their repr.
    """
    if value is MISSING:
        return "[undefined]"
    if isinstance(value, str):
        return value
    return json.dumps(_canonicalize(value, []), indent=2, ensure_ascii=False)


def _canonicalize(value: Any, stack: list[int]) -> Any:
    if value is None or isinstance(value, (bool, int, str)):
        return value
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            return f"[{value}]"
        return value
    if isinstance(value, Enum):
        return _canonicalize(value.value, stack)
    if isinstance(value, (datetime, date)):
        return f"[Date: {value.isoformat()}]"
    if isinstance(value, bytes):
        return f"[Bytes: {value!r}]"

    if id(value) in stack:
        return CIRCULAR

    stack.append(id(value))
    try:
        if isinstance(value, dict):
            return {
                str(key): _canonicalize(value[key], stack)
                for key in sorted(value, key=str)
            }
        if isinstance(value, (list, tuple)):
            return [_canonicalize(item, stack) for item in value]
        if isinstance(value, (set, frozenset)):
            return [_canonicalize(item, stack) for item in sorted(value, key=repr)]
        if is_dataclass(value) and not isinstance(value, type):
            return {
                f.name: _canonicalize(getattr(value, f.name), stack)
                for f in sorted(fields(value), key=lambda f: f.name)
            }
        return repr(value)
    finally:
        stack.pop()


def clean_cycles(obj: Any) -> Any:
    """
    Return a JSON-safe copy of obj with every back-reference replaced.

    Only references to an ancestor are replaced; a value shared between
    two siblings is copied twice. FailureInfo nodes become plain dicts.
    """
    return _clean(obj, [])


def _clean(value: Any, ancestors: list[int]) -> Any:
    if value is MISSING:
        return None
    if isinstance(value, float) and not math.isfinite(value):
        return f"[{value}]"
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if isinstance(value, Enum):
        return value.value

    if id(value) in ancestors:
        return CIRCULAR

    ancestors.append(id(value))
    try:
        if isinstance(value, FailureInfo):
            return {key: _clean(item, ancestors) for key, item in failure_fields(value).items()}
        if isinstance(value, dict):
            return {str(key): _clean(item, ancestors) for key, item in value.items()}
        if isinstance(value, (list, tuple, set, frozenset)):
            return [_clean(item, ancestors) for item in value]
        return str(value)
    finally:
        ancestors.pop()


def failure_fields(failure: FailureInfo) -> dict[str, Any]:
    """Own fields of a FailureInfo, omitting unset optional ones."""
    result: dict[str, Any] = {
        "name": failure.name,
        "message": failure.message,
        "stack": failure.stack,
    }
    if failure.actual is not MISSING:
        result["actual"] = failure.actual
    if failure.expected is not MISSING:
        result["expected"] = failure.expected
    if not failure.show_diff:
        result["showDiff"] = False
    if failure.uncaught:
        result["uncaught"] = True
    if failure.cause is not None:
        result["cause"] = failure.cause
    if failure.multiple:
        result["multiple"] = failure.multiple
    return result
