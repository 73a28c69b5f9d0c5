"""
Event log loader.

This module provides the public API for loading and validating recorded
event logs from disk or from YAML/JSON strings.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from .parser import EventLog, EventLogParser
from .validation import EventLogValidator, ValidationResult


def load_event_log(path: str | Path) -> tuple[EventLog | None, ValidationResult]:
    """
    Load and validate an event log from a YAML or JSON file.

    Args:
        path: Path to the event log file

    Returns:
        Tuple of (EventLog or None, ValidationResult)
        If validation fails, EventLog will be None.

    Example:
        log, result = load_event_log("runs/nightly.yaml")
        if not result.is_valid:
            print(result)
            sys.exit(1)
    """
    path = Path(path)

    if not path.exists():
        result = ValidationResult()
        result.add_error(
            str(path),
            "File not found",
            suggestion="Check the file path is correct"
        )
        return None, result

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error(
            str(path),
            f"Invalid YAML/JSON syntax: {e}",
            suggestion="Check formatting (indentation, colons, brackets)"
        )
        return None, result

    return _validate_and_parse(data, str(path))


def parse_event_log(text: str) -> tuple[EventLog | None, ValidationResult]:
    """
    Validate an event log from a YAML or JSON string (useful for testing).

    Args:
        text: YAML or JSON content

    Returns:
        Tuple of (EventLog or None, ValidationResult)
    """
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        result = ValidationResult()
        result.add_error("yaml", f"Invalid YAML/JSON syntax: {e}")
        return None, result

    return _validate_and_parse(data, "yaml")


def _validate_and_parse(data: Any, source: str) -> tuple[EventLog | None, ValidationResult]:
    if not isinstance(data, dict):
        result = ValidationResult()
        result.add_error(
            source,
            "Content must be an object (not a list or scalar)",
            value=type(data).__name__
        )
        return None, result

    result = EventLogValidator(data).validate()
    if not result.is_valid:
        return None, result

    return EventLogParser(data).parse(), result
