"""
Schema validation for recorded event logs.

This module checks raw parsed YAML/JSON against the event log schema and
reports errors with helpful messages.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..models import TestState


# ─────────────────────────────────────────────────────────────────────────────
# Validation Result Types
# ─────────────────────────────────────────────────────────────────────────────

@dataclass
class ValidationError:
    """Represents a single validation error with context."""
    path: str  # e.g., "suites[0].tests[2].state"
    message: str
    value: Any = None
    suggestion: str | None = None

    def __str__(self) -> str:
        parts = [f"❌ {self.path}: {self.message}"]
        if self.value is not None:
            parts.append(f"   Got: {repr(self.value)}")
        if self.suggestion:
            parts.append(f"   💡 {self.suggestion}")
        return "\n".join(parts)


@dataclass
class ValidationResult:
    """Result of schema validation."""
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(
        self,
        path: str,
        message: str,
        value: Any = None,
        suggestion: str | None = None
    ) -> None:
        self.errors.append(ValidationError(path, message, value, suggestion))

    def __str__(self) -> str:
        if self.is_valid:
            return "✅ Event log validation passed"
        lines = [f"Event log validation failed with {len(self.errors)} error(s):\n"]
        lines.extend(str(e) for e in self.errors)
        return "\n".join(lines)


# ─────────────────────────────────────────────────────────────────────────────
# Event Log Validator
# ─────────────────────────────────────────────────────────────────────────────

class EventLogValidator:
    """Validates raw parsed data against the event log schema."""

    REQUIRED_TOP_LEVEL = {"version", "suites"}
    OPTIONAL_TOP_LEVEL = {"name", "total", "duration"}
    SUITE_KEYS = {"title", "file", "tests", "suites"}
    TEST_KEYS = {"title", "state", "duration", "slow", "file", "retry", "errors"}
    ERROR_KEYS = {
        "message", "stack", "name", "actual", "expected",
        "show_diff", "uncaught", "error", "cause",
    }
    VALID_STATES = {s.value for s in TestState}

    def __init__(self, data: dict[str, Any]):
        self.data = data
        self.result = ValidationResult()

    def validate(self) -> ValidationResult:
        """Run all validation checks and return result."""
        self._validate_top_level()
        if not self.result.is_valid:
            return self.result

        self._validate_version()
        self._validate_counts()
        self._validate_suites(self.data.get("suites"), "suites")
        return self.result

    def _validate_top_level(self) -> None:
        """Check required and unknown top-level keys."""
        keys = set(self.data.keys())
        missing = self.REQUIRED_TOP_LEVEL - keys
        unknown = keys - self.REQUIRED_TOP_LEVEL - self.OPTIONAL_TOP_LEVEL

        for key in sorted(missing):
            self.result.add_error(
                key,
                f"Required field '{key}' is missing",
                suggestion=f"Add '{key}:' to your event log"
            )

        for key in sorted(unknown):
            self.result.add_error(
                key,
                f"Unknown top-level field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(self.REQUIRED_TOP_LEVEL | self.OPTIONAL_TOP_LEVEL))}"
            )

    def _validate_version(self) -> None:
        version = self.data.get("version")
        if not isinstance(version, int) or isinstance(version, bool):
            self.result.add_error(
                "version",
                "Must be an integer",
                value=version,
                suggestion="Use 'version: 1'"
            )
        elif version != 1:
            self.result.add_error(
                "version",
                "Unsupported version",
                value=version,
                suggestion="Only version 1 is supported"
            )

    def _validate_counts(self) -> None:
        for key in ("total", "duration"):
            if key in self.data and not _is_number(self.data[key], minimum=0):
                self.result.add_error(key, "Must be a non-negative number", value=self.data[key])

    def _validate_suites(self, suites: Any, path: str) -> None:
        if not isinstance(suites, list):
            self.result.add_error(path, "Must be a list of suites", value=suites)
            return

        for i, suite in enumerate(suites):
            self._validate_suite(suite, f"{path}[{i}]")

    def _validate_suite(self, suite: Any, path: str) -> None:
        if not isinstance(suite, dict):
            self.result.add_error(path, "Must be an object", value=suite)
            return

        self._check_unknown(suite, self.SUITE_KEYS, path)
        if not isinstance(suite.get("title"), str) or not suite["title"].strip():
            self.result.add_error(
                f"{path}.title",
                "Must be a non-empty string",
                value=suite.get("title"),
            )

        if "file" in suite and not isinstance(suite["file"], str):
            self.result.add_error(f"{path}.file", "Must be a string", value=suite["file"])

        tests = suite.get("tests", [])
        if not isinstance(tests, list):
            self.result.add_error(f"{path}.tests", "Must be a list of tests", value=tests)
        else:
            for i, test in enumerate(tests):
                self._validate_test(test, f"{path}.tests[{i}]")

        if "suites" in suite:
            self._validate_suites(suite["suites"], f"{path}.suites")

    def _validate_test(self, test: Any, path: str) -> None:
        if not isinstance(test, dict):
            self.result.add_error(path, "Must be an object", value=test)
            return

        self._check_unknown(test, self.TEST_KEYS, path)
        if not isinstance(test.get("title"), str) or not test["title"].strip():
            self.result.add_error(f"{path}.title", "Must be a non-empty string", value=test.get("title"))

        state = test.get("state")
        if state not in self.VALID_STATES:
            self.result.add_error(
                f"{path}.state",
                "Invalid test state",
                value=state,
                suggestion=f"Valid states: {', '.join(sorted(self.VALID_STATES))}"
            )

        for key in ("duration", "slow"):
            if key in test and not _is_number(test[key], minimum=0):
                self.result.add_error(f"{path}.{key}", "Must be a non-negative number", value=test[key])

        if "retry" in test and not (isinstance(test["retry"], int) and test["retry"] >= 0):
            self.result.add_error(f"{path}.retry", "Must be a non-negative integer", value=test["retry"])

        errors = test.get("errors")
        if state == TestState.FAILED.value:
            if not isinstance(errors, list) or not errors:
                self.result.add_error(
                    f"{path}.errors",
                    "Failed tests need at least one error",
                    suggestion="Add 'errors: [{message: ...}]'"
                )
                return
        elif errors:
            self.result.add_error(
                f"{path}.errors",
                f"Only failed tests can have errors (state is '{state}')",
            )
            return

        for i, error in enumerate(errors or []):
            self._validate_error(error, f"{path}.errors[{i}]")

    def _validate_error(self, error: Any, path: str) -> None:
        if not isinstance(error, dict):
            self.result.add_error(path, "Must be an object", value=error)
            return

        self._check_unknown(error, self.ERROR_KEYS, path)
        if not isinstance(error.get("message"), str):
            self.result.add_error(f"{path}.message", "Must be a string", value=error.get("message"))

        for key in ("stack", "name"):
            if key in error and not isinstance(error[key], str):
                self.result.add_error(f"{path}.{key}", "Must be a string", value=error[key])

        for key in ("show_diff", "uncaught", "error"):
            if key in error and not isinstance(error[key], bool):
                self.result.add_error(f"{path}.{key}", "Must be true or false", value=error[key])

        if "cause" in error:
            self._validate_error(error["cause"], f"{path}.cause")

    def _check_unknown(self, obj: dict[str, Any], allowed: set[str], path: str) -> None:
        for key in sorted(set(obj) - allowed):
            self.result.add_error(
                f"{path}.{key}",
                f"Unknown field '{key}'",
                suggestion=f"Valid fields are: {', '.join(sorted(allowed))}"
            )


def _is_number(value: Any, minimum: float | None = None) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return minimum is None or value >= minimum
