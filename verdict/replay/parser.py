"""
Event log parser.

This module converts validated event log data into suites, test results
and failure chains ready to be replayed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..models import MISSING, FailureInfo, Suite, TestResult, TestState


@dataclass
class RecordedTest:
    """A test and the errors it reported, in the order they were raised."""
    test: TestResult
    state: TestState
    errors: list[FailureInfo] = field(default_factory=list)


@dataclass
class RecordedSuite:
    """A suite with its tests and nested suites."""
    suite: Suite
    tests: list[RecordedTest] = field(default_factory=list)
    suites: list[RecordedSuite] = field(default_factory=list)

    def count_tests(self) -> int:
        return len(self.tests) + sum(s.count_tests() for s in self.suites)


@dataclass
class EventLog:
    """A recorded test run."""
    version: int
    root: RecordedSuite
    name: str | None = None
    total: int | None = None
    duration: float | None = None


class EventLogParser:
    """Parses validated event log data into an EventLog."""

    def __init__(self, data: dict[str, Any]):
        self.data = data

    def parse(self) -> EventLog:
        """Convert validated data to a typed EventLog."""
        root = RecordedSuite(suite=Suite())
        root.suites = [self._parse_suite(s, root.suite) for s in self.data["suites"]]
        total = self.data.get("total")
        return EventLog(
            version=self.data["version"],
            root=root,
            name=self.data.get("name"),
            total=int(total) if total is not None else None,
            duration=self.data.get("duration"),
        )

    def _parse_suite(self, data: dict[str, Any], parent: Suite) -> RecordedSuite:
        suite = Suite(title=data["title"], file=data.get("file") or parent.file, parent=parent)
        return RecordedSuite(
            suite=suite,
            tests=[self._parse_test(t, suite) for t in data.get("tests", [])],
            suites=[self._parse_suite(s, suite) for s in data.get("suites", [])],
        )

    def _parse_test(self, data: dict[str, Any], suite: Suite) -> RecordedTest:
        test = TestResult(
            title=data["title"],
            parent=suite,
            file=data.get("file") or suite.file,
            duration=data.get("duration"),
            slow=data.get("slow"),
            current_retry=data.get("retry", 0),
        )
        return RecordedTest(
            test=test,
            state=TestState(data["state"]),
            errors=[self._parse_error(e) for e in data.get("errors") or []],
        )

    def _parse_error(self, data: dict[str, Any]) -> FailureInfo:
        message = data["message"]
        name = data.get("name", "Error")
        return FailureInfo(
            message=message,
            stack=data.get("stack", f"{name}: {message}"),
            name=name,
            actual=data.get("actual", MISSING),
            expected=data.get("expected", MISSING),
            show_diff=data.get("show_diff", True),
            uncaught=data.get("uncaught", False),
            is_error=data.get("error", True),
            cause=self._parse_error(data["cause"]) if "cause" in data else None,
        )
