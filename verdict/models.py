"""
Data models for test runs.

This module defines the data structures a reporter reads: suites, test
results, failure chains and the aggregate run statistics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class _Missing:
    """Marker for a value that was never supplied (distinct from None)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()


class TestState(str, Enum):
    """Outcome of a single test."""
    __test__ = False

    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"


class Speed(str, Enum):
    """Speed class assigned to a passing test."""
    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"


class RunPhase(str, Enum):
    """Lifecycle of one reporter."""
    IDLE = "idle"
    RUNNING = "running"
    REPORTING = "reporting"
    DONE = "done"


class EventType(str, Enum):
    """Lifecycle events emitted by a runner."""
    RUN_BEGIN = "run-begin"
    RUN_END = "run-end"
    SUITE_BEGIN = "suite-begin"
    SUITE_END = "suite-end"
    TEST_BEGIN = "test-begin"
    TEST_PASS = "test-pass"
    TEST_FAIL = "test-fail"
    TEST_PENDING = "test-pending"
    TEST_END = "test-end"


@dataclass(eq=False)
class FailureInfo:
    """
    One test's error chain.

    `cause` is the error this one wraps. `multiple` holds further errors
    raised for the same test, in the order they were raised. Both may form
    cycles, so neither takes part in repr.
    """
    message: str = ""
    stack: str = ""
    name: str = "Error"
    display: str | None = None  # custom string representation, preferred over message
    actual: Any = MISSING
    expected: Any = MISSING
    show_diff: bool = True
    uncaught: bool = False
    is_error: bool = True  # False when a non-exception value was thrown
    cause: FailureInfo | None = field(default=None, repr=False)
    multiple: list[FailureInfo] = field(default_factory=list, repr=False)

    def chain(self) -> list[FailureInfo]:
        """The primary error followed by every chained error."""
        return [self, *self.multiple]


@dataclass(eq=False)
class Suite:
    """A suite of tests; the root suite has an empty title."""
    title: str = ""
    file: str | None = None
    parent: Suite | None = field(default=None, repr=False)

    @property
    def root(self) -> bool:
        return self.parent is None and not self.title

    def title_path(self) -> list[str]:
        path = self.parent.title_path() if self.parent else []
        if self.title:
            path.append(self.title)
        return path

    def full_title(self) -> str:
        return " ".join(self.title_path())


@dataclass(eq=False)
class TestResult:
    """
    Record of a single test as produced by the runner.

    The reporter treats everything here as read-only except `speed`,
    which the stats tracker assigns when the test passes, and `err`,
    which collects the failure chain.
    """
    __test__ = False

    title: str
    parent: Suite | None = field(default=None, repr=False)
    file: str | None = None
    duration: float | None = None
    state: TestState | None = None
    speed: Speed | None = None
    slow: float | None = None  # per-test slow threshold in ms
    current_retry: int = 0
    err: FailureInfo | None = field(default=None, repr=False)

    def title_path(self) -> list[str]:
        path = self.parent.title_path() if self.parent else []
        path.append(self.title)
        return path

    def full_title(self) -> str:
        return " ".join(self.title_path())

    def is_pending(self) -> bool:
        return self.state == TestState.PENDING

    @property
    def file_path(self) -> str | None:
        if self.file:
            return self.file
        return self.parent.file if self.parent else None


@dataclass
class RunStats:
    """
    Aggregate statistics for one run.

    Owned and mutated by the stats tracker while the run is in progress,
    frozen at run end.
    """
    suites: int = 0
    tests: int = 0
    passes: int = 0
    pending: int = 0
    failures: int = 0
    total_tests: int = 0
    start: datetime | None = None
    end: datetime | None = None
    duration: float | None = None  # milliseconds

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "suites": self.suites,
            "tests": self.tests,
            "passes": self.passes,
            "pending": self.pending,
            "failures": self.failures,
            "totalTests": self.total_tests,
            "start": self.start.isoformat() if self.start else None,
            "end": self.end.isoformat() if self.end else None,
            "duration": self.duration,
        }
