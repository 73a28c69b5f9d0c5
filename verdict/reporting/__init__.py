"""
Reporting for Test Runs

This package turns a runner's lifecycle events into report output.

Features:
    - Speed classification and ordered failure tracking
    - Multiple errors per test, chained in the order they were raised
    - Console formats: dot, list, min, landing
    - File formats: json, xunit
    - Explicit run lifecycle: idle -> running -> reporting -> done

Usage:
    from verdict.config import ReporterOptions
    from verdict.reporting import Reporter, Suite, TestResult

    reporter = Reporter("list", ReporterOptions(max_diff_size=4096))
    reporter.run_begin(total=1)

    test = TestResult("compares strings", parent=Suite("strings"), duration=4)
    reporter.test_begin(test)
    try:
        assert "foo" == "bar"
    except AssertionError as e:
        reporter.test_fail(test, e)
    reporter.test_end(test)

    reporter.run_end()
    failures = asyncio.run(reporter.done())
"""

# Models
from ..models import (
    MISSING,
    EventType,
    FailureInfo,
    RunPhase,
    RunStats,
    Speed,
    Suite,
    TestResult,
    TestState,
)

# Adapter
from .adapter import as_failure

# Stats
from .stats import StatsTracker, classify_speed

# Reporter
from .reporter import Reporter

# Formats
from .formats import FORMATS, FormatDescriptor, get_format

__all__ = [
    # Models
    "MISSING",
    "EventType",
    "FailureInfo",
    "RunPhase",
    "RunStats",
    "Speed",
    "Suite",
    "TestResult",
    "TestState",
    # Adapter
    "as_failure",
    # Stats
    "StatsTracker",
    "classify_speed",
    # Reporter
    "Reporter",
    # Formats
    "FORMATS",
    "FormatDescriptor",
    "get_format",
]
