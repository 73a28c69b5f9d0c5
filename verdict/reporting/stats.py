"""
Run statistics tracking.

The StatsTracker is the first subscriber of every lifecycle event. It
classifies speed, merges repeated failures into one chain, keeps the
ordered failure list and maintains RunStats.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Callable

from ..config import DEFAULT_SLOW_MS
from ..models import RunStats, Speed, Suite, TestResult, TestState
from ..rendering.diff import should_show_diff, stringify_diff_values
from .adapter import as_failure

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def classify_speed(duration: float | None, slow: float) -> Speed:
    """
    Classify a passing test's duration against its slow threshold.

    Slower than the threshold is slow, slower than half of it is medium,
    anything else is fast.
    """
    duration = duration or 0
    if duration > slow:
        return Speed.SLOW
    if duration > slow / 2:
        return Speed.MEDIUM
    return Speed.FAST


class StatsTracker:
    """
    Aggregates one run's outcome events.

    Attributes:
        stats: The RunStats being built; frozen once the run ends
        failures: Failed tests in the order their failure events arrived
    """

    def __init__(self, slow: float = DEFAULT_SLOW_MS, clock: Clock = _utc_now):
        self.default_slow = slow
        self.clock = clock
        self.stats = RunStats()
        self.failures: list[TestResult] = []
        self.frozen = False

    def _rejects(self, event: str) -> bool:
        if self.frozen:
            logger.warning(f"Ignoring {event} after the run ended")
        return self.frozen

    def run_begin(self, total: int = 0) -> None:
        if self._rejects("run-begin"):
            return
        self.stats.total_tests = total
        self.stats.start = self.clock()

    def suite_begin(self, suite: Suite) -> None:
        if not suite.root and not self._rejects("suite-begin"):
            self.stats.suites += 1

    def test_pass(self, test: TestResult) -> None:
        if self._rejects("test-pass"):
            return
        threshold = test.slow if test.slow is not None else self.default_slow
        test.speed = classify_speed(test.duration, threshold)
        test.state = TestState.PASSED
        self.stats.passes += 1

    def test_fail(self, test: TestResult, error: Any) -> None:
        """
        Record a failure event.

        A genuine error reported for a test that already holds a failure is
        chained onto that failure's `multiple` list; anything else replaces
        the prior failure.
        """
        if self._rejects("test-fail"):
            return
        failure = as_failure(error)
        if should_show_diff(failure):
            failure.actual, failure.expected = stringify_diff_values(failure.actual, failure.expected)

        if test.err is not None and failure.is_error:
            test.err.multiple.append(failure)
        else:
            test.err = failure

        test.state = TestState.FAILED
        self.failures.append(test)
        self.stats.failures += 1

    def test_pending(self, test: TestResult) -> None:
        if self._rejects("test-pending"):
            return
        test.state = TestState.PENDING
        self.stats.pending += 1

    def test_end(self, test: TestResult) -> None:
        if not self._rejects("test-end"):
            self.stats.tests += 1

    def run_end(self, duration: float | None = None) -> RunStats:
        """
        Freeze the stats.

        Once frozen, every further event is ignored and a second
        run_end returns the stats unchanged.

        Args:
            duration: Run duration in ms; measured from the clock when omitted

        Returns:
            The frozen RunStats
        """
        if self._rejects("run-end"):
            return self.stats
        self.stats.end = self.clock()
        if duration is not None:
            self.stats.duration = duration
        elif self.stats.start is not None:
            delta = self.stats.end - self.stats.start
            self.stats.duration = delta.total_seconds() * 1000
        self.frozen = True
        logger.debug(
            f"Run finished: {self.stats.passes} passed, {self.stats.failures} failed, "
            f"{self.stats.pending} pending"
        )
        return self.stats
