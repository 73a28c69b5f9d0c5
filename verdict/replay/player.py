"""
Replay a recorded event log through a Reporter.

Events are emitted in the order a live runner would produce them:
run-begin, then for every suite suite-begin, its tests, its nested suites
and suite-end, then run-end.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models import TestState
from .parser import EventLog, RecordedSuite, RecordedTest

if TYPE_CHECKING:
    from ..models import RunStats
    from ..reporting import Reporter

logger = logging.getLogger(__name__)


def replay(log: EventLog, reporter: Reporter) -> RunStats | None:
    """
    Feed every event of log to reporter.

    Args:
        log: The parsed event log
        reporter: A reporter in its idle phase

    Returns:
        The frozen run statistics
    """
    total = log.total if log.total is not None else log.root.count_tests()
    logger.debug(f"Replaying {total} test(s) from '{log.name or 'event log'}'")

    reporter.run_begin(total)
    _replay_suite(log.root, reporter)
    return reporter.run_end(log.duration)


def _replay_suite(recorded: RecordedSuite, reporter: Reporter) -> None:
    reporter.suite_begin(recorded.suite)
    for test in recorded.tests:
        _replay_test(test, reporter)
    for suite in recorded.suites:
        _replay_suite(suite, reporter)
    reporter.suite_end(recorded.suite)


def _replay_test(recorded: RecordedTest, reporter: Reporter) -> None:
    test = recorded.test
    if recorded.state == TestState.PENDING:
        reporter.test_pending(test)
        reporter.test_end(test)
        return

    reporter.test_begin(test)
    if recorded.state == TestState.PASSED:
        reporter.test_pass(test)
    else:
        for error in recorded.errors:
            reporter.test_fail(test, error)
    reporter.test_end(test)
