"""
Event Log Replay

This package loads recorded test runs and replays their lifecycle events
through a Reporter, so any run can be re-rendered in any format.

Usage:
    from verdict.replay import load_event_log, replay
    from verdict.reporting import Reporter

    log, result = load_event_log("runs/nightly.yaml")
    if not result.is_valid:
        print(result)

    reporter = Reporter("xunit")
    replay(log, reporter)
    asyncio.run(reporter.done())
"""

# Public API
from .loader import load_event_log, parse_event_log
from .player import replay

# Models
from .parser import EventLog, EventLogParser, RecordedSuite, RecordedTest

# Validation
from .validation import EventLogValidator, ValidationError, ValidationResult

__all__ = [
    # Loader functions
    "load_event_log",
    "parse_event_log",
    "replay",
    # Models
    "EventLog",
    "EventLogParser",
    "RecordedSuite",
    "RecordedTest",
    # Validation
    "EventLogValidator",
    "ValidationError",
    "ValidationResult",
]
