"""
Verdict - Test Run Report Rendering

This package turns the lifecycle events of a test run into console
summaries and machine-readable reports.

Subpackages:
    - terminal: terminal capabilities, color and symbol themes, cursor control
    - rendering: error stack flattening, diffs, the end-of-run presenter
    - reporting: stats tracking, the Reporter core and its output formats
    - replay: load recorded event logs and replay them through a Reporter

Usage:
    from verdict import Reporter, ReporterOptions, load_event_log, replay

    log, result = load_event_log("runs/nightly.yaml")
    reporter = Reporter("list", ReporterOptions(inline_diffs=True))
    replay(log, reporter)
    failures = asyncio.run(reporter.done())
"""

__version__ = "0.1.0"

# Configuration and errors
from .config import ReporterOptions
from .errors import ConfigError, ContractViolation, UnsupportedError, VerdictError

# Re-export terminal for convenience
from .terminal import ColorTheme, SymbolTheme, TerminalCapabilities

# Re-export rendering for convenience
from .rendering import (
    DiffEngine,
    DiffResult,
    FullErrorStack,
    Presenter,
    clean_cycles,
    flatten_error_stack,
    humanize_ms,
    stringify,
)

# Re-export reporting for convenience
from .reporting import (
    FORMATS,
    MISSING,
    EventType,
    FailureInfo,
    Reporter,
    RunPhase,
    RunStats,
    Speed,
    StatsTracker,
    Suite,
    TestResult,
    TestState,
    as_failure,
)

# Re-export replay for convenience
from .replay import load_event_log, parse_event_log, replay

__all__ = [
    # Package info
    "__version__",
    # Configuration and errors
    "ReporterOptions",
    "VerdictError",
    "ConfigError",
    "ContractViolation",
    "UnsupportedError",
    # Terminal
    "ColorTheme",
    "SymbolTheme",
    "TerminalCapabilities",
    # Rendering
    "DiffEngine",
    "DiffResult",
    "FullErrorStack",
    "Presenter",
    "clean_cycles",
    "flatten_error_stack",
    "humanize_ms",
    "stringify",
    # Reporting
    "FORMATS",
    "MISSING",
    "EventType",
    "FailureInfo",
    "Reporter",
    "RunPhase",
    "RunStats",
    "Speed",
    "StatsTracker",
    "Suite",
    "TestResult",
    "TestState",
    "as_failure",
    # Replay
    "load_event_log",
    "parse_event_log",
    "replay",
]
