"""
Rendering Core

This package turns failures and run statistics into report text:

    - flatten_error_stack: cycle-safe cause-chain flattening
    - DiffEngine: bounded unified/inline diffs of actual vs expected
    - stringify / clean_cycles: canonical text and JSON-safe payloads
    - Presenter: the end-of-run epilogue and numbered failure blocks

Usage:
    from verdict.rendering import DiffEngine, Presenter
    from verdict.terminal import ColorTheme

    theme = ColorTheme(enabled=False)
    presenter = Presenter(theme, DiffEngine(theme, max_diff_size=8192))
    print(presenter.epilogue(stats, failures), end="")
"""

# Diff
from .diff import DiffEngine, DiffResult, should_show_diff, stringify_diff_values

# Duration
from .duration import humanize_ms

# Presenter
from .presenter import Presenter

# Stack flattening
from .stack import CIRCULAR_MARKER, FullErrorStack, flatten_error_stack

# Stringification
from .stringify import CIRCULAR, clean_cycles, failure_fields, stringify

__all__ = [
    # Diff
    "DiffEngine",
    "DiffResult",
    "should_show_diff",
    "stringify_diff_values",
    # Duration
    "humanize_ms",
    # Presenter
    "Presenter",
    # Stack flattening
    "CIRCULAR_MARKER",
    "FullErrorStack",
    "flatten_error_stack",
    # Stringification
    "CIRCULAR",
    "clean_cycles",
    "failure_fields",
    "stringify",
]
