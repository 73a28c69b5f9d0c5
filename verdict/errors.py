"""
Exception taxonomy for verdict.

Only setup-time problems propagate to the caller. Diff and write failures
are recovered where they happen and never reach this module's types.
"""

from __future__ import annotations


class VerdictError(Exception):
    """Base class for all verdict errors."""


class ConfigError(VerdictError):
    """Reporter options are invalid."""


class UnsupportedError(VerdictError):
    """
    The requested setup cannot work in this environment.

    Raised eagerly, before any run begins, e.g. when file output is
    requested for a format that only writes to the console.
    """


class ContractViolation(VerdictError):
    """A lifecycle event arrived outside the phase where it is valid."""

    def __init__(self, event: str, phase: str):
        self.event = event
        self.phase = phase
        super().__init__(f"'{event}' is not valid while the run is {phase}")
