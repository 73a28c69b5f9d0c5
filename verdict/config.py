"""
Run configuration for verdict reporters.

A single immutable ReporterOptions value is built once per run and handed
to every component that renders output, so two reporters in the same
process never share mutable state.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .errors import ConfigError
from .terminal.theme import DEFAULT_COLORS

DEFAULT_MAX_DIFF_SIZE = 8192
DEFAULT_SLOW_MS = 75

# Reporter-option keys are accepted in either spelling
_ALIASES = {
    "useColors": "use_colors",
    "colors": "use_colors",
    "inlineDiffs": "inline_diffs",
    "maxDiffSize": "max_diff_size",
    "hideDiff": "hide_diff",
    "suiteName": "suite_name",
    "showRelativePaths": "show_relative_paths",
    "colorOverrides": "color_overrides",
}


@dataclass(frozen=True)
class ReporterOptions:
    """
    Options accepted by every reporter.

    Attributes:
        use_colors: Force colors on/off; None means detect from the terminal
        inline_diffs: Render word-level inline diffs instead of unified ones
        max_diff_size: Truncate each diffed side to this many characters (0 = unbounded)
        slow: Default per-test slow threshold in milliseconds
        hide_diff: Never render diffs, even when a failure supports one
        output: File destination for file-capable formats (json, xunit)
        suite_name: Name of the root <testsuite> element in xunit output
        show_relative_paths: Render test file paths relative to the cwd
        strict: Raise on out-of-phase lifecycle events instead of logging them
        color_overrides: Replacement ANSI codes for color tags, e.g. {"fail": "35"}
    """
    use_colors: bool | None = None
    inline_diffs: bool = False
    max_diff_size: int = DEFAULT_MAX_DIFF_SIZE
    slow: float = DEFAULT_SLOW_MS
    hide_diff: bool = False
    output: Path | None = None
    suite_name: str | None = None
    show_relative_paths: bool = False
    strict: bool = False
    color_overrides: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        if isinstance(self.max_diff_size, bool) or not isinstance(self.max_diff_size, int):
            raise ConfigError(f"max_diff_size must be an integer, got {self.max_diff_size!r}")
        if self.max_diff_size < 0:
            raise ConfigError(f"max_diff_size must be >= 0, got {self.max_diff_size}")
        if self.slow < 0:
            raise ConfigError(f"slow must be >= 0, got {self.slow}")
        if self.output is not None and not isinstance(self.output, Path):
            object.__setattr__(self, "output", Path(self.output))
        if self.color_overrides is not None:
            unknown = sorted(set(self.color_overrides) - set(DEFAULT_COLORS))
            if unknown:
                raise ConfigError(f"Unknown color tag(s): {', '.join(unknown)}")
            object.__setattr__(self, "color_overrides", MappingProxyType(dict(self.color_overrides)))

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> ReporterOptions:
        """
        Build options from loosely-typed reporter options.

        Keys may be camelCase or snake_case. A maxDiffSize that is not
        numeric is ignored and the default is kept; numeric strings are
        accepted.

        Args:
            mapping: Reporter options, e.g. parsed from a command line

        Returns:
            ReporterOptions instance
        """
        if not mapping:
            return cls()

        values: dict[str, Any] = {}
        for key, value in mapping.items():
            name = _ALIASES.get(key, key)
            if name not in cls.__dataclass_fields__:
                raise ConfigError(f"Unknown reporter option '{key}'")
            values[name] = value

        if "max_diff_size" in values:
            size = _coerce_number(values.pop("max_diff_size"))
            if size is not None:
                values["max_diff_size"] = _diff_size(size)

        if "slow" in values:
            slow = _coerce_number(values.pop("slow"))
            if slow is not None:
                values["slow"] = slow

        return cls(**values)

    def with_overrides(self, **changes: Any) -> ReporterOptions:
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


def _diff_size(size: float) -> int:
    """
    Turn a numeric max diff size into a character bound.

    An infinite bound is no bound (0). Fractions round up, so a positive
    bound never collapses to 0.
    """
    if math.isinf(size):
        if size < 0:
            raise ConfigError(f"max_diff_size must be >= 0, got {size}")
        return 0
    return math.ceil(size)


def _coerce_number(value: Any) -> float | None:
    """Interpret value as a number, or None if it is not one."""
    if isinstance(value, bool) or value is None:
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if number != number:  # NaN
        return None
    return number
