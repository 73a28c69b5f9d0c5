"""
Output Formats

Every format is a plain class that holds the shared Reporter by reference
and subscribes to the lifecycle events it cares about. Formats are picked
by tag from the FORMATS registry.

Usage:
    from verdict.reporting.formats import FORMATS, get_format

    for descriptor in FORMATS.values():
        print(descriptor.tag, descriptor.description)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable

from ...errors import ConfigError
from .dot import DotFormat
from .json_report import JSONFormat, clean_test
from .landing import LandingFormat
from .list import ListFormat
from .min import MinFormat
from .xunit import DEFAULT_SUITE_NAME, XUnitFormat

if TYPE_CHECKING:
    from ..reporter import Reporter


@dataclass(frozen=True)
class FormatDescriptor:
    """Describes one selectable output format."""
    tag: str
    description: str
    factory: Callable[[Reporter], Any]
    writes_files: bool = False


FORMATS: dict[str, FormatDescriptor] = {
    d.tag: d
    for d in (
        FormatDescriptor("dot", "dot matrix representation", DotFormat),
        FormatDescriptor("list", "one line per test, flat", ListFormat),
        FormatDescriptor("min", "essentially just a summary", MinFormat),
        FormatDescriptor("landing", "Unicode landing strip", LandingFormat),
        FormatDescriptor("json", "single JSON object", JSONFormat, writes_files=True),
        FormatDescriptor("xunit", "xUnit-compatible XML output", XUnitFormat, writes_files=True),
    )
}


def get_format(tag: str) -> FormatDescriptor:
    """
    Look up a format by tag.

    Raises:
        ConfigError: If no format has this tag
    """
    try:
        return FORMATS[tag]
    except KeyError:
        valid = ", ".join(sorted(FORMATS))
        raise ConfigError(f"Unknown format '{tag}'. Valid formats: {valid}") from None


__all__ = [
    "FORMATS",
    "FormatDescriptor",
    "get_format",
    # Formats
    "DotFormat",
    "JSONFormat",
    "LandingFormat",
    "ListFormat",
    "MinFormat",
    "XUnitFormat",
    # Helpers
    "DEFAULT_SUITE_NAME",
    "clean_test",
]
