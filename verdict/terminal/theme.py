"""
Color and symbol themes.

Both tables are built once per run and never mutated afterwards. A
disabled ColorTheme turns every color call into the identity function.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping

from .capabilities import TerminalCapabilities

COLOR_ENV_VAR = "VERDICT_COLORS"

DEFAULT_COLORS: Mapping[str, str] = MappingProxyType({
    "pass": "90",
    "fail": "31",
    "bright pass": "92",
    "bright fail": "91",
    "bright yellow": "93",
    "pending": "36",
    "suite": "0",
    "error title": "0",
    "error message": "31",
    "error stack": "90",
    "checkmark": "32",
    "fast": "90",
    "medium": "33",
    "slow": "31",
    "green": "32",
    "light": "90",
    "diff gutter": "90",
    "diff added": "32",
    "diff removed": "31",
    "diff added inline": "30;42",
    "diff removed inline": "30;41",
    # landing strip
    "plane": "0",
    "plane crash": "31",
    "runway": "90",
})


@dataclass(frozen=True)
class ColorTheme:
    """Maps semantic color tags to ANSI SGR codes."""
    enabled: bool = False
    codes: Mapping[str, str] = field(default_factory=lambda: DEFAULT_COLORS)

    @classmethod
    def for_terminal(
        cls,
        capabilities: TerminalCapabilities,
        use_colors: bool | None = None,
        environ: Mapping[str, str] | None = None,
        overrides: Mapping[str, str] | None = None,
    ) -> ColorTheme:
        """
        Decide whether colors are on and build the table.

        An explicit use_colors wins. Otherwise colors are on when the
        terminal supports them or VERDICT_COLORS is set.
        """
        environ = os.environ if environ is None else environ
        if use_colors is None:
            enabled = capabilities.supports_color or COLOR_ENV_VAR in environ
        else:
            enabled = use_colors

        codes: Mapping[str, str] = DEFAULT_COLORS
        if overrides:
            codes = MappingProxyType({**DEFAULT_COLORS, **overrides})
        return cls(enabled=enabled, codes=codes)

    def color(self, tag: str, text: Any) -> str:
        """Wrap text in the ANSI code for tag."""
        if not self.enabled:
            return str(text)
        return f"\x1b[{self.codes[tag]}m{text}\x1b[0m"

    def color_lines(self, tag: str, text: str) -> str:
        """Color every line of text separately so codes never span a newline."""
        return "\n".join(self.color(tag, line) for line in text.split("\n"))

    def disabled(self) -> ColorTheme:
        return ColorTheme(enabled=False, codes=self.codes)


@dataclass(frozen=True)
class SymbolTheme:
    """Glyphs used by the console formats."""
    ok: str = "✔"
    err: str = "✖"
    dot: str = "."
    comma: str = ","
    bang: str = "!"

    @classmethod
    def for_terminal(cls, capabilities: TerminalCapabilities) -> SymbolTheme:
        if capabilities.unicode:
            return cls()
        return cls(ok="√", err="×")
