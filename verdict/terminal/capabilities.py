"""
Terminal capability detection.

Capabilities are detected once per process from the real output streams
and then passed around as an immutable value.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import lru_cache

from rich.console import Console

FALLBACK_WIDTH = 75
WIDTH_SCALE = 0.75


@dataclass(frozen=True)
class TerminalCapabilities:
    """
    What the attached terminal can do.

    Attributes:
        interactive: Both stdout and stderr are attached to a real terminal
        width: Usable width in columns (75% of the detected columns)
        supports_color: The output stream can render ANSI colors
        unicode: The output encoding can represent non-ASCII glyphs
    """
    interactive: bool = False
    width: int = FALLBACK_WIDTH
    supports_color: bool = False
    unicode: bool = True

    @classmethod
    def detect(
        cls,
        console: Console | None = None,
        error_console: Console | None = None,
    ) -> TerminalCapabilities:
        """
        Inspect the consoles and describe their capabilities.

        Args:
            console: Console bound to the output stream (stdout by default)
            error_console: Console bound to the diagnostic stream (stderr by default)

        Returns:
            TerminalCapabilities for these streams
        """
        console = console or Console()
        error_console = error_console or Console(stderr=True)

        interactive = console.is_terminal and error_console.is_terminal
        width = FALLBACK_WIDTH
        if interactive:
            columns = console.size.width
            if columns:
                width = math.floor(columns * WIDTH_SCALE)

        encoding = (console.encoding or "").lower()
        return cls(
            interactive=interactive,
            width=width,
            supports_color=console.color_system is not None,
            unicode=encoding.startswith("utf") and not console.legacy_windows,
        )


@lru_cache(maxsize=1)
def process_capabilities() -> TerminalCapabilities:
    """Capabilities of this process's stdout/stderr, detected once."""
    return TerminalCapabilities.detect()
