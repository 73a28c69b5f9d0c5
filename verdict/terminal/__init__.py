"""
Terminal Capabilities and Theming

This package describes the attached terminal and turns semantic tags into
ANSI colors and glyphs.

Usage:
    from verdict.terminal import ColorTheme, SymbolTheme, TerminalCapabilities

    caps = TerminalCapabilities.detect()
    theme = ColorTheme.for_terminal(caps)
    symbols = SymbolTheme.for_terminal(caps)

    print(theme.color("checkmark", symbols.ok), "all good")
"""

# Capabilities
from .capabilities import FALLBACK_WIDTH, TerminalCapabilities, process_capabilities

# Cursor
from .cursor import Cursor

# Themes
from .theme import COLOR_ENV_VAR, DEFAULT_COLORS, ColorTheme, SymbolTheme

__all__ = [
    # Capabilities
    "FALLBACK_WIDTH",
    "TerminalCapabilities",
    "process_capabilities",
    # Cursor
    "Cursor",
    # Themes
    "COLOR_ENV_VAR",
    "DEFAULT_COLORS",
    "ColorTheme",
    "SymbolTheme",
]
