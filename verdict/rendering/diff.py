"""
Diff engine for actual/expected values.

Renders a bounded, colorized diff in one of two modes:

    unified  - classic line-based patch with +/- prefixes
    inline   - word-level diff highlighted within the running text

Diff rendering must never break a report, so any internal failure is
replaced with a one-line notice.
"""

from __future__ import annotations

import difflib
import logging
import re
from dataclasses import dataclass
from typing import Any

from ..models import MISSING, FailureInfo
from ..terminal.theme import ColorTheme
from .stringify import stringify

logger = logging.getLogger(__name__)

INDENT = "      "
# unified_diff emits "---", "+++" and the first "@@" hunk header before any content
PATCH_PREAMBLE_LINES = 3
PATCH_CONTEXT_LINES = 4
INLINE_NUMBERING_THRESHOLD = 4

_WORD_TOKENS = re.compile(r"\s+|\w+|[^\w\s]")


@dataclass(frozen=True)
class DiffResult:
    """Outcome of one diff computation."""
    text: str
    truncated: bool = False
    skipped_chars: int = 0


def should_show_diff(err: FailureInfo | None) -> bool:
    """
    Whether a diff makes sense for err.

    Requires expected to be supplied, actual and expected to share a
    runtime type, and the failure not to opt out.
    """
    return (
        err is not None
        and err.show_diff
        and err.expected is not MISSING
        and type(err.actual) is type(err.expected)
    )


def stringify_diff_values(actual: Any, expected: Any) -> tuple[str, str]:
    """Stringify both sides unless both already are strings."""
    if isinstance(actual, str) and isinstance(expected, str):
        return actual, expected
    return stringify(actual), stringify(expected)


class DiffEngine:
    """
    Produces colorized diffs bounded by max_diff_size.

    Example:
        engine = DiffEngine(ColorTheme(enabled=False), max_diff_size=8192)
        print(engine.diff("foo", "bar"))
    """

    def __init__(self, theme: ColorTheme, max_diff_size: int = 8192, inline: bool = False):
        self.theme = theme
        self.max_diff_size = max_diff_size
        self.inline = inline

    def diff(self, actual: Any, expected: Any) -> str:
        """Return the rendered diff text between actual and expected."""
        return self.compute(actual, expected).text

    def compute(self, actual: Any, expected: Any) -> DiffResult:
        """
        Compute the diff, truncating both sides to max_diff_size first.

        Args:
            actual: The value produced by the code under test
            expected: The value the test expected

        Returns:
            DiffResult with the rendered text and truncation details
        """
        try:
            actual, expected = stringify_diff_values(actual, expected)
            limit = self.max_diff_size
            skipped = 0
            if limit > 0:
                skipped = max(len(actual) - limit, len(expected) - limit, 0)
                actual = actual[:limit]
                expected = expected[:limit]

            if self.inline:
                text = self._inline_diff(actual, expected)
            else:
                text = self._unified_diff(actual, expected)

            if skipped > 0:
                text += (
                    f"\n{INDENT}[verdict] output truncated to {limit} characters, "
                    f'see "max_diff_size" reporter option\n'
                )
            return DiffResult(text=text, truncated=skipped > 0, skipped_chars=skipped)
        except Exception as e:
            logger.debug(f"Diff generation failed: {type(e).__name__}: {e}")
            return DiffResult(text=self._fallback_notice())

    def _fallback_notice(self) -> str:
        color = self.theme.color
        return (
            f"\n{INDENT}"
            + color("diff added", "+ expected")
            + " "
            + color("diff removed", "- actual:  failed to generate diff")
            + "\n"
        )

    def _unified_diff(self, actual: str, expected: str) -> str:
        color_lines = self.theme.color_lines

        def clean_up(line: str) -> str | None:
            if line.startswith("+"):
                return INDENT + color_lines("diff added", line)
            if line.startswith("-"):
                return INDENT + color_lines("diff removed", line)
            if line.startswith("@@") and line.rstrip().endswith("@@"):
                return "--"
            if line.startswith("\\ No newline"):
                return None
            return INDENT + line

        patch = difflib.unified_diff(
            actual.split("\n"),
            expected.split("\n"),
            fromfile="string",
            tofile="string",
            n=PATCH_CONTEXT_LINES,
            lineterm="",
        )
        lines = list(patch)[PATCH_PREAMBLE_LINES:]
        body = [cleaned for cleaned in map(clean_up, lines) if cleaned is not None]

        return (
            f"\n{INDENT}"
            + color_lines("diff added", "+ expected")
            + " "
            + color_lines("diff removed", "- actual")
            + "\n\n"
            + "\n".join(body)
        )

    def _inline_diff(self, actual: str, expected: str) -> str:
        msg = self._word_diff(actual, expected)
        lines = msg.split("\n")

        if len(lines) > INLINE_NUMBERING_THRESHOLD:
            width = len(str(len(lines)))
            msg = "\n".join(
                f"{str(number).rjust(width)} | {line}"
                for number, line in enumerate(lines, start=1)
            )

        color = self.theme.color
        msg = (
            "\n"
            + color("diff removed inline", "actual")
            + " "
            + color("diff added inline", "expected")
            + "\n\n"
            + msg
            + "\n"
        )
        return re.sub(r"^", INDENT, msg, flags=re.MULTILINE)

    def _word_diff(self, actual: str, expected: str) -> str:
        old = _WORD_TOKENS.findall(actual)
        new = _WORD_TOKENS.findall(expected)
        matcher = difflib.SequenceMatcher(None, old, new, autojunk=False)
        color_lines = self.theme.color_lines

        parts: list[str] = []
        for tag, i1, i2, j1, j2 in matcher.get_opcodes():
            if tag == "equal":
                parts.append("".join(old[i1:i2]))
                continue
            if tag in ("delete", "replace"):
                parts.append(color_lines("diff removed inline", "".join(old[i1:i2])))
            if tag in ("insert", "replace"):
                parts.append(color_lines("diff added inline", "".join(new[j1:j2])))
        return "".join(parts)
