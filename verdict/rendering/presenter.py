"""
Presenter for the end-of-run summary.

Composes the stack flattener, the diff engine and the color theme into the
epilogue printed by the console formats. Rendering never mutates its
inputs, so the same stats always produce the same text.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Iterable

from ..terminal.theme import ColorTheme
from .diff import DiffEngine, should_show_diff
from .duration import humanize_ms
from .stack import flatten_error_stack

if TYPE_CHECKING:
    from ..models import FailureInfo, RunStats, TestResult

_ASSERTION_PREFIX = re.compile(r"^([^:]+): expected")


class Presenter:
    """
    Renders run summaries and failure listings.

    Example:
        presenter = Presenter(ColorTheme(enabled=False), DiffEngine(...))
        print(presenter.epilogue(tracker.stats, tracker.failures), end="")
    """

    def __init__(self, theme: ColorTheme, diff_engine: DiffEngine, hide_diff: bool = False):
        self.theme = theme
        self.diff_engine = diff_engine
        self.hide_diff = hide_diff

    def epilogue(self, stats: RunStats, failures: Iterable[TestResult]) -> str:
        """
        Render the final summary.

        Args:
            stats: Frozen statistics of the run
            failures: Failed tests in the order their failures arrived

        Returns:
            The summary text, ending with a newline
        """
        color = self.theme.color
        parts = [
            "\n",
            color("bright pass", " ")
            + color("green", f" {stats.passes or 0} passing")
            + color("light", f" ({humanize_ms(stats.duration)})")
            + "\n",
        ]

        if stats.pending:
            parts.append(color("pending", " ") + color("pending", f" {stats.pending} pending") + "\n")

        if stats.failures:
            parts.append(color("fail", f"  {stats.failures} failing") + "\n")
            parts.append(self.list_failures(failures))
            parts.append("\n")

        parts.append("\n")
        return "".join(parts)

    def list_failures(self, failures: Iterable[TestResult]) -> str:
        """
        Render one numbered block per failure entry.

        A test that failed several times appears once per failure event;
        each appearance shows the next error of its chain.
        """
        remaining: dict[int, list[FailureInfo]] = {}
        blocks = ["\n"]

        for index, test in enumerate(failures, start=1):
            if test.err is None:
                continue
            queue = remaining.setdefault(id(test), test.err.chain())
            err = queue.pop(0) if queue else test.err
            blocks.append(self.failure_block(index, test, err))

        return "".join(blocks)

    def failure_block(self, index: int, test: TestResult, err: FailureInfo) -> str:
        """Render a single numbered failure with its message, diff and stack."""
        color = self.theme.color
        flat = flatten_error_stack(err)
        msg = flat.msg
        if err.uncaught:
            msg = "Uncaught " + msg

        title = self.format_title(test.title_path())
        stack = re.sub(r"^", "  ", flat.stack, flags=re.MULTILINE)

        if not self.hide_diff and should_show_diff(err):
            match = _ASSERTION_PREFIX.match(flat.message)
            msg = f"\n      {color('error message', match.group(1) if match else msg)}"
            msg += self.diff_engine.diff(err.actual, err.expected)
            return (
                color("error title", f"  {index}) {title}:\n{msg}")
                + color("error stack", f"\n{stack}\n")
                + "\n"
            )

        return (
            color("error title", f"  {index}) {title}:\n")
            + color("error message", f"     {msg}")
            + color("error stack", f"\n{stack}\n")
            + "\n"
        )

    @staticmethod
    def format_title(path: list[str]) -> str:
        """Join a title path, indenting each level two spaces deeper."""
        return "\n     ".join("  " * depth + title for depth, title in enumerate(path))
