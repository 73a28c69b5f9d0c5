"""
xUnit format: JUnit-compatible XML.

Diffs inside <failure> bodies are always rendered without colors.
"""

from __future__ import annotations

import os
from email.utils import formatdate
from html import escape
from typing import TYPE_CHECKING, Any

from ...models import EventType, TestResult, TestState
from ...rendering import DiffEngine, should_show_diff

if TYPE_CHECKING:
    from ..reporter import Reporter

DEFAULT_SUITE_NAME = "Verdict Tests"


def tag(name: str, attrs: dict[str, Any], close: bool, content: str | None = None) -> str:
    """Render an XML tag; attribute values are escaped, content is not."""
    end = "/>" if close else ">"
    pairs = " ".join(f'{key}="{escape(str(value))}"' for key, value in attrs.items())
    result = f"<{name}{' ' + pairs if pairs else ''}{end}"
    if content:
        result += f"{content}</{name}{end}"
    return result


class XUnitFormat:
    """Collects finished tests and emits one <testsuite> at run end."""

    def __init__(self, core: Reporter):
        self.core = core
        self.suite_name = core.options.suite_name or DEFAULT_SUITE_NAME
        self.diff_engine = DiffEngine(
            core.theme.disabled(),
            max_diff_size=core.options.max_diff_size,
            inline=core.options.inline_diffs,
        )
        self.tests: list[TestResult] = []

        core.on(EventType.TEST_PENDING, self.tests.append)
        core.on(EventType.TEST_PASS, self.tests.append)
        core.on(EventType.TEST_FAIL, lambda test, error: self.tests.append(test))
        core.once(EventType.RUN_END, self._on_run_end)

    def _on_run_end(self) -> None:
        stats = self.core.stats
        lines = [
            tag(
                "testsuite",
                {
                    "name": self.suite_name,
                    "tests": stats.tests,
                    "failures": 0,
                    "errors": stats.failures,
                    "skipped": stats.tests - stats.failures - stats.passes,
                    "timestamp": formatdate(usegmt=True),
                    "time": (stats.duration or 0) / 1000,
                },
                False,
            )
        ]
        lines.extend(self.testcase(t) for t in self.tests)
        lines.append("</testsuite>")
        self.core.deliver("\n".join(lines) + "\n")

    def testcase(self, test: TestResult) -> str:
        """Render the <testcase> element for one test."""
        attrs = {
            "classname": test.parent.full_title() if test.parent else "",
            "name": test.title,
            "file": self._file_path(test.file_path),
            "time": (test.duration or 0) / 1000,
        }

        if test.state == TestState.FAILED and test.err is not None:
            err = test.err
            diff = ""
            if not self.core.options.hide_diff and should_show_diff(err):
                diff = "\n" + self.diff_engine.diff(err.actual, err.expected)
            body = escape(err.message) + escape(diff) + "\n" + escape(err.stack)
            return tag("testcase", attrs, False, tag("failure", {}, False, body))

        if test.is_pending():
            return tag("testcase", attrs, False, tag("skipped", {}, True))

        return tag("testcase", attrs, True)

    def _file_path(self, path: str | None) -> str:
        if not path:
            return ""
        if self.core.options.show_relative_paths:
            return os.path.relpath(path, os.getcwd())
        return path
