"""List format: one line per test, rewritten in place as outcomes arrive."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...models import EventType, Speed, TestResult

if TYPE_CHECKING:
    from ..reporter import Reporter


class ListFormat:
    """Prints each test's full title with its outcome and duration."""

    def __init__(self, core: Reporter):
        self.core = core
        self.failed = 0

        core.on(EventType.RUN_BEGIN, self._on_run_begin)
        core.on(EventType.TEST_BEGIN, self._on_test_begin)
        core.on(EventType.TEST_PENDING, self._on_pending)
        core.on(EventType.TEST_PASS, self._on_pass)
        core.on(EventType.TEST_FAIL, self._on_fail)
        core.once(EventType.RUN_END, core.epilogue)

    def _on_run_begin(self, total: int) -> None:
        self.core.write("\n")

    def _on_test_begin(self, test: TestResult) -> None:
        self.core.write(self.core.theme.color("pass", f"    {test.full_title()}: "))

    def _on_pending(self, test: TestResult) -> None:
        color = self.core.theme.color
        self.core.cursor.cr()
        self.core.write(color("checkmark", "  -") + color("pending", f" {test.full_title()}") + "\n")

    def _on_pass(self, test: TestResult) -> None:
        color = self.core.theme.color
        speed = (test.speed or Speed.FAST).value
        duration = int(test.duration or 0)
        self.core.cursor.cr()
        self.core.write(
            color("checkmark", f"  {self.core.symbols.ok}")
            + color("pass", f" {test.full_title()}: ")
            + color(speed, f"{duration}ms")
            + "\n"
        )

    def _on_fail(self, test: TestResult, error: object) -> None:
        self.failed += 1
        self.core.cursor.cr()
        self.core.write(self.core.theme.color("fail", f"  {self.failed}) {test.full_title()}") + "\n")
