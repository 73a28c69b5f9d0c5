"""Dot matrix format: one glyph per test outcome."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...models import EventType, Speed, TestResult

if TYPE_CHECKING:
    from ..reporter import Reporter


class DotFormat:
    """Prints `.` per pass (colored by speed), `,` per pending and `!` per failure."""

    def __init__(self, core: Reporter):
        self.core = core
        self.width = core.capabilities.width
        self.count = -1

        core.on(EventType.RUN_BEGIN, self._on_run_begin)
        core.on(EventType.TEST_PENDING, self._on_pending)
        core.on(EventType.TEST_PASS, self._on_pass)
        core.on(EventType.TEST_FAIL, self._on_fail)
        core.once(EventType.RUN_END, self._on_run_end)

    def _mark(self, tag: str, glyph: str) -> None:
        self.count += 1
        if self.count % self.width == 0:
            self.core.write("\n  ")
        self.core.write(self.core.theme.color(tag, glyph))

    def _on_run_begin(self, total: int) -> None:
        self.core.write("\n")

    def _on_pending(self, test: TestResult) -> None:
        self._mark("pending", self.core.symbols.comma)

    def _on_pass(self, test: TestResult) -> None:
        if test.speed == Speed.SLOW:
            self._mark("bright yellow", self.core.symbols.dot)
        else:
            self._mark((test.speed or Speed.FAST).value, self.core.symbols.dot)

    def _on_fail(self, test: TestResult, error: object) -> None:
        self._mark("fail", self.core.symbols.bang)

    def _on_run_end(self) -> None:
        self.core.write("\n")
        self.core.epilogue()
