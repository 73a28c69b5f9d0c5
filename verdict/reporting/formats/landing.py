"""Landing strip format: a plane crosses the runway as tests finish."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...models import EventType, TestResult, TestState

if TYPE_CHECKING:
    from ..reporter import Reporter

PLANE = "✈"
RESET = "\x1b[0m"


class LandingFormat:
    """
    Animates progress as a plane landing on a runway.

    The plane turns red and stays where it is once any test fails. The
    cursor is hidden for the animation and restored at run end, or when
    the process is interrupted.
    """

    def __init__(self, core: Reporter):
        self.core = core
        self.width = core.capabilities.width
        self.plane = core.theme.color("plane", PLANE)
        self.crashed = -1
        self.finished = 0

        core.on(EventType.RUN_BEGIN, self._on_run_begin)
        core.on(EventType.TEST_END, self._on_test_end)
        core.once(EventType.RUN_END, self._on_run_end)

    def runway(self) -> str:
        return "  " + self.core.theme.color("runway", "-" * (self.width - 1))

    def _on_run_begin(self, total: int) -> None:
        self.core.write("\n\n\n  ")
        self.core.cursor.hide()
        self.core.cursor.restore_on_interrupt()

    def _on_test_end(self, test: TestResult) -> None:
        color = self.core.theme.color
        if self.crashed == -1:
            self.finished += 1
            total = max(self.core.stats.total_tests, self.finished)
            col = self.width * self.finished // total
        else:
            col = self.crashed

        if test.state == TestState.FAILED:
            self.plane = color("plane crash", PLANE)
            self.crashed = col

        write = self.core.write
        write(f"\x1b[{self.width + 1}D\x1b[2A")
        write(self.runway())
        write("\n  ")
        write(color("runway", "⋅" * max(col - 1, 0)))
        write(self.plane)
        write(color("runway", "⋅" * max(self.width - col - 1, 0)) + "\n")
        write(self.runway())
        write(RESET)

    def _on_run_end(self) -> None:
        self.core.cursor.show()
        self.core.cursor.release_interrupt_guard()
        self.core.write("\n")
        self.core.epilogue()
