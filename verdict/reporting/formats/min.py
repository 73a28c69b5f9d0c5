"""Minimal format: clears the screen and prints only the summary."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ...models import EventType

if TYPE_CHECKING:
    from ..reporter import Reporter

CLEAR_SCREEN = "\x1b[2J"
CURSOR_HOME = "\x1b[1;3H"


class MinFormat:
    """Best suited to watch mode, where only the latest summary matters."""

    def __init__(self, core: Reporter):
        self.core = core
        core.on(EventType.RUN_BEGIN, self._on_run_begin)
        core.once(EventType.RUN_END, core.epilogue)

    def _on_run_begin(self, total: int) -> None:
        self.core.write(CLEAR_SCREEN)
        self.core.write(CURSOR_HOME)
