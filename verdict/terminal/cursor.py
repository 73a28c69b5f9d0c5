"""
Cursor control for animated console formats.

Every control sequence is a no-op when the terminal is not interactive.
"""

from __future__ import annotations

import logging
import signal
import threading
from typing import Callable, TextIO

logger = logging.getLogger(__name__)

HIDE = "\x1b[?25l"
SHOW = "\x1b[?25h"
DELETE_LINE = "\x1b[2K"
BEGINNING_OF_LINE = "\x1b[0G"


class Cursor:
    """Basic cursor interactions shared by the console formats."""

    def __init__(self, stream: TextIO, interactive: bool):
        self.stream = stream
        self.interactive = interactive
        self.hidden = False
        self._previous_handler: Callable | int | None = None

    def hide(self) -> None:
        if self.interactive:
            self.stream.write(HIDE)
            self.hidden = True

    def show(self) -> None:
        if self.interactive:
            self.stream.write(SHOW)
            self.stream.flush()
        self.hidden = False

    def delete_line(self) -> None:
        if self.interactive:
            self.stream.write(DELETE_LINE)

    def beginning_of_line(self) -> None:
        if self.interactive:
            self.stream.write(BEGINNING_OF_LINE)

    def cr(self) -> None:
        """Return to the start of the current line, clearing it when possible."""
        if self.interactive:
            self.delete_line()
            self.beginning_of_line()
        else:
            self.stream.write("\r")

    def restore_on_interrupt(self) -> None:
        """
        Install a SIGINT handler that shows the cursor before the
        interrupt propagates.

        Signal handlers can only be installed from the main thread; from
        any other thread this does nothing.
        """
        if threading.current_thread() is not threading.main_thread():
            logger.debug("Not on the main thread, skipping SIGINT cursor guard")
            return
        self._previous_handler = signal.getsignal(signal.SIGINT)
        signal.signal(signal.SIGINT, self._on_interrupt)

    def release_interrupt_guard(self) -> None:
        """Reinstate whatever SIGINT handler was active before."""
        if self._previous_handler is None:
            return
        if threading.current_thread() is threading.main_thread():
            signal.signal(signal.SIGINT, self._previous_handler)
        self._previous_handler = None

    def _on_interrupt(self, signum, frame) -> None:
        if self.hidden:
            self.show()
        previous = self._previous_handler
        self.release_interrupt_guard()
        if callable(previous):
            previous(signum, frame)
        else:
            raise KeyboardInterrupt
