"""
JSON format: one JSON object describing the whole run.

    {
      "stats": {...},
      "tests": [...], "pending": [...], "failures": [...], "passes": [...]
    }
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from ...models import EventType, TestResult
from ...rendering import clean_cycles

if TYPE_CHECKING:
    from ..reporter import Reporter


def clean_test(test: TestResult) -> dict[str, Any]:
    """Plain-dict view of a test, free of cyclic references."""
    return {
        "title": test.title,
        "fullTitle": test.full_title(),
        "file": test.file_path,
        "duration": test.duration,
        "currentRetry": test.current_retry,
        "speed": test.speed.value if test.speed else None,
        "err": clean_cycles(test.err) if test.err is not None else {},
    }


class JSONFormat:
    """Collects every test and emits a single JSON document at run end."""

    def __init__(self, core: Reporter):
        self.core = core
        self.tests: list[TestResult] = []
        self.pending: list[TestResult] = []
        self.failures: list[TestResult] = []
        self.passes: list[TestResult] = []
        self.results: dict[str, Any] | None = None

        core.on(EventType.TEST_END, self.tests.append)
        core.on(EventType.TEST_PASS, self.passes.append)
        core.on(EventType.TEST_FAIL, lambda test, error: self.failures.append(test))
        core.on(EventType.TEST_PENDING, self.pending.append)
        core.once(EventType.RUN_END, self._on_run_end)

    def build(self) -> dict[str, Any]:
        return {
            "stats": self.core.stats.to_dict(),
            "tests": [clean_test(t) for t in self.tests],
            "pending": [clean_test(t) for t in self.pending],
            "failures": [clean_test(t) for t in self.failures],
            "passes": [clean_test(t) for t in self.passes],
        }

    def _on_run_end(self) -> None:
        self.results = self.build()
        self.core.deliver(json.dumps(self.results, indent=2, default=str))
