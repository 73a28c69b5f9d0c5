"""Short human-readable durations ("12ms", "3s", "2m")."""

from __future__ import annotations

SECOND = 1000
MINUTE = SECOND * 60
HOUR = MINUTE * 60
DAY = HOUR * 24

_UNITS = (
    (DAY, "d"),
    (HOUR, "h"),
    (MINUTE, "m"),
    (SECOND, "s"),
)


def humanize_ms(ms: float | None) -> str:
    """
    Format a millisecond duration using the largest unit it reaches.

    Values are rounded half away from zero, so 1500 renders as "2s".
    """
    ms = ms or 0
    magnitude = abs(ms)
    for size, suffix in _UNITS:
        if magnitude >= size:
            return f"{_round(ms / size)}{suffix}"
    return f"{_round(ms)}ms"


def _round(value: float) -> int:
    if value < 0:
        return -int(-value + 0.5)
    return int(value + 0.5)
