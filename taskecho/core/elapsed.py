"""Elapsed-time stamping for reporter lines.

``format_duration`` renders a millisecond count as a fixed 7-character,
unit-scaled string.  ``ElapsedTimeTracker`` is a stopwatch whose every
read measures the gap since the previous read and restarts itself.
"""

from __future__ import annotations

import math
import time
from collections.abc import Callable

DURATION_WIDTH = 7

# (threshold, divisor, unit) — escalate while the value exceeds threshold.
_ESCALATIONS: tuple[tuple[float, float, str], ...] = (
    (1000, 1000, "  s"),
    (60, 60, "min"),
    (60, 60, " hr"),
)


def _round_tenth(value: float) -> float:
    """Round half up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def _render_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_duration(milliseconds: float) -> str:
    """Format *milliseconds* as exactly 7 characters, right-aligned.

    Examples
    --------
    >>> format_duration(1000)
    '1000 ms'
    >>> format_duration(1500)
    ' 1.5  s'
    >>> format_duration(86_400_000)
    '  24 hr'
    """
    weight: float = milliseconds
    unit = " ms"
    for threshold, divisor, next_unit in _ESCALATIONS:
        if weight <= threshold:
            break
        weight = _round_tenth(weight / divisor)
        unit = next_unit

    return f"   {_render_number(weight)}{unit}"[-DURATION_WIDTH:]


class ElapsedTimeTracker:
    """Stopwatch that resets on every read.

    Parameters
    ----------
    clock:
        Callable returning the current time in seconds.  Defaults to
        ``time.monotonic``.
    """

    def __init__(self, clock: Callable[[], float] | None = None) -> None:
        self._clock = clock or time.monotonic
        self._reference = self._clock()

    @property
    def reference(self) -> float:
        """The instant of the last reset or read, in clock seconds."""
        return self._reference

    def reset(self) -> None:
        """Restart the stopwatch at the current instant."""
        self._reference = self._clock()

    def read_ms(self) -> int:
        """Return milliseconds since the last reset/read and restart.

        A negative delta (clock skew) reads as 0.
        """
        now = self._clock()
        delta = round((now - self._reference) * 1000)
        self._reference = now
        return max(delta, 0)

    def read(self) -> str:
        """Return the formatted gap since the last reset/read and restart."""
        return format_duration(self.read_ms())
