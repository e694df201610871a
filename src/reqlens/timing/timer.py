"""Wall-clock accumulator for request phases."""

from __future__ import annotations

import time
from types import MappingProxyType
from typing import Optional

from ..errors import InvalidStateError
from ..thresholds import PHASE_KEYS
from .models import TimingSnapshot


def now_ms() -> float:
    """Monotonic clock in milliseconds."""
    return time.perf_counter() * 1000


class RequestTimer:
    """Records start/end of a request and named phase durations.

    Methods return self so calls can be chained:

        timer = RequestTimer().start()
        timer.set_phase("dns", 12.5).end()
    """

    def __init__(self) -> None:
        self._start: Optional[float] = None
        self._end: Optional[float] = None
        self._total: Optional[float] = None
        self._phases: dict[str, Optional[float]] = {key: None for key in PHASE_KEYS}

    @property
    def started(self) -> bool:
        return self._start is not None

    @property
    def ended(self) -> bool:
        return self._end is not None

    def start(self) -> "RequestTimer":
        self._start = now_ms()
        self._end = None
        self._total = None
        return self

    def end(self) -> "RequestTimer":
        """Stop the clock and compute the total.

        Raises:
            InvalidStateError: If start() was never called
        """
        if self._start is None:
            raise InvalidStateError("RequestTimer.end() called before start()")
        self._end = max(now_ms(), self._start)
        self._total = self._end - self._start
        return self

    def set_phase(self, name: str, value: Optional[float]) -> "RequestTimer":
        """Store a phase duration in ms (None clears it)."""
        if name not in self._phases:
            raise ValueError(f"Unknown phase '{name}' (expected one of {', '.join(PHASE_KEYS)})")
        self._phases[name] = None if value is None else max(float(value), 0.0)
        return self

    def snapshot(self) -> TimingSnapshot:
        return TimingSnapshot(
            start=self._start,
            end=self._end,
            total=self._total,
            phases=MappingProxyType(dict(self._phases)),
        )
