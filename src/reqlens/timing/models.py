"""Data models for request timing."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional

from ..thresholds import PHASE_KEYS

# Phases derived from the single measured request duration by fixed ratios
ESTIMATED_PHASES = frozenset({"waiting", "first_byte", "download"})


class ExecutionStage(str, Enum):
    """Stage of the probe-then-request pipeline."""

    IDLE = "idle"
    RESOLVING = "resolving"
    CONNECTING = "connecting"
    HANDSHAKING = "handshaking"
    REQUESTING = "requesting"
    DONE = "done"
    FAILED = "failed"


def _empty_phases() -> Mapping[str, Optional[float]]:
    return MappingProxyType({key: None for key in PHASE_KEYS})


@dataclass(frozen=True)
class TimingSnapshot:
    """Immutable copy of a RequestTimer's state (all values in ms).

    DNS, TCP and TLS come from standalone probe connections, and
    waiting, first_byte and download are fixed-ratio estimates of the
    request duration. None of these are measured on the real connection,
    so phases do not sum to total.
    """

    start: Optional[float] = None
    end: Optional[float] = None
    total: Optional[float] = None
    phases: Mapping[str, Optional[float]] = field(default_factory=_empty_phases)

    def phase(self, name: str) -> Optional[float]:
        """Get a phase duration, None if not measured."""
        return self.phases.get(name)

    @staticmethod
    def is_estimated(name: str) -> bool:
        return name in ESTIMATED_PHASES


@dataclass(frozen=True)
class ResponseRecord:
    """HTTP response with the timing of the request that produced it."""

    status: int
    status_text: str = ""
    headers: dict[str, str] = field(default_factory=dict)
    data: Any = None
    timing: TimingSnapshot = field(default_factory=TimingSnapshot)
    url: str = ""
    http_version: str = ""
