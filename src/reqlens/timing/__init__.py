"""Request timing pipeline: probes, timer and executor."""

from .models import ExecutionStage, ResponseRecord, TimingSnapshot
from .timer import RequestTimer
from .probe import PhaseProbe
from .executor import TimedRequestExecutor, estimate_transfer_phases

__all__ = [
    "ExecutionStage",
    "ResponseRecord",
    "TimingSnapshot",
    "RequestTimer",
    "PhaseProbe",
    "TimedRequestExecutor",
    "estimate_transfer_phases",
]
