"""Data models for response analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SizeInfo:
    """Response body size."""

    bytes: int
    formatted: str
    estimated: bool = False  # True when derived from the parsed body


@dataclass(frozen=True)
class PerformanceInfo:
    """Rating derived from total request time."""

    rating: str  # "excellent", "good", "moderate", "slow"
    recommendations: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class SecurityInfo:
    """Security headers partitioned by presence."""

    present: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class CachingInfo:
    """Caching headers as received ("Not set" when absent)."""

    cache_control: str = "Not set"
    etag: str = "Not set"
    last_modified: str = "Not set"
    expires: str = "Not set"
    cacheable: bool = False


@dataclass(frozen=True)
class AnalysisResult:
    """Everything ResponseAnalyzer derives from one response."""

    data_type: str
    size: SizeInfo
    structure: dict[str, Any]
    performance: PerformanceInfo
    security: SecurityInfo
    caching: CachingInfo
    status_category: str
