"""Response analysis."""

from .models import (
    AnalysisResult,
    CachingInfo,
    PerformanceInfo,
    SecurityInfo,
    SizeInfo,
)
from .analyzer import (
    ResponseAnalyzer,
    analyze,
    categorize_status,
    classify_content_type,
    rate_performance,
)

__all__ = [
    "AnalysisResult",
    "CachingInfo",
    "PerformanceInfo",
    "SecurityInfo",
    "SizeInfo",
    "ResponseAnalyzer",
    "analyze",
    "categorize_status",
    "classify_content_type",
    "rate_performance",
]
