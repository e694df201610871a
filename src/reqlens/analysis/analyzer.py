"""Response analysis: content type, size, structure, rating, headers."""

from __future__ import annotations

import json
from typing import Any, Optional

from ..request import get_header
from ..thresholds import (
    CONTENT_TYPE_RULES,
    EXCELLENT_BELOW,
    MODERATE_ABOVE,
    SECURITY_HEADERS,
    SLOW_ABOVE,
    UNKNOWN_CONTENT_TYPE,
)
from ..timing.models import ResponseRecord
from ..utils import format_bytes
from .models import (
    AnalysisResult,
    CachingInfo,
    PerformanceInfo,
    SecurityInfo,
    SizeInfo,
)

MAX_TOP_LEVEL_KEYS = 10


def classify_content_type(content_type: str) -> str:
    """Map a content-type header to a data type label."""
    content_type = (content_type or "").lower()
    for needles, label in CONTENT_TYPE_RULES:
        if any(needle in content_type for needle in needles):
            return label
    return UNKNOWN_CONTENT_TYPE


def categorize_status(status: int) -> str:
    """Bucket an HTTP status code by class."""
    if 200 <= status < 300:
        return "success"
    elif 300 <= status < 400:
        return "redirect"
    elif 400 <= status < 500:
        return "client_error"
    elif status >= 500:
        return "server_error"
    else:
        return "informational"


def rate_performance(total: Optional[float]) -> str:
    """Rate total request time in ms."""
    if total is None:
        return "good"
    if total > SLOW_ABOVE:
        return "slow"
    elif total > MODERATE_ABOVE:
        return "moderate"
    elif total < EXCELLENT_BELOW:
        return "excellent"
    else:
        return "good"


def type_name(value: Any) -> str:
    """JSON-style type name of a parsed body value."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, (list, tuple)):
        return "array"
    if isinstance(value, dict):
        return "object"
    return type(value).__name__


def serialize(data: Any) -> str:
    """Text form of a body: strings as-is, everything else as JSON."""
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(data)


def measure_size(data: Any, headers: dict[str, str]) -> SizeInfo:
    """Body size from content-length, else estimated from the body.

    The estimate is the UTF-8 length of the serialized parsed body, so
    it is approximate for compressed or binary responses.
    """
    content_length = get_header(headers, "content-length")
    if content_length is not None:
        try:
            size = int(content_length)
        except ValueError:
            pass
        else:
            return SizeInfo(bytes=size, formatted=format_bytes(size))

    size = 0 if data is None else len(serialize(data).encode("utf-8"))
    return SizeInfo(bytes=size, formatted=format_bytes(size), estimated=True)


def describe_structure(data: Any) -> dict[str, Any]:
    """Summarize the shape of a parsed body."""
    if data is None or data == "":
        return {"type": "empty"}

    if isinstance(data, list):
        return {
            "type": "array",
            "length": len(data),
            "item_type": type_name(data[0]) if data else "unknown",
        }

    if isinstance(data, dict):
        keys = [str(k) for k in data]
        return {
            "type": "object",
            "keys": len(keys),
            "top_level_keys": keys[:MAX_TOP_LEVEL_KEYS],
        }

    return {
        "type": type_name(data),
        "length": len(serialize(data)),
    }


def recommend(total: Optional[float], status: int, headers: dict[str, str]) -> list[str]:
    recommendations: list[str] = []
    if total is not None and total > MODERATE_ABOVE:
        recommendations.append("Consider optimizing server response time")
    if status >= 400:
        recommendations.append("Check API endpoint and request parameters")
    if get_header(headers, "cache-control") is None:
        recommendations.append("Consider adding cache headers for better performance")
    return recommendations


def check_security_headers(headers: dict[str, str]) -> SecurityInfo:
    present: list[str] = []
    missing: list[str] = []
    for header, name in SECURITY_HEADERS.items():
        if get_header(headers, header):
            present.append(name)
        else:
            missing.append(name)
    return SecurityInfo(present=present, missing=missing)


def check_caching(headers: dict[str, str]) -> CachingInfo:
    cache_control = get_header(headers, "cache-control")
    return CachingInfo(
        cache_control=cache_control or "Not set",
        etag=get_header(headers, "etag") or "Not set",
        last_modified=get_header(headers, "last-modified") or "Not set",
        expires=get_header(headers, "expires") or "Not set",
        cacheable=bool(cache_control) and "no-cache" not in cache_control.lower(),
    )


def analyze(record: ResponseRecord) -> AnalysisResult:
    """Analyze a completed response. Pure: no I/O, input untouched."""
    headers = record.headers
    total = record.timing.total

    return AnalysisResult(
        data_type=classify_content_type(get_header(headers, "content-type", "")),
        size=measure_size(record.data, headers),
        structure=describe_structure(record.data),
        performance=PerformanceInfo(
            rating=rate_performance(total),
            recommendations=recommend(total, record.status, headers),
        ),
        security=check_security_headers(headers),
        caching=check_caching(headers),
        status_category=categorize_status(record.status),
    )


class ResponseAnalyzer:
    """Caches the analysis of one response."""

    def __init__(self, record: ResponseRecord) -> None:
        self.record = record
        self.analysis = analyze(record)

    @staticmethod
    def analyze(record: ResponseRecord) -> AnalysisResult:
        return analyze(record)
