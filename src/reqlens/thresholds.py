"""Static lookup tables for ratings, thresholds and header allow-lists."""

from __future__ import annotations

# Phase keys, in pipeline order
PHASE_KEYS: tuple[str, ...] = (
    "dns",
    "tcp",
    "tls",
    "request",
    "waiting",
    "first_byte",
    "download",
)

# Performance table rows: (key, label, icon)
PHASE_LABELS: list[tuple[str, str, str]] = [
    ("dns", "DNS Resolution", "🔍"),
    ("tcp", "TCP Connect", "🔗"),
    ("tls", "TLS Handshake", "🔐"),
    ("request", "Request Sent", "📤"),
    ("waiting", "Waiting (TTFB)", "⏳"),
    ("first_byte", "First Byte", "🏁"),
    ("download", "Download", "📥"),
]

# Slow-phase thresholds in ms: key -> (limit, status label, style)
PHASE_THRESHOLDS: dict[str, tuple[float, str, str]] = {
    "dns": (100, "Slow DNS", "yellow"),
    "tcp": (200, "Slow Connection", "yellow"),
    "tls": (300, "Slow TLS", "yellow"),
    "waiting": (1000, "Slow Server", "red"),
    "download": (500, "Large Response", "yellow"),
}

# Hints printed when a phase crosses its threshold
PHASE_INSIGHTS: dict[str, str] = {
    "dns": "🔍 DNS resolution is slow - consider using a faster DNS provider",
    "tcp": "🔗 TCP connection is slow - server might be geographically distant",
    "tls": "🔐 TLS handshake is slow - server might need SSL optimization",
    "waiting": "⏳ Server response time is slow - consider backend optimization",
    "download": "📥 Download time is high - consider response compression or CDN",
}

# Overall label for the totals row: (upper bound ms, label, style)
OVERALL_RATINGS: list[tuple[float, str, str]] = [
    (200, "🚀 Excellent", "green"),
    (500, "✅ Good", "blue"),
    (1000, "❗ Moderate", "yellow"),
    (2000, "🐌 Slow", "red"),
]
OVERALL_RATING_FALLBACK: tuple[str, str] = ("❌ Very Slow", "red")

# Analyzer rating boundaries in ms
EXCELLENT_BELOW = 500
MODERATE_ABOVE = 2000
SLOW_ABOVE = 5000

# Waterfall rows: (label, phase key, style)
WATERFALL_PHASES: list[tuple[str, str, str]] = [
    ("DNS", "dns", "blue"),
    ("TCP", "tcp", "green"),
    ("TLS", "tls", "yellow"),
    ("Wait", "waiting", "red"),
    ("Download", "download", "magenta"),
]
WATERFALL_WIDTH = 60

# Content type substrings, first match wins
CONTENT_TYPE_RULES: list[tuple[tuple[str, ...], str]] = [
    (("application/json",), "JSON"),
    (("text/html",), "HTML"),
    (("text/xml", "application/xml"), "XML"),
    (("text/plain",), "Plain Text"),
    (("image/",), "Image"),
    (("application/pdf",), "PDF"),
]
UNKNOWN_CONTENT_TYPE = "Unknown"

# Security header -> display name
SECURITY_HEADERS: dict[str, str] = {
    "strict-transport-security": "HSTS",
    "x-frame-options": "Frame Options",
    "x-content-type-options": "Content Type Options",
    "x-xss-protection": "XSS Protection",
    "content-security-policy": "CSP",
}

# Response headers shown in the headers section
IMPORTANT_HEADERS: tuple[str, ...] = (
    "content-type",
    "content-length",
    "cache-control",
    "set-cookie",
    "location",
)
MAX_SHOWN_HEADERS = 10

# Status category -> style
STATUS_STYLES: dict[str, str] = {
    "success": "green",
    "redirect": "blue",
    "client_error": "yellow",
    "server_error": "red",
    "informational": "blue",
}

STATUS_ICONS: dict[str, str] = {
    "success": "✅",
    "client_error": "⚠️",
    "server_error": "❌",
}

BODY_PREVIEW_LENGTH = 500
ANALYSIS_PREVIEW_LENGTH = 1000
TRUNCATION_MARKER = "\n... (truncated)"
