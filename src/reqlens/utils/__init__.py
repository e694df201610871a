"""Utility functions for reqlens."""

from .url import append_query_params, extract_hostname
from .formatting import format_bytes, format_ms, truncate_text

__all__ = [
    "append_query_params",
    "extract_hostname",
    "format_bytes",
    "format_ms",
    "truncate_text",
]
