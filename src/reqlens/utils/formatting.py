"""Text formatting utility functions."""

from __future__ import annotations

from typing import Optional

BYTE_UNITS = ["Bytes", "KB", "MB", "GB"]


def truncate_text(text: str, max_length: int, marker: str = "...") -> str:
    """Cut text at max_length and append a marker.

    Args:
        text: Text to truncate
        max_length: Number of characters kept from the original text
        marker: Appended only when the text was cut

    Returns:
        Original text if short enough, otherwise the cut text plus marker
    """
    if len(text) <= max_length:
        return text
    return text[:max_length] + marker


def format_bytes(size: int) -> str:
    """Format a byte count for humans (1536 -> '1.5 KB')."""
    if size <= 0:
        return "0 Bytes"
    value = float(size)
    index = 0
    while value >= 1024 and index < len(BYTE_UNITS) - 1:
        value /= 1024
        index += 1
    text = f"{value:.2f}".rstrip("0").rstrip(".")
    return f"{text} {BYTE_UNITS[index]}"


def format_ms(value: Optional[float], digits: int = 2) -> str:
    """Format a millisecond value, or 'N/A' when not measured."""
    if value is None:
        return "N/A"
    return f"{value:.{digits}f}"
