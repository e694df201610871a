"""Terminal rendering of timings and responses."""

from .breakdown import (
    NO_BODY,
    BreakdownRenderer,
    PhaseRow,
    Section,
    failure_sections,
    format_body_preview,
    important_headers,
    overall_rating,
    performance_insights,
    phase_rows,
    phase_status,
    print_sections,
    summary_lines,
)
from .waterfall import WaterfallBar, render_waterfall, waterfall_bars

__all__ = [
    "NO_BODY",
    "BreakdownRenderer",
    "PhaseRow",
    "Section",
    "failure_sections",
    "format_body_preview",
    "important_headers",
    "overall_rating",
    "performance_insights",
    "phase_rows",
    "phase_status",
    "print_sections",
    "summary_lines",
    "WaterfallBar",
    "render_waterfall",
    "waterfall_bars",
]
