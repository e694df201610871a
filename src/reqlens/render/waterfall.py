"""Text waterfall chart of request phases."""

from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from ..thresholds import WATERFALL_PHASES, WATERFALL_WIDTH
from ..timing.models import TimingSnapshot
from ..utils import format_ms

BAR_CHAR = "█"
LABEL_WIDTH = 8


@dataclass(frozen=True)
class WaterfallBar:
    """One row of the waterfall, in character units."""

    label: str
    key: str
    duration: float
    offset: int
    width: int
    style: str


def waterfall_bars(timing: TimingSnapshot, max_width: int = WATERFALL_WIDTH) -> list[WaterfallBar]:
    """Lay out one bar per phase along a shared timeline.

    Width is proportional to the phase's share of the total (at least 1),
    offset to the summed duration of the phases drawn before it. Phases
    with no duration are left out. Every later phase keeps one column in
    reserve, so the widths add up to at most max_width.
    """
    total = timing.total or 0
    if total <= 0 or max_width <= 0:
        return []

    active = [
        (label, key, style, timing.phase(key))
        for label, key, style in WATERFALL_PHASES
        if (timing.phase(key) or 0) > 0
    ][:max_width]

    bars: list[WaterfallBar] = []
    elapsed = 0.0
    used = 0
    for index, (label, key, style, duration) in enumerate(active):
        reserved = len(active) - index - 1
        width = max(1, round(duration / total * max_width))
        width = max(1, min(width, max_width - used - reserved))
        offset = min(round(elapsed / total * max_width), max_width - width)

        bars.append(WaterfallBar(label, key, duration, offset, width, style))
        elapsed += duration
        used += width

    return bars


def render_waterfall(timing: TimingSnapshot, max_width: int = WATERFALL_WIDTH) -> Text:
    """Render the waterfall as styled text lines."""
    text = Text()
    for bar in waterfall_bars(timing, max_width):
        text.append(f"{bar.label:<{LABEL_WIDTH}} ")
        text.append(" " * bar.offset)
        text.append(BAR_CHAR * bar.width, style=bar.style)
        text.append(f" {bar.duration:.1f}ms\n")

    text.append(f"\nTotal: {format_ms(timing.total)}ms", style="dim")
    return text
