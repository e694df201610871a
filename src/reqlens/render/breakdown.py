"""Response breakdown sections for the terminal."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Optional

from rich.console import Console, RenderableType
from rich.table import Table
from rich.text import Text

from ..analysis import AnalysisResult, categorize_status
from ..errors import TransportError
from ..request import RequestConfig, get_header
from ..thresholds import (
    ANALYSIS_PREVIEW_LENGTH,
    BODY_PREVIEW_LENGTH,
    IMPORTANT_HEADERS,
    MAX_SHOWN_HEADERS,
    OVERALL_RATING_FALLBACK,
    OVERALL_RATINGS,
    PHASE_INSIGHTS,
    PHASE_LABELS,
    PHASE_THRESHOLDS,
    STATUS_ICONS,
    STATUS_STYLES,
    TRUNCATION_MARKER,
    WATERFALL_WIDTH,
)
from ..timing.models import ResponseRecord, TimingSnapshot
from ..utils import extract_hostname, format_ms, truncate_text
from .waterfall import render_waterfall

NO_BODY = "No response body"
RULE = "═" * 80


@dataclass(frozen=True)
class Section:
    """A titled block of the breakdown."""

    title: str
    renderable: RenderableType


@dataclass(frozen=True)
class PhaseRow:
    """One row of the performance table."""

    key: str
    label: str
    icon: str
    time: Optional[float]
    percentage: float
    status: str
    style: str


def phase_status(key: str, time: Optional[float]) -> tuple[str, str]:
    """Qualitative status and style for a phase duration."""
    if not time:
        return "➖ N/A", "dim"
    threshold = PHASE_THRESHOLDS.get(key)
    if threshold is not None:
        limit, label, style = threshold
        if time > limit:
            return f"❗ {label}", style
    return "✅ Good", "green"


def phase_rows(timing: TimingSnapshot) -> list[PhaseRow]:
    total = timing.total or 0
    rows = []
    for key, label, icon in PHASE_LABELS:
        time = timing.phase(key)
        percentage = (time or 0) / total * 100 if total > 0 else 0.0
        status, style = phase_status(key, time)
        rows.append(PhaseRow(key, label, icon, time, percentage, status, style))
    return rows


def overall_rating(total: Optional[float]) -> tuple[str, str]:
    """Label and style for the totals row."""
    total = total or 0
    for upper, label, style in OVERALL_RATINGS:
        if total < upper:
            return label, style
    return OVERALL_RATING_FALLBACK


def performance_insights(timing: TimingSnapshot) -> list[str]:
    """Plain-language hints about slow phases."""
    insights = []
    for key, message in PHASE_INSIGHTS.items():
        time = timing.phase(key) or 0
        if time > PHASE_THRESHOLDS[key][0]:
            insights.append(message)

    total = timing.total or 0
    connection = sum(timing.phase(k) or 0 for k in ("dns", "tcp", "tls"))
    if connection > total * 0.5:
        insights.append("🔄 Connection setup takes significant time - consider connection pooling")

    if total < 200:
        insights.append("🚀 Excellent performance - your API is very responsive!")
    elif total > 2000:
        insights.append("🎯 Focus on server-side optimizations for better user experience")

    if not insights:
        insights.append("✅ Performance looks good overall")
    return insights


def important_headers(headers: dict[str, str]) -> list[tuple[str, str]]:
    """Headers on the allow-list, case-insensitive, capped."""
    shown = []
    for name, value in headers.items():
        if name.lower() in IMPORTANT_HEADERS:
            shown.append((name, value))
            if len(shown) >= MAX_SHOWN_HEADERS:
                break
    return shown


def format_body_preview(
    data: Any,
    max_length: int = BODY_PREVIEW_LENGTH,
    data_type: Optional[str] = None,
) -> str:
    """Serialize a body for display and cut it at max_length.

    Structured bodies are pretty-printed. With data_type set, only JSON
    bodies are pretty-printed and anything else non-text is compact.
    """
    if data is None or data == "":
        return NO_BODY

    if isinstance(data, str):
        text = data
    elif data_type is None or data_type == "JSON":
        try:
            text = json.dumps(data, indent=2, ensure_ascii=False)
        except (TypeError, ValueError):
            text = str(data)
    else:
        try:
            text = json.dumps(data, ensure_ascii=False)
        except (TypeError, ValueError):
            text = str(data)

    return truncate_text(text, max_length, TRUNCATION_MARKER)


def summary_lines(
    config: RequestConfig,
    timing: TimingSnapshot,
    status: Optional[int] = None,
) -> list[str]:
    """One-line recap plus timing details."""
    category = categorize_status(status) if status is not None else ""
    icon = STATUS_ICONS.get(category, "📊")
    hostname = extract_hostname(config.url) or config.url
    status_text = str(status) if status is not None else "N/A"

    return [
        f"{icon} {config.method.upper()} request to {hostname}",
        f"   Status: {status_text} | Total Time: {format_ms(timing.total)}ms",
        "   "
        + " | ".join(
            f"{label}: {format_ms(timing.phase(key), 1)}ms"
            for label, key in (("DNS", "dns"), ("TCP", "tcp"), ("TLS", "tls"))
        ),
    ]


def _property_table() -> Table:
    table = Table(show_header=True)
    table.add_column("Property", style="yellow", width=20)
    table.add_column("Value", width=60)
    return table


def overview_table(config: RequestConfig) -> Table:
    table = _property_table()
    table.add_row("Method", config.method.upper())
    table.add_row("URL", config.display_url)
    table.add_row("Headers Count", str(len(config.headers)))
    table.add_row("Has Body", "Yes" if config.has_body else "No")
    return table


def performance_table(timing: TimingSnapshot) -> Table:
    table = Table(show_header=True)
    table.add_column("Phase", width=22)
    table.add_column("Time (ms)", justify="right", width=12)
    table.add_column("Percentage", justify="right", width=12)
    table.add_column("Status", width=24)

    for row in phase_rows(timing):
        table.add_row(
            f"{row.icon} {row.label}",
            Text(format_ms(row.time), style=row.style),
            f"{row.percentage:.1f}%",
            row.status,
        )

    label, style = overall_rating(timing.total)
    table.add_row(
        "[bold]🎯 Total Time[/bold]",
        Text(format_ms(timing.total), style="bold blue"),
        "[bold]100.0%[/bold]",
        Text(label, style=style),
    )
    table.caption = "Waiting, First Byte and Download are estimated from the request time"
    return table


class BreakdownRenderer:
    """Builds the ordered breakdown sections for one response."""

    def __init__(
        self,
        record: ResponseRecord,
        config: RequestConfig,
        analysis: Optional[AnalysisResult] = None,
        body_preview_length: int = BODY_PREVIEW_LENGTH,
        analysis_preview_length: int = ANALYSIS_PREVIEW_LENGTH,
        waterfall_width: int = WATERFALL_WIDTH,
    ) -> None:
        self.record = record
        self.config = config
        self.analysis = analysis
        self.body_preview_length = body_preview_length
        self.analysis_preview_length = analysis_preview_length
        self.waterfall_width = waterfall_width

    @property
    def timing(self) -> TimingSnapshot:
        return self.record.timing

    def status_table(self) -> Table:
        record = self.record
        style = STATUS_STYLES[categorize_status(record.status)]
        table = _property_table()
        table.add_row(
            "Status Code",
            Text(f"{record.status} {record.status_text}".strip(), style=style),
        )
        table.add_row("Content Length", get_header(record.headers, "content-length", "N/A"))
        table.add_row("Content Type", get_header(record.headers, "content-type", "N/A"))
        return table

    def headers_table(self) -> Table:
        table = Table(show_header=True)
        table.add_column("Header", style="yellow", width=30)
        table.add_column("Value", width=50)
        for name, value in important_headers(self.record.headers):
            table.add_row(name, value)
        return table

    def body_preview(self) -> Text:
        preview = format_body_preview(self.record.data, self.body_preview_length)
        return Text(preview, style="dim" if preview == NO_BODY else "")

    def analysis_table(self) -> Table:
        result = self.analysis
        structure = result.structure
        shape = ", ".join(
            f"{k}={', '.join(v) if isinstance(v, list) else v}"
            for k, v in structure.items()
        )
        size = result.size.formatted + (" (estimated)" if result.size.estimated else "")

        table = _property_table()
        table.add_row("Data Type", result.data_type)
        table.add_row("Size", size)
        table.add_row("Structure", shape)
        table.add_row("Category", result.status_category)
        table.add_row("Rating", result.performance.rating)
        table.add_row(
            "Recommendations",
            "\n".join(result.performance.recommendations) or "None",
        )
        table.add_row("Security (present)", ", ".join(result.security.present) or "None")
        table.add_row("Security (missing)", ", ".join(result.security.missing) or "None")
        table.add_row("Cache-Control", result.caching.cache_control)
        table.add_row("ETag", result.caching.etag)
        table.add_row("Last-Modified", result.caching.last_modified)
        table.add_row("Expires", result.caching.expires)
        table.add_row("Cacheable", "Yes" if result.caching.cacheable else "No")
        return table

    def sections(self) -> list[Section]:
        """All sections in display order."""
        timing = self.timing
        sections = [
            Section("📤 REQUEST OVERVIEW", overview_table(self.config)),
            Section("⚡ DETAILED PERFORMANCE BREAKDOWN", performance_table(timing)),
            Section("📊 TIMING WATERFALL", render_waterfall(timing, self.waterfall_width)),
            Section("💡 PERFORMANCE INSIGHTS", "\n".join(f"   {i}" for i in performance_insights(timing))),
            Section("📊 RESPONSE STATUS", self.status_table()),
            Section("📋 RESPONSE HEADERS", self.headers_table()),
            Section("📄 RESPONSE BODY PREVIEW", self.body_preview()),
        ]
        if self.analysis is not None:
            sections.append(Section("🔬 RESPONSE ANALYSIS", self.analysis_table()))
            sections.append(Section(
                "📄 FULL BODY PREVIEW",
                Text(format_body_preview(
                    self.record.data,
                    self.analysis_preview_length,
                    self.analysis.data_type,
                )),
            ))
        sections.append(Section(
            "📊 SUMMARY",
            Text("\n".join(summary_lines(self.config, timing, self.record.status))),
        ))
        return sections

    def render(self, console: Console) -> None:
        console.print()
        console.print("[bold blue]🔍 RESPONSE BREAKDOWN[/bold blue]")
        console.print(f"[dim]{RULE}[/dim]")
        print_sections(console, self.sections())


def failure_sections(
    error: TransportError,
    config: RequestConfig,
    waterfall_width: int = WATERFALL_WIDTH,
) -> list[Section]:
    """Best-effort sections for a request that failed in transit."""
    lines = Text()
    lines.append(str(error), style="red")
    if error.status is not None:
        lines.append(f"\nStatus: {error.status}", style="yellow")
    if error.body is not None:
        lines.append(f"\nResponse: {format_body_preview(error.body)}", style="yellow")

    sections = [Section("❌ Request Error", lines), Section("📤 REQUEST OVERVIEW", overview_table(config))]
    if error.timing is not None:
        sections.append(Section("⚡ DETAILED PERFORMANCE BREAKDOWN", performance_table(error.timing)))
        sections.append(Section("📊 TIMING WATERFALL", render_waterfall(error.timing, waterfall_width)))
        sections.append(Section(
            "📊 SUMMARY",
            Text("\n".join(summary_lines(config, error.timing, error.status))),
        ))
    return sections


def print_sections(console: Console, sections: list[Section]) -> None:
    for section in sections:
        console.print()
        console.print(f"[bold cyan]{section.title}[/bold cyan]")
        console.print(section.renderable)
