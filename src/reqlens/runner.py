"""Send a request and print its breakdown."""

from __future__ import annotations

from typing import Optional

from rich.console import Console

from .analysis import analyze
from .config import ReqlensConfig
from .errors import TransportError
from .render import BreakdownRenderer, failure_sections, print_sections
from .request import RequestConfig
from .timing import ExecutionStage, ResponseRecord, TimedRequestExecutor
from .timing.executor import StageCallback

STAGE_MESSAGES = {
    ExecutionStage.IDLE: "Measuring connection phases...",
    ExecutionStage.RESOLVING: "Resolving DNS...",
    ExecutionStage.CONNECTING: "Establishing TCP connection...",
    ExecutionStage.HANDSHAKING: "Performing TLS handshake...",
    ExecutionStage.REQUESTING: "Sending HTTP request...",
    ExecutionStage.DONE: "Request completed",
    ExecutionStage.FAILED: "Request failed",
}


def build_executor(
    settings: ReqlensConfig,
    on_stage: Optional[StageCallback] = None,
) -> TimedRequestExecutor:
    return TimedRequestExecutor(
        timeout=settings.request_timeout,
        probe_timeout=settings.probe_timeout,
        verify_ssl=settings.verify_ssl,
        proxy=settings.proxy,
        follow_redirects=settings.follow_redirects,
        on_stage=on_stage,
    )


def run_request(
    request: RequestConfig,
    settings: ReqlensConfig,
    console: Console,
) -> Optional[ResponseRecord]:
    """Execute the request behind a status spinner and render the result.

    Returns:
        The response, or None if the request failed in transit (the
        partial breakdown has been printed)
    """
    with console.status(STAGE_MESSAGES[ExecutionStage.IDLE]) as status:
        executor = build_executor(
            settings,
            on_stage=lambda stage: status.update(STAGE_MESSAGES[stage]),
        )
        try:
            record = executor.execute(request)
        except TransportError as e:
            console.print("[red]✖ Request failed![/red]")
            print_sections(console, failure_sections(e, request, settings.waterfall_width))
            return None

    console.print("[green]✔ Request completed with detailed timing![/green]")
    renderer = BreakdownRenderer(
        record,
        request,
        analysis=analyze(record) if settings.show_analysis else None,
        body_preview_length=settings.body_preview_length,
        analysis_preview_length=settings.analysis_preview_length,
        waterfall_width=settings.waterfall_width,
    )
    renderer.render(console)
    return record
