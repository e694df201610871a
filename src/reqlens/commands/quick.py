"""Quick command - send one request from flags."""

from __future__ import annotations

import sys
from typing import Optional

import click
from rich.console import Console

from ..config import load_config
from ..errors import InvalidRequestError
from ..quick_command import generate_quick_command
from ..request import (
    HTTP_METHODS,
    build_request_config,
    parse_body,
    parse_headers_json,
    parse_query_params,
)

console = Console()


@click.command("quick")
@click.option("--url", "-u", default=None, help="Request URL")
@click.option(
    "--method", "-m",
    type=click.Choice(HTTP_METHODS, case_sensitive=False),
    default="GET",
    help="HTTP method",
)
@click.option("--headers", "-H", default=None, help="Headers in JSON format")
@click.option("--data", "-d", default=None, help="Request body (JSON or text)")
@click.option("--query", "-q", default=None, help="Query parameters (key1=value1&key2=value2)")
@click.option("--config", "-c", "config_path", default=None, help="Config file path")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds")
@click.option("--no-verify-ssl", is_flag=True, help="Disable SSL certificate verification")
@click.option("--proxy", default=None, help="HTTP proxy for the request (e.g., http://127.0.0.1:8080)")
@click.option("--follow-redirects", is_flag=True, help="Follow 3xx redirects")
@click.option("--no-analysis", is_flag=True, help="Skip the response analysis section")
@click.option("--show-command", is_flag=True, help="Print a reusable quick command afterwards")
def quick(
    url: Optional[str],
    method: str,
    headers: Optional[str],
    data: Optional[str],
    query: Optional[str],
    config_path: Optional[str],
    timeout: Optional[float],
    no_verify_ssl: bool,
    proxy: Optional[str],
    follow_redirects: bool,
    no_analysis: bool,
    show_command: bool,
) -> None:
    """Send a single request and show its timing breakdown.

    \b
    Examples:
        reqlens quick -u https://httpbin.org/get
        reqlens quick -u https://httpbin.org/post -m POST -d '{"a": 1}'
        reqlens quick -u https://api.example.com -H '{"Authorization": "Bearer x"}'
    """
    from ..runner import run_request

    if not url:
        console.print("[red]❌ URL is required for quick mode[/red]")
        sys.exit(1)

    settings = load_config(config_path)
    if timeout is not None:
        settings.request_timeout = timeout
    if no_verify_ssl:
        settings.verify_ssl = False
    if proxy:
        settings.proxy = proxy
    if follow_redirects:
        settings.follow_redirects = True
    if no_analysis:
        settings.show_analysis = False

    try:
        request = build_request_config(
            url=url,
            method=method,
            headers=parse_headers_json(headers),
            params=parse_query_params(query),
            data=parse_body(data),
            default_headers=settings.default_headers,
        )
    except InvalidRequestError as e:
        console.print(f"[red]❌ {e}[/red]")
        sys.exit(1)

    record = run_request(request, settings, console)

    if show_command:
        console.print()
        console.print("[bold cyan]🔁 QUICK COMMAND[/bold cyan]")
        console.print(generate_quick_command(request), markup=False, highlight=False)

    if record is None:
        sys.exit(1)
