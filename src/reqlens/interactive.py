"""Interactive CLI prompts for reqlens."""

from __future__ import annotations

from typing import Optional

import questionary
from questionary import Style
from rich.console import Console

from .config import ReqlensConfig
from .errors import InvalidRequestError, InvalidUrlError
from .quick_command import generate_quick_command
from .request import (
    BODY_METHODS,
    HTTP_METHODS,
    RequestConfig,
    build_request_config,
    parse_body,
    parse_headers_json,
    parse_query_params,
    parse_target,
    validate_headers,
)


# Custom style for prompts
STYLE = Style([
    ("qmark", "fg:cyan bold"),
    ("question", "bold"),
    ("answer", "fg:cyan"),
    ("pointer", "fg:cyan bold"),
    ("highlighted", "fg:cyan bold"),
    ("selected", "fg:green"),
    ("separator", "fg:gray"),
    ("instruction", "fg:gray italic"),
])

TOKEN_PLACEHOLDER = "<token>"
KEY_PLACEHOLDER = "<key>"

COMMON_HEADERS = [
    {"name": "Content-Type: application/json", "value": ("Content-Type", "application/json")},
    {"name": "Content-Type: application/x-www-form-urlencoded",
     "value": ("Content-Type", "application/x-www-form-urlencoded")},
    {"name": "Accept: application/json", "value": ("Accept", "application/json")},
    {"name": "Accept: text/html", "value": ("Accept", "text/html")},
    {"name": "User-Agent: reqlens/1.0", "value": ("User-Agent", "reqlens/1.0")},
    {"name": "Authorization: Bearer (will prompt for token)",
     "value": ("Authorization", f"Bearer {TOKEN_PLACEHOLDER}")},
    {"name": "X-API-Key (will prompt for key)", "value": ("X-API-Key", KEY_PLACEHOLDER)},
    {"name": "Accept-Encoding: gzip, deflate", "value": ("Accept-Encoding", "gzip, deflate")},
    {"name": "Cache-Control: no-cache", "value": ("Cache-Control", "no-cache")},
]


def validate_url(text: str) -> bool | str:
    """questionary validator for the URL prompt."""
    if not text.strip():
        return "URL is required"
    try:
        parse_target(text)
    except InvalidUrlError:
        return "Please enter a valid URL (include http:// or https://)"
    return True


def validate_headers_json(text: str) -> bool | str:
    """questionary validator for the custom headers prompt."""
    try:
        headers = parse_headers_json(text)
    except InvalidRequestError:
        return "Please enter a JSON object for headers, e.g. {\"X-Custom\": \"value\"}"
    try:
        validate_headers(headers)
    except InvalidRequestError as e:
        return str(e)
    return True


def prompt_url() -> str | None:
    return questionary.text(
        "Enter the URL:",
        validate=validate_url,
        style=STYLE,
    ).ask()


def prompt_method() -> str | None:
    return questionary.select(
        "Select HTTP method:",
        choices=HTTP_METHODS,
        default="GET",
        style=STYLE,
    ).ask()


def prompt_query_params() -> str | None:
    return questionary.text(
        "Enter query parameters (format: key1=value1&key2=value2):",
        default="",
        style=STYLE,
    ).ask()


def prompt_common_headers() -> list[tuple[str, str]] | None:
    return questionary.checkbox(
        "Select common headers:",
        choices=COMMON_HEADERS,
        style=STYLE,
        instruction="(Space to toggle, Enter to confirm)",
    ).ask()


def resolve_placeholders(selected: list[tuple[str, str]]) -> dict[str, str] | None:
    """Ask for token/key values behind placeholder headers.

    Returns:
        Header dict, or None if cancelled
    """
    headers: dict[str, str] = {}
    for name, value in selected:
        if TOKEN_PLACEHOLDER in value or KEY_PLACEHOLDER in value:
            kind = "token" if TOKEN_PLACEHOLDER in value else "key"
            secret = questionary.text(
                f"Enter the {kind} value for {name}:",
                validate=lambda text, kind=kind: True if text.strip() else f"{kind} value is required",
                style=STYLE,
            ).ask()
            if secret is None:
                return None
            if kind == "token":
                headers[name] = value.replace(TOKEN_PLACEHOLDER, secret)
            else:
                headers[name] = secret
        else:
            headers[name] = value
    return headers


def prompt_custom_headers() -> str | None:
    return questionary.text(
        'Enter custom headers (JSON format, e.g., {"X-Custom": "value"}):',
        default="",
        validate=validate_headers_json,
        style=STYLE,
    ).ask()


def prompt_body(method: str) -> str | None:
    """Prompt for a request body; only asked for methods that carry one."""
    if method not in BODY_METHODS:
        return ""
    return questionary.text(
        "Enter request body (JSON/text):",
        multiline=True,
        style=STYLE,
        instruction="(Esc then Enter to finish)",
    ).ask()


def prompt_request_config(settings: Optional[ReqlensConfig] = None) -> RequestConfig | None:
    """Walk the user through building a request.

    Returns:
        RequestConfig, or None if any prompt was cancelled
    """
    settings = settings or ReqlensConfig()

    url = prompt_url()
    if url is None:
        return None

    method = prompt_method()
    if method is None:
        return None

    query = prompt_query_params()
    if query is None:
        return None

    selected = prompt_common_headers()
    if selected is None:
        return None
    headers = resolve_placeholders([tuple(item) for item in selected])
    if headers is None:
        return None

    custom = prompt_custom_headers()
    if custom is None:
        return None
    headers.update(parse_headers_json(custom))

    body = prompt_body(method)
    if body is None:
        return None

    return build_request_config(
        url=url,
        method=method,
        headers=headers,
        params=parse_query_params(query),
        data=parse_body(body.strip()),
        default_headers=settings.default_headers,
        json_content_type=True,
    )


def prompt_continue() -> bool:
    """Prompt user if they want to send another request."""
    return questionary.confirm(
        "Make another request?",
        default=True,
        style=STYLE,
    ).ask() or False


def run_interactive_mode(settings: Optional[ReqlensConfig] = None, console: Optional[Console] = None) -> None:
    """Run the interactive request loop."""
    from .runner import run_request

    settings = settings or ReqlensConfig()
    console = console or Console()

    while True:
        console.print()
        console.print("[bold blue]📋 Configure your HTTP request:[/bold blue]")
        console.print()

        try:
            request = prompt_request_config(settings)
        except InvalidRequestError as e:
            console.print(f"[red]❌ {e}[/red]")
            if not prompt_continue():
                break
            continue

        if request is None:
            console.print("\n[dim]Cancelled.[/dim]")
            break

        record = run_request(request, settings, console)
        if record is not None:
            console.print()
            console.print("[bold cyan]🔁 QUICK COMMAND[/bold cyan]")
            console.print(generate_quick_command(request), markup=False, highlight=False)

        console.print()
        if not prompt_continue():
            break

    console.print("\n[bold cyan]👋 Thanks for using reqlens! Goodbye![/bold cyan]")
