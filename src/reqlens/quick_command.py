"""Reusable `reqlens quick` command strings."""

from __future__ import annotations

import json
import shlex

import click

from .errors import InvalidRequestError
from .request import (
    RequestConfig,
    build_request_config,
    parse_body,
    parse_headers_json,
    parse_query_params,
)

PROGRAM = "reqlens"


def generate_quick_command(config: RequestConfig) -> str:
    """Encode a request as a shell command that reproduces it.

    Query params are baked into the URL. The original pre-param URL
    is not part of the command.
    """
    parts = [PROGRAM, "quick", "-u", shlex.quote(config.full_url)]

    if config.method.upper() != "GET":
        parts += ["-m", config.method.upper()]

    if config.headers:
        parts += ["-H", shlex.quote(json.dumps(config.headers, ensure_ascii=False))]

    if config.has_body:
        data = config.data if isinstance(config.data, str) else json.dumps(config.data, ensure_ascii=False)
        parts += ["-d", shlex.quote(data)]

    return " ".join(parts)


def parse_quick_command(command: str) -> RequestConfig:
    """Parse a `reqlens quick ...` string back into a RequestConfig.

    Raises:
        InvalidRequestError: If the string is not a valid quick command
    """
    from .commands.quick import quick

    try:
        args = shlex.split(command)
    except ValueError as e:
        raise InvalidRequestError(f"Cannot parse command: {e}") from e

    if args[:2] != [PROGRAM, "quick"]:
        raise InvalidRequestError(f"Not a '{PROGRAM} quick' command: {command}")

    try:
        ctx = quick.make_context("quick", args[2:])
    except click.ClickException as e:
        raise InvalidRequestError(e.format_message()) from e

    params = ctx.params
    if not params.get("url"):
        raise InvalidRequestError("URL is required")

    return build_request_config(
        url=params["url"],
        method=params["method"],
        headers=parse_headers_json(params.get("headers")),
        params=parse_query_params(params.get("query")),
        data=parse_body(params.get("data")),
    )
