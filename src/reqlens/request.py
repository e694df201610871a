"""Request configuration model and builders."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import unquote, urlparse

import httpx

from .errors import InvalidRequestError, InvalidUrlError
from .utils import append_query_params

HTTP_METHODS = ["GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS"]
BODY_METHODS = ("POST", "PUT", "PATCH")
DEFAULT_PORTS = {"http": 80, "https": 443}


@dataclass(frozen=True)
class Target:
    """Connection endpoint parsed from a request URL."""

    scheme: str
    hostname: str
    port: int

    @property
    def secure(self) -> bool:
        return self.scheme == "https"


@dataclass(frozen=True)
class RequestConfig:
    """A single HTTP request to send and time."""

    url: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    data: Any = None
    original_url: Optional[str] = None

    @property
    def full_url(self) -> str:
        """URL with params appended to its query string."""
        return append_query_params(self.url, self.params)

    @property
    def display_url(self) -> str:
        return self.original_url or self.url

    @property
    def has_body(self) -> bool:
        return self.data is not None and self.data != ""


def parse_target(url: str) -> Target:
    """Parse scheme, hostname and port from a URL.

    Raises:
        InvalidUrlError: If the URL is not an absolute http(s) URL
    """
    try:
        parsed = urlparse(url.strip())
        port = parsed.port
    except ValueError as e:
        raise InvalidUrlError(url, str(e)) from e

    scheme = parsed.scheme.lower()
    if scheme not in DEFAULT_PORTS:
        raise InvalidUrlError(url, "scheme must be http or https")
    if not parsed.hostname:
        raise InvalidUrlError(url, "missing host")

    try:
        httpx.URL(url.strip())
    except httpx.InvalidURL as e:
        raise InvalidUrlError(url, str(e)) from e

    return Target(
        scheme=scheme,
        hostname=parsed.hostname,
        port=port or DEFAULT_PORTS[scheme],
    )


def normalize_method(method: str) -> str:
    """Upper-case and validate an HTTP method name."""
    upper = (method or "GET").strip().upper()
    if upper not in HTTP_METHODS:
        raise InvalidRequestError(
            f"Unsupported method '{method}' (expected one of {', '.join(HTTP_METHODS)})"
        )
    return upper


def find_header_key(headers: dict[str, str], name: str) -> Optional[str]:
    """Find the actual header key (case-insensitive match)."""
    for key in headers:
        if key.lower() == name.lower():
            return key
    return None


def get_header(headers: dict[str, str], name: str, default: Optional[str] = None) -> Optional[str]:
    """Case-insensitive header lookup."""
    key = find_header_key(headers, name)
    return headers[key] if key is not None else default


def merge_headers(*sources: Optional[dict[str, str]]) -> dict[str, str]:
    """Merge header mappings, later sources win regardless of key case."""
    merged: dict[str, str] = {}
    for source in sources:
        for name, value in (source or {}).items():
            existing = find_header_key(merged, name)
            if existing is not None:
                del merged[existing]
            merged[name] = str(value)
    return merged


def parse_query_params(query_string: Optional[str]) -> dict[str, str]:
    """Parse 'key1=value1&key2=value2' into an ordered dict.

    Keys without a value map to an empty string; empty keys are skipped.
    """
    params: dict[str, str] = {}
    if not query_string or not query_string.strip():
        return params

    for pair in query_string.strip().split("&"):
        key, _, value = pair.partition("=")
        if key:
            params[unquote(key)] = unquote(value)
    return params


def parse_json(text: Optional[str]) -> Any:
    """Parse JSON text, returning None for empty or invalid input."""
    if not text or not text.strip():
        return None
    try:
        return json.loads(text)
    except (json.JSONDecodeError, ValueError):
        return None


def parse_headers_json(text: Optional[str]) -> dict[str, str]:
    """Parse a JSON object of headers.

    Raises:
        InvalidRequestError: If the text is not a JSON object
    """
    if not text or not text.strip():
        return {}
    try:
        data = json.loads(text)
    except (json.JSONDecodeError, ValueError) as e:
        raise InvalidRequestError(f"Headers must be valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise InvalidRequestError(
            f"Headers must be a JSON object, got {type(data).__name__}"
        )
    return {str(k): str(v) for k, v in data.items()}


def parse_body(text: Optional[str]) -> Any:
    """Parse a body blob: a JSON object or array, raw text otherwise.

    JSON scalars such as `false` or `1e3` stay text so they are sent
    byte for byte as typed.
    """
    if text is None or text == "":
        return None
    parsed = parse_json(text)
    return parsed if isinstance(parsed, (dict, list)) else text


def validate_headers(headers: dict[str, str]) -> None:
    """Check that header names and values can go on the wire as ASCII.

    Raises:
        InvalidRequestError: If a header contains non-ASCII characters
    """
    for name, value in headers.items():
        try:
            name.encode("ascii")
            value.encode("ascii")
        except UnicodeEncodeError as e:
            raise InvalidRequestError(
                f"Header '{name}' must be ASCII: {e.object!r} at position {e.start}"
            ) from e


def build_request_config(
    url: str,
    method: str = "GET",
    headers: Optional[dict[str, str]] = None,
    params: Optional[dict[str, str]] = None,
    data: Any = None,
    default_headers: Optional[dict[str, str]] = None,
    json_content_type: bool = False,
) -> RequestConfig:
    """Validate inputs and build a RequestConfig.

    Args:
        url: Absolute http(s) URL as entered by the user
        method: HTTP method (case-insensitive)
        headers: User headers, merged over default_headers
        params: Query parameters appended at request time
        data: Structured body, raw text body, or None
        default_headers: Headers from the config file
        json_content_type: Add Content-Type: application/json for
            structured bodies when no content type was given

    Raises:
        InvalidUrlError: If the URL cannot be parsed
        InvalidRequestError: If the method is not supported or a header
            is not ASCII
    """
    url = url.strip()
    parse_target(url)
    merged = merge_headers(default_headers, headers)
    validate_headers(merged)

    if (
        json_content_type
        and isinstance(data, (dict, list))
        and find_header_key(merged, "content-type") is None
    ):
        merged["Content-Type"] = "application/json"

    return RequestConfig(
        url=url,
        method=normalize_method(method),
        headers=merged,
        params=dict(params or {}),
        data=data,
        original_url=url,
    )
