"""URL utility functions."""

from urllib.parse import urlencode, urlparse, urlunparse


def extract_hostname(url: str) -> str:
    """Extract hostname from URL.

    Args:
        url: Full URL

    Returns:
        Hostname or empty string if extraction fails
    """
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""


def append_query_params(url: str, params: dict[str, str]) -> str:
    """Append query parameters to a URL, keeping any existing query.

    Examples:
        https://a.com/x + {"q": "1"} -> https://a.com/x?q=1
        https://a.com/x?a=1 + {"b": "2"} -> https://a.com/x?a=1&b=2

    Args:
        url: Base URL
        params: Parameters to append, in insertion order

    Returns:
        URL with the parameters added to its query string
    """
    if not params:
        return url

    parsed = urlparse(url)
    extra = urlencode(list(params.items()))
    query = f"{parsed.query}&{extra}" if parsed.query else extra
    return urlunparse(parsed._replace(query=query))
