"""
URL parsing for request targets.

Converts between URL strings and Target models using httpx's URL type.
"""

import httpx

from ..schemas.request import Target


def parse_url(url: str) -> Target:
    """
    Parse a URL string into a Target.

    The path and any credentials are kept in their percent-encoded form so
    that rebuilding the URL sends exactly what the caller wrote.

    Args:
        url: Absolute URL, e.g. ``http://example.com:8080/items?page=2``

    Returns:
        Target with scheme, userinfo, host, port, path and query

    Raises:
        httpx.InvalidURL: If the string cannot be parsed as a URL
    """
    parsed = httpx.URL(url)
    raw_path, _, _ = parsed.raw_path.partition(b"?")

    return Target(
        scheme=parsed.scheme or "http",
        userinfo=parsed.userinfo.decode("ascii"),
        host=parsed.host,
        port=parsed.port,
        path=raw_path.decode("ascii") or "/",
        query=parsed.query.decode("ascii"),
    )


def build_url(target: Target) -> httpx.URL:
    """
    Build the httpx URL a Target points at.

    Credentials stay in the URL; httpx sends them as Basic auth.
    """
    return httpx.URL(
        scheme=target.scheme,
        userinfo=target.userinfo.encode("ascii") or None,
        host=target.host,
        port=target.port,
        path=target.path or "/",
        query=target.query.encode("ascii") or None,
    )
