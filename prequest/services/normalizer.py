"""
Input normalization for outgoing requests.

Turns a URL string or a request description into an EffectiveRequest:
resolves the target, overlays explicit target fields, and serializes
structured bodies as JSON.
"""

import json
from collections.abc import Mapping
from typing import Any, Callable

from ..exceptions import MissingURLError
from ..schemas.request import EffectiveRequest, RequestOptions, Target


# Media type set on requests carrying a structured body
JSON_CONTENT_TYPE = "application/json"

UrlParser = Callable[[str], Target]


def is_structured(value: Any) -> bool:
    """Return True for values serialized as a JSON request body."""
    return isinstance(value, (Mapping, list, tuple))


def prepare_body(body: Any, headers: dict[str, str] | None) -> tuple[str | None, dict[str, str]]:
    """
    Resolve the request payload and its headers.

    Args:
        body: Body from the request description
        headers: Headers from the request description, or None

    Returns:
        Tuple of (body text or None, headers)

    Example:
        >>> prepare_body({"a": 1}, None)
        ('{"a":1}', {'Content-Type': 'application/json', 'Accept': 'application/json'})
        >>> prepare_body(42, {"X-Id": "7"})
        (None, {'X-Id': '7'})
    """
    headers = dict(headers or {})

    if isinstance(body, str):
        return body, headers

    if not is_structured(body):
        return None, headers

    # Replace caller-supplied variants of the JSON headers
    for name in list(headers):
        if name.lower() in ("content-type", "accept"):
            del headers[name]
    headers["Content-Type"] = JSON_CONTENT_TYPE
    headers["Accept"] = JSON_CONTENT_TYPE

    return json.dumps(body, separators=(",", ":"), allow_nan=False), headers


def resolve_target(options: RequestOptions, url_parser: UrlParser) -> Target:
    """
    Resolve the target of a request description.

    The URL is parsed (or used directly when already a Target) and target
    fields set on the description are laid over it.

    Raises:
        MissingURLError: If there is no URL and no host to send to
    """
    overrides = options.target_overrides()

    if isinstance(options.url, str):
        target = url_parser(options.url)
    elif isinstance(options.url, Target):
        target = options.url
    elif "host" in overrides:
        target = Target()
    else:
        raise MissingURLError()

    if overrides:
        target = target.model_copy(update=overrides)
    return target


def normalize(request: Any, url_parser: UrlParser) -> EffectiveRequest:
    """
    Normalize caller input into an EffectiveRequest.

    Args:
        request: URL string, RequestOptions, or a mapping of its fields
        url_parser: Callable turning a URL string into a Target

    Returns:
        The request to transmit

    Raises:
        MissingURLError: If the input is neither a string nor a description
        pydantic.ValidationError: If a description has invalid fields
        httpx.InvalidURL: If the URL cannot be parsed
        ValueError: If a structured body holds NaN or infinite floats
    """
    if isinstance(request, str):
        return EffectiveRequest(target=url_parser(request))

    if isinstance(request, Mapping):
        options = RequestOptions.model_validate(dict(request))
    elif isinstance(request, RequestOptions):
        options = request
    else:
        raise MissingURLError()

    body, headers = prepare_body(options.body, options.headers)

    return EffectiveRequest(
        target=resolve_target(options, url_parser),
        method=options.method.upper(),
        body=body,
        headers=headers,
    )
