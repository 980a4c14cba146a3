"""
Exception classes for prequest.

Every failure of a request is delivered by rejecting its completion handle
with one of these errors. Transport errors raised by httpx are passed
through unchanged and have no class here.
"""

import json
from typing import Any


# Message used when the input names no request target
MISSING_URL_MESSAGE = "Missing URL"


class PRequestError(Exception):
    """Base exception for request failures."""

    def __init__(self, detail: str, error_code: str | None = None):
        self.detail = detail
        self.error_code = error_code
        super().__init__(detail)


class MissingURLError(PRequestError, ValueError):
    """Raised when the input is neither a URL nor a request description."""

    def __init__(self, detail: str = MISSING_URL_MESSAGE):
        super().__init__(detail=detail, error_code="MISSING_URL")


class ConnectionClosedError(PRequestError):
    """Raised when the connection closes before the response body completes."""

    def __init__(self, detail: str = "Connection closed."):
        super().__init__(detail=detail, error_code="CONNECTION_CLOSED")


class MissingContentTypeError(PRequestError):
    """Raised when a completed response carries no Content-Type header."""

    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(
            detail=f"Response with status {status_code} has no Content-Type header",
            error_code="MISSING_CONTENT_TYPE"
        )


class BodyParseError(json.JSONDecodeError):
    """
    Raised when a response declared as JSON does not parse.

    Keeps the position information of the original decode error and
    attaches the response (status, headers, raw text) for diagnosis.
    """

    error_code = "BODY_PARSE_ERROR"

    def __init__(self, error: json.JSONDecodeError, response: Any):
        super().__init__(error.msg, error.doc, error.pos)
        self.response = response
