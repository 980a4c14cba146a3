"""
Pydantic schemas for outgoing requests.

Defines the request target, the structured request description accepted
from callers, and the fully resolved request handed to the transport.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


# Method used when the caller does not name one
DEFAULT_METHOD = "GET"

# Fields of a request description that override the parsed target
TARGET_FIELDS = ("scheme", "userinfo", "host", "port", "path", "query")


class Target(BaseModel):
    """Where a request is sent, as parsed from a URL."""
    scheme: str = "http"
    userinfo: str = ""
    host: str = ""
    port: int | None = None
    path: str = "/"
    query: str = ""


class RequestOptions(BaseModel):
    """
    Structured request description.

    ``url`` may be a URL string or an already parsed Target. Target fields
    given alongside it take precedence over the values parsed from ``url``.
    """
    url: str | Target | None = None
    method: str = DEFAULT_METHOD
    body: Any = None
    headers: dict[str, str] | None = None

    scheme: str | None = None
    userinfo: str | None = None
    host: str | None = None
    port: int | None = None
    path: str | None = None
    query: str | None = None

    model_config = ConfigDict(extra="ignore")

    def target_overrides(self) -> dict[str, Any]:
        """Return the target fields explicitly set on this description."""
        return {
            name: getattr(self, name)
            for name in TARGET_FIELDS
            if name in self.model_fields_set and getattr(self, name) is not None
        }


class EffectiveRequest(BaseModel):
    """Fully normalized request, ready for transmission."""
    target: Target
    method: str = DEFAULT_METHOD
    body: str | None = None
    headers: dict[str, str] = {}
