"""
Pydantic schema for buffered responses.
"""

from typing import Any

from pydantic import BaseModel


class ResponseResult(BaseModel):
    """
    Normalized response delivered to the caller.

    ``body`` is the decoded text, or the parsed value when the response
    declared ``application/json``.
    """
    status_code: int
    headers: dict[str, str]
    body: Any
