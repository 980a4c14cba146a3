"""
Pydantic schemas package.

Exports the request and response models.
"""

from .request import (
    DEFAULT_METHOD,
    Target,
    RequestOptions,
    EffectiveRequest,
)

from .response import ResponseResult

__all__ = [
    # Request schemas
    "DEFAULT_METHOD",
    "Target",
    "RequestOptions",
    "EffectiveRequest",
    # Response schemas
    "ResponseResult",
]
