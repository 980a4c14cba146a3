"""
prequest - buffered HTTP requests settled through a completion handle.

    >>> import prequest
    >>> response = await prequest.execute("http://example.com/")
    >>> response.status_code, response.body
"""

# Set default logging handler to avoid "No handler found" warnings.
import logging
from logging import NullHandler

from .exceptions import (
    BodyParseError,
    ConnectionClosedError,
    MissingContentTypeError,
    MissingURLError,
    PRequestError,
)
from .schemas import EffectiveRequest, RequestOptions, ResponseResult, Target
from .services import CompletionHandle, RequestExecutor, execute, parse_url

__version__ = "1.0.0"

__all__ = [
    "BodyParseError",
    "CompletionHandle",
    "ConnectionClosedError",
    "EffectiveRequest",
    "MissingContentTypeError",
    "MissingURLError",
    "PRequestError",
    "RequestExecutor",
    "RequestOptions",
    "ResponseResult",
    "Target",
    "add_stderr_logger",
    "execute",
    "parse_url",
]

logging.getLogger(__name__).addHandler(NullHandler())


def add_stderr_logger(level: int = logging.DEBUG) -> logging.StreamHandler:
    """
    Helper for quickly adding a StreamHandler to the logger. Useful for
    debugging.

    Returns the handler after adding it.
    """
    logger = logging.getLogger(__name__)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)
    logger.debug("Added a stderr logging handler to logger: %s", __name__)
    return handler


del NullHandler
