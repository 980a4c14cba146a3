"""
HTTP execution service for buffered requests.

RequestExecutor sends one request per call through httpx, buffers the
whole response body, parses JSON responses, and settles a CompletionHandle
with the normalized result or the error that ended the exchange.
"""

import asyncio
import enum
import json
import logging
from typing import Any

import httpx

from ..exceptions import BodyParseError, ConnectionClosedError, MissingContentTypeError
from ..schemas.request import EffectiveRequest
from ..schemas.response import ResponseResult
from .completion import CompletionHandle
from .normalizer import JSON_CONTENT_TYPE, UrlParser, normalize
from .url_parser import build_url, parse_url


log = logging.getLogger(__name__)

# Number of leading Content-Type characters compared against JSON_CONTENT_TYPE
CONTENT_TYPE_PREFIX_LENGTH = len(JSON_CONTENT_TYPE)

# Errors raised while reading the body when the peer drops the connection
CONNECTION_CLOSED_ERRORS = (httpx.RemoteProtocolError, httpx.ReadError)


class ExchangeState(enum.Enum):
    CONNECTING = "connecting"
    AWAITING_RESPONSE = "awaiting_response"
    RECEIVING_BODY = "receiving_body"
    SETTLED = "settled"


class Exchange:
    """
    State of a single request/response exchange.

    Owns the call's accumulating buffer and its handle. Once the exchange
    is SETTLED every further signal is ignored.
    """

    def __init__(self, request: EffectiveRequest, handle: CompletionHandle[ResponseResult]):
        self.request = request
        self.handle = handle
        self.state = ExchangeState.CONNECTING
        self.chunks: list[str] = []

    def advance(self, state: ExchangeState) -> bool:
        if self.state is ExchangeState.SETTLED:
            return False
        log.debug("Exchange %s %s: %s -> %s", self.request.method,
                  self.request.target.host, self.state.value, state.value)
        self.state = state
        return True

    def append(self, chunk: str) -> None:
        if self.state is ExchangeState.RECEIVING_BODY:
            self.chunks.append(chunk)

    def resolve(self, result: ResponseResult) -> None:
        if self.advance(ExchangeState.SETTLED):
            self.handle.resolve(result)

    def reject(self, error: BaseException) -> None:
        if self.advance(ExchangeState.SETTLED):
            self.chunks = []
            self.handle.reject(error)


def build_result(response: httpx.Response, text: str) -> ResponseResult:
    """
    Build the caller's result from a completed response.

    Args:
        response: Response whose body has been fully read
        text: Accumulated body text

    Returns:
        ResponseResult with the body parsed when declared as JSON

    Raises:
        MissingContentTypeError: If the response has no Content-Type header
        BodyParseError: If a JSON response body does not parse
    """
    headers = dict(response.headers)
    result = ResponseResult(status_code=response.status_code, headers=headers, body=text)

    content_type = headers.get("content-type")
    if content_type is None:
        raise MissingContentTypeError(response.status_code)

    if content_type[:CONTENT_TYPE_PREFIX_LENGTH] == JSON_CONTENT_TYPE:
        try:
            result.body = json.loads(text)
        except json.JSONDecodeError as e:
            raise BodyParseError(e, response=result) from e

    return result


class RequestExecutor:
    """
    Executes buffered HTTP requests.

    Args:
        client: httpx client used as transport. When omitted, each call
            opens and closes its own client, so no connection is shared
            between calls. An injected client is never closed here.
        url_parser: Callable turning a URL string into a Target
    """

    def __init__(self, client: httpx.AsyncClient | None = None, url_parser: UrlParser = parse_url):
        self.client = client
        self.url_parser = url_parser

    def execute(self, request: Any) -> CompletionHandle[ResponseResult]:
        """
        Start a request and return its completion handle immediately.

        Must be called with an asyncio event loop running. Invalid input
        yields an already-rejected handle and no connection is attempted.

        Args:
            request: URL string, RequestOptions, or a mapping of its fields

        Returns:
            Handle resolved with a ResponseResult or rejected with the error
        """
        try:
            effective = normalize(request, self.url_parser)
        except Exception as e:
            return CompletionHandle.rejected(e)

        handle: CompletionHandle[ResponseResult] = CompletionHandle()
        exchange = Exchange(effective, handle)
        handle.attach(asyncio.get_running_loop().create_task(self._run(exchange)))
        return handle

    async def _run(self, exchange: Exchange) -> None:
        try:
            if self.client is not None:
                await self._exchange(self.client, exchange)
            else:
                async with httpx.AsyncClient(timeout=None) as client:
                    await self._exchange(client, exchange)
        except Exception as e:
            if exchange.state is ExchangeState.SETTLED:
                log.debug("Error after exchange settled", exc_info=True)
            exchange.reject(e)
        finally:
            # Cancelled before settling
            exchange.reject(ConnectionClosedError())

    async def _exchange(self, client: httpx.AsyncClient, exchange: Exchange) -> None:
        request = exchange.request
        try:
            http_request = client.build_request(
                method=request.method,
                url=build_url(request.target),
                headers=request.headers,
                content=request.body,
            )
            log.debug("Starting request: %s %s", http_request.method, http_request.url)
            exchange.advance(ExchangeState.AWAITING_RESPONSE)
            response = await client.send(http_request, stream=True)
        except Exception as e:
            exchange.reject(e)
            return

        try:
            log.debug('"%s %s" %s', http_request.method, http_request.url, response.status_code)
            exchange.advance(ExchangeState.RECEIVING_BODY)
            async for chunk in response.aiter_text():
                exchange.append(chunk)
            result = build_result(response, "".join(exchange.chunks))
        except CONNECTION_CLOSED_ERRORS as e:
            error = ConnectionClosedError()
            error.__cause__ = e
            exchange.reject(error)
        except Exception as e:
            exchange.reject(e)
        else:
            exchange.resolve(result)
        finally:
            await response.aclose()


def execute(request: Any, *, client: httpx.AsyncClient | None = None) -> CompletionHandle[ResponseResult]:
    """
    Perform one buffered HTTP request.

    Shortcut for ``RequestExecutor(client).execute(request)``.

    Example:
        >>> response = await execute("http://example.com/items")
        >>> response = await execute({"url": "http://example.com/items", "method": "POST", "body": {"a": 1}})
    """
    return RequestExecutor(client=client).execute(request)
