# Services package

from .completion import CompletionHandle
from .executor import ExchangeState, RequestExecutor, build_result, execute
from .normalizer import normalize, prepare_body, resolve_target
from .url_parser import build_url, parse_url

__all__ = [
    "CompletionHandle",
    "ExchangeState",
    "RequestExecutor",
    "build_result",
    "execute",
    "normalize",
    "prepare_body",
    "resolve_target",
    "build_url",
    "parse_url",
]
