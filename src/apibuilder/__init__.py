"""Declarative builder for REST API clients.

Describe a tree of endpoints once and get awaitable request handles that
compute URL, body and headers on every call.
"""

from ._api_endpoint import ApiEndpoint
from ._client import ApiClient
from ._config import Config
from ._endpoint import Endpoint
from ._progress import ProgressDirection, ProgressEvent, ProgressStream, ProgressTransport
from ._request_handle import ProgressRequestHandle, RequestHandle
from ._server import Server
from ._token import TokenSource, TokenStore
from ._transport import RequestHandler, RequestInit, prepare_request_data
from ._utils import FormData, body_to_params, get_url_end
from .models import (
    ApiError,
    BaseUrlMissingError,
    ContentType,
    HttpError,
    Method,
    MethodSettings,
    NoTokenProvidedError,
    Override,
    RequestProps,
    RequestSettings,
    Suffix,
    TokenType,
)

__all__ = [
    "ApiClient",
    "ApiEndpoint",
    "ApiError",
    "BaseUrlMissingError",
    "Config",
    "ContentType",
    "Endpoint",
    "FormData",
    "HttpError",
    "Method",
    "MethodSettings",
    "NoTokenProvidedError",
    "Override",
    "ProgressDirection",
    "ProgressEvent",
    "ProgressRequestHandle",
    "ProgressStream",
    "ProgressTransport",
    "RequestHandle",
    "RequestHandler",
    "RequestInit",
    "RequestProps",
    "RequestSettings",
    "Server",
    "Suffix",
    "TokenSource",
    "TokenStore",
    "TokenType",
    "body_to_params",
    "get_url_end",
    "prepare_request_data",
]
