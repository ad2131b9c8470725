"""Request descriptor types and error classes."""

from .errors import ApiError, BaseUrlMissingError, HttpError, NoTokenProvidedError
from .request import (
    ContentType,
    MapperFn,
    MapperResult,
    Method,
    MethodSettings,
    Override,
    RequestProps,
    RequestPropsGetter,
    RequestSettings,
    Suffix,
    TokenType,
    normalize_mapper_result,
)

__all__ = [
    "ApiError",
    "BaseUrlMissingError",
    "HttpError",
    "NoTokenProvidedError",
    "ContentType",
    "MapperFn",
    "MapperResult",
    "Method",
    "MethodSettings",
    "Override",
    "RequestProps",
    "RequestPropsGetter",
    "RequestSettings",
    "Suffix",
    "TokenType",
    "normalize_mapper_result",
]
