from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Any, Callable, Mapping, Optional, Union


class ContentType(str, Enum):
    """Content types a request body can be encoded with."""

    JSON = "application/json"
    FORM_ENCODED = "application/x-www-form-urlencoded"
    FORM_DATA = "multipart/form-data"


class Method(str, Enum):
    """HTTP methods supported by endpoints."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"


class TokenType(str, Enum):
    """Authorization schemes used when a request is protected."""

    BEARER = "Bearer"
    BASIC = "Basic"


@dataclass(frozen=True)
class RequestProps:
    """Self-contained description of a single HTTP call.

    ``url`` is a zero-argument producer so that building a descriptor never
    forces URL evaluation. ``attempt`` is passed through untouched.
    """

    method: Method
    url: Callable[[], str]
    body: Any = None
    content_type: Optional[ContentType] = None
    with_token: bool = False
    raw_response: bool = False
    attempt: int = 0

    def resolve_url(self) -> str:
        return self.url()


@dataclass(frozen=True)
class Suffix:
    """Mapper result appended to the URL as a path segment."""

    value: Union[str, int, float]


@dataclass(frozen=True)
class Override:
    """Mapper result carrying body, URL suffix and descriptor overrides."""

    body: Any = None
    url: Union[str, int, float, None] = None
    entity_id: Union[str, int, None] = None
    fields: Mapping[str, Any] = field(default_factory=dict)


MapperResult = Union[Suffix, Override, str, int, float, Mapping[str, Any], None]
MapperFn = Callable[[Any], MapperResult]
RequestPropsGetter = Callable[..., RequestProps]

_OVERRIDE_KEYS = ("body", "url", "entity_id")


def normalize_mapper_result(result: MapperResult) -> Union[Suffix, Override, None]:
    """Turn whatever a mapper returned into ``Suffix``, ``Override`` or ``None``.

    Raises:
        TypeError: If the result has an unsupported shape.
    """
    if result is None or isinstance(result, (Suffix, Override)):
        return result
    if isinstance(result, (str, int, float)) and not isinstance(result, bool):
        return Suffix(result)
    if isinstance(result, Mapping):
        rest = {k: v for k, v in result.items() if k not in _OVERRIDE_KEYS}
        return Override(
            body=result.get("body"),
            url=result.get("url"),
            entity_id=result.get("entity_id"),
            fields=rest,
        )
    raise TypeError(
        f"Mapper returned unsupported result of type {type(result).__name__}"
    )


@dataclass(frozen=True)
class MethodSettings:
    """Per-call settings understood by ``Endpoint.method``."""

    method: Method
    endpoint: Union[str, int, None] = None
    with_token: Optional[bool] = None
    content_type: Optional[ContentType] = None
    raw_response: Optional[bool] = None


@dataclass(frozen=True)
class RequestSettings(MethodSettings):
    """Everything needed to build a request handle, mapper included."""

    fn: Optional[MapperFn] = None

    def method_settings(self) -> MethodSettings:
        return MethodSettings(
            method=self.method,
            endpoint=self.endpoint,
            with_token=self.with_token,
            content_type=self.content_type,
            raw_response=self.raw_response,
        )


SETTINGS_KEYS = frozenset(
    f.name for f in fields(RequestSettings) if f.name != "method"
)


def prepare_request_settings(
    method: Union[Method, str],
    props: Any = None,
    **settings: Any,
) -> RequestSettings:
    """Normalize whatever a verb method received into ``RequestSettings``.

    ``props`` may be a mapper function, a static endpoint suffix, a settings
    mapping or object, or nothing. Keyword ``settings`` win over ``props``.

    Raises:
        TypeError: For an unknown setting, an unsupported ``props`` type or a
            ``method`` setting that differs from ``method``.
    """
    method = Method(method)
    options: dict = {}
    if props is None:
        pass
    elif isinstance(props, MethodSettings):
        options = {
            key: getattr(props, key) for key in SETTINGS_KEYS if hasattr(props, key)
        }
        options["method"] = props.method
    elif isinstance(props, (str, int)) and not isinstance(props, bool):
        options = {"endpoint": props}
    elif isinstance(props, Mapping):
        options = dict(props)
    elif callable(props):
        options = {"fn": props}
    else:
        raise TypeError(f"Unsupported request props of type {type(props).__name__}")

    options.update(settings)
    if "method" in options and Method(options.pop("method")) != method:
        raise TypeError(f"Request settings method does not match {method.value}")
    unknown = set(options) - SETTINGS_KEYS
    if unknown:
        raise TypeError(f"Unknown request settings: {', '.join(sorted(unknown))}")
    return RequestSettings(method=method, **options)
