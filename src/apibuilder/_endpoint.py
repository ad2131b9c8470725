from dataclasses import replace
from typing import Any, Callable, Mapping, Optional, Union, overload

from ._server import Server
from ._utils import (
    body_to_params,
    check_for_form_data,
    get_url_end,
    is_content_type_form_data,
    is_primitive,
    remove_slashes,
)
from .models.request import (
    ContentType,
    MapperFn,
    Method,
    MethodSettings,
    RequestProps,
    RequestPropsGetter,
    Suffix,
    normalize_mapper_result,
    prepare_request_settings,
)

SpecificMethodProps = Union[MapperFn, str, int, Mapping[str, Any], MethodSettings, None]


def _coerce_method_settings(method: Union[Method, str, MethodSettings]) -> MethodSettings:
    if isinstance(method, MethodSettings):
        return replace(method, method=Method(method.method))
    return MethodSettings(method=Method(method))


def _coerce_overrides(fields: Mapping[str, Any]) -> dict:
    overrides = dict(fields)
    if overrides.get("content_type") is not None:
        overrides["content_type"] = ContentType(overrides["content_type"])
    if overrides.get("method") is not None:
        overrides["method"] = Method(overrides["method"])
    return overrides


def _with_suffix(url: Callable[[], str], suffix: str) -> Callable[[], str]:
    return lambda: f"{url()}{suffix}"


class Endpoint:
    """A node of the API resource tree.

    The node knows its own path segment, the optional shared server it is
    bound to and whether requests made through it need an access token.
    Children copy the protection flag once, when they are created.

    Examples:
        ```python
        server = Server(url="https://example.com", api_path="api")
        users = Endpoint(server, "users").protect()
        get_user = users.get(lambda user_id: user_id)

        get_user(42).resolve_url()  # https://example.com/api/users/42
        ```
    """

    @overload
    def __init__(self, server_or_segment: str) -> None: ...

    @overload
    def __init__(
        self, server_or_segment: Optional[Server], segment: Optional[str] = None
    ) -> None: ...

    def __init__(
        self,
        server_or_segment: Union[Server, str, None],
        segment: Optional[str] = None,
    ) -> None:
        self._server: Optional[Server] = None
        self._is_protected = False

        if isinstance(server_or_segment, str):
            self._segment = remove_slashes(server_or_segment)
        elif server_or_segment is not None:
            self._server = server_or_segment
            self._segment = f"/{remove_slashes(segment)}" if segment else ""
        else:
            self._segment = remove_slashes(segment or "")

    @property
    def server(self) -> Optional[Server]:
        return self._server

    @property
    def segment(self) -> str:
        return self._segment

    @property
    def is_protected(self) -> bool:
        return self._is_protected

    @property
    def path(self) -> str:
        if self._server is None:
            return self._segment
        return f"{self._server.api}{self._segment}"

    def set_protection(self, state: bool) -> "Endpoint":
        self._is_protected = state
        return self

    def protect(self) -> "Endpoint":
        return self.set_protection(True)

    def unprotect(self) -> "Endpoint":
        return self.set_protection(False)

    def create_endpoint(self, segment: str) -> "Endpoint":
        """Create a child node below this one.

        The child shares the server and starts with the protection flag this
        node has right now.
        """
        child = Endpoint(
            self._server, f"{self._segment}/{remove_slashes(segment)}"
        )
        if self._is_protected:
            child.protect()
        return child

    def _common_request_props(self, settings: MethodSettings) -> RequestProps:
        server, segment = self._server, self._segment
        path_end = get_url_end(settings.endpoint)

        def url() -> str:
            base = segment if server is None else f"{server.api}{segment}"
            return f"{base}{path_end}"

        return RequestProps(
            method=settings.method,
            url=url,
            with_token=(
                settings.with_token
                if settings.with_token is not None
                else self._is_protected
            ),
            raw_response=bool(settings.raw_response),
            content_type=(
                ContentType(settings.content_type) if settings.content_type else None
            ),
        )

    def _method_with_body(
        self, settings: MethodSettings, fn: Optional[MapperFn] = None
    ) -> RequestPropsGetter:
        common = self._common_request_props(settings)

        def getter(params: Any = None) -> RequestProps:
            if fn is None:
                if params is None:
                    return common
                if is_content_type_form_data(common.content_type):
                    return replace(common, body=check_for_form_data(params))
                return replace(common, body=params)

            result = normalize_mapper_result(fn(params))
            if result is None:
                return common
            if isinstance(result, Suffix):
                return replace(common, url=_with_suffix(common.url, get_url_end(result.value)))

            url_end = get_url_end(result.url, result.entity_id)
            overrides = _coerce_overrides(result.fields)
            content_type = overrides.get("content_type") or common.content_type
            body = (
                check_for_form_data(result.body)
                if is_content_type_form_data(content_type)
                else result.body
            )
            return replace(
                common,
                **overrides,
                body=body,
                url=_with_suffix(common.url, url_end),
            )

        return getter

    def _method_with_params(
        self, settings: MethodSettings, fn: Optional[MapperFn] = None
    ) -> RequestPropsGetter:
        common = self._common_request_props(settings)

        def getter(params: Any = None) -> RequestProps:
            if fn is None:
                if params is None:
                    return common
                if is_primitive(params):
                    return replace(common, url=_with_suffix(common.url, get_url_end(params)))
                query = body_to_params(params)
                if not query:
                    return common
                return replace(common, url=_with_suffix(common.url, f"?{query}"))

            result = normalize_mapper_result(fn(params))
            if result is None:
                return common
            if isinstance(result, Suffix):
                return replace(common, url=_with_suffix(common.url, get_url_end(result.value)))

            query = body_to_params(result.body) if result.body else ""
            url_end = get_url_end(result.url, result.entity_id)
            if query:
                url_end = f"{url_end}?{query}"
            return replace(
                common,
                **_coerce_overrides(result.fields),
                url=_with_suffix(common.url, url_end),
            )

        return getter

    def method(
        self,
        method: Union[Method, str, MethodSettings],
        fn: Optional[MapperFn] = None,
    ) -> RequestPropsGetter:
        """Build a descriptor getter for ``method``.

        GET requests put their parameters in the query string, every other
        verb sends them as the request body.
        """
        settings = _coerce_method_settings(method)
        if settings.method == Method.GET:
            return self._method_with_params(settings, fn)
        return self._method_with_body(settings, fn)

    def _specific_method(
        self, method: Method, props: SpecificMethodProps, settings: Mapping[str, Any]
    ) -> RequestPropsGetter:
        request_settings = prepare_request_settings(method, props, **settings)
        return self.method(request_settings.method_settings(), request_settings.fn)

    def get(self, props: SpecificMethodProps = None, **settings: Any) -> RequestPropsGetter:
        return self._specific_method(Method.GET, props, settings)

    def post(self, props: SpecificMethodProps = None, **settings: Any) -> RequestPropsGetter:
        return self._specific_method(Method.POST, props, settings)

    def put(self, props: SpecificMethodProps = None, **settings: Any) -> RequestPropsGetter:
        return self._specific_method(Method.PUT, props, settings)

    def delete(self, props: SpecificMethodProps = None, **settings: Any) -> RequestPropsGetter:
        return self._specific_method(Method.DELETE, props, settings)

    def patch(self, props: SpecificMethodProps = None, **settings: Any) -> RequestPropsGetter:
        return self._specific_method(Method.PATCH, props, settings)

    def __repr__(self) -> str:
        return f"Endpoint(path={self.path!r}, is_protected={self._is_protected!r})"
