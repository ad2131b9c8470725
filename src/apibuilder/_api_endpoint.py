from typing import Any, Mapping, Optional, Union

from ._endpoint import Endpoint
from ._request_handle import RequestDataGetter, RequestHandle, RequestHandlerFn
from .models.request import (
    MapperFn,
    Method,
    MethodSettings,
    RequestPropsGetter,
    RequestSettings,
    prepare_request_settings,
)

SpecificRequestProps = Union[MapperFn, str, int, Mapping[str, Any], MethodSettings, None]


class ApiEndpoint:
    """Fluent builder of executable request handles for one ``Endpoint``.

    ``request_handler`` executes descriptors and ``request_data_getter``
    computes what would be sent for them; both are supplied by the caller,
    usually ``RequestHandler`` and its ``request_data`` method.

    Examples:
        ```python
        api = ApiEndpoint(
            Endpoint(server),
            request_handler=handler,
            request_data_getter=handler.request_data,
        )
        auth = api.endpoint("auth")
        login = auth.post("login")
        me = auth.endpoint("me", with_token=True).get()

        await login({"username": "jane", "password": "secret"})
        profile = await me()
        ```
    """

    def __init__(
        self,
        endpoint: Endpoint,
        request_handler: RequestHandlerFn,
        request_data_getter: RequestDataGetter,
    ) -> None:
        self._endpoint = endpoint
        self._request_handler = request_handler
        self._request_data_getter = request_data_getter

    @property
    def request_handler(self) -> RequestHandlerFn:
        return self._request_handler

    @property
    def request_data_getter(self) -> RequestDataGetter:
        return self._request_data_getter

    @property
    def path(self) -> str:
        return self._endpoint.path

    @property
    def is_protected(self) -> bool:
        return self._endpoint.is_protected

    def protect(self) -> "ApiEndpoint":
        self._endpoint.protect()
        return self

    def unprotect(self) -> "ApiEndpoint":
        self._endpoint.unprotect()
        return self

    def endpoint(self, path: str, with_token: Optional[bool] = None) -> "ApiEndpoint":
        """Descend to ``path``.

        Args:
            path: Child path segment, slashes are trimmed.
            with_token: Overrides the protection inherited from this node.
        """
        child = self._endpoint.create_endpoint(path)
        if with_token is not None:
            child.set_protection(with_token)
        return ApiEndpoint(
            endpoint=child,
            request_handler=self._request_handler,
            request_data_getter=self._request_data_getter,
        )

    def props_getter(self, settings: RequestSettings) -> RequestPropsGetter:
        return self._endpoint.method(settings.method_settings(), settings.fn)

    def request(self, settings: RequestSettings) -> RequestHandle:
        return RequestHandle(self, settings, self.props_getter(settings))

    def method(
        self,
        method: Union[Method, str],
        props: SpecificRequestProps = None,
        **settings: Any,
    ) -> RequestHandle:
        return self.request(prepare_request_settings(method, props, **settings))

    def get(self, props: SpecificRequestProps = None, **settings: Any) -> RequestHandle:
        return self.method(Method.GET, props, **settings)

    def post(self, props: SpecificRequestProps = None, **settings: Any) -> RequestHandle:
        return self.method(Method.POST, props, **settings)

    def put(self, props: SpecificRequestProps = None, **settings: Any) -> RequestHandle:
        return self.method(Method.PUT, props, **settings)

    def delete(self, props: SpecificRequestProps = None, **settings: Any) -> RequestHandle:
        return self.method(Method.DELETE, props, **settings)

    def patch(self, props: SpecificRequestProps = None, **settings: Any) -> RequestHandle:
        return self.method(Method.PATCH, props, **settings)

    def __repr__(self) -> str:
        return f"ApiEndpoint(path={self.path!r}, is_protected={self.is_protected!r})"
