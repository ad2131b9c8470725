import inspect
from dataclasses import replace
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Optional,
    Protocol,
    TypedDict,
    Union,
)

from httpx import Response

from ._progress import ProgressStream, ProgressTransport
from ._transport import Driver, RequestInit
from .models.request import RequestProps, RequestPropsGetter, RequestSettings

if TYPE_CHECKING:
    from ._api_endpoint import ApiEndpoint

ResponseMapper = Callable[[Response], Union[Any, Awaitable[Any]]]


class RequestHandlerFn(Protocol):
    def __call__(
        self, props: RequestProps, driver: Optional[Driver] = None
    ) -> Awaitable[Any]: ...


RequestDataGetter = Callable[[RequestProps], Awaitable[RequestInit]]


class RequestData(TypedDict):
    data: RequestInit
    url: str


class RequestHandle:
    """A configured request.

    Awaiting ``handle(params)`` builds a fresh descriptor from ``params`` and
    executes it. The variant methods (``raw``, ``with_progress``,
    ``protect``, ``unprotect``) return new handles and leave this one as it
    is, so a handle can be shared and called concurrently.

    Examples:
        ```python
        users = api.endpoint("users")
        get_user = users.get(lambda user_id: user_id)

        user = await get_user(42)
        response = await get_user.raw()(42)
        get_user.url(42)  # .../users/42
        ```
    """

    def __init__(
        self,
        api_endpoint: "ApiEndpoint",
        settings: RequestSettings,
        props_getter: RequestPropsGetter,
        driver: Optional[Driver] = None,
        response_mapper: Optional[ResponseMapper] = None,
    ) -> None:
        self._api_endpoint = api_endpoint
        self._settings = settings
        self._props_getter = props_getter
        self._driver = driver
        self._response_mapper = response_mapper

    @property
    def settings(self) -> RequestSettings:
        return self._settings

    async def __call__(self, params: Any = None) -> Any:
        props = self._props_getter(params)
        result = await self._api_endpoint.request_handler(props, self._driver)
        if self._response_mapper is None:
            return result
        mapped = self._response_mapper(result)
        if inspect.isawaitable(mapped):
            return await mapped
        return mapped

    def raw(self, mapper: Optional[ResponseMapper] = None) -> "RequestHandle":
        """Return a handle resolving to the unparsed ``httpx.Response``.

        Args:
            mapper: Optional function, sync or async, applied to the response.
        """
        settings = replace(self._settings, raw_response=True)
        return RequestHandle(
            self._api_endpoint,
            settings,
            self._api_endpoint.props_getter(settings),
            driver=self._driver,
            response_mapper=mapper,
        )

    def with_progress(self) -> "ProgressRequestHandle":
        """Return a copy of this handle that reports transfer progress."""
        return ProgressRequestHandle(
            self._api_endpoint,
            self._settings,
            self._props_getter,
            response_mapper=self._response_mapper,
        )

    def protect(self) -> "RequestHandle":
        return self._api_endpoint.request(replace(self._settings, with_token=True))

    def unprotect(self) -> "RequestHandle":
        return self._api_endpoint.request(replace(self._settings, with_token=False))

    def url(self, params: Any = None) -> str:
        return self._props_getter(params).resolve_url()

    def request_props(self, params: Any = None) -> RequestProps:
        return self._props_getter(params)

    async def request_data(self, params: Any = None) -> RequestData:
        props = self._props_getter(params)
        data = await self._api_endpoint.request_data_getter(props)
        return {"data": data, "url": props.resolve_url()}

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(method={self._settings.method.value!r}, "
            f"path={self._api_endpoint.path!r})"
        )


class ProgressRequestHandle(RequestHandle):
    """Request handle routed through its own ``ProgressTransport``."""

    def __init__(
        self,
        api_endpoint: "ApiEndpoint",
        settings: RequestSettings,
        props_getter: RequestPropsGetter,
        response_mapper: Optional[ResponseMapper] = None,
    ) -> None:
        self._transport = ProgressTransport()
        super().__init__(
            api_endpoint,
            settings,
            props_getter,
            driver=self._transport.request,
            response_mapper=response_mapper,
        )

    @property
    def progress(self) -> ProgressStream:
        return self._transport.progress

    def copy(self) -> "ProgressRequestHandle":
        """Independent clone with a progress stream of its own."""
        return ProgressRequestHandle(
            self._api_endpoint,
            self._settings,
            self._props_getter,
            response_mapper=self._response_mapper,
        )

    def with_progress(self) -> "ProgressRequestHandle":
        return self.copy()

    def raw(self, mapper: Optional[ResponseMapper] = None) -> "ProgressRequestHandle":
        return super().raw(mapper).with_progress()

    def protect(self) -> "ProgressRequestHandle":
        return super().protect().with_progress()

    def unprotect(self) -> "ProgressRequestHandle":
        return super().unprotect().with_progress()

