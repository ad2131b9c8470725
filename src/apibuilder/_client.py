from typing import Any, Optional

from httpx import AsyncClient

from ._api_endpoint import ApiEndpoint
from ._config import Config
from ._endpoint import Endpoint
from ._server import Server
from ._token import TokenSource, TokenStore
from ._transport import RequestHandler
from ._utils import get_httpx_client_kwargs
from .models.request import TokenType


class ApiClient:
    """Entry point wiring a server, a token store and an httpx client together.

    Examples:
        ```python
        from apibuilder import ApiClient, Config

        async with ApiClient(Config(base_url="https://example.com", api_path="api")) as api:
            login = api.endpoint("auth").post("login")
            tokens = await login({"username": "jane", "password": "secret"})
            api.set_token(tokens["access"])

            list_orders = api.endpoint("orders", with_token=True).get()
            orders = await list_orders({"page": 2, "status": ["new", "paid"]})
        ```
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        client: Optional[AsyncClient] = None,
        token_source: Optional[TokenSource] = None,
    ) -> None:
        self._config = config or Config.from_env()
        self._server = Server(url=self._config.base_url, api_path=self._config.api_path)
        self._token_source = token_source or TokenStore(
            self._config.access_token, self._config.token_type
        )

        self._owns_client = client is None
        self._client = client or AsyncClient(
            **get_httpx_client_kwargs(self._config.timeout)
        )
        self._handler = RequestHandler(self._client, self._token_source)
        self._root = ApiEndpoint(
            endpoint=Endpoint(self._server),
            request_handler=self._handler,
            request_data_getter=self._handler.request_data,
        )

    @property
    def config(self) -> Config:
        return self._config

    @property
    def server(self) -> Server:
        return self._server

    @property
    def root(self) -> ApiEndpoint:
        return self._root

    @property
    def token_source(self) -> TokenSource:
        return self._token_source

    def endpoint(self, path: str, with_token: Optional[bool] = None) -> ApiEndpoint:
        return self._root.endpoint(path, with_token=with_token)

    def set_token(self, token: str, token_type: Optional[TokenType] = None) -> None:
        if not isinstance(self._token_source, TokenStore):
            raise TypeError("set_token() needs the default TokenStore token source")
        self._token_source.set(token, token_type)

    def clear_token(self) -> None:
        if not isinstance(self._token_source, TokenStore):
            raise TypeError("clear_token() needs the default TokenStore token source")
        self._token_source.clear()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.aclose()
