import sys
from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from httpx import AsyncClient

# Ensure local source package (src/apibuilder) is importable before tests collect
_PROJECT_ROOT: Path = Path(__file__).resolve().parents[1]
_SRC_PATH: Path = _PROJECT_ROOT / "src"
if _SRC_PATH.exists():
    sys.path.insert(0, str(_SRC_PATH))

from apibuilder import (  # noqa: E402
    ApiEndpoint,
    Endpoint,
    RequestHandler,
    Server,
    TokenStore,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clean environment variables before each test."""
    for name in (
        "APIBUILDER_URL",
        "APIBUILDER_API_PATH",
        "APIBUILDER_ACCESS_TOKEN",
        "APIBUILDER_TOKEN_TYPE",
        "APIBUILDER_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
def base_url() -> str:
    return "https://test.example.com"


@pytest.fixture
def api_path() -> str:
    return "api"


@pytest.fixture
def secret() -> str:
    return "secret"


@pytest.fixture
def server(base_url: str, api_path: str) -> Server:
    return Server(url=base_url, api_path=api_path)


@pytest.fixture
def api_url(base_url: str, api_path: str) -> str:
    return f"{base_url}/{api_path}"


@pytest.fixture
def token_store() -> TokenStore:
    return TokenStore()


@pytest.fixture
def client() -> AsyncClient:
    return AsyncClient()


@pytest.fixture
def handler(client: AsyncClient, token_store: TokenStore) -> RequestHandler:
    return RequestHandler(client, token_store)


@pytest.fixture
def api(server: Server, handler: RequestHandler) -> ApiEndpoint:
    return ApiEndpoint(
        endpoint=Endpoint(server),
        request_handler=handler,
        request_data_getter=handler.request_data,
    )


@pytest.fixture
def request_handler_mock() -> AsyncMock:
    return AsyncMock(return_value={"ok": True})


@pytest.fixture
def request_data_getter_mock() -> AsyncMock:
    return AsyncMock(return_value={"method": "GET", "headers": {}})


@pytest.fixture
def mocked_api(
    server: Server,
    request_handler_mock: AsyncMock,
    request_data_getter_mock: AsyncMock,
) -> ApiEndpoint:
    return ApiEndpoint(
        endpoint=Endpoint(server),
        request_handler=request_handler_mock,
        request_data_getter=request_data_getter_mock,
    )
