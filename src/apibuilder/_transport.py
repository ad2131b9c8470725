import json
from logging import getLogger
from typing import Any, Awaitable, Callable, Dict, List, Optional, Tuple, TypedDict

from httpx import AsyncClient, Response

from ._token import TokenSource
from ._utils import FormData, check_for_form_data, format_param
from ._utils.constants import (
    HEADER_AUTHORIZATION,
    HEADER_CONTENT_TYPE,
    LOGGER_NAME,
)
from .models.errors import ApiError
from .models.request import ContentType, RequestProps, TokenType


class RequestInit(TypedDict, total=False):
    method: str
    headers: Dict[str, str]
    content: str
    data: Dict[str, Any]
    files: List[Tuple[str, Any]]


Driver = Callable[[AsyncClient, str, RequestInit], Awaitable[Response]]

JSON_MEDIA_TYPE = "application/json"


def _form_fields(body: Any) -> FormData:
    form = check_for_form_data(body)
    if not isinstance(form, FormData):
        raise TypeError(
            f"Form request body must be a mapping or FormData, got {type(body).__name__}"
        )
    return form


def _multipart_parts(key: str, value: Any) -> List[Tuple[str, Any]]:
    """Expand one form field into multipart parts.

    Lists become repeated parts. Bytes, file objects and httpx file tuples
    are passed through untouched.
    """
    if isinstance(value, list):
        return [part for item in value for part in _multipart_parts(key, item)]
    if isinstance(value, (bytes, tuple)) or hasattr(value, "read"):
        return [(key, value)]
    # (None, value) keeps the part without a filename
    return [(key, (None, format_param(value)))]


def prepare_request_data(
    props: RequestProps,
    token: Optional[str] = None,
    token_type: TokenType = TokenType.BEARER,
) -> RequestInit:
    """Compute method, headers and encoded body for a descriptor.

    Multipart requests get no ``Content-Type`` header here; httpx adds it
    together with the boundary.
    """
    content_type = ContentType(props.content_type or ContentType.JSON)
    headers: Dict[str, str] = {}
    if content_type != ContentType.FORM_DATA:
        headers[HEADER_CONTENT_TYPE] = content_type.value
    if props.with_token and token:
        headers[HEADER_AUTHORIZATION] = f"{TokenType(token_type).value} {token}"

    data: RequestInit = {"method": props.method.value, "headers": headers}
    if props.body is None:
        return data

    if content_type == ContentType.JSON:
        data["content"] = json.dumps(props.body)
    elif content_type == ContentType.FORM_ENCODED:
        fields: Dict[str, Any] = {}
        for key, value in _form_fields(props.body):
            fields.setdefault(key, []).append(value)
        data["data"] = {k: v[0] if len(v) == 1 else v for k, v in fields.items()}
    else:
        data["files"] = [
            part
            for key, value in _form_fields(props.body)
            for part in _multipart_parts(key, value)
        ]
    return data


def is_json_response(response: Response) -> bool:
    content_type = response.headers.get(HEADER_CONTENT_TYPE, "")
    return content_type.split(";")[0].strip().lower() == JSON_MEDIA_TYPE


async def send(client: AsyncClient, url: str, init: RequestInit) -> Response:
    """Default driver: a plain ``AsyncClient.request`` call."""
    return await client.request(url=url, **init)


class RequestHandler:
    """Executes request descriptors against an httpx client.

    Reads the access token from ``token_source`` at call time, so a token set
    after the API tree was built is still picked up.
    """

    def __init__(self, client: AsyncClient, token_source: TokenSource) -> None:
        self._logger = getLogger(LOGGER_NAME)
        self._client = client
        self._token_source = token_source

    @property
    def client(self) -> AsyncClient:
        return self._client

    async def request_data(self, props: RequestProps) -> RequestInit:
        """Compute what would be sent for ``props`` without sending it."""
        return prepare_request_data(
            props, self._token_source.token, self._token_source.token_type
        )

    async def do_request(
        self, props: RequestProps, driver: Optional[Driver] = None
    ) -> Response:
        token = self._token_source.token
        if props.with_token and not token:
            self._logger.warning(
                f"Rejected {props.method.value} request: no access token available"
            )
            raise ApiError.no_token_provided()

        url = props.resolve_url()
        init = prepare_request_data(props, token, self._token_source.token_type)
        self._logger.debug(f"Request: {props.method.value} {url}")
        self._logger.debug(f"HEADERS: {_masked(init['headers'])}")
        if props.attempt:
            self._logger.debug(f"Attempt: {props.attempt}")

        return await (driver or send)(self._client, url, init)

    async def __call__(
        self, props: RequestProps, driver: Optional[Driver] = None
    ) -> Any:
        """Execute ``props`` and return the decoded result.

        Returns the ``httpx.Response`` itself for raw descriptors, the decoded
        JSON for JSON responses and ``None`` for any other successful response.

        Raises:
            NoTokenProvidedError: The descriptor needs a token and none is set.
            HttpError: The response status is not a success.
        """
        response = await self.do_request(props, driver)
        self._logger.debug(f"Response: {response.status_code}")

        if not response.is_success:
            raise ApiError.from_response(response)
        if props.raw_response:
            return response
        if not is_json_response(response):
            return None
        return response.json()


def _masked(headers: Dict[str, str]) -> Dict[str, str]:
    if HEADER_AUTHORIZATION not in headers:
        return headers
    scheme = headers[HEADER_AUTHORIZATION].split(" ", 1)[0]
    return {**headers, HEADER_AUTHORIZATION: f"{scheme} ***"}
