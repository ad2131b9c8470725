import json
from typing import Any, Optional

from httpx import Response


class ApiError(Exception):
    """Base class for errors raised while executing a request."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)

    @staticmethod
    def no_token_provided() -> "NoTokenProvidedError":
        return NoTokenProvidedError()

    @staticmethod
    def from_response(response: Response) -> "HttpError":
        """Classify a failed response.

        The body is decoded as JSON when possible and kept as text otherwise.
        A ``message``, ``error`` or ``detail`` key of a JSON object body is
        used as the error message.
        """
        body: Any
        try:
            body = response.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            body = response.text

        message: Optional[str] = None
        if isinstance(body, dict):
            for key in ("message", "error", "detail"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    message = value
                    break

        return HttpError(
            message
            or f"{response.status_code} {response.reason_phrase}".strip(),
            status_code=response.status_code,
            body=body,
            response=response,
        )


class NoTokenProvidedError(ApiError):
    def __init__(
        self,
        message="The request requires an access token but none was provided.",
    ):
        super().__init__(message)


class HttpError(ApiError):
    """Raised when a completed call returns a non-success status."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: Any = None,
        response: Optional[Response] = None,
    ):
        self.status_code = status_code
        self.body = body
        self.response = response
        super().__init__(message)

    def __repr__(self) -> str:
        return f"HttpError(status_code={self.status_code!r}, message={self.message!r})"


class BaseUrlMissingError(Exception):
    def __init__(
        self,
        message="No base URL configured. Pass one explicitly or set the APIBUILDER_URL environment variable.",
    ):
        self.message = message
        super().__init__(self.message)
