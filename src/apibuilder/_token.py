from typing import Optional, Protocol

from .models.request import TokenType


class TokenSource(Protocol):
    """Anything the transport can read an access token from at call time."""

    @property
    def token(self) -> Optional[str]: ...

    @property
    def token_type(self) -> TokenType: ...


class TokenStore:
    """Mutable in-memory token source."""

    def __init__(
        self, token: Optional[str] = None, token_type: TokenType = TokenType.BEARER
    ) -> None:
        self._token = token
        self._token_type = TokenType(token_type)

    @property
    def token(self) -> Optional[str]:
        return self._token

    @property
    def token_type(self) -> TokenType:
        return self._token_type

    def set(self, token: str, token_type: Optional[TokenType] = None) -> None:
        self._token = token
        if token_type is not None:
            self._token_type = TokenType(token_type)

    def clear(self) -> None:
        self._token = None

    def __repr__(self) -> str:
        # never print the token itself
        state = "set" if self._token else "empty"
        return f"TokenStore(token_type={self._token_type.value!r}, token={state})"
