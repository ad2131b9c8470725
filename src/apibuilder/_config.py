import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, HttpUrl, field_validator

from ._utils.constants import (
    DEFAULT_TIMEOUT,
    DOTENV_FILE,
    ENV_ACCESS_TOKEN,
    ENV_API_PATH,
    ENV_BASE_URL,
    ENV_TIMEOUT,
    ENV_TOKEN_TYPE,
)
from .models.errors import BaseUrlMissingError
from .models.request import TokenType


class Config(BaseModel):
    base_url: str
    api_path: str = ""
    access_token: Optional[str] = None
    token_type: TokenType = TokenType.BEARER
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("base_url", mode="before")
    @classmethod
    def validate_url(cls, value: str) -> str:
        HttpUrl(url=value)
        return value.rstrip("/")

    @classmethod
    def from_env(cls, dotenv_path: Optional[str] = None, **overrides) -> "Config":
        """Build a configuration from ``APIBUILDER_*`` environment variables.

        A ``.env`` file is loaded first without overriding variables that are
        already set. Keyword ``overrides`` take precedence over the environment.

        Raises:
            BaseUrlMissingError: When no base URL is configured.
        """
        load_dotenv(
            dotenv_path=dotenv_path or os.path.join(os.getcwd(), DOTENV_FILE),
            override=False,
        )

        values = {
            "base_url": os.getenv(ENV_BASE_URL),
            "api_path": os.getenv(ENV_API_PATH),
            "access_token": os.getenv(ENV_ACCESS_TOKEN),
            "token_type": os.getenv(ENV_TOKEN_TYPE),
            "timeout": os.getenv(ENV_TIMEOUT),
        }
        values.update(overrides)
        values = {key: value for key, value in values.items() if value is not None}

        if not values.get("base_url"):
            raise BaseUrlMissingError()
        return cls(**values)
