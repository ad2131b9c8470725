from pydantic import BaseModel, HttpUrl, field_validator

from ._utils import remove_slashes


class Server(BaseModel):
    """Base URL provider shared by every endpoint of an API tree.

    Endpoints only read ``api``; several endpoints may reference the same
    server instance.
    """

    url: str
    api_path: str = ""

    @field_validator("url", mode="before")
    @classmethod
    def validate_url(cls, value: str) -> str:
        HttpUrl(url=value)
        return value.rstrip("/")

    @field_validator("api_path", mode="before")
    @classmethod
    def normalize_api_path(cls, value: str) -> str:
        return remove_slashes(value or "")

    @property
    def api(self) -> str:
        if not self.api_path:
            return self.url
        return f"{self.url}/{self.api_path}"
