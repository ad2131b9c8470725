"""Upload and download progress reporting for request handles."""

from dataclasses import dataclass
from enum import Enum
from typing import AsyncIterator, Callable, List, Optional

from httpx import AsyncClient, Response

from ._transport import RequestInit
from ._utils.constants import HEADER_CONTENT_LENGTH

CHUNK_SIZE = 64 * 1024


class ProgressDirection(str, Enum):
    UPLOAD = "upload"
    DOWNLOAD = "download"


@dataclass(frozen=True)
class ProgressEvent:
    direction: ProgressDirection
    loaded: int
    total: Optional[int] = None

    @property
    def length_computable(self) -> bool:
        return self.total is not None


ProgressListener = Callable[[ProgressEvent], None]


class ProgressStream:
    """Synchronous event stream of ``ProgressEvent`` values."""

    def __init__(self) -> None:
        self._listeners: List[ProgressListener] = []

    def watch(self, listener: ProgressListener) -> Callable[[], None]:
        """Subscribe ``listener``; returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unwatch() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unwatch

    def emit(self, event: ProgressEvent) -> None:
        for listener in list(self._listeners):
            listener(event)

    def __len__(self) -> int:
        return len(self._listeners)


def _content_length(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class ProgressTransport:
    """Driver that reports progress while sending and receiving bodies.

    ``request`` has the same signature as the default driver, so it can be
    handed to ``RequestHandler`` in its place. Every instance owns its own
    ``progress`` stream.
    """

    def __init__(self, chunk_size: int = CHUNK_SIZE) -> None:
        self.progress = ProgressStream()
        self._chunk_size = chunk_size

    async def _upload(self, body: bytes) -> AsyncIterator[bytes]:
        total = len(body)
        loaded = 0
        for start in range(0, total, self._chunk_size):
            chunk = body[start : start + self._chunk_size]
            loaded += len(chunk)
            self.progress.emit(ProgressEvent(ProgressDirection.UPLOAD, loaded, total))
            yield chunk

    async def request(self, client: AsyncClient, url: str, init: RequestInit) -> Response:
        built = client.build_request(url=url, **init)
        body = built.read()
        if body:
            built = client.build_request(
                method=built.method,
                url=built.url,
                headers=built.headers,
                content=self._upload(body),
            )

        response = await client.send(built, stream=True)
        total = _content_length(response.headers.get(HEADER_CONTENT_LENGTH))
        if response.is_stream_consumed:
            # transports handing back an already read response
            loaded = response.num_bytes_downloaded or len(response.content)
            self.progress.emit(ProgressEvent(ProgressDirection.DOWNLOAD, loaded, total))
            await response.aclose()
            return response

        try:
            raw = bytearray()
            async for chunk in response.aiter_raw():
                raw.extend(chunk)
                self.progress.emit(
                    ProgressEvent(ProgressDirection.DOWNLOAD, len(raw), total)
                )
        finally:
            await response.aclose()

        # rebuilt from the raw bytes so content decoding happens exactly once
        rebuilt = Response(
            status_code=response.status_code,
            headers=response.headers,
            content=bytes(raw),
            request=built,
            extensions=response.extensions,
            history=response.history,
            default_encoding=response.default_encoding,
        )
        # available once the stream is closed
        rebuilt.elapsed = response.elapsed
        return rebuilt
