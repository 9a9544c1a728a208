from __future__ import annotations
from typing import Optional

import httpx

from ..errors import DeserializationError, OpenAIRestError, RequestTimeout, TransportError
from ..ports import AsyncTransport, SyncTransport


def map_transport_error(e: httpx.RequestError, request: httpx.Request) -> OpenAIRestError:
    where = f"{request.method} {request.url.path}"
    if isinstance(e, httpx.DecodingError):
        # body arrived but its content-encoding could not be undone
        return DeserializationError(f"{where}: cannot decode response body: {e}")
    if isinstance(e, httpx.TimeoutException):
        return RequestTimeout(f"{where} timed out: {e}")
    return TransportError(f"{where} failed: {e}")


class HttpxTransport(SyncTransport):
    """Blocking transport over ``httpx.Client``.

    A caller-supplied client is used as-is and not closed by ``close()``.
    """

    def __init__(self, client: Optional[httpx.Client] = None, *, timeout: Optional[float] = None,
                 proxy: Optional[str] = None):
        self._owned = client is None
        self.http = client or httpx.Client(timeout=timeout, proxy=proxy)

    def build_request(self, method: str, url: str, **kwargs) -> httpx.Request:
        return self.http.build_request(method, url, **kwargs)

    def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        try:
            return self.http.send(request, stream=stream)
        except httpx.RequestError as e:
            raise map_transport_error(e, request) from e

    def close(self) -> None:
        if self._owned:
            self.http.close()


class AsyncHttpxTransport(AsyncTransport):
    def __init__(self, client: Optional[httpx.AsyncClient] = None, *, timeout: Optional[float] = None,
                 proxy: Optional[str] = None):
        self._owned = client is None
        self.http = client or httpx.AsyncClient(timeout=timeout, proxy=proxy)

    def build_request(self, method: str, url: str, **kwargs) -> httpx.Request:
        return self.http.build_request(method, url, **kwargs)

    async def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response:
        try:
            return await self.http.send(request, stream=stream)
        except httpx.RequestError as e:
            raise map_transport_error(e, request) from e

    async def aclose(self) -> None:
        if self._owned:
            await self.http.aclose()
