from __future__ import annotations
from abc import ABC, abstractmethod

import httpx


class SyncTransport(ABC):
    """Sends one prepared request and returns the raw response.

    Implementations raise ``TransportError`` / ``RequestTimeout`` on
    connection failures and never inspect the status code.
    """

    @abstractmethod
    def build_request(self, method: str, url: str, **kwargs) -> httpx.Request: ...

    @abstractmethod
    def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response: ...

    @abstractmethod
    def close(self) -> None: ...


class AsyncTransport(ABC):
    @abstractmethod
    def build_request(self, method: str, url: str, **kwargs) -> httpx.Request: ...

    @abstractmethod
    async def send(self, request: httpx.Request, *, stream: bool = False) -> httpx.Response: ...

    @abstractmethod
    async def aclose(self) -> None: ...
