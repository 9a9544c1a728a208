from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import AsyncIterator, Dict, Generic, Iterator, List, Optional, Type, TypeVar

import httpx
from pydantic import ValidationError

from .adapters.httpx_transport import map_transport_error
from .contracts.common import ApiResponse
from .errors import ApiError, DeserializationError

log = logging.getLogger("openai_rest.streaming")

T = TypeVar("T", bound=ApiResponse)

DONE_MARKER = "[DONE]"


@dataclass
class ServerSentEvent:
    data: str
    event: Optional[str] = None
    id: Optional[str] = None


class SSEDecoder:
    """Incremental text/event-stream decoder fed one line at a time."""

    def __init__(self) -> None:
        self._data: List[str] = []
        self._event: Optional[str] = None
        self._id: Optional[str] = None

    def decode(self, line: str) -> Optional[ServerSentEvent]:
        line = line.rstrip("\r")
        if not line:
            if not self._data:
                self._event = None
                return None
            ev = ServerSentEvent(data="\n".join(self._data), event=self._event, id=self._id)
            self._data, self._event = [], None
            return ev
        if line.startswith(":"):
            return None
        field, _, value = line.partition(":")
        if value.startswith(" "):
            value = value[1:]
        if field == "data":
            self._data.append(value)
        elif field == "event":
            self._event = value
        elif field == "id":
            self._id = value
        return None

    def flush(self) -> Optional[ServerSentEvent]:
        return self.decode("")


_DONE = object()


class _ChunkParser(Generic[T]):
    def __init__(self, cast_to: Type[T], response: httpx.Response):
        self.cast_to = cast_to
        self.status_code = response.status_code
        self.headers: Dict[str, str] = {k.lower(): v for k, v in response.headers.items()}

    def parse(self, ev: ServerSentEvent):
        data = ev.data.strip()
        if data == DONE_MARKER:
            return _DONE
        try:
            payload = json.loads(data)
        except ValueError as e:
            raise DeserializationError(f"invalid JSON in stream event: {e}",
                                       status_code=self.status_code, body=data[:500]) from e
        if isinstance(payload, dict) and payload.get("error") is not None:
            raise ApiError.from_payload(self.status_code, payload, headers=self.headers)
        try:
            chunk = self.cast_to.model_validate(payload)
        except ValidationError as e:
            raise DeserializationError(f"stream event does not match {self.cast_to.__name__}: {e}",
                                       status_code=self.status_code, body=data[:500]) from e
        chunk.headers = self.headers
        return chunk


class Stream(Generic[T]):
    """Lazy, single-pass iterator over streamed chunks.

    The HTTP response is closed once the stream is exhausted, fails, or is
    closed explicitly (also on leaving a ``with`` block).
    """

    def __init__(self, response: httpx.Response, cast_to: Type[T]):
        self.response = response
        self._parser = _ChunkParser(cast_to, response)
        self._iterator = self._iter_chunks()

    @property
    def headers(self) -> Dict[str, str]:
        return self._parser.headers

    @property
    def closed(self) -> bool:
        return self.response.is_closed

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        return next(self._iterator)

    def _iter_chunks(self) -> Iterator[T]:
        decoder = SSEDecoder()
        try:
            for line in self.response.iter_lines():
                ev = decoder.decode(line)
                if ev is None:
                    continue
                item = self._parser.parse(ev)
                if item is _DONE:
                    return
                yield item
            ev = decoder.flush()
            if ev is not None:
                item = self._parser.parse(ev)
                if item is not _DONE:
                    yield item
        except httpx.RequestError as e:
            raise map_transport_error(e, self.response.request) from e
        finally:
            self._release()

    def _release(self) -> None:
        if not self.response.is_closed:
            log.debug("openai.stream close path=%s", self.response.request.url.path)
            self.response.close()

    def close(self) -> None:
        self._iterator.close()
        self._release()

    def __enter__(self) -> "Stream[T]":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class AsyncStream(Generic[T]):
    def __init__(self, response: httpx.Response, cast_to: Type[T]):
        self.response = response
        self._parser = _ChunkParser(cast_to, response)
        self._iterator = self._iter_chunks()

    @property
    def headers(self) -> Dict[str, str]:
        return self._parser.headers

    @property
    def closed(self) -> bool:
        return self.response.is_closed

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        return await self._iterator.__anext__()

    async def _iter_chunks(self) -> AsyncIterator[T]:
        decoder = SSEDecoder()
        try:
            async for line in self.response.aiter_lines():
                ev = decoder.decode(line)
                if ev is None:
                    continue
                item = self._parser.parse(ev)
                if item is _DONE:
                    return
                yield item
            ev = decoder.flush()
            if ev is not None:
                item = self._parser.parse(ev)
                if item is not _DONE:
                    yield item
        except httpx.RequestError as e:
            raise map_transport_error(e, self.response.request) from e
        finally:
            await self._release()

    async def _release(self) -> None:
        if not self.response.is_closed:
            log.debug("openai.stream close path=%s", self.response.request.url.path)
            await self.response.aclose()

    async def aclose(self) -> None:
        await self._iterator.aclose()
        await self._release()

    async def __aenter__(self) -> "AsyncStream[T]":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
