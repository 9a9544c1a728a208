from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Dict, Optional

import httpx
from pydantic import ValidationError
from pydantic_core import PydanticSerializationError

from .adapters.httpx_transport import AsyncHttpxTransport, HttpxTransport, map_transport_error
from .config import DEFAULT_BASE_URL, DEFAULT_BETA, DEFAULT_TIMEOUT, VERSION, ClientConfig, ClientSettings, validate_config
from .contracts.common import WireModel
from .contracts.uploads import FileUpload, MultipartRequest
from .endpoints import ApiCall, EndpointsMixin
from .errors import ApiError, DeserializationError, SerializationError, TransportError
from .observability import record_status, span
from .ports import AsyncTransport, SyncTransport
from .streaming import AsyncStream, Stream

log = logging.getLogger("openai_rest.client")

USER_AGENT = f"openai-rest-python/{VERSION}"


def _dur_ms(t0: float) -> int:
    return int((time.perf_counter() - t0) * 1000)


class BaseClient(EndpointsMixin):
    """Request encoding and response decoding shared by both clients."""

    def __init__(self, config: ClientConfig):
        self.config = validate_config(config)

    @staticmethod
    def _make_config(api_key, base_url, organization, project, timeout, proxy, beta) -> ClientConfig:
        return ClientConfig(
            api_key=api_key,
            base_url=base_url or DEFAULT_BASE_URL,
            organization=organization,
            project=project,
            timeout=DEFAULT_TIMEOUT if timeout is None else timeout,
            proxy=proxy,
            beta=beta,
        )

    # ---------- request side ----------

    def url_for(self, path: str) -> str:
        return self.config.base_url.rstrip("/") + path

    def headers_for(self, call: ApiCall) -> Dict[str, str]:
        cfg = self.config
        headers = {
            "Authorization": f"Bearer {cfg.api_key}",
            "User-Agent": USER_AGENT,
            "Accept": "text/event-stream" if call.stream else "application/json",
        }
        if cfg.organization:
            headers["OpenAI-Organization"] = cfg.organization
        if cfg.project:
            headers["OpenAI-Project"] = cfg.project
        if cfg.beta and call.is_beta:
            headers["OpenAI-Beta"] = cfg.beta
        return headers

    def _request_kwargs(self, call: ApiCall, uploads: Optional[Dict[str, FileUpload]]) -> Dict[str, Any]:
        kwargs: Dict[str, Any] = {"headers": self.headers_for(call)}
        if call.params:
            kwargs["params"] = call.params
        if call.body is None:
            return kwargs
        if call.multipart:
            body: MultipartRequest = call.body
            try:
                data, files = body.to_multipart(uploads)
            except (PydanticSerializationError, TypeError, ValueError) as e:
                raise SerializationError(f"cannot encode {type(body).__name__}: {e}") from e
            kwargs["data"] = data
            kwargs["files"] = files
            return kwargs
        try:
            payload = call.body.to_wire() if isinstance(call.body, WireModel) else call.body
            kwargs["content"] = json.dumps(payload).encode("utf-8")
        except (PydanticSerializationError, TypeError, ValueError) as e:
            raise SerializationError(f"cannot encode {type(call.body).__name__}: {e}") from e
        kwargs["headers"]["Content-Type"] = "application/json"
        return kwargs

    # ---------- response side ----------

    def _fail(self, call: ApiCall, response: httpx.Response, t0: float) -> ApiError:
        err = ApiError.from_response(response)
        log.warning("openai.request err method=%s path=%s status=%s type=%s dur_ms=%s",
                    call.method, call.path, response.status_code, err.error_type, _dur_ms(t0))
        return err

    def _decode(self, call: ApiCall, response: httpx.Response, t0: float):
        if not response.is_success:
            raise self._fail(call, response, t0)
        headers = {k.lower(): v for k, v in response.headers.items()}
        try:
            if call.expect == "binary":
                result = call.cast_to.model_validate({
                    "content": response.content,
                    "content_type": response.headers.get("content-type"),
                })
            elif call.expect == "text":
                result = call.cast_to.model_validate({"text": response.text})
            else:
                result = call.cast_to.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            # json.JSONDecodeError is a ValueError
            raise DeserializationError(
                f"{call.method} {call.path}: cannot decode {getattr(call.cast_to, '__name__', call.cast_to)}: {e}",
                status_code=response.status_code,
                body=response.text[:500],
            ) from e
        result.headers = headers
        log.info("openai.request ok method=%s path=%s status=%s dur_ms=%s",
                 call.method, call.path, response.status_code, _dur_ms(t0))
        return result


class Client(BaseClient):
    """Blocking client.

    >>> client = Client("sk-...")
    >>> client.chat_completion(ChatCompletionRequest.from_prompt("What is bitcoin?")).first_content()
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        organization: Optional[str] = None,
        project: Optional[str] = None,
        timeout: Optional[float] = None,
        proxy: Optional[str] = None,
        beta: Optional[str] = DEFAULT_BETA,
        http_client: Optional[httpx.Client] = None,
        transport: Optional[SyncTransport] = None,
        config: Optional[ClientConfig] = None,
    ):
        cfg = config or self._make_config(api_key, base_url, organization, project, timeout, proxy, beta)
        super().__init__(cfg)
        self.transport = transport or HttpxTransport(http_client, timeout=self.config.timeout,
                                                     proxy=self.config.proxy)

    @classmethod
    def from_env(cls, settings: Optional[ClientSettings] = None, *,
                 http_client: Optional[httpx.Client] = None,
                 transport: Optional[SyncTransport] = None, **overrides) -> "Client":
        """Build a client from OPENAI_* environment variables (and ``.env``)."""
        cfg = ClientConfig.from_settings(settings, **overrides)
        return cls(config=cfg, http_client=http_client, transport=transport)

    def _execute(self, call: ApiCall):
        uploads = call.body.resolve_uploads() if call.multipart else None
        request = self.transport.build_request(call.method, self.url_for(call.path),
                                               **self._request_kwargs(call, uploads))
        t0 = time.perf_counter()
        with span("openai.request", method=call.method, path=call.path) as s:
            try:
                response = self.transport.send(request, stream=call.stream)
            except (TransportError, DeserializationError) as e:
                log.warning("openai.request failed method=%s path=%s dur_ms=%s err=%s",
                            call.method, call.path, _dur_ms(t0), e)
                raise
            record_status(s, response.status_code)
            if call.stream:
                return self._open_stream(call, response, t0)
            result = self._decode(call, response, t0)
        if call.output is not None:
            result.output = result.write_to(call.output)
        return result

    def _open_stream(self, call: ApiCall, response: httpx.Response, t0: float) -> Stream:
        if not response.is_success:
            try:
                response.read()
            except httpx.RequestError as e:
                raise map_transport_error(e, response.request) from e
            finally:
                response.close()
            raise self._fail(call, response, t0)
        log.info("openai.stream open method=%s path=%s status=%s dur_ms=%s",
                 call.method, call.path, response.status_code, _dur_ms(t0))
        return Stream(response, call.cast_to)

    def close(self) -> None:
        self.transport.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, *exc) -> None:
        self.close()


class AsyncClient(BaseClient):
    """Async client; every endpoint method returns an awaitable."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        *,
        base_url: Optional[str] = None,
        organization: Optional[str] = None,
        project: Optional[str] = None,
        timeout: Optional[float] = None,
        proxy: Optional[str] = None,
        beta: Optional[str] = DEFAULT_BETA,
        http_client: Optional[httpx.AsyncClient] = None,
        transport: Optional[AsyncTransport] = None,
        config: Optional[ClientConfig] = None,
    ):
        cfg = config or self._make_config(api_key, base_url, organization, project, timeout, proxy, beta)
        super().__init__(cfg)
        self.transport = transport or AsyncHttpxTransport(http_client, timeout=self.config.timeout,
                                                          proxy=self.config.proxy)

    @classmethod
    def from_env(cls, settings: Optional[ClientSettings] = None, *,
                 http_client: Optional[httpx.AsyncClient] = None,
                 transport: Optional[AsyncTransport] = None, **overrides) -> "AsyncClient":
        cfg = ClientConfig.from_settings(settings, **overrides)
        return cls(config=cfg, http_client=http_client, transport=transport)

    async def _execute(self, call: ApiCall):
        # file reads stay off the event loop
        uploads = await asyncio.to_thread(call.body.resolve_uploads) if call.multipart else None
        request = self.transport.build_request(call.method, self.url_for(call.path),
                                               **self._request_kwargs(call, uploads))
        t0 = time.perf_counter()
        with span("openai.request", method=call.method, path=call.path) as s:
            try:
                response = await self.transport.send(request, stream=call.stream)
            except (TransportError, DeserializationError) as e:
                log.warning("openai.request failed method=%s path=%s dur_ms=%s err=%s",
                            call.method, call.path, _dur_ms(t0), e)
                raise
            record_status(s, response.status_code)
            if call.stream:
                return await self._open_stream(call, response, t0)
            result = self._decode(call, response, t0)
        if call.output is not None:
            result.output = await asyncio.to_thread(result.write_to, call.output)
        return result

    async def _open_stream(self, call: ApiCall, response: httpx.Response, t0: float) -> AsyncStream:
        if not response.is_success:
            try:
                await response.aread()
            except httpx.RequestError as e:
                raise map_transport_error(e, response.request) from e
            finally:
                await response.aclose()
            raise self._fail(call, response, t0)
        log.info("openai.stream open method=%s path=%s status=%s dur_ms=%s",
                 call.method, call.path, response.status_code, _dur_ms(t0))
        return AsyncStream(response, call.cast_to)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "AsyncClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()
