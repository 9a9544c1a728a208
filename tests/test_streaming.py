import json

import httpx
import pytest

from openai_rest import ApiError, AsyncClient, Client, DeserializationError, RateLimitError
from openai_rest.contracts import ChatCompletionRequest, CompletionRequest, FinishReason
from openai_rest.streaming import SSEDecoder


def _chunk(content=None, finish=None, role=None):
    delta = {}
    if role:
        delta["role"] = role
    if content is not None:
        delta["content"] = content
    return {"id": "chatcmpl-s", "object": "chat.completion.chunk", "created": 1, "model": "gpt-4o",
            "choices": [{"index": 0, "delta": delta, "finish_reason": finish}]}


def _sse(*events, done=True):
    body = "".join(f"data: {json.dumps(e)}\n\n" for e in events)
    if done:
        body += "data: [DONE]\n\n"
    return body.encode()


def _stream_client(body, status=200, seen=None):
    def handler(request):
        if seen is not None:
            request.read()
            seen.append(request)
        return httpx.Response(status, content=body, headers={"content-type": "text/event-stream",
                                                              "x-request-id": "req_s"})
    return Client("sk-test", http_client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_decoder_joins_multiline_data_and_skips_comments():
    dec = SSEDecoder()
    assert dec.decode(": keep-alive") is None
    assert dec.decode("event: message") is None
    assert dec.decode("data: {\"a\":") is None
    assert dec.decode("data: 1}") is None
    ev = dec.decode("")
    assert ev.event == "message"
    assert json.loads(ev.data) == {"a": 1}
    assert dec.decode("") is None


def test_chat_stream_yields_chunks_until_done():
    seen = []
    client = _stream_client(_sse(_chunk(role="assistant"), _chunk("Bit"), _chunk("coin"), _chunk(finish="stop")),
                            seen=seen)
    stream = client.chat_completion_stream(ChatCompletionRequest.from_prompt("What is bitcoin?"))

    assert json.loads(seen[0].content)["stream"] is True
    assert seen[0].headers["accept"] == "text/event-stream"
    assert stream.headers["x-request-id"] == "req_s"

    chunks = list(stream)
    assert "".join(c.delta_text() for c in chunks) == "Bitcoin"
    assert chunks[-1].choices[0].finish_reason is FinishReason.STOP
    assert stream.closed
    # single pass
    assert list(stream) == []


def test_stream_ends_on_connection_close_without_done():
    client = _stream_client(_sse(_chunk("a"), _chunk("b"), done=False))
    with client.chat_completion_stream(ChatCompletionRequest.from_prompt("x")) as stream:
        assert [c.delta_text() for c in stream] == ["a", "b"]


def test_closing_early_releases_the_response():
    client = _stream_client(_sse(_chunk("a"), _chunk("b"), _chunk("c")))
    stream = client.chat_completion_stream(ChatCompletionRequest.from_prompt("x"))
    assert next(stream).delta_text() == "a"
    stream.close()
    assert stream.closed
    with pytest.raises(StopIteration):
        next(stream)


def test_error_event_inside_stream_raises_api_error():
    body = _sse(_chunk("a"), done=False) + \
        b'data: {"error": {"message": "model overloaded", "type": "server_error"}}\n\n'
    client = _stream_client(body)
    stream = client.chat_completion_stream(ChatCompletionRequest.from_prompt("x"))
    assert next(stream).delta_text() == "a"
    with pytest.raises(ApiError) as ei:
        next(stream)
    assert ei.value.message == "model overloaded"
    assert stream.closed


def test_malformed_event_is_a_deserialization_error():
    client = _stream_client(b"data: {not json}\n\n")
    with pytest.raises(DeserializationError):
        list(client.chat_completion_stream(ChatCompletionRequest.from_prompt("x")))


def test_non_2xx_stream_raises_before_iteration():
    client = _stream_client(json.dumps({"error": {"message": "slow down", "type": "requests"}}).encode(), status=429)
    with pytest.raises(RateLimitError) as ei:
        client.chat_completion_stream(ChatCompletionRequest.from_prompt("x"))
    assert ei.value.message == "slow down"


def test_completion_stream():
    events = [{"id": "cmpl-1", "object": "text_completion", "created": 1, "model": "gpt-3.5-turbo-instruct",
               "choices": [{"text": t, "index": 0, "finish_reason": None}]} for t in ("Hel", "lo")]
    client = _stream_client(_sse(*events))
    stream = client.completion_stream(CompletionRequest.for_prompt("gpt-3.5-turbo-instruct", "Say hello"))
    assert "".join(c.first_text() for c in stream) == "Hello"


@pytest.mark.anyio
async def test_async_chat_stream():
    body = _sse(_chunk("Bit"), _chunk("coin"), _chunk(finish="stop"))

    def handler(request):
        return httpx.Response(200, content=body, headers={"content-type": "text/event-stream"})

    client = AsyncClient("sk-test", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    stream = await client.chat_completion_stream(ChatCompletionRequest.from_prompt("x"))
    text = ""
    async with stream:
        async for chunk in stream:
            text += chunk.delta_text()
    assert text == "Bitcoin"
    assert stream.closed
    await client.aclose()


def _gzip_stream_client(status=200):
    def handler(request):
        return httpx.Response(status, headers={"content-encoding": "gzip", "content-type": "text/event-stream"},
                              content=iter([b"data: not-gzip\n\n"]))
    return Client("sk-test", http_client=httpx.Client(transport=httpx.MockTransport(handler)))


def test_corrupt_compressed_stream_is_a_deserialization_error():
    stream = _gzip_stream_client().chat_completion_stream(ChatCompletionRequest.from_prompt("x"))
    with pytest.raises(DeserializationError):
        next(stream)
    assert stream.closed


def test_corrupt_compressed_error_body_is_typed():
    with pytest.raises(DeserializationError):
        _gzip_stream_client(status=500).chat_completion_stream(ChatCompletionRequest.from_prompt("x"))


@pytest.mark.anyio
async def test_async_corrupt_compressed_stream_is_a_deserialization_error():
    async def body():
        yield b"data: not-gzip\n\n"

    def handler(request):
        return httpx.Response(200, headers={"content-encoding": "gzip", "content-type": "text/event-stream"},
                              content=body())

    client = AsyncClient("sk-test", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    stream = await client.chat_completion_stream(ChatCompletionRequest.from_prompt("x"))
    with pytest.raises(DeserializationError):
        await stream.__anext__()
    assert stream.closed
    await client.aclose()
