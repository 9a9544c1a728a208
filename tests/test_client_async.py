import json

import httpx
import pytest

from openai_rest import AsyncClient, ConfigurationError, NotFoundError, RequestTimeout
from openai_rest.contracts import (
    AudioSpeechRequest,
    ChatCompletionRequest,
    EmbeddingRequest,
    FileUploadRequest,
    ListPage,
    RunStepObject,
)


def _client(handler, **kwargs):
    return AsyncClient("sk-test", http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)), **kwargs)


@pytest.mark.anyio
async def test_async_embedding_round_trip():
    seen = []

    async def handler(request):
        seen.append(json.loads(await request.aread()))
        return httpx.Response(200, json={"object": "list", "model": "text-embedding-3-small",
                                         "data": [{"object": "embedding", "index": 1, "embedding": [0.3, 0.4]},
                                                  {"object": "embedding", "index": 0, "embedding": [0.1, 0.2]}],
                                         "usage": {"prompt_tokens": 2, "total_tokens": 2}})

    async with _client(handler) as client:
        resp = await client.embedding(EmbeddingRequest.for_inputs("text-embedding-3-small", ["a", "b"]))

    assert seen == [{"model": "text-embedding-3-small", "input": ["a", "b"]}]
    assert resp.vectors() == [[0.1, 0.2], [0.3, 0.4]]
    assert resp.usage.total_tokens == 2


@pytest.mark.anyio
async def test_async_methods_return_awaitables():
    def handler(request):
        return httpx.Response(200, json={"id": "c", "object": "chat.completion", "created": 1, "model": "gpt-4o",
                                         "choices": []})

    client = _client(handler)
    pending = client.chat_completion(ChatCompletionRequest.from_prompt("hi"))
    assert hasattr(pending, "__await__")
    resp = await pending
    assert resp.first_content() is None
    await client.aclose()


@pytest.mark.anyio
async def test_async_upload_reads_file_off_loop(tmp_path):
    path = tmp_path / "notes.txt"
    path.write_bytes(b"hello")
    bodies = []

    async def handler(request):
        bodies.append(await request.aread())
        return httpx.Response(200, json={"id": "file-9", "object": "file", "bytes": 5, "created_at": 1,
                                         "filename": "notes.txt", "purpose": "assistants"})

    client = _client(handler)
    obj = await client.file_upload(FileUploadRequest.for_path(path, "assistants"))
    assert obj.bytes == 5
    assert b'filename="notes.txt"' in bodies[0]
    assert b"hello" in bodies[0]


@pytest.mark.anyio
async def test_async_speech_writes_file(tmp_path):
    def handler(request):
        return httpx.Response(200, content=b"OggS", headers={"content-type": "audio/ogg"})

    out = tmp_path / "speech.opus"
    client = _client(handler)
    resp = await client.audio_speech(
        AudioSpeechRequest.for_text("tts-1-hd", "hi", "nova", output=out).with_options(response_format="opus"))
    assert out.read_bytes() == b"OggS"
    assert resp.output == out


@pytest.mark.anyio
async def test_async_errors_are_typed():
    def not_found(request):
        return httpx.Response(404, json={"error": {"message": "No run step found", "type": "invalid_request_error"}})

    def timeout(request):
        raise httpx.ConnectTimeout("connect timeout", request=request)

    with pytest.raises(NotFoundError):
        await _client(not_found).retrieve_run_step("thread_1", "run_1", "step_1")
    with pytest.raises(RequestTimeout):
        await _client(timeout).list_run_steps("thread_1", "run_1")


@pytest.mark.anyio
async def test_async_list_run_steps():
    step = {"id": "step_1", "object": "thread.run.step", "created_at": 1, "assistant_id": "asst_1",
            "thread_id": "thread_1", "run_id": "run_1", "type": "message_creation", "status": "completed",
            "step_details": {"type": "message_creation", "message_creation": {"message_id": "msg_1"}}}
    urls = []

    def handler(request):
        urls.append(request.url)
        return httpx.Response(200, json={"object": "list", "data": [step], "first_id": "step_1",
                                         "last_id": "step_1", "has_more": False})

    page = await _client(handler).list_run_steps("thread_1", "run_1", limit=1)
    assert isinstance(page, ListPage)
    assert isinstance(page.data[0], RunStepObject)
    assert urls[0].path == "/v1/threads/thread_1/runs/run_1/steps"
    assert urls[0].params["limit"] == "1"


def test_async_client_requires_key():
    with pytest.raises(ConfigurationError):
        AsyncClient("")
