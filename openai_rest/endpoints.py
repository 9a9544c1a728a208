from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Type, Union
from urllib.parse import quote

from .contracts.assistant import (
    AssistantFileObject, AssistantFileRequest, AssistantObject, AssistantRequest, ModifyAssistantRequest,
)
from .contracts.audio import (
    AudioSpeechRequest, AudioSpeechResponse, AudioTranscriptionRequest, AudioTranscriptionResponse,
    AudioTranslationRequest, AudioTranslationResponse,
)
from .contracts.chat_completion import ChatCompletionChunk, ChatCompletionRequest, ChatCompletionResponse
from .contracts.common import DeletionStatus, ListPage, ListQuery, SortOrder
from .contracts.completion import CompletionRequest, CompletionResponse
from .contracts.edit import EditRequest, EditResponse
from .contracts.embedding import EmbeddingRequest, EmbeddingResponse
from .contracts.file import FileContentResponse, FileDeleteResponse, FileListResponse, FileObject, FileUploadRequest
from .contracts.fine_tuning import CreateFineTuningJobRequest, FineTuningJob, FineTuningJobEvent
from .contracts.image import ImageEditRequest, ImageGenerationRequest, ImageResponse, ImageVariationRequest
from .contracts.message import CreateMessageRequest, MessageFileObject, MessageObject, ModifyMessageRequest
from .contracts.moderation import CreateModerationRequest, CreateModerationResponse
from .contracts.run import (
    CreateRunRequest, CreateThreadAndRunRequest, ModifyRunRequest, RunObject, RunStepObject,
    SubmitToolOutputsRequest,
)
from .contracts.thread import CreateThreadRequest, ModifyThreadRequest, ThreadObject

# Path prefixes that get the OpenAI-Beta header
BETA_PREFIXES = ("/assistants", "/threads")


@dataclass(frozen=True)
class ApiCall:
    """Everything the client needs to perform one endpoint call."""
    method: str
    path: str
    cast_to: Type[Any]
    body: Any = None
    params: Optional[Dict[str, Any]] = None
    multipart: bool = False
    # "json" | "text" | "binary"
    expect: str = "json"
    stream: bool = False
    output: Optional[Path] = None

    @property
    def is_beta(self) -> bool:
        return self.path.startswith(BETA_PREFIXES)


def _seg(value: str) -> str:
    return quote(str(value), safe="")


def _list_params(limit=None, order=None, after=None, before=None) -> Dict[str, Any]:
    return ListQuery(limit=limit, order=order, after=after, before=before).to_params()


class EndpointsMixin:
    """One method per endpoint.

    Each method describes the call and hands it to ``self._execute``; the
    blocking client returns the result, the async client an awaitable.
    """

    def _execute(self, call: ApiCall):
        raise NotImplementedError

    # ---------- Completions / chat ----------

    def completion(self, req: CompletionRequest):
        body = req.with_options(stream=None) if req.stream else req
        return self._execute(ApiCall("POST", "/completions", CompletionResponse, body=body))

    def completion_stream(self, req: CompletionRequest):
        return self._execute(ApiCall("POST", "/completions", CompletionResponse,
                                     body=req.with_options(stream=True), stream=True))

    def edit(self, req: EditRequest):
        return self._execute(ApiCall("POST", "/edits", EditResponse, body=req))

    def chat_completion(self, req: ChatCompletionRequest):
        body = req.with_options(stream=None) if req.stream else req
        return self._execute(ApiCall("POST", "/chat/completions", ChatCompletionResponse, body=body))

    def chat_completion_stream(self, req: ChatCompletionRequest):
        return self._execute(ApiCall("POST", "/chat/completions", ChatCompletionChunk,
                                     body=req.with_options(stream=True), stream=True))

    # ---------- Images ----------

    def image_generation(self, req: ImageGenerationRequest):
        return self._execute(ApiCall("POST", "/images/generations", ImageResponse, body=req))

    def image_edit(self, req: ImageEditRequest):
        return self._execute(ApiCall("POST", "/images/edits", ImageResponse, body=req, multipart=True))

    def image_variation(self, req: ImageVariationRequest):
        return self._execute(ApiCall("POST", "/images/variations", ImageResponse, body=req, multipart=True))

    # ---------- Embeddings / moderation ----------

    def embedding(self, req: EmbeddingRequest):
        return self._execute(ApiCall("POST", "/embeddings", EmbeddingResponse, body=req))

    def create_moderation(self, req: CreateModerationRequest):
        return self._execute(ApiCall("POST", "/moderations", CreateModerationResponse, body=req))

    # ---------- Files ----------

    def file_list(self, purpose: Optional[str] = None):
        params = {"purpose": str(purpose)} if purpose else None
        return self._execute(ApiCall("GET", "/files", FileListResponse, params=params))

    def file_upload(self, req: FileUploadRequest):
        return self._execute(ApiCall("POST", "/files", FileObject, body=req, multipart=True))

    def file_delete(self, file_id: str):
        return self._execute(ApiCall("DELETE", f"/files/{_seg(file_id)}", FileDeleteResponse))

    def file_retrieve(self, file_id: str):
        return self._execute(ApiCall("GET", f"/files/{_seg(file_id)}", FileObject))

    def file_retrieve_content(self, file_id: str):
        return self._execute(ApiCall("GET", f"/files/{_seg(file_id)}/content", FileContentResponse,
                                     expect="binary"))

    # ---------- Audio ----------

    def audio_transcription(self, req: AudioTranscriptionRequest):
        return self._execute(ApiCall("POST", "/audio/transcriptions", AudioTranscriptionResponse, body=req,
                                     multipart=True, expect="text" if req.returns_text() else "json"))

    def audio_translation(self, req: AudioTranslationRequest):
        return self._execute(ApiCall("POST", "/audio/translations", AudioTranslationResponse, body=req,
                                     multipart=True, expect="text" if req.returns_text() else "json"))

    def audio_speech(self, req: AudioSpeechRequest):
        return self._execute(ApiCall("POST", "/audio/speech", AudioSpeechResponse, body=req,
                                     expect="binary", output=req.output))

    # ---------- Fine-tuning ----------

    def create_fine_tuning_job(self, req: CreateFineTuningJobRequest):
        return self._execute(ApiCall("POST", "/fine_tuning/jobs", FineTuningJob, body=req))

    def list_fine_tuning_jobs(self, after: Optional[str] = None, limit: Optional[int] = None):
        return self._execute(ApiCall("GET", "/fine_tuning/jobs", ListPage[FineTuningJob],
                                     params=_list_params(limit=limit, after=after)))

    def list_fine_tuning_job_events(self, job_id: str, after: Optional[str] = None, limit: Optional[int] = None):
        return self._execute(ApiCall("GET", f"/fine_tuning/jobs/{_seg(job_id)}/events",
                                     ListPage[FineTuningJobEvent], params=_list_params(limit=limit, after=after)))

    def retrieve_fine_tuning_job(self, job_id: str):
        return self._execute(ApiCall("GET", f"/fine_tuning/jobs/{_seg(job_id)}", FineTuningJob))

    def cancel_fine_tuning_job(self, job_id: str):
        return self._execute(ApiCall("POST", f"/fine_tuning/jobs/{_seg(job_id)}/cancel", FineTuningJob))

    # ---------- Assistants ----------

    def create_assistant(self, req: AssistantRequest):
        return self._execute(ApiCall("POST", "/assistants", AssistantObject, body=req))

    def retrieve_assistant(self, assistant_id: str):
        return self._execute(ApiCall("GET", f"/assistants/{_seg(assistant_id)}", AssistantObject))

    def modify_assistant(self, assistant_id: str, req: Union[ModifyAssistantRequest, AssistantRequest]):
        return self._execute(ApiCall("POST", f"/assistants/{_seg(assistant_id)}", AssistantObject, body=req))

    def delete_assistant(self, assistant_id: str):
        return self._execute(ApiCall("DELETE", f"/assistants/{_seg(assistant_id)}", DeletionStatus))

    def list_assistants(self, limit: Optional[int] = None, order: Optional[Union[SortOrder, str]] = None,
                        after: Optional[str] = None, before: Optional[str] = None):
        return self._execute(ApiCall("GET", "/assistants", ListPage[AssistantObject],
                                     params=_list_params(limit, order, after, before)))

    def create_assistant_file(self, assistant_id: str, req: AssistantFileRequest):
        return self._execute(ApiCall("POST", f"/assistants/{_seg(assistant_id)}/files", AssistantFileObject,
                                     body=req))

    def retrieve_assistant_file(self, assistant_id: str, file_id: str):
        return self._execute(ApiCall("GET", f"/assistants/{_seg(assistant_id)}/files/{_seg(file_id)}",
                                     AssistantFileObject))

    def delete_assistant_file(self, assistant_id: str, file_id: str):
        return self._execute(ApiCall("DELETE", f"/assistants/{_seg(assistant_id)}/files/{_seg(file_id)}",
                                     DeletionStatus))

    def list_assistant_files(self, assistant_id: str, limit: Optional[int] = None,
                             order: Optional[Union[SortOrder, str]] = None,
                             after: Optional[str] = None, before: Optional[str] = None):
        return self._execute(ApiCall("GET", f"/assistants/{_seg(assistant_id)}/files",
                                     ListPage[AssistantFileObject], params=_list_params(limit, order, after, before)))

    # ---------- Threads ----------

    def create_thread(self, req: Optional[CreateThreadRequest] = None):
        return self._execute(ApiCall("POST", "/threads", ThreadObject, body=req or CreateThreadRequest()))

    def retrieve_thread(self, thread_id: str):
        return self._execute(ApiCall("GET", f"/threads/{_seg(thread_id)}", ThreadObject))

    def modify_thread(self, thread_id: str, req: ModifyThreadRequest):
        return self._execute(ApiCall("POST", f"/threads/{_seg(thread_id)}", ThreadObject, body=req))

    def delete_thread(self, thread_id: str):
        return self._execute(ApiCall("DELETE", f"/threads/{_seg(thread_id)}", DeletionStatus))

    # ---------- Messages ----------

    def create_message(self, thread_id: str, req: CreateMessageRequest):
        return self._execute(ApiCall("POST", f"/threads/{_seg(thread_id)}/messages", MessageObject, body=req))

    def retrieve_message(self, thread_id: str, message_id: str):
        return self._execute(ApiCall("GET", f"/threads/{_seg(thread_id)}/messages/{_seg(message_id)}",
                                     MessageObject))

    def modify_message(self, thread_id: str, message_id: str, req: ModifyMessageRequest):
        return self._execute(ApiCall("POST", f"/threads/{_seg(thread_id)}/messages/{_seg(message_id)}",
                                     MessageObject, body=req))

    def list_messages(self, thread_id: str, limit: Optional[int] = None,
                      order: Optional[Union[SortOrder, str]] = None,
                      after: Optional[str] = None, before: Optional[str] = None):
        return self._execute(ApiCall("GET", f"/threads/{_seg(thread_id)}/messages", ListPage[MessageObject],
                                     params=_list_params(limit, order, after, before)))

    def retrieve_message_file(self, thread_id: str, message_id: str, file_id: str):
        path = f"/threads/{_seg(thread_id)}/messages/{_seg(message_id)}/files/{_seg(file_id)}"
        return self._execute(ApiCall("GET", path, MessageFileObject))

    def list_message_files(self, thread_id: str, message_id: str, limit: Optional[int] = None,
                           order: Optional[Union[SortOrder, str]] = None,
                           after: Optional[str] = None, before: Optional[str] = None):
        path = f"/threads/{_seg(thread_id)}/messages/{_seg(message_id)}/files"
        return self._execute(ApiCall("GET", path, ListPage[MessageFileObject],
                                     params=_list_params(limit, order, after, before)))

    # ---------- Runs ----------

    def create_run(self, thread_id: str, req: CreateRunRequest):
        return self._execute(ApiCall("POST", f"/threads/{_seg(thread_id)}/runs", RunObject, body=req))

    def retrieve_run(self, thread_id: str, run_id: str):
        return self._execute(ApiCall("GET", f"/threads/{_seg(thread_id)}/runs/{_seg(run_id)}", RunObject))

    def modify_run(self, thread_id: str, run_id: str, req: ModifyRunRequest):
        return self._execute(ApiCall("POST", f"/threads/{_seg(thread_id)}/runs/{_seg(run_id)}", RunObject,
                                     body=req))

    def list_runs(self, thread_id: str, limit: Optional[int] = None,
                  order: Optional[Union[SortOrder, str]] = None,
                  after: Optional[str] = None, before: Optional[str] = None):
        return self._execute(ApiCall("GET", f"/threads/{_seg(thread_id)}/runs", ListPage[RunObject],
                                     params=_list_params(limit, order, after, before)))

    def cancel_run(self, thread_id: str, run_id: str):
        return self._execute(ApiCall("POST", f"/threads/{_seg(thread_id)}/runs/{_seg(run_id)}/cancel",
                                     RunObject, body={}))

    def submit_tool_outputs(self, thread_id: str, run_id: str, req: SubmitToolOutputsRequest):
        path = f"/threads/{_seg(thread_id)}/runs/{_seg(run_id)}/submit_tool_outputs"
        return self._execute(ApiCall("POST", path, RunObject, body=req))

    def create_thread_and_run(self, req: CreateThreadAndRunRequest):
        return self._execute(ApiCall("POST", "/threads/runs", RunObject, body=req))

    def retrieve_run_step(self, thread_id: str, run_id: str, step_id: str):
        path = f"/threads/{_seg(thread_id)}/runs/{_seg(run_id)}/steps/{_seg(step_id)}"
        return self._execute(ApiCall("GET", path, RunStepObject))

    def list_run_steps(self, thread_id: str, run_id: str, limit: Optional[int] = None,
                       order: Optional[Union[SortOrder, str]] = None,
                       after: Optional[str] = None, before: Optional[str] = None):
        path = f"/threads/{_seg(thread_id)}/runs/{_seg(run_id)}/steps"
        return self._execute(ApiCall("GET", path, ListPage[RunStepObject],
                                     params=_list_params(limit, order, after, before)))
