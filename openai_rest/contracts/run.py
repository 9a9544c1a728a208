from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from .assistant import AssistantTool
from .chat_completion import ToolCall
from .common import ApiResponse, RequestModel, Usage, WireEnum, WireModel
from .models import ChatModel
from .thread import CreateThreadRequest


class RunStatus(WireEnum):
    QUEUED = "queued"
    IN_PROGRESS = "in_progress"
    REQUIRES_ACTION = "requires_action"
    CANCELLING = "cancelling"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    INCOMPLETE = "incomplete"
    EXPIRED = "expired"


TERMINAL_RUN_STATUSES = frozenset({
    RunStatus.CANCELLED, RunStatus.FAILED, RunStatus.COMPLETED, RunStatus.INCOMPLETE, RunStatus.EXPIRED,
})


class RunStepType(WireEnum):
    MESSAGE_CREATION = "message_creation"
    TOOL_CALLS = "tool_calls"


class RunStepStatus(WireEnum):
    IN_PROGRESS = "in_progress"
    CANCELLED = "cancelled"
    FAILED = "failed"
    COMPLETED = "completed"
    EXPIRED = "expired"


class CreateRunRequest(RequestModel):
    assistant_id: str
    model: Optional[ChatModel] = None
    instructions: Optional[str] = None
    additional_instructions: Optional[str] = None
    tools: Optional[List[AssistantTool]] = None
    metadata: Optional[Dict[str, str]] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_prompt_tokens: Optional[int] = None
    max_completion_tokens: Optional[int] = None

    @classmethod
    def for_assistant(cls, assistant_id: str) -> "CreateRunRequest":
        return cls(assistant_id=assistant_id)


class ModifyRunRequest(RequestModel):
    metadata: Optional[Dict[str, str]] = None


class CreateThreadAndRunRequest(RequestModel):
    assistant_id: str
    thread: Optional[CreateThreadRequest] = None
    model: Optional[ChatModel] = None
    instructions: Optional[str] = None
    tools: Optional[List[AssistantTool]] = None
    tool_resources: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, str]] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None


class ToolOutput(WireModel):
    tool_call_id: str
    output: str


class SubmitToolOutputsRequest(RequestModel):
    tool_outputs: List[ToolOutput]


class SubmitToolOutputs(WireModel):
    tool_calls: List[ToolCall] = Field(default_factory=list)


class RequiredAction(WireModel):
    type: str
    submit_tool_outputs: Optional[SubmitToolOutputs] = None


class LastError(WireModel):
    code: str
    message: str


class RunObject(ApiResponse):
    id: str
    object: str = "thread.run"
    created_at: int
    thread_id: str
    assistant_id: str
    status: RunStatus
    required_action: Optional[RequiredAction] = None
    last_error: Optional[LastError] = None
    expires_at: Optional[int] = None
    started_at: Optional[int] = None
    cancelled_at: Optional[int] = None
    failed_at: Optional[int] = None
    completed_at: Optional[int] = None
    model: str
    instructions: Optional[str] = None
    tools: List[AssistantTool] = Field(default_factory=list)
    file_ids: Optional[List[str]] = None
    metadata: Optional[Dict[str, str]] = Field(default_factory=dict)
    usage: Optional[Usage] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_RUN_STATUSES


class RunStepObject(ApiResponse):
    id: str
    object: str = "thread.run.step"
    created_at: int
    assistant_id: str
    thread_id: str
    run_id: str
    type: RunStepType
    status: RunStepStatus
    step_details: Dict[str, Any] = Field(default_factory=dict)
    last_error: Optional[LastError] = None
    expired_at: Optional[int] = None
    cancelled_at: Optional[int] = None
    failed_at: Optional[int] = None
    completed_at: Optional[int] = None
    metadata: Optional[Dict[str, str]] = Field(default_factory=dict)
    usage: Optional[Usage] = None
