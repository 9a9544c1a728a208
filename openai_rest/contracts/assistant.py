from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from .chat_completion import Function
from .common import ApiResponse, RequestModel, WireEnum, WireModel
from .models import ChatModel


class AssistantToolType(WireEnum):
    CODE_INTERPRETER = "code_interpreter"
    FILE_SEARCH = "file_search"
    RETRIEVAL = "retrieval"
    FUNCTION = "function"


class AssistantTool(WireModel):
    type: AssistantToolType
    function: Optional[Function] = None

    @classmethod
    def code_interpreter(cls) -> "AssistantTool":
        return cls(type=AssistantToolType.CODE_INTERPRETER)

    @classmethod
    def file_search(cls) -> "AssistantTool":
        return cls(type=AssistantToolType.FILE_SEARCH)

    @classmethod
    def of_function(cls, function: Function) -> "AssistantTool":
        return cls(type=AssistantToolType.FUNCTION, function=function)


class AssistantRequest(RequestModel):
    model: ChatModel
    name: Optional[str] = None
    description: Optional[str] = None
    instructions: Optional[str] = None
    tools: Optional[List[AssistantTool]] = None
    # v1 field; v2 uses tool_resources
    file_ids: Optional[List[str]] = None
    tool_resources: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, str]] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    response_format: Optional[Union[str, Dict[str, Any]]] = None

    @classmethod
    def for_model(cls, model: Union[ChatModel, str]) -> "AssistantRequest":
        return cls(model=model)


class ModifyAssistantRequest(RequestModel):
    model: Optional[ChatModel] = None
    name: Optional[str] = None
    description: Optional[str] = None
    instructions: Optional[str] = None
    tools: Optional[List[AssistantTool]] = None
    file_ids: Optional[List[str]] = None
    tool_resources: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, str]] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    response_format: Optional[Union[str, Dict[str, Any]]] = None


class AssistantObject(ApiResponse):
    id: str
    object: str = "assistant"
    created_at: int
    name: Optional[str] = None
    description: Optional[str] = None
    model: str
    instructions: Optional[str] = None
    tools: List[AssistantTool] = Field(default_factory=list)
    file_ids: Optional[List[str]] = None
    tool_resources: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, str]] = Field(default_factory=dict)
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    response_format: Optional[Union[str, Dict[str, Any]]] = None


class AssistantFileRequest(RequestModel):
    file_id: str


class AssistantFileObject(ApiResponse):
    id: str
    object: str = "assistant.file"
    created_at: int
    assistant_id: str
