from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import Field

from .common import ApiResponse, MessageRole, RequestModel, Usage, WireEnum, WireModel
from .models import DEFAULT_CHAT_MODEL, ChatModel


# ---------- Vocabularies ----------

class FinishReason(WireEnum):
    STOP = "stop"
    LENGTH = "length"
    CONTENT_FILTER = "content_filter"
    TOOL_CALLS = "tool_calls"
    FUNCTION_CALL = "function_call"
    NULL = "null"


class ToolType(WireEnum):
    FUNCTION = "function"


class ToolChoiceMode(WireEnum):
    NONE = "none"
    AUTO = "auto"
    REQUIRED = "required"


class ContentPartType(WireEnum):
    TEXT = "text"
    IMAGE_URL = "image_url"


class ImageDetail(WireEnum):
    AUTO = "auto"
    LOW = "low"
    HIGH = "high"


class JSONSchemaType(WireEnum):
    OBJECT = "object"
    NUMBER = "number"
    INTEGER = "integer"
    STRING = "string"
    ARRAY = "array"
    NULL = "null"
    BOOLEAN = "boolean"


# ---------- Message content ----------

class ImageUrl(WireModel):
    url: str
    detail: Optional[ImageDetail] = None


class ContentPart(WireModel):
    type: ContentPartType
    text: Optional[str] = None
    image_url: Optional[ImageUrl] = None

    @classmethod
    def of_text(cls, text: str) -> "ContentPart":
        return cls(type=ContentPartType.TEXT, text=text)

    @classmethod
    def of_image(cls, url: str, detail: Optional[ImageDetail] = None) -> "ContentPart":
        return cls(type=ContentPartType.IMAGE_URL, image_url=ImageUrl(url=url, detail=detail))


class FunctionCall(WireModel):
    name: Optional[str] = None
    # JSON-encoded arguments, exactly as produced by the model
    arguments: Optional[str] = None


class ToolCall(WireModel):
    id: str
    type: ToolType = ToolType.FUNCTION
    function: FunctionCall


class ChatCompletionMessage(WireModel):
    role: MessageRole
    content: Optional[Union[str, List[ContentPart]]] = None
    name: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None

    @classmethod
    def user(cls, content: Union[str, List[ContentPart]], name: Optional[str] = None) -> "ChatCompletionMessage":
        return cls(role=MessageRole.USER, content=content, name=name)

    @classmethod
    def system(cls, content: str) -> "ChatCompletionMessage":
        return cls(role=MessageRole.SYSTEM, content=content)

    @classmethod
    def assistant(cls, content: Optional[str] = None, tool_calls: Optional[List[ToolCall]] = None) -> "ChatCompletionMessage":
        return cls(role=MessageRole.ASSISTANT, content=content, tool_calls=tool_calls)

    @classmethod
    def tool(cls, tool_call_id: str, content: str) -> "ChatCompletionMessage":
        return cls(role=MessageRole.TOOL, content=content, tool_call_id=tool_call_id)

    @classmethod
    def user_with_images(cls, text: str, urls: List[str], detail: Optional[ImageDetail] = None) -> "ChatCompletionMessage":
        parts = [ContentPart.of_text(text)] + [ContentPart.of_image(u, detail) for u in urls]
        return cls(role=MessageRole.USER, content=parts)

    def text(self) -> Optional[str]:
        """Plain text of the message, joining text parts when content is a list."""
        if self.content is None or isinstance(self.content, str):
            return self.content
        return "".join(p.text or "" for p in self.content if p.type == ContentPartType.TEXT)


# ---------- Tools ----------

class JSONSchemaDefine(WireModel):
    type: Optional[JSONSchemaType] = None
    description: Optional[str] = None
    enum_values: Optional[List[str]] = Field(default=None, alias="enum")
    properties: Optional[Dict[str, "JSONSchemaDefine"]] = None
    required: Optional[List[str]] = None
    items: Optional["JSONSchemaDefine"] = None


class FunctionParameters(WireModel):
    type: JSONSchemaType = JSONSchemaType.OBJECT
    properties: Optional[Dict[str, JSONSchemaDefine]] = None
    required: Optional[List[str]] = None


class Function(WireModel):
    name: str
    description: Optional[str] = None
    parameters: FunctionParameters = Field(default_factory=FunctionParameters)


class Tool(WireModel):
    type: ToolType = ToolType.FUNCTION
    function: Function

    @classmethod
    def of_function(cls, name: str, description: Optional[str] = None,
                    parameters: Optional[FunctionParameters] = None) -> "Tool":
        return cls(function=Function(name=name, description=description,
                                     parameters=parameters or FunctionParameters()))


class NamedFunction(WireModel):
    name: str


class NamedToolChoice(WireModel):
    type: ToolType = ToolType.FUNCTION
    function: NamedFunction

    @classmethod
    def function_named(cls, name: str) -> "NamedToolChoice":
        return cls(function=NamedFunction(name=name))


ToolChoice = Union[ToolChoiceMode, NamedToolChoice]


class ResponseFormat(WireModel):
    type: str = "text"  # "text" | "json_object"


# ---------- Request ----------

class ChatCompletionRequest(RequestModel):
    model: ChatModel
    messages: List[ChatCompletionMessage]
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    n: Optional[int] = None
    stream: Optional[bool] = None
    stop: Optional[Union[str, List[str]]] = None
    max_tokens: Optional[int] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    logit_bias: Optional[Dict[str, int]] = None
    logprobs: Optional[bool] = None
    top_logprobs: Optional[int] = None
    user: Optional[str] = None
    seed: Optional[int] = None
    response_format: Optional[ResponseFormat] = None
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[ToolChoice] = None
    parallel_tool_calls: Optional[bool] = None

    @classmethod
    def for_message(cls, model: Union[ChatModel, str], message: ChatCompletionMessage) -> "ChatCompletionRequest":
        return cls(model=model, messages=[message])

    @classmethod
    def for_messages(cls, model: Union[ChatModel, str], messages: List[ChatCompletionMessage]) -> "ChatCompletionRequest":
        return cls(model=model, messages=list(messages))

    @classmethod
    def from_prompt(cls, text: str, model: Union[ChatModel, str] = DEFAULT_CHAT_MODEL) -> "ChatCompletionRequest":
        return cls.for_message(model, ChatCompletionMessage.user(text))


# ---------- Response ----------

class TopLogprob(WireModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None


class TokenLogprob(WireModel):
    token: str
    logprob: float
    bytes: Optional[List[int]] = None
    top_logprobs: List[TopLogprob] = Field(default_factory=list)


class ChoiceLogprobs(WireModel):
    content: Optional[List[TokenLogprob]] = None


class FinishDetails(WireModel):
    type: FinishReason
    stop: Optional[str] = None


class ChatCompletionChoice(WireModel):
    index: int
    message: ChatCompletionMessage
    finish_reason: Optional[FinishReason] = None
    finish_details: Optional[FinishDetails] = None
    logprobs: Optional[ChoiceLogprobs] = None


class ChatCompletionResponse(ApiResponse):
    id: str
    object: str = "chat.completion"
    created: int
    model: str
    choices: List[ChatCompletionChoice]
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    def first_content(self) -> Optional[str]:
        if not self.choices:
            return None
        return self.choices[0].message.text()


# ---------- Streaming ----------

class FunctionCallDelta(WireModel):
    name: Optional[str] = None
    arguments: Optional[str] = None


class ToolCallDelta(WireModel):
    index: int
    id: Optional[str] = None
    type: Optional[ToolType] = None
    function: Optional[FunctionCallDelta] = None


class ChoiceDelta(WireModel):
    role: Optional[MessageRole] = None
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCallDelta]] = None


class ChatCompletionChunkChoice(WireModel):
    index: int
    delta: ChoiceDelta = Field(default_factory=ChoiceDelta)
    finish_reason: Optional[FinishReason] = None
    logprobs: Optional[ChoiceLogprobs] = None


class ChatCompletionChunk(ApiResponse):
    id: str
    object: str = "chat.completion.chunk"
    created: int
    model: str
    choices: List[ChatCompletionChunkChoice] = Field(default_factory=list)
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    def delta_text(self) -> str:
        return "".join(c.delta.content or "" for c in self.choices)


JSONSchemaDefine.model_rebuild()
