from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import Field

from .common import ApiResponse, MessageRole, RequestModel, WireEnum, WireModel


class MessageContentType(WireEnum):
    TEXT = "text"
    IMAGE_FILE = "image_file"
    IMAGE_URL = "image_url"


class MessageAttachment(WireModel):
    file_id: str
    tools: Optional[List[Dict[str, Any]]] = None


class CreateMessageRequest(RequestModel):
    role: MessageRole
    content: Union[str, List[Dict[str, Any]]]
    attachments: Optional[List[MessageAttachment]] = None
    # v1 field
    file_ids: Optional[List[str]] = None
    metadata: Optional[Dict[str, str]] = None

    @classmethod
    def user(cls, content: str) -> "CreateMessageRequest":
        return cls(role=MessageRole.USER, content=content)


class ModifyMessageRequest(RequestModel):
    metadata: Optional[Dict[str, str]] = None


class TextAnnotation(WireModel):
    type: str
    text: str
    start_index: Optional[int] = None
    end_index: Optional[int] = None
    file_citation: Optional[Dict[str, Any]] = None
    file_path: Optional[Dict[str, Any]] = None


class ContentText(WireModel):
    value: str
    annotations: List[TextAnnotation] = Field(default_factory=list)


class ImageFile(WireModel):
    file_id: str
    detail: Optional[str] = None


class MessageContent(WireModel):
    type: MessageContentType
    text: Optional[ContentText] = None
    image_file: Optional[ImageFile] = None
    image_url: Optional[Dict[str, Any]] = None


class MessageObject(ApiResponse):
    id: str
    object: str = "thread.message"
    created_at: int
    thread_id: str
    role: MessageRole
    content: List[MessageContent] = Field(default_factory=list)
    assistant_id: Optional[str] = None
    run_id: Optional[str] = None
    status: Optional[str] = None
    attachments: Optional[List[MessageAttachment]] = None
    file_ids: Optional[List[str]] = None
    metadata: Optional[Dict[str, str]] = Field(default_factory=dict)

    def text(self) -> str:
        return "".join(c.text.value for c in self.content if c.text is not None)


class MessageFileObject(ApiResponse):
    id: str
    object: str = "thread.message.file"
    created_at: int
    message_id: str
