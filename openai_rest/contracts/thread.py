from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import Field

from .common import ApiResponse, RequestModel
from .message import CreateMessageRequest


class CreateThreadRequest(RequestModel):
    messages: Optional[List[CreateMessageRequest]] = None
    tool_resources: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, str]] = None


class ModifyThreadRequest(RequestModel):
    tool_resources: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, str]] = None


class ThreadObject(ApiResponse):
    id: str
    object: str = "thread"
    created_at: int
    tool_resources: Optional[Dict[str, Any]] = None
    metadata: Optional[Dict[str, str]] = Field(default_factory=dict)
