from __future__ import annotations

import enum
from pathlib import Path
from typing import Any, Dict, Generic, List, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import core_schema

T = TypeVar("T")


class WireEnum(str, enum.Enum):
    """String enum that tolerates values added by the provider after release.

    Decoding an unrecognised string yields a pseudo-member named ``UNKNOWN``
    whose value is the raw string, so it serializes back unchanged.
    """

    @classmethod
    def _missing_(cls, value: object):
        if not isinstance(value, str):
            return None
        raw = value.value if isinstance(value, enum.Enum) else str.__str__(value)
        member = str.__new__(cls, raw)
        member._name_ = "UNKNOWN"
        member._value_ = raw
        return member

    @property
    def is_unknown(self) -> bool:
        return self._name_ == "UNKNOWN"

    def __str__(self) -> str:
        return self._value_

    @classmethod
    def _validate(cls, value: Any) -> "WireEnum":
        if isinstance(value, cls):
            return value
        if isinstance(value, enum.Enum):
            value = value.value
        if isinstance(value, str):
            return cls(value)
        raise ValueError(f"{cls.__name__} expects a string, got {type(value).__name__}")

    @classmethod
    def __get_pydantic_core_schema__(cls, source, handler):
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(lambda v: v._value_),
        )

    @classmethod
    def __get_pydantic_json_schema__(cls, schema, handler):
        return {"type": "string", "examples": [m.value for m in cls]}


class WireModel(BaseModel):
    """Base for anything decoded from a provider response. Unknown keys are dropped."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True, protected_namespaces=())

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class RequestModel(WireModel):
    """Base for request bodies.

    ``None`` means "not set" and never reaches the wire. Unknown keyword
    fields are kept and sent as-is.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True, protected_namespaces=())

    def with_options(self, **fields: Any):
        data = dict(self)
        data.update(fields)
        return type(self).model_validate(data)


class ApiResponse(WireModel):
    # filled by the client from the HTTP response
    headers: Dict[str, str] = Field(default_factory=dict, exclude=True)

    @property
    def request_id(self) -> Optional[str]:
        return self.headers.get("x-request-id")


class TextResponse(ApiResponse):
    text: str


class BinaryResponse(ApiResponse):
    content: bytes = Field(default=b"", repr=False)
    content_type: Optional[str] = None

    def write_to(self, path: Union[str, Path]) -> Path:
        p = Path(path)
        p.write_bytes(self.content)
        return p


class MessageRole(WireEnum):
    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    FUNCTION = "function"
    TOOL = "tool"


class SortOrder(WireEnum):
    ASC = "asc"
    DESC = "desc"


class Usage(WireModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class DeletionStatus(ApiResponse):
    id: str
    object: str
    deleted: bool


class ListPage(ApiResponse, Generic[T]):
    object: str = "list"
    data: List[T] = Field(default_factory=list)
    first_id: Optional[str] = None
    last_id: Optional[str] = None
    has_more: Optional[bool] = None


class ListQuery(WireModel):
    """Cursor pagination parameters shared by the list endpoints."""
    limit: Optional[int] = None
    order: Optional[SortOrder] = None
    after: Optional[str] = None
    before: Optional[str] = None

    def to_params(self) -> Dict[str, Any]:
        return self.to_wire()
