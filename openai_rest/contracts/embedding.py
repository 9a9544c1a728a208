from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field

from .common import ApiResponse, RequestModel, WireEnum, WireModel
from .models import EmbeddingModel


class EncodingFormat(WireEnum):
    FLOAT = "float"
    BASE64 = "base64"


class EmbeddingRequest(RequestModel):
    model: EmbeddingModel
    input: Union[str, List[str], List[int], List[List[int]]]
    encoding_format: Optional[EncodingFormat] = None
    dimensions: Optional[int] = None
    user: Optional[str] = None

    @classmethod
    def for_input(cls, model: Union[EmbeddingModel, str], text: str) -> "EmbeddingRequest":
        return cls(model=model, input=text)

    @classmethod
    def for_inputs(cls, model: Union[EmbeddingModel, str], texts: List[str]) -> "EmbeddingRequest":
        return cls(model=model, input=list(texts))


class EmbeddingData(WireModel):
    object: str = "embedding"
    index: int
    # base64 string when encoding_format is base64
    embedding: Union[List[float], str]


class EmbeddingUsage(WireModel):
    prompt_tokens: int = 0
    total_tokens: int = 0


class EmbeddingResponse(ApiResponse):
    object: str = "list"
    data: List[EmbeddingData] = Field(default_factory=list)
    model: str
    usage: Optional[EmbeddingUsage] = None

    def vectors(self) -> List[List[float]]:
        return [d.embedding for d in sorted(self.data, key=lambda d: d.index) if isinstance(d.embedding, list)]
