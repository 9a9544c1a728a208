from __future__ import annotations

from typing import Dict, List, Optional, Union

from pydantic import Field

from .chat_completion import FinishReason
from .common import ApiResponse, RequestModel, Usage, WireModel
from .models import CompletionModel


class CompletionRequest(RequestModel):
    model: CompletionModel
    prompt: Union[str, List[str]]
    suffix: Optional[str] = None
    max_tokens: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    n: Optional[int] = None
    stream: Optional[bool] = None
    logprobs: Optional[int] = None
    echo: Optional[bool] = None
    stop: Optional[Union[str, List[str]]] = None
    presence_penalty: Optional[float] = None
    frequency_penalty: Optional[float] = None
    best_of: Optional[int] = None
    logit_bias: Optional[Dict[str, int]] = None
    seed: Optional[int] = None
    user: Optional[str] = None

    @classmethod
    def for_prompt(cls, model: Union[CompletionModel, str], prompt: str) -> "CompletionRequest":
        return cls(model=model, prompt=prompt)

    @classmethod
    def for_prompts(cls, model: Union[CompletionModel, str], prompts: List[str]) -> "CompletionRequest":
        return cls(model=model, prompt=list(prompts))


class LogprobResult(WireModel):
    tokens: List[str] = Field(default_factory=list)
    token_logprobs: List[Optional[float]] = Field(default_factory=list)
    top_logprobs: List[Optional[Dict[str, float]]] = Field(default_factory=list)
    text_offset: List[int] = Field(default_factory=list)


class CompletionChoice(WireModel):
    text: str
    index: int
    finish_reason: Optional[FinishReason] = None
    logprobs: Optional[LogprobResult] = None


class CompletionResponse(ApiResponse):
    id: str
    object: str = "text_completion"
    created: int
    model: str
    choices: List[CompletionChoice]
    usage: Optional[Usage] = None
    system_fingerprint: Optional[str] = None

    def first_text(self) -> Optional[str]:
        return self.choices[0].text if self.choices else None
