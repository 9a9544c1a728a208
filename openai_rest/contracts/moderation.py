from __future__ import annotations

from typing import List, Optional, Union

from pydantic import Field

from .common import ApiResponse, RequestModel, WireModel
from .models import ModerationModel


class CreateModerationRequest(RequestModel):
    input: Union[str, List[str]]
    model: Optional[ModerationModel] = None

    @classmethod
    def for_input(cls, text: str) -> "CreateModerationRequest":
        return cls(input=text)

    @classmethod
    def for_inputs(cls, texts: List[str]) -> "CreateModerationRequest":
        return cls(input=list(texts))


class ModerationCategories(WireModel):
    hate: bool = False
    hate_threatening: bool = Field(default=False, alias="hate/threatening")
    harassment: bool = False
    harassment_threatening: bool = Field(default=False, alias="harassment/threatening")
    self_harm: bool = Field(default=False, alias="self-harm")
    self_harm_intent: bool = Field(default=False, alias="self-harm/intent")
    self_harm_instructions: bool = Field(default=False, alias="self-harm/instructions")
    sexual: bool = False
    sexual_minors: bool = Field(default=False, alias="sexual/minors")
    violence: bool = False
    violence_graphic: bool = Field(default=False, alias="violence/graphic")


class ModerationCategoryScores(WireModel):
    hate: float = 0.0
    hate_threatening: float = Field(default=0.0, alias="hate/threatening")
    harassment: float = 0.0
    harassment_threatening: float = Field(default=0.0, alias="harassment/threatening")
    self_harm: float = Field(default=0.0, alias="self-harm")
    self_harm_intent: float = Field(default=0.0, alias="self-harm/intent")
    self_harm_instructions: float = Field(default=0.0, alias="self-harm/instructions")
    sexual: float = 0.0
    sexual_minors: float = Field(default=0.0, alias="sexual/minors")
    violence: float = 0.0
    violence_graphic: float = Field(default=0.0, alias="violence/graphic")


class ModerationResult(WireModel):
    flagged: bool
    categories: ModerationCategories
    category_scores: ModerationCategoryScores


class CreateModerationResponse(ApiResponse):
    id: str
    model: str
    results: List[ModerationResult]

    def flagged(self) -> bool:
        return any(r.flagged for r in self.results)
