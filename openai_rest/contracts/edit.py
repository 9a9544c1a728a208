from __future__ import annotations

from typing import List, Optional, Union

from .common import ApiResponse, RequestModel, Usage, WireModel
from .models import EditModel


class EditRequest(RequestModel):
    model: EditModel
    instruction: str
    input: Optional[str] = None
    n: Optional[int] = None
    temperature: Optional[float] = None
    top_p: Optional[float] = None

    @classmethod
    def for_instruction(cls, model: Union[EditModel, str], instruction: str,
                        input: Optional[str] = None) -> "EditRequest":
        return cls(model=model, instruction=instruction, input=input)


class EditChoice(WireModel):
    text: str
    index: int


class EditResponse(ApiResponse):
    object: str = "edit"
    created: int
    usage: Optional[Usage] = None
    choices: List[EditChoice]
