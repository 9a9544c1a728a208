import pytest
from pydantic import BaseModel, ValidationError

from openai_rest.contracts import (
    ChatModel,
    DeletionStatus,
    EmbeddingRequest,
    FinishReason,
    ListPage,
    ListQuery,
    MessageRole,
    RunStatus,
    SortOrder,
    Usage,
)
from openai_rest.contracts.common import WireEnum
from openai_rest.contracts import assistant, audio, chat_completion, embedding, file, fine_tuning, image, message, models, run


def _all_wire_enums():
    seen = []
    for mod in (models, chat_completion, embedding, image, audio, file, fine_tuning, assistant, message, run):
        for value in vars(mod).values():
            if isinstance(value, type) and issubclass(value, WireEnum) and value is not WireEnum and value not in seen:
                seen.append(value)
    seen.extend([MessageRole, SortOrder])
    return seen


@pytest.mark.parametrize("enum_cls", _all_wire_enums(), ids=lambda c: c.__name__)
def test_every_enum_decodes_unknown_values(enum_cls):
    class Holder(BaseModel):
        value: enum_cls

    h = Holder.model_validate({"value": "brand-new-value-2031"})
    assert h.value.is_unknown
    assert h.value.value == "brand-new-value-2031"
    assert h.model_dump(mode="json") == {"value": "brand-new-value-2031"}


def test_known_enum_values_keep_their_member():
    assert ChatModel("gpt-4o") is ChatModel.GPT_4O
    assert not ChatModel.GPT_4O.is_unknown
    assert str(FinishReason.TOOL_CALLS) == "tool_calls"
    assert MessageRole.USER == "user"


def test_unknown_enum_compares_as_raw_string():
    v = RunStatus("paused")
    assert v.name == "UNKNOWN"
    assert v == "paused"
    assert v != RunStatus.QUEUED


def test_enum_rejects_non_strings():
    class Holder(BaseModel):
        role: MessageRole

    with pytest.raises(ValidationError):
        Holder(role=3)


def test_usage_defaults_to_zero():
    assert Usage.model_validate({}).total_tokens == 0
    u = Usage.model_validate({"prompt_tokens": 3, "completion_tokens": 4, "total_tokens": 7, "reasoning": 1})
    assert (u.prompt_tokens, u.completion_tokens, u.total_tokens) == (3, 4, 7)


def test_required_only_request_omits_optional_fields():
    req = EmbeddingRequest.for_input("text-embedding-3-small", "hello")
    assert req.to_wire() == {"model": "text-embedding-3-small", "input": "hello"}


def test_with_options_returns_new_request():
    req = EmbeddingRequest.for_inputs("text-embedding-3-small", ["a", "b"])
    tuned = req.with_options(dimensions=256, encoding_format="float")
    assert req.dimensions is None
    assert tuned.to_wire() == {
        "model": "text-embedding-3-small",
        "input": ["a", "b"],
        "dimensions": 256,
        "encoding_format": "float",
    }


def test_request_accepts_and_sends_unmodelled_fields():
    req = EmbeddingRequest.for_input("text-embedding-3-small", "x").with_options(service_tier="flex")
    assert req.to_wire()["service_tier"] == "flex"


def test_response_headers_are_not_part_of_payload():
    d = DeletionStatus.model_validate({"id": "asst_1", "object": "assistant.deleted", "deleted": True})
    d.headers = {"x-request-id": "req_1"}
    assert d.request_id == "req_1"
    assert d.to_wire() == {"id": "asst_1", "object": "assistant.deleted", "deleted": True}


def test_list_page_is_generic_and_tolerant():
    page = ListPage[DeletionStatus].model_validate({
        "object": "list",
        "data": [{"id": "a", "object": "x", "deleted": False}],
        "has_more": True,
        "next_page": "ignored",
    })
    assert page.data[0].id == "a"
    assert page.has_more is True
    assert page.first_id is None


def test_list_query_params_skip_unset():
    assert ListQuery().to_params() == {}
    assert ListQuery(limit=5, order="desc", after="a_1").to_params() == {"limit": 5, "order": "desc", "after": "a_1"}
