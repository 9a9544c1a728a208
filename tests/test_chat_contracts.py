import json

import pytest
from pydantic import ValidationError

from openai_rest.contracts import (
    ChatCompletionChunk,
    ChatCompletionMessage,
    ChatCompletionRequest,
    ChatCompletionResponse,
    ChatModel,
    ContentPartType,
    FinishReason,
    FunctionParameters,
    JSONSchemaDefine,
    JSONSchemaType,
    MessageRole,
    NamedToolChoice,
    Tool,
    ToolChoiceMode,
)

CHAT_FIXTURE = {
    "id": "chatcmpl-9abc",
    "object": "chat.completion",
    "created": 1715000000,
    "model": "gpt-4o-2024-05-13",
    "system_fingerprint": "fp_3aa7262c27",
    "choices": [
        {
            "index": 0,
            "message": {
                "role": "assistant",
                "content": None,
                "tool_calls": [
                    {
                        "id": "call_1",
                        "type": "function",
                        "function": {"name": "get_coin_price", "arguments": "{\"coin\": \"BTC\"}"},
                    }
                ],
                "refusal": None,
            },
            "logprobs": None,
            "finish_reason": "tool_calls",
        }
    ],
    "usage": {"prompt_tokens": 82, "completion_tokens": 17, "total_tokens": 99},
}


def test_bitcoin_request_serializes_exactly():
    req = ChatCompletionRequest.for_message(ChatModel.GPT_4O, ChatCompletionMessage.user("What is bitcoin?"))
    body = req.to_wire()
    assert body == {"model": "gpt-4o", "messages": [{"role": "user", "content": "What is bitcoin?"}]}
    assert json.loads(json.dumps(body)) == body


def test_plain_string_model_is_accepted():
    req = ChatCompletionRequest.from_prompt("hi", model="gpt-4o-mini")
    assert req.model is ChatModel.GPT_4O_MINI
    custom = ChatCompletionRequest.from_prompt("hi", model="ft:gpt-4o:acme::abc")
    assert custom.model.is_unknown
    assert custom.to_wire()["model"] == "ft:gpt-4o:acme::abc"


def test_from_prompt_defaults_to_gpt_4o():
    assert ChatCompletionRequest.from_prompt("hello").to_wire()["model"] == "gpt-4o"


def test_for_messages_keeps_order():
    msgs = [ChatCompletionMessage.system("be brief"), ChatCompletionMessage.user("hi")]
    body = ChatCompletionRequest.for_messages("gpt-4", msgs).to_wire()
    assert [m["role"] for m in body["messages"]] == ["system", "user"]


def test_tool_choice_mode_and_named_function():
    weather = Tool.of_function(
        "get_coin_price",
        "Get the price of a cryptocurrency",
        FunctionParameters(
            properties={"coin": JSONSchemaDefine(type=JSONSchemaType.STRING, enum_values=["BTC", "ETH"])},
            required=["coin"],
        ),
    )
    req = ChatCompletionRequest.from_prompt("price?").with_options(tools=[weather], tool_choice="auto")
    body = req.to_wire()
    assert body["tool_choice"] == "auto"
    assert body["tools"][0]["function"]["parameters"] == {
        "type": "object",
        "properties": {"coin": {"type": "string", "enum": ["BTC", "ETH"]}},
        "required": ["coin"],
    }

    named = req.with_options(tool_choice=NamedToolChoice.function_named("get_coin_price"))
    assert named.to_wire()["tool_choice"] == {"type": "function", "function": {"name": "get_coin_price"}}
    assert req.with_options(tool_choice="required").tool_choice is ToolChoiceMode.REQUIRED


def test_vision_message_uses_content_parts():
    msg = ChatCompletionMessage.user_with_images("What is in this image?", ["https://example.com/cat.png"])
    wire = msg.to_wire()
    assert wire["content"][0] == {"type": "text", "text": "What is in this image?"}
    assert wire["content"][1] == {"type": "image_url", "image_url": {"url": "https://example.com/cat.png"}}
    assert msg.content[1].type is ContentPartType.IMAGE_URL
    assert msg.text() == "What is in this image?"


def test_tool_result_message():
    wire = ChatCompletionMessage.tool("call_1", "{\"price\": 1}").to_wire()
    assert wire == {"role": "tool", "content": "{\"price\": 1}", "tool_call_id": "call_1"}


def test_response_fixture_decodes_and_round_trips():
    resp = ChatCompletionResponse.model_validate(CHAT_FIXTURE)
    choice = resp.choices[0]
    assert choice.finish_reason is FinishReason.TOOL_CALLS
    assert choice.message.role is MessageRole.ASSISTANT
    assert choice.message.tool_calls[0].function.name == "get_coin_price"
    assert resp.first_content() is None
    assert resp.usage.total_tokens == 99

    again = ChatCompletionResponse.model_validate(resp.to_wire())
    assert again == resp


def test_unknown_finish_reason_survives():
    data = json.loads(json.dumps(CHAT_FIXTURE))
    data["choices"][0]["finish_reason"] = "guardrail"
    resp = ChatCompletionResponse.model_validate(data)
    assert resp.choices[0].finish_reason.is_unknown
    assert resp.to_wire()["choices"][0]["finish_reason"] == "guardrail"


def test_missing_required_field_is_rejected():
    data = json.loads(json.dumps(CHAT_FIXTURE))
    del data["choices"]
    with pytest.raises(ValidationError):
        ChatCompletionResponse.model_validate(data)


def test_chunk_delta_text():
    chunk = ChatCompletionChunk.model_validate({
        "id": "c1", "object": "chat.completion.chunk", "created": 1, "model": "gpt-4o",
        "choices": [{"index": 0, "delta": {"content": "Bit"}, "finish_reason": None}],
    })
    assert chunk.delta_text() == "Bit"
    assert chunk.choices[0].delta.role is None
