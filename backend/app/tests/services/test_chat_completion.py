import asyncio
from unittest.mock import MagicMock

import httpx
import openai
import pytest

from app.gpt.tools import search_prices_tool
from app.models import AssistantMessage, SystemMessage, ToolCall, ToolMessage, UserMessage
from app.services.chat_completion import ChatCompletionClient, ChatCompletionError


def _client_returning(message: MagicMock) -> MagicMock:
    mock_resp = MagicMock()
    mock_choice = MagicMock()
    mock_choice.message = message
    mock_resp.choices = [mock_choice]
    client_mock = MagicMock()
    client_mock.chat.completions.create.return_value = mock_resp
    return client_mock


def test_complete_sends_filtered_history_and_single_tool() -> None:
    message = MagicMock(content="Hola", tool_calls=None)
    client_mock = _client_returning(message)
    history = [
        SystemMessage(content="persona"),
        AssistantMessage(
            content="",
            tool_calls=[ToolCall(id="c1", name="search_prices", arguments='{"term": "arroz"}')],
        ),
        ToolMessage(content="resultado", tool_call_id="c1"),
        UserMessage(content="¿y en Cali?"),
    ]

    result = asyncio.run(ChatCompletionClient(client=client_mock, model="m").complete(history))

    assert result == AssistantMessage(content="Hola")
    kwargs = client_mock.chat.completions.create.call_args.kwargs
    assert kwargs["model"] == "m"
    assert kwargs["tools"] == [search_prices_tool]
    assert kwargs["messages"] == [
        {"role": "system", "content": "persona"},
        {
            "role": "assistant",
            "content": "",
            "tool_calls": [
                {
                    "id": "c1",
                    "type": "function",
                    "function": {"name": "search_prices", "arguments": '{"term": "arroz"}'},
                }
            ],
        },
        {"role": "tool", "content": "resultado", "tool_call_id": "c1"},
        {"role": "user", "content": "¿y en Cali?"},
    ]
    assert all("is_loading" not in m for m in kwargs["messages"])


def test_complete_returns_tool_calls_and_empty_content() -> None:
    raw_call = MagicMock(id="call_9")
    raw_call.function.name = "search_prices"
    raw_call.function.arguments = '{"term": "leche", "city_id": 1}'
    message = MagicMock(content=None, tool_calls=[raw_call])
    client_mock = _client_returning(message)

    result = asyncio.run(
        ChatCompletionClient(client=client_mock).complete([UserMessage(content="leche")])
    )

    assert result.content == ""
    assert result.tool_calls == [
        ToolCall(id="call_9", name="search_prices", arguments='{"term": "leche", "city_id": 1}')
    ]


def test_api_error_propagates_as_chat_completion_error() -> None:
    client_mock = MagicMock()
    request = httpx.Request("POST", "https://api.mistral.ai/v1/chat/completions")
    client_mock.chat.completions.create.side_effect = openai.APIConnectionError(request=request)

    with pytest.raises(ChatCompletionError):
        asyncio.run(ChatCompletionClient(client=client_mock).complete([UserMessage(content="x")]))


def test_empty_choices_is_chat_completion_error() -> None:
    client_mock = MagicMock()
    client_mock.chat.completions.create.return_value = MagicMock(choices=[])

    with pytest.raises(ChatCompletionError):
        asyncio.run(ChatCompletionClient(client=client_mock).complete([UserMessage(content="x")]))


def test_tool_call_without_name_is_chat_completion_error() -> None:
    raw_call = MagicMock(id="call_1")
    raw_call.function.name = None
    raw_call.function.arguments = "{}"
    client_mock = _client_returning(MagicMock(content="", tool_calls=[raw_call]))

    with pytest.raises(ChatCompletionError):
        asyncio.run(ChatCompletionClient(client=client_mock).complete([UserMessage(content="x")]))
