# app/services/chat_completion.py

import asyncio
import logging
from typing import Any, Sequence

from openai import OpenAI, OpenAIError
from pydantic import ValidationError

from app.core.config import settings
from app.gpt.tools import search_prices_tool
from app.models import AssistantMessage, Message, ToolCall


class ChatCompletionError(Exception):
    """Fallo de transporte, de API o de formato en ``/v1/chat/completions``."""


def _to_tool_calls(raw_calls: Any) -> list[ToolCall] | None:
    if not raw_calls:
        return None
    calls = []
    for raw in raw_calls:
        function = getattr(raw, "function", None)
        if function is None:
            # tool calls no-funcionales (p.ej. "custom") no aplican aquí
            continue
        calls.append(
            ToolCall(
                id=getattr(raw, "id", None),
                name=function.name,
                arguments=function.arguments or "{}",
            )
        )
    return calls or None


class ChatCompletionClient:
    """Cliente del endpoint OpenAI-compatible de Mistral.

    Usa el SDK síncrono de ``openai`` en un hilo para no bloquear el event loop.
    """

    def __init__(
        self,
        client: OpenAI | None = None,
        model: str | None = None,
    ) -> None:
        self.client = client or OpenAI(
            api_key=settings.MISTRAL_API_KEY,
            base_url=settings.LLM_BASE_URL,
            max_retries=0,
        )
        self.model = model or settings.LLM_MODEL

    async def complete(self, history: Sequence[Message]) -> AssistantMessage:
        messages = [msg.to_api() for msg in history]
        try:
            rsp = await asyncio.to_thread(
                self.client.chat.completions.create,
                model=self.model,
                messages=messages,
                tools=[search_prices_tool],
            )
            message = rsp.choices[0].message
            reply = AssistantMessage(
                content=message.content or "",
                tool_calls=_to_tool_calls(getattr(message, "tool_calls", None)),
            )
        except OpenAIError as exc:
            raise ChatCompletionError(str(exc)) from exc
        except (IndexError, AttributeError, TypeError, ValidationError) as exc:
            raise ChatCompletionError(f"Unexpected completion payload: {exc!r}") from exc

        logging.info(
            "Completion reply: %d chars, tool_calls=%s",
            len(reply.content),
            bool(reply.tool_calls),
        )
        return reply
