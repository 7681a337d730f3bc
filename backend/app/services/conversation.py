# app/services/conversation.py

import enum
import json
import logging
from typing import Protocol, Sequence

from pydantic import ValidationError

from app.gpt import prompts
from app.gpt.tools import SEARCH_PRICES_TOOL_NAME
from app.models import (
    AssistantMessage,
    Message,
    PriceSearchResult,
    SearchPricesArgs,
    SystemMessage,
    ToolCall,
    ToolMessage,
    UserMessage,
)
from app.services.chat_completion import ChatCompletionError
from app.services.price_format import format_results


class ConversationState(str, enum.Enum):
    IDLE = "idle"
    AWAITING_FIRST_COMPLETION = "awaiting_first_completion"
    AWAITING_TOOL_RESULT = "awaiting_tool_result"
    AWAITING_SECOND_COMPLETION = "awaiting_second_completion"


class ConversationBusyError(Exception):
    """Ya hay un ciclo en curso; la conversación sólo acepta uno a la vez."""


class ToolCallError(ValueError):
    """El modelo pidió una tool desconocida o con argumentos inválidos."""


class CompletionClient(Protocol):
    async def complete(self, history: Sequence[Message]) -> AssistantMessage: ...


class PriceClient(Protocol):
    async def search(self, term: str, city_id: int | None = None) -> PriceSearchResult: ...


def parse_tool_call(call: ToolCall) -> SearchPricesArgs:
    if call.name != SEARCH_PRICES_TOOL_NAME:
        raise ToolCallError(f"Unknown tool {call.name!r}")
    try:
        args = json.loads(call.arguments or "{}")
        return SearchPricesArgs.model_validate(args)
    except (ValueError, ValidationError) as exc:
        raise ToolCallError(f"Invalid arguments for {call.name}: {call.arguments!r}") from exc


class ConversationOrchestrator:
    """Dueño del transcript y de la máquina de estados de un ciclo.

    Cada mutación reemplaza la tupla completa del transcript, así que un
    lector nunca ve una lista a medio actualizar.
    """

    def __init__(self, chat_client: CompletionClient, price_client: PriceClient) -> None:
        self.chat_client = chat_client
        self.price_client = price_client
        self.state = ConversationState.IDLE
        self._transcript: tuple[Message, ...] = (
            SystemMessage(content=prompts.SYSTEM_PROMPT),
            AssistantMessage(content=prompts.GREETING),
        )

    # ───────────────────────────── lectura ─────────────────────────────
    @property
    def busy(self) -> bool:
        return self.state is not ConversationState.IDLE

    def current_transcript(self) -> tuple[Message, ...]:
        return self._transcript

    def visible_transcript(self) -> tuple[Message, ...]:
        return tuple(msg for msg in self._transcript if msg.role != "system")

    def _history(self) -> list[Message]:
        return [
            msg
            for msg in self._transcript
            if not (isinstance(msg, AssistantMessage) and msg.is_loading)
        ]

    # ──────────────────────────── mutaciones ───────────────────────────
    def _append(self, *messages: Message) -> None:
        self._transcript = self._transcript + messages

    def _replace_loading(self, *messages: Message) -> None:
        last = self._transcript[-1]
        if isinstance(last, AssistantMessage) and last.is_loading:
            self._transcript = self._transcript[:-1] + messages
        else:
            self._transcript = self._transcript + messages

    # ───────────────────────────── ciclo ───────────────────────────────
    async def submit(self, text: str) -> None:
        text = (text or "").strip()
        if not text:
            return
        if self.busy:
            raise ConversationBusyError("A message is already being processed")

        self._append(UserMessage(content=text))
        self.state = ConversationState.AWAITING_FIRST_COMPLETION
        try:
            await self._run_cycle()
        except ChatCompletionError:
            logging.exception("Error in message flow (state=%s)", self.state.value)
            self._replace_loading(AssistantMessage(content=prompts.ERROR_TEXT))
        finally:
            self.state = ConversationState.IDLE

    async def _run_cycle(self) -> None:
        history = self._history()
        self._append(AssistantMessage(content=prompts.THINKING_TEXT, is_loading=True))

        # — 1ª llamada —
        reply = await self.chat_client.complete(history)
        call = reply.first_tool_call
        if call is None:
            self._replace_loading(reply)
            return

        try:
            args = parse_tool_call(call)
        except ToolCallError:
            logging.warning("Ignoring unusable tool call: %s", call)
            self._replace_loading(AssistantMessage(content=prompts.INVALID_TOOL_CALL_TEXT))
            return

        self._replace_loading(reply)
        self.state = ConversationState.AWAITING_TOOL_RESULT
        self._append(AssistantMessage(content=prompts.SEARCHING_TEXT, is_loading=True))

        result = await self.price_client.search(args.term, args.city_id)
        tool_message = ToolMessage(
            content=format_results(result) + prompts.TOOL_RESULT_SUFFIX,
            tool_call_id=call.id,
        )
        self._replace_loading(tool_message)

        # — 2ª llamada —
        self.state = ConversationState.AWAITING_SECOND_COMPLETION
        final = await self.chat_client.complete(self._history())
        self._append(AssistantMessage(content=final.content))
