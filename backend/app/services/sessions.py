# app/services/sessions.py

import logging
import uuid
from typing import Callable

from app.core.config import settings
from app.services.chat_completion import ChatCompletionClient
from app.services.conversation import ConversationOrchestrator
from app.services.losprecios import PriceLookupClient


def default_orchestrator() -> ConversationOrchestrator:
    return ConversationOrchestrator(ChatCompletionClient(), PriceLookupClient())


class SessionStore:
    """Conversaciones en memoria; se pierden al reiniciar el proceso.

    Guarda como máximo ``max_sessions``: al crear una sesión nueva por encima
    del límite se descarta la más antigua.
    """

    def __init__(
        self,
        factory: Callable[[], ConversationOrchestrator] = default_orchestrator,
        max_sessions: int | None = None,
    ) -> None:
        self._factory = factory
        self.max_sessions = max_sessions or settings.MAX_SESSIONS
        # dict conserva el orden de inserción: la primera clave es la más antigua
        self._sessions: dict[str, ConversationOrchestrator] = {}

    def create(self) -> tuple[str, ConversationOrchestrator]:
        session_id = uuid.uuid4().hex
        orchestrator = self._factory()
        self._sessions[session_id] = orchestrator
        while len(self._sessions) > self.max_sessions:
            oldest = next(iter(self._sessions))
            del self._sessions[oldest]
            logging.info("Evicted chat session %s (limit %d)", oldest, self.max_sessions)
        return session_id, orchestrator

    def get(self, session_id: str) -> ConversationOrchestrator | None:
        return self._sessions.get(session_id)

    def delete(self, session_id: str) -> bool:
        return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._sessions)


session_store = SessionStore()
