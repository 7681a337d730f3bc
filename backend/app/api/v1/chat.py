# app/api/v1/chat.py

import logging
from typing import List, Literal

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel

from app.services.conversation import ConversationBusyError, ConversationOrchestrator
from app.services.sessions import SessionStore, session_store

router = APIRouter(prefix="/chat")


class MessageIn(BaseModel):
    content: str


class MessageOut(BaseModel):
    role: Literal["user", "assistant", "tool"]
    content: str
    is_loading: bool = False


class TranscriptOut(BaseModel):
    session_id: str
    busy: bool
    messages: List[MessageOut]


def get_session_store() -> SessionStore:
    return session_store


def _transcript(session_id: str, orchestrator: ConversationOrchestrator) -> TranscriptOut:
    return TranscriptOut(
        session_id=session_id,
        busy=orchestrator.busy,
        messages=[
            MessageOut(
                role=msg.role,
                content=msg.content,
                is_loading=getattr(msg, "is_loading", False),
            )
            for msg in orchestrator.visible_transcript()
        ],
    )


def _get_or_404(store: SessionStore, session_id: str) -> ConversationOrchestrator:
    orchestrator = store.get(session_id)
    if orchestrator is None:
        raise HTTPException(status_code=404, detail="Sesión no encontrada")
    return orchestrator


@router.post("/sessions", response_model=TranscriptOut, status_code=status.HTTP_201_CREATED)
def create_session(store: SessionStore = Depends(get_session_store)):
    session_id, orchestrator = store.create()
    logging.info("New chat session %s", session_id)
    return _transcript(session_id, orchestrator)


@router.get("/sessions/{session_id}", response_model=TranscriptOut)
def read_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    return _transcript(session_id, _get_or_404(store, session_id))


@router.post("/sessions/{session_id}/messages", response_model=TranscriptOut)
async def send_message(
    session_id: str,
    body: MessageIn,
    store: SessionStore = Depends(get_session_store),
):
    """
    Recibe {"content": "<pregunta>"} y ejecuta un ciclo completo.
    Devuelve el transcript visible (sin el mensaje de sistema).
    """
    orchestrator = _get_or_404(store, session_id)
    try:
        await orchestrator.submit(body.content)
    except ConversationBusyError:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Ya hay una consulta en curso para esta sesión",
        )
    return _transcript(session_id, orchestrator)


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str, store: SessionStore = Depends(get_session_store)):
    if not store.delete(session_id):
        raise HTTPException(status_code=404, detail="Sesión no encontrada")
    logging.info("Deleted chat session %s", session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
