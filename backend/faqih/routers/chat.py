import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status

from faqih.config import settings
from faqih.dependencies import SessionStore, get_dataset, get_fallback, get_session_store
from faqih.middleware.rate_limit import limiter
from faqih.models.schemas import (
    ChatSendRequest,
    ChatSendResponse,
    ChatSessionResponse,
    Fatwa,
)
from faqih.services.dataset import find_fatwa
from faqih.services.semantic_fallback import SemanticFallback
from faqih.services.session import mark_busy, mark_idle, submit_query_with_fallback

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chat", tags=["chat"])


@router.post("/sessions", response_model=ChatSessionResponse, status_code=201)
@limiter.limit(settings.session_rate_limit)
async def create_session(
    request: Request,
    store: SessionStore = Depends(get_session_store),
):
    """Create a new empty chat session."""
    session_id = store.create()
    return ChatSessionResponse(id=session_id, busy=False, messages=[])


@router.get("/sessions/{session_id}", response_model=ChatSessionResponse)
async def get_session_detail(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
):
    """Get a session with all its messages."""
    state = store.get(session_id)
    return ChatSessionResponse(id=session_id, busy=state.busy, messages=list(state.messages))


@router.post("/sessions/{session_id}/messages", response_model=ChatSendResponse)
@limiter.limit(settings.chat_rate_limit)
async def send_message(
    request: Request,
    session_id: str,
    body: ChatSendRequest,
    store: SessionStore = Depends(get_session_store),
    fatwas: tuple[Fatwa, ...] = Depends(get_dataset),
    fallback: SemanticFallback | None = Depends(get_fallback),
):
    """Send a query -> local matching (-> remote fallback) -> model reply."""
    state = store.get(session_id)
    if state.busy:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="A query is already in progress for this session",
        )

    store.put(session_id, mark_busy(state))
    new_state = state
    try:
        new_state = await submit_query_with_fallback(state, body.message, fatwas, fallback)
    finally:
        store.put(session_id, mark_idle(new_state))

    appended = list(new_state.messages[len(state.messages):])
    related: list[Fatwa] = []
    for message in appended:
        for fatwa_id in message.related_fatwa_ids:
            fatwa = find_fatwa(fatwas, fatwa_id)
            if fatwa is not None:
                related.append(fatwa)

    logger.info(
        "Session %s: query %r -> %d fatwas",
        session_id, body.message, len(related),
    )
    return ChatSendResponse(session_id=session_id, messages=appended, fatwas=related)
