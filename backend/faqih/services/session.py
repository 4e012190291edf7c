"""Query session controller.

A session is an immutable ``SessionState``; each submission returns a new
state with exactly one user message and one model message appended. Empty
input and submissions while the session is busy leave the state untouched.
"""

import logging
import uuid
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from faqih.models.schemas import ChatMessage, Fatwa
from faqih.services.dataset import find_fatwa
from faqih.services.selector import select_top_matches
from faqih.services.semantic_fallback import SemanticFallback

logger = logging.getLogger(__name__)

NO_MATCH_TEXT = "عذرًا، لم أجد فتوى مطابقة لهذا السؤال في قاعدة البيانات الحالية."
SINGLE_MATCH_TEXT = "ها هي الفتوى عزيزي الطبيب"
MULTI_MATCH_TEXT = "ها هي {count} فتاوى مرتبطة بسؤالك من مصادر متعددة:"
ERROR_TEXT = "عذرًا، حدث خطأ غير متوقَّع."

Search = Callable[[str, Sequence[Fatwa]], list[Fatwa]]


@dataclass(frozen=True)
class SessionState:
    messages: tuple[ChatMessage, ...] = ()
    busy: bool = False


def _new_message(role: str, text: str, related_fatwa_ids: list[str] | None = None) -> ChatMessage:
    return ChatMessage(
        id=str(uuid.uuid4()),
        role=role,
        text=text,
        related_fatwa_ids=related_fatwa_ids or [],
    )


def _append(state: SessionState, message: ChatMessage) -> SessionState:
    return replace(state, messages=state.messages + (message,))


def reply_text(count: int) -> str:
    if count == 0:
        return NO_MATCH_TEXT
    if count == 1:
        return SINGLE_MATCH_TEXT
    return MULTI_MATCH_TEXT.format(count=count)


def _accepts(state: SessionState, text: str) -> bool:
    if not text or not text.strip():
        return False
    if state.busy:
        logger.info("Ignoring submission while a query is in flight")
        return False
    return True


def _reply(matches: list[Fatwa]) -> ChatMessage:
    return _new_message("model", reply_text(len(matches)), [f.id for f in matches])


def _error_reply() -> ChatMessage:
    return _new_message("model", ERROR_TEXT)


def submit_query(
    state: SessionState,
    text: str,
    fatwas: Sequence[Fatwa],
    search: Search = select_top_matches,
) -> SessionState:
    """Run one query against ``fatwas`` and return the new session state."""
    if not _accepts(state, text):
        return state

    state = _append(state, _new_message("user", text))

    try:
        reply = _reply(search(text, fatwas))
    except Exception:
        logger.exception("Matching failed for query %r", text)
        reply = _error_reply()

    return _append(state, reply)


async def submit_query_with_fallback(
    state: SessionState,
    text: str,
    fatwas: Sequence[Fatwa],
    fallback: SemanticFallback | None,
    search: Search = select_top_matches,
) -> SessionState:
    """Like ``submit_query``, consulting ``fallback`` when nothing matched locally."""
    if not _accepts(state, text):
        return state

    state = _append(state, _new_message("user", text))

    try:
        matches = search(text, fatwas)
    except Exception:
        logger.exception("Matching failed for query %r", text)
        return _append(state, _error_reply())

    if not matches and fallback is not None:
        fatwa = await _consult_fallback(fallback, text, fatwas)
        if fatwa is not None:
            matches = [fatwa]

    return _append(state, _reply(matches))


async def _consult_fallback(
    fallback: SemanticFallback, text: str, fatwas: Sequence[Fatwa]
) -> Fatwa | None:
    # A failing fallback only ever means "no match"
    try:
        match_id = await fallback.find_match(text, fatwas)
    except Exception:
        logger.warning("Semantic fallback failed for query %r", text, exc_info=True)
        return None
    return find_fatwa(tuple(fatwas), match_id) if match_id else None


def mark_busy(state: SessionState) -> SessionState:
    return replace(state, busy=True)


def mark_idle(state: SessionState) -> SessionState:
    return replace(state, busy=False)
