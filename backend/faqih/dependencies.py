import logging
import uuid

from fastapi import HTTPException, status

from faqih.config import settings
from faqih.models.schemas import Fatwa
from faqih.services.dataset import get_fatwas
from faqih.services.semantic_fallback import SemanticFallback, get_semantic_fallback
from faqih.services.session import SessionState

logger = logging.getLogger(__name__)


class SessionStore:
    """In-process chat sessions; nothing survives a restart.

    Holds at most ``max_sessions`` sessions. Creating one past the cap
    evicts the oldest (dicts keep insertion order).
    """

    def __init__(self, max_sessions: int | None = None):
        self.max_sessions = max_sessions if max_sessions is not None else settings.max_sessions
        self._sessions: dict[str, SessionState] = {}

    def __len__(self) -> int:
        return len(self._sessions)

    def create(self) -> str:
        while len(self._sessions) >= self.max_sessions:
            evicted = next(iter(self._sessions))
            del self._sessions[evicted]
            logger.info("Evicted chat session %s (store full)", evicted)

        session_id = str(uuid.uuid4())
        self._sessions[session_id] = SessionState()
        logger.info("Created chat session %s", session_id)
        return session_id

    def get(self, session_id: str) -> SessionState:
        """Return the session state. Raises 404 if unknown."""
        state = self._sessions.get(session_id)
        if state is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Session not found",
            )
        return state

    def put(self, session_id: str, state: SessionState) -> None:
        # An evicted session is not brought back by a late write
        if session_id in self._sessions:
            self._sessions[session_id] = state


_store = SessionStore()


def get_session_store() -> SessionStore:
    return _store


def get_dataset() -> tuple[Fatwa, ...]:
    return get_fatwas()


def get_fallback() -> SemanticFallback | None:
    return get_semantic_fallback()
