"""Process-local session store."""
import threading
from typing import Any

from ..questionnaire.state import SessionState
from .base import BaseSessionStore


class InMemorySessionStore(BaseSessionStore):
    def __init__(self) -> None:
        self._sessions: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def load(self, session_id: str) -> SessionState | None:
        with self._lock:
            payload = self._sessions.get(session_id)
        if payload is None:
            return None
        return SessionState.from_dict(payload)

    def save(self, session_id: str, state: SessionState) -> None:
        payload = state.to_dict()
        with self._lock:
            self._sessions[session_id] = payload

    def delete(self, session_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
