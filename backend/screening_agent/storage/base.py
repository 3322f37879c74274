"""Base class for session persistence backends."""
import abc

from ..questionnaire.state import SessionState


class BaseSessionStore(abc.ABC):
    """Abstract base class for session state persistence.

    Backends hand out independent copies: mutating a loaded state has no
    effect until it is saved.
    """

    @abc.abstractmethod
    def load(self, session_id: str) -> SessionState | None:
        """
        Load the state of a session.

        :param session_id: Conversation identifier
        :return: Stored state, or None when no session is active
        """
        pass

    @abc.abstractmethod
    def save(self, session_id: str, state: SessionState) -> None:
        """Persist the state of a session, replacing any previous state."""
        pass

    @abc.abstractmethod
    def delete(self, session_id: str) -> bool:
        """Drop a session. Returns True if a session was removed."""
        pass
