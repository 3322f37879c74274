"""Session persistence backends."""
from .base import BaseSessionStore
from .memory import InMemorySessionStore
from .file import JSONFileSessionStore

__all__ = [
    "BaseSessionStore",
    "InMemorySessionStore",
    "JSONFileSessionStore",
]
