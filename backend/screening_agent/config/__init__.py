"""Configuration module for the screening agent."""
from .settings import (
    get_services,
    get_session_store,
    get_controller,
    reset_services,
)

__all__ = [
    "get_services",
    "get_session_store",
    "get_controller",
    "reset_services",
]
