"""Configuration and service factory for the screening agent."""
import os
from typing import Dict, Any

from ..core.logging_utils import log_event
from ..questionnaire import SessionController, StepSequencer
from ..storage import BaseSessionStore, InMemorySessionStore, JSONFileSessionStore


# Singleton service instances
_services: Dict[str, Any] = None
_SUPPORTED_SESSION_STORES = ("memory", "file")
_DEFAULT_SESSION_DIR = os.path.join("data", "sessions")


def _normalize_choice(env_name: str, supported: tuple[str, ...], default: str) -> str:
    raw = os.environ.get(env_name, default).strip().lower()
    if raw in supported:
        return raw
    supported_values = ", ".join(supported)
    raise ValueError(
        f"Unsupported {env_name} value '{raw}'. Supported values: {supported_values}."
    )


def _get_float_env(name: str, default: float) -> float:
    raw = os.environ.get(name, str(default))
    try:
        value = float(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be a number") from err
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value


def get_turn_lock_timeout_seconds() -> float:
    return _get_float_env("SCREENING_TURN_LOCK_TIMEOUT_S", 5.0)


def _build_session_store(backend_name: str) -> BaseSessionStore:
    if backend_name == "memory":
        return InMemorySessionStore()
    if backend_name == "file":
        directory = os.environ.get("SCREENING_SESSION_DIR", "").strip() or _DEFAULT_SESSION_DIR
        return JSONFileSessionStore(directory)
    raise ValueError(f"Unsupported session store: {backend_name}")


def get_services() -> Dict[str, Any]:
    """
    Factory function to get or initialize service instances.

    Returns a dictionary with:
        - 'store': Session persistence backend
        - 'sequencer': Step sequencer
        - 'controller': Session controller wired to both
    """
    global _services
    if _services is None:
        store_name = _normalize_choice("SCREENING_SESSION_STORE", _SUPPORTED_SESSION_STORES, "memory")
        store = _build_session_store(store_name)
        sequencer = StepSequencer()
        controller = SessionController(
            store,
            sequencer=sequencer,
            lock_timeout_s=get_turn_lock_timeout_seconds(),
        )
        log_event(
            component="services",
            event="services_initialized",
            details={"session_store": store_name},
        )
        _services = {
            "store": store,
            "sequencer": sequencer,
            "controller": controller,
        }
    return _services


def reset_services() -> None:
    """Drop cached services so the next call re-reads the environment."""
    global _services
    _services = None


def get_session_store() -> BaseSessionStore:
    """Get the session store instance."""
    return get_services()["store"]


def get_controller() -> SessionController:
    """Get the session controller instance."""
    return get_services()["controller"]
