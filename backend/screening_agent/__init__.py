"""
Screening Agent Package for COVID-19 Triage.

This package runs a fixed six-question yes/no screening interview and
derives a deterministic triage recommendation from the answers:
- Step sequencer asking one question per turn, resumable across turns
- Decision rules evaluated once per completed session
- Session controller serialising turns per conversation

Main entry point:
    screening_pipeline: Inbound text values -> screening events

Core components:
    - core: Event types, errors, schemas and structured logging
    - questionnaire: Questions, answer store, sequencer, decision rules, controller
    - storage: Session persistence backends
    - pipelines: Conversation pipeline
    - config: Service configuration and factory
"""

# Main pipeline (primary public API)
from .pipelines import screening_pipeline

# Core event types (for type hints and event handling)
from .core import (
    ScreeningEvent,
    PromptEvent,
    AnswerRejectedEvent,
    OutcomeEvent,
    SessionCompletedEvent,
)

# Questionnaire (decision engine and controller)
from .questionnaire import (
    InboundEvent,
    Outcome,
    SessionController,
    StepSequencer,
    evaluate_outcome,
)

# Configuration (for service initialization)
from .config import get_services, get_session_store, get_controller

__all__ = [
    # Main pipeline
    "screening_pipeline",
    # Events
    "ScreeningEvent",
    "PromptEvent",
    "AnswerRejectedEvent",
    "OutcomeEvent",
    "SessionCompletedEvent",
    # Questionnaire
    "InboundEvent",
    "Outcome",
    "SessionController",
    "StepSequencer",
    "evaluate_outcome",
    # Config
    "get_services",
    "get_session_store",
    "get_controller",
]

__version__ = "1.0.0"
