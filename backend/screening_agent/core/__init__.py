"""Core abstractions and types for the screening agent."""
from .events import (
    ScreeningEvent,
    PromptEvent,
    AnswerRejectedEvent,
    OutcomeEvent,
    SessionCompletedEvent,
)
from .errors import (
    ScreeningError,
    ValidationRejected,
    IncompleteAnswerSet,
    SessionBusyError,
)
from .types import AnswerMapping, SessionPayload
from .schemas import (
    TurnRequest,
    EvaluateRequest,
    PromptPayload,
    OutcomePayload,
    TurnResponse,
    EvaluateResponse,
    QuestionSchema,
    QuestionnaireResponse,
    StatusResponse,
)

__all__ = [
    # Events
    "ScreeningEvent",
    "PromptEvent",
    "AnswerRejectedEvent",
    "OutcomeEvent",
    "SessionCompletedEvent",
    # Errors
    "ScreeningError",
    "ValidationRejected",
    "IncompleteAnswerSet",
    "SessionBusyError",
    # Types
    "AnswerMapping",
    "SessionPayload",
    # Schemas
    "TurnRequest",
    "EvaluateRequest",
    "PromptPayload",
    "OutcomePayload",
    "TurnResponse",
    "EvaluateResponse",
    "QuestionSchema",
    "QuestionnaireResponse",
    "StatusResponse",
]
