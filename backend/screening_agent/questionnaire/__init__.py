"""Screening questionnaire: questions, sequencer, decision rules and session controller."""
from .questions import QUESTIONS, QUESTION_KEYS, Question, get_question
from .answer_store import AnswerStore
from .state import SequencerStatus, SessionState
from .sequencer import Prompt, SequencerResult, StepSequencer
from .decision import Outcome, TriageDecision, evaluate_outcome
from .controller import InboundEvent, SessionController, TurnResult

__all__ = [
    "QUESTIONS",
    "QUESTION_KEYS",
    "Question",
    "get_question",
    "AnswerStore",
    "SequencerStatus",
    "SessionState",
    "Prompt",
    "SequencerResult",
    "StepSequencer",
    "Outcome",
    "TriageDecision",
    "evaluate_outcome",
    "InboundEvent",
    "SessionController",
    "TurnResult",
]
