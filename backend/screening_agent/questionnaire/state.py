"""Per-session screening state and its JSON representation."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from ..core.types import SessionPayload
from .answer_store import AnswerStore
from .questions import QUESTION_KEYS, YES_NO_CHOICES, num_questions


class SequencerStatus(str, Enum):
    NOT_STARTED = "not_started"
    AWAITING_ANSWER = "awaiting_answer"
    COMPLETE = "complete"


@dataclass
class SessionState:
    """Index of the next unanswered question plus the answers collected so far.

    Owned by exactly one conversation. ``last_event_id`` remembers the last
    accepted inbound event so a re-delivered event is not counted twice.
    """

    index: int = 0
    answers: AnswerStore = field(default_factory=AnswerStore)
    last_event_id: str | None = None

    @property
    def status(self) -> SequencerStatus:
        if self.index >= num_questions():
            return SequencerStatus.COMPLETE
        return SequencerStatus.AWAITING_ANSWER

    def to_dict(self) -> SessionPayload:
        return {
            "index": self.index,
            "answers": self.answers.as_dict(),
            "last_event_id": self.last_event_id,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "SessionState":
        """Rebuild a state, rejecting anything the sequencer could not have produced.

        Answers must cover exactly the questions before ``index``, in order,
        with accepted choice values.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Session payload must be an object")
        index = payload.get("index", 0)
        if isinstance(index, bool) or not isinstance(index, int):
            raise ValueError(f"Invalid session index: {index!r}")
        if index < 0 or index > num_questions():
            raise ValueError(f"Session index out of range: {index}")
        answers = payload.get("answers") or {}
        if not isinstance(answers, Mapping):
            raise ValueError("Session answers must be an object")
        expected_keys = list(QUESTION_KEYS[:index])
        if list(answers) != expected_keys:
            raise ValueError(
                f"Session answers {list(answers)} do not match questions {expected_keys}"
            )
        invalid = [key for key, value in answers.items() if value not in YES_NO_CHOICES]
        if invalid:
            raise ValueError(f"Session answers hold unaccepted values for: {', '.join(invalid)}")
        last_event_id = payload.get("last_event_id")
        return cls(
            index=index,
            answers=AnswerStore(answers),
            last_event_id=str(last_event_id) if last_event_id is not None else None,
        )
