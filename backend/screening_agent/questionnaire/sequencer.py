"""Linear step sequencer: ask current question, record answer, advance."""
from __future__ import annotations

from dataclasses import dataclass

from ..core.errors import ValidationRejected
from .answer_store import AnswerStore
from .questions import Question, get_question, num_questions
from .state import SequencerStatus, SessionState


@dataclass(frozen=True)
class Prompt:
    """Outbound prompt for one question."""

    question_key: str
    index: int
    text: str
    choices: tuple[str, ...]

    @property
    def payload(self):
        return {"text": self.text, "choices": list(self.choices)}

    @classmethod
    def for_question(cls, question: Question, index: int) -> "Prompt":
        return cls(
            question_key=question.key,
            index=index,
            text=question.prompt,
            choices=question.choices,
        )


@dataclass(frozen=True)
class SequencerResult:
    status: SequencerStatus
    state: SessionState
    prompt: Prompt | None = None
    answers: AnswerStore | None = None
    rejected: ValidationRejected | None = None


class StepSequencer:
    """Drives the fixed question list one answer per turn.

    The sequencer never decides the outcome; it reports ``COMPLETE`` with
    the finished answers once every question has been answered.
    """

    def start(self, state: SessionState | None = None) -> SequencerResult:
        state = state if state is not None else SessionState()
        state.index = 0
        state.answers = AnswerStore()
        state.last_event_id = None
        return self._awaiting(state)

    def resume(self, state: SessionState | None, value: str) -> SequencerResult:
        if state is None:
            return self.start()

        question = get_question(state.index)
        if question is None:
            return SequencerResult(
                status=SequencerStatus.COMPLETE,
                state=state,
                answers=state.answers,
            )

        canonical = question.recognize(value)
        if canonical is None:
            return SequencerResult(
                status=SequencerStatus.AWAITING_ANSWER,
                state=state,
                prompt=Prompt.for_question(question, state.index),
                rejected=ValidationRejected(question.key, value, question.choices),
            )

        state.answers.record(question.key, canonical)
        state.index += 1
        if state.index < num_questions():
            return self._awaiting(state)
        return SequencerResult(
            status=SequencerStatus.COMPLETE,
            state=state,
            answers=state.answers,
        )

    def current_prompt(self, state: SessionState) -> Prompt | None:
        """Prompt for the question awaited by ``state``, or None when complete."""
        question = get_question(state.index)
        if question is None:
            return None
        return Prompt.for_question(question, state.index)

    def _awaiting(self, state: SessionState) -> SequencerResult:
        return SequencerResult(
            status=SequencerStatus.AWAITING_ANSWER,
            state=state,
            prompt=self.current_prompt(state),
        )
