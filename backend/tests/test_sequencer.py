import pytest

from screening_agent.core import ValidationRejected
from screening_agent.questionnaire import (
    QUESTION_KEYS,
    QUESTIONS,
    AnswerStore,
    SequencerStatus,
    SessionState,
    StepSequencer,
)


def test_start_emits_first_question():
    result = StepSequencer().start()

    assert result.status is SequencerStatus.AWAITING_ANSWER
    assert result.state.index == 0
    assert len(result.state.answers) == 0
    assert result.prompt.question_key == "symptoms"
    assert result.prompt.text == QUESTIONS[0].prompt
    assert result.prompt.payload == {"text": QUESTIONS[0].prompt, "choices": ["Yes", "No"]}


def test_start_resets_existing_state():
    state = SessionState(index=3, answers=AnswerStore({"symptoms": "Yes"}), last_event_id="e1")

    result = StepSequencer().start(state)

    assert result.state is state
    assert state.index == 0
    assert len(state.answers) == 0
    assert state.last_event_id is None


def test_resume_without_session_behaves_as_start():
    result = StepSequencer().resume(None, "Yes")

    assert result.status is SequencerStatus.AWAITING_ANSWER
    assert result.state.index == 0
    assert len(result.state.answers) == 0


@pytest.mark.parametrize(
    "answers",
    [
        ("No", "No", "No", "No", "No", "No"),
        ("Yes", "Yes", "Yes", "Yes", "Yes", "Yes"),
        ("Yes", "No", "No", "Yes", "No", "No"),
        ("No", "Yes", "No", "No", "Yes", "No"),
    ],
)
def test_six_awaiting_states_then_complete_in_fixed_order(answers):
    sequencer = StepSequencer()
    result = sequencer.start()
    asked = []

    for value in answers:
        assert result.status is SequencerStatus.AWAITING_ANSWER
        asked.append(result.prompt.question_key)
        result = sequencer.resume(result.state, value)

    assert asked == list(QUESTION_KEYS)
    assert result.status is SequencerStatus.COMPLETE
    assert result.prompt is None
    assert result.answers.as_dict() == dict(zip(QUESTION_KEYS, answers))


@pytest.mark.parametrize("index", range(6))
def test_out_of_set_value_is_rejected_without_advancing(index: int):
    sequencer = StepSequencer()
    state = sequencer.start().state
    for _ in range(index):
        state = sequencer.resume(state, "No").state

    result = sequencer.resume(state, "Maybe")

    assert result.status is SequencerStatus.AWAITING_ANSWER
    assert isinstance(result.rejected, ValidationRejected)
    assert result.rejected.question_key == QUESTION_KEYS[index]
    assert result.rejected.value == "Maybe"
    assert state.index == index
    assert len(state.answers) == index
    assert result.prompt.question_key == QUESTION_KEYS[index]


def test_repeated_invalid_value_is_idempotent():
    sequencer = StepSequencer()
    state = sequencer.resume(sequencer.start().state, "Yes").state

    first = sequencer.resume(state, "Maybe")
    second = sequencer.resume(state, "Maybe")

    assert first.prompt == second.prompt
    assert state.index == 1
    assert state.answers.as_dict() == {"symptoms": "Yes"}


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("yes", "Yes"), ("  NO ", "No"), ("1", "Yes"), ("2", "No")],
)
def test_choice_recognition_stores_canonical_value(raw: str, expected: str):
    sequencer = StepSequencer()
    state = sequencer.start().state

    sequencer.resume(state, raw)

    assert state.answers["symptoms"] == expected


@pytest.mark.parametrize("raw", ["", "   ", "0", "3", "yess", "Y"])
def test_unrecognized_values_are_rejected(raw: str):
    sequencer = StepSequencer()
    state = sequencer.start().state

    result = sequencer.resume(state, raw)

    assert result.rejected is not None
    assert state.index == 0


def test_resume_on_completed_state_does_not_record_again():
    sequencer = StepSequencer()
    state = SessionState(index=6, answers=AnswerStore({key: "No" for key in QUESTION_KEYS}))

    result = sequencer.resume(state, "Yes")

    assert result.status is SequencerStatus.COMPLETE
    assert state.index == 6
    assert set(state.answers.values()) == {"No"}


def test_current_prompt_is_none_when_complete():
    state = SessionState(index=6)

    assert StepSequencer().current_prompt(state) is None
