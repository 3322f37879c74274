import json
import os

import pytest

from screening_agent.questionnaire import (
    QUESTION_KEYS,
    AnswerStore,
    InboundEvent,
    Outcome,
    SequencerStatus,
    SessionController,
    SessionState,
)
from screening_agent.storage import InMemorySessionStore, JSONFileSessionStore


@pytest.fixture(params=["memory", "file"])
def session_store(request, tmp_path):
    if request.param == "memory":
        return InMemorySessionStore()
    return JSONFileSessionStore(str(tmp_path / "sessions"))


def test_load_missing_session_returns_none(session_store):
    assert session_store.load("unknown") is None


def test_save_then_load_returns_independent_copy(session_store):
    state = SessionState(index=2, answers=AnswerStore({"symptoms": "Yes", "travel": "No"}), last_event_id="e2")
    session_store.save("s1", state)

    loaded = session_store.load("s1")
    loaded.answers.record("internationalTravel", "No")
    loaded.index = 3

    reloaded = session_store.load("s1")
    assert reloaded.index == 2
    assert reloaded.answers.as_dict() == {"symptoms": "Yes", "travel": "No"}
    assert reloaded.last_event_id == "e2"


def test_delete_reports_whether_session_existed(session_store):
    session_store.save("s1", SessionState())

    assert session_store.delete("s1") is True
    assert session_store.delete("s1") is False
    assert session_store.load("s1") is None


def test_file_store_survives_new_instance(tmp_path):
    directory = str(tmp_path / "sessions")
    JSONFileSessionStore(directory).save("s1", SessionState(index=1, answers=AnswerStore({"symptoms": "No"})))

    loaded = JSONFileSessionStore(directory).load("s1")

    assert loaded.index == 1
    assert loaded.answers.as_dict() == {"symptoms": "No"}


def test_file_store_treats_corrupt_file_as_missing(tmp_path):
    store = JSONFileSessionStore(str(tmp_path))
    store.save("s1", SessionState())
    with open(store._path("s1"), "w", encoding="utf-8") as fh:
        fh.write("{not json")

    assert store.load("s1") is None


def test_file_store_writes_session_id_and_no_temp_files(tmp_path):
    store = JSONFileSessionStore(str(tmp_path))
    store.save("s1", SessionState())

    files = os.listdir(tmp_path)
    assert len(files) == 1
    assert files[0].endswith(".json")
    with open(tmp_path / files[0], encoding="utf-8") as fh:
        assert json.load(fh)["session_id"] == "s1"


def test_answer_store_is_append_only():
    answers = AnswerStore()
    answers.record("symptoms", "Yes")

    with pytest.raises(ValueError):
        answers.record("symptoms", "No")
    assert answers["symptoms"] == "Yes"


@pytest.mark.parametrize("payload", [{"index": -1}, {"index": "2"}, {"answers": ["Yes"]}])
def test_session_state_rejects_malformed_payload(payload):
    with pytest.raises(ValueError):
        SessionState.from_dict(payload)


@pytest.mark.parametrize(
    "payload",
    [
        [],
        {"index": 7},
        {"index": True},
        {"index": 5, "answers": {}},
        {"index": 1, "answers": {"travel": "No"}},
        {"index": 2, "answers": {"travel": "No", "symptoms": "Yes"}},
        {"index": 1, "answers": {"symptoms": "Maybe"}},
        {"index": 0, "answers": {"symptoms": "Yes"}},
    ],
)
def test_session_state_rejects_inconsistent_payload(payload):
    with pytest.raises(ValueError):
        SessionState.from_dict(payload)


def test_session_state_accepts_completed_payload():
    answers = {key: "No" for key in QUESTION_KEYS}

    state = SessionState.from_dict({"index": 6, "answers": answers})

    assert state.answers.as_dict() == answers


@pytest.mark.parametrize("raw", ["[]", '{"index": 5, "answers": {}}', '{"index": 1, "answers": {"symptoms": 1}}'])
def test_file_store_treats_wrong_shape_as_missing(tmp_path, raw):
    store = JSONFileSessionStore(str(tmp_path))
    store.save("s1", SessionState())
    with open(store._path("s1"), "w", encoding="utf-8") as fh:
        fh.write(raw)

    assert store.load("s1") is None


def test_inconsistent_file_state_restarts_session(tmp_path):
    store = JSONFileSessionStore(str(tmp_path))
    store.save("s1", SessionState())
    with open(store._path("s1"), "w", encoding="utf-8") as fh:
        fh.write('{"index": 5, "answers": {}}')
    controller = SessionController(store)

    restarted = controller.handle_turn(InboundEvent("s1", "Yes"))

    assert restarted.started is True
    assert restarted.prompt.question_key == "symptoms"
    results = [controller.handle_turn(InboundEvent("s1", "No")) for _ in QUESTION_KEYS]
    assert results[-1].status is SequencerStatus.COMPLETE
    assert results[-1].decision.outcome is Outcome.NO_FURTHER_ASSESSMENT
    assert store.load("s1") is None
