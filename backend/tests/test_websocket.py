import pytest
from fastapi.testclient import TestClient

from main import app
from routes.http import get_screening_services
from screening_agent.questionnaire import QUESTIONS, SessionController
from screening_agent.storage import InMemorySessionStore


@pytest.fixture
def store():
    store = InMemorySessionStore()
    controller = SessionController(store)
    app.dependency_overrides[get_screening_services] = lambda: {
        "store": store,
        "controller": controller,
    }
    yield store
    app.dependency_overrides = {}


def test_websocket_full_screening_session(store):
    with TestClient(app) as client:
        with client.websocket_connect("/ws/screening") as websocket:
            websocket.send_text("hello")
            first = websocket.receive_json()
            assert first == {
                "type": "prompt",
                "text": QUESTIONS[0].prompt,
                "choices": ["Yes", "No"],
            }

            websocket.send_text("Maybe")
            assert websocket.receive_json() == {
                "type": "rejected",
                "value": "Maybe",
                "choices": ["Yes", "No"],
            }
            assert websocket.receive_json()["text"] == QUESTIONS[0].prompt

            for index, value in enumerate(["Yes", "Yes", "No", "No", "No"], start=1):
                websocket.send_text(value)
                message = websocket.receive_json()
                assert message["type"] == "prompt"
                assert message["text"] == QUESTIONS[index].prompt

            websocket.send_text("No")
            outcome = websocket.receive_json()
            assert outcome["type"] == "outcome"
            assert outcome["text"].startswith("Triage for medical assessment")
            assert websocket.receive_json() == {"type": "complete", "outcome": "urgent_assessment"}

    assert len(store) == 0


def test_websocket_silent_outcome_sends_only_completion(store):
    with TestClient(app) as client:
        with client.websocket_connect("/ws/screening") as websocket:
            websocket.send_text("start")
            websocket.receive_json()
            for value in ["No", "Yes", "No", "No", "No"]:
                websocket.send_text(value)
                websocket.receive_json()
            websocket.send_text("No")
            assert websocket.receive_json() == {"type": "complete", "outcome": "none"}


def test_websocket_abandoned_session_is_discarded(store):
    with TestClient(app) as client:
        with client.websocket_connect("/ws/screening") as websocket:
            websocket.send_text("hello")
            websocket.receive_json()
            websocket.send_text("Yes")
            websocket.receive_json()
            assert len(store) == 1

    assert len(store) == 0
