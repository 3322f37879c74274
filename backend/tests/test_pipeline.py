import pytest
from unittest.mock import patch

from screening_agent import screening_pipeline
from screening_agent.core import (
    AnswerRejectedEvent,
    OutcomeEvent,
    PromptEvent,
    SessionCompletedEvent,
)
from screening_agent.questionnaire import QUESTION_KEYS, SessionController
from screening_agent.storage import InMemorySessionStore


async def inbound(*values):
    for value in values:
        yield value


@pytest.mark.asyncio
async def test_pipeline_flow_until_outcome():
    store = InMemorySessionStore()
    controller = SessionController(store)

    events = []
    async for event in screening_pipeline(
        "p1",
        inbound("hi", "Yes", "No", "No", "No", "Yes", "No", "ignored after completion"),
        controller=controller,
    ):
        events.append(event)

    prompts = [e for e in events if isinstance(e, PromptEvent)]
    assert [p.question_key for p in prompts] == list(QUESTION_KEYS)
    assert isinstance(events[-2], OutcomeEvent)
    assert events[-2].outcome == "urgent_assessment"
    assert events[-2].payload == {"text": events[-2].text}
    assert isinstance(events[-1], SessionCompletedEvent)
    assert len(store) == 0


@pytest.mark.asyncio
async def test_pipeline_rejection_precedes_reprompt():
    controller = SessionController(InMemorySessionStore())

    events = [e async for e in screening_pipeline("p2", inbound("hi", "perhaps"), controller=controller)]

    assert isinstance(events[1], AnswerRejectedEvent)
    assert events[1].value == "perhaps"
    assert isinstance(events[2], PromptEvent)
    assert events[2].question_key == "symptoms"


@pytest.mark.asyncio
async def test_pipeline_uses_configured_controller_by_default():
    controller = SessionController(InMemorySessionStore())

    with patch("screening_agent.pipelines.interview_pipeline.get_controller", return_value=controller):
        events = [e async for e in screening_pipeline("p3", inbound("hi"))]

    assert len(events) == 1
    assert controller.store.load("p3").index == 0
