"""Screening conversation pipeline orchestration."""
import asyncio
from typing import AsyncIterator

from ..config import get_controller
from ..core import (
    AnswerRejectedEvent,
    OutcomeEvent,
    PromptEvent,
    ScreeningEvent,
    SessionCompletedEvent,
)
from ..questionnaire import InboundEvent, SequencerStatus, SessionController, TurnResult


def turn_events(result: TurnResult) -> list[ScreeningEvent]:
    """Translate one turn result into outbound events, in emission order."""
    events: list[ScreeningEvent] = []
    if result.rejected is not None:
        events.append(
            AnswerRejectedEvent(
                question_key=result.rejected.question_key,
                value=result.rejected.value,
                choices=list(result.rejected.choices),
            )
        )
    if result.prompt is not None:
        events.append(
            PromptEvent(
                question_key=result.prompt.question_key,
                text=result.prompt.text,
                choices=list(result.prompt.choices),
            )
        )
    if result.status is SequencerStatus.COMPLETE and result.decision is not None:
        decision = result.decision
        if decision.emits_message:
            events.append(
                OutcomeEvent(
                    outcome=decision.outcome.value,
                    text=decision.text,
                    rule_id=decision.rule_id,
                )
            )
        events.append(
            SessionCompletedEvent(
                outcome=decision.outcome.value,
                details={"rule_id": decision.rule_id},
            )
        )
    return events


async def screening_pipeline(
    session_id: str,
    inbound_stream: AsyncIterator[str],
    controller: SessionController | None = None,
) -> AsyncIterator[ScreeningEvent]:
    """
    Screening conversation pipeline:
    Inbound text values -> Session Controller -> Prompt / Outcome events

    Each inbound value is one turn. The pipeline stops after the session
    completes; remaining inbound values are not consumed.

    :param session_id: Conversation identifier
    :param inbound_stream: Iterator yielding inbound answer text
    :param controller: Controller to use; defaults to the configured one
    :yields: ScreeningEvent instances
    """
    controller = controller or get_controller()

    async for value in inbound_stream:
        event = InboundEvent(session_id=session_id, value=value)
        result = await asyncio.to_thread(controller.handle_turn, event)
        for outbound in turn_events(result):
            yield outbound
        if result.status is SequencerStatus.COMPLETE:
            return
