from functools import partial

from fastapi import APIRouter, Depends, WebSocket

from routes.http import get_screening_services
from screening_agent import screening_pipeline
from screening_agent.core import (
    AnswerRejectedEvent,
    OutcomeEvent,
    PromptEvent,
    ScreeningEvent,
    SessionCompletedEvent,
)

from .ws_shared import run_websocket_session

router = APIRouter()


async def _send_screening_event(websocket: WebSocket, event: ScreeningEvent) -> None:
    if isinstance(event, PromptEvent):
        payload = {"type": "prompt", **event.payload}
        await websocket.send_json(payload)
    elif isinstance(event, AnswerRejectedEvent):
        payload = {
            "type": "rejected",
            "value": event.value,
            "choices": list(event.choices),
        }
        await websocket.send_json(payload)
    elif isinstance(event, OutcomeEvent):
        payload = {"type": "outcome", **event.payload}
        await websocket.send_json(payload)
    elif isinstance(event, SessionCompletedEvent):
        payload = {"type": "complete", "outcome": event.outcome}
        await websocket.send_json(payload)


@router.websocket("/ws/screening")
async def websocket_endpoint(
    websocket: WebSocket,
    services: dict = Depends(get_screening_services),
) -> None:
    controller = services["controller"]
    await run_websocket_session(
        websocket=websocket,
        component="websocket_screening",
        session_prefix="ws",
        pipeline_factory=partial(screening_pipeline, controller=controller),
        send_event=_send_screening_event,
        on_abandon=controller.reset,
    )
