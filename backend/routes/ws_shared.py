import asyncio
import uuid
from collections.abc import AsyncIterator, Awaitable, Callable

from fastapi import WebSocket, WebSocketDisconnect

from screening_agent.core import ScreeningEvent, SessionCompletedEvent
from screening_agent.core.logging_utils import clear_log_context, log_event, set_session_id


def _is_websocket_closed_error(err: BaseException) -> bool:
    message = str(err)
    known_markers = (
        "Unexpected ASGI message 'websocket.send'",
        "disconnect message has been received",
        "WebSocket is not connected",
    )
    return any(marker in message for marker in known_markers)


async def websocket_text_stream(
    websocket: WebSocket,
    component: str,
) -> AsyncIterator[str]:
    """Yield inbound text frames from websocket, skipping keepalives."""
    try:
        while True:
            message = await websocket.receive()
            if message.get("type") == "websocket.disconnect":
                log_event(
                    component=component,
                    event="ws_disconnected",
                    details={"source": "receive", "reason": "disconnect_message"},
                )
                return
            text_data = message.get("text")
            if text_data is None:
                continue
            if text_data in {"PING", "PONG"}:
                continue
            yield text_data
    except WebSocketDisconnect:
        log_event(
            component=component,
            event="ws_disconnected",
            details={"source": "receive", "reason": "websocket_disconnect"},
        )
        return
    except RuntimeError as err:
        if "disconnect message has been received" in str(err):
            log_event(
                component=component,
                event="ws_disconnected",
                details={"source": "receive", "reason": "disconnect_message_received"},
            )
            return
        log_event(
            component=component,
            event="ws_receive_failed",
            level="ERROR",
            details={"error": str(err)},
        )
        return


async def run_websocket_session(
    *,
    websocket: WebSocket,
    component: str,
    session_prefix: str,
    pipeline_factory: Callable[[str, AsyncIterator[str]], AsyncIterator[ScreeningEvent]],
    send_event: Callable[[WebSocket, ScreeningEvent], Awaitable[None]],
    on_abandon: Callable[[str], object] | None = None,
) -> None:
    """Run one websocket screening session with shared lifecycle and cleanup.

    ``on_abandon`` is called with the session id when the socket ends
    before the session completes.
    """
    await websocket.accept()
    session_id = f"{session_prefix}-{uuid.uuid4().hex[:12]}"
    set_session_id(session_id)
    log_event(component=component, event="ws_connected")
    completed = False

    try:
        input_stream = websocket_text_stream(websocket, component)
        output_stream = pipeline_factory(session_id, input_stream)
        async for event in output_stream:
            if isinstance(event, SessionCompletedEvent):
                completed = True
            try:
                await send_event(websocket, event)
            except WebSocketDisconnect:
                log_event(
                    component=component,
                    event="ws_disconnected",
                    details={"source": "send", "reason": "websocket_disconnect"},
                )
                break
            except RuntimeError as err:
                if _is_websocket_closed_error(err):
                    log_event(
                        component=component,
                        event="ws_disconnected",
                        details={
                            "source": "send",
                            "reason": "send_on_closed_socket",
                            "error": str(err),
                        },
                    )
                    break
                raise
    except Exception as err:
        log_event(
            component=component,
            event="ws_pipeline_failed",
            level="ERROR",
            details={"error": str(err), "error_type": type(err).__name__},
        )
    finally:
        if not completed and on_abandon is not None:
            try:
                await asyncio.to_thread(on_abandon, session_id)
            except Exception as err:
                log_event(
                    component=component,
                    event="ws_abandon_cleanup_failed",
                    level="ERROR",
                    details={"error": str(err)},
                )
            log_event(component=component, event="session_abandoned")
        try:
            await websocket.close()
        except RuntimeError:
            pass
        clear_log_context()
