from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from screening_agent.config import get_services
from screening_agent.core import (
    EvaluateRequest,
    EvaluateResponse,
    IncompleteAnswerSet,
    QuestionnaireResponse,
    SessionBusyError,
    StatusResponse,
    TurnRequest,
    TurnResponse,
)
from screening_agent.core.error_mapping import (
    ERROR_CODE_INCOMPLETE_ANSWER_SET,
    build_error_payload,
    build_exception_payload,
)
from screening_agent.core.logging_utils import log_event
from screening_agent.questionnaire import (
    QUESTIONS,
    InboundEvent,
    SequencerStatus,
    TurnResult,
    evaluate_outcome,
)

router = APIRouter()


def get_screening_services():
    return get_services()


@router.get("/", response_model=StatusResponse)
def read_root():
    return {"status": "online", "system": "COVID-19 Screening Bot"}


@router.get("/questions", response_model=QuestionnaireResponse)
def list_questions():
    return {
        "questions": [
            {"key": q.key, "prompt": q.prompt, "choices": list(q.choices)}
            for q in QUESTIONS
        ]
    }


def _turn_payload(result: TurnResult) -> dict:
    if result.rejected is not None:
        status = "rejected"
    else:
        status = result.status.value

    payload: dict = {
        "session_id": result.session_id,
        "status": status,
        "prompt": result.prompt.payload if result.prompt else None,
        "outcome": None,
        "error": build_exception_payload(result.rejected) if result.rejected else None,
    }
    if result.status is SequencerStatus.COMPLETE and result.decision is not None:
        decision = result.decision
        if decision.emits_message:
            payload["outcome"] = {
                "outcome": decision.outcome.value,
                "rule_id": decision.rule_id,
                "text": decision.text,
            }
    return payload


def _failed_turn_response(session_id: str, status_code: int, err: Exception) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "session_id": session_id,
            "status": "failed",
            "prompt": None,
            "outcome": None,
            "error": build_exception_payload(err),
        },
    )


@router.post("/sessions/{session_id}/messages", response_model=TurnResponse)
def post_message(
    session_id: str,
    request: TurnRequest,
    services: dict = Depends(get_screening_services),
):
    controller = services["controller"]
    event = InboundEvent(session_id=session_id, value=request.value, event_id=request.event_id)
    try:
        result = controller.handle_turn(event)
    except SessionBusyError as err:
        return _failed_turn_response(session_id, 409, err)
    except IncompleteAnswerSet as err:
        # Already logged by the controller; never expose the answers to the user.
        return _failed_turn_response(session_id, 500, err)
    return _turn_payload(result)


@router.delete("/sessions/{session_id}", response_model=StatusResponse)
def delete_session(session_id: str, services: dict = Depends(get_screening_services)):
    controller = services["controller"]
    try:
        removed = controller.reset(session_id)
    except SessionBusyError as err:
        return JSONResponse(
            status_code=409,
            content={"status": "busy", "system": build_exception_payload(err)["message"]},
        )
    return {"status": "deleted" if removed else "not_found", "system": None}


@router.post("/evaluate", response_model=EvaluateResponse)
def evaluate_answers(request: EvaluateRequest):
    try:
        decision = evaluate_outcome(request.answers)
    except IncompleteAnswerSet as err:
        log_event(
            component="http",
            event="evaluate_rejected",
            level="WARNING",
            details={"missing": list(err.missing), "invalid": list(err.invalid)},
        )
        return {
            "success": False,
            "data": {},
            "error": build_error_payload(
                ERROR_CODE_INCOMPLETE_ANSWER_SET,
                "Answer set must contain 'Yes' or 'No' for every question.",
                details=str(err),
            ),
        }

    return {
        "success": True,
        "data": {
            "outcome": decision.outcome.value,
            "rule_id": decision.rule_id,
            "text": decision.text,
        },
        "error": None,
    }
