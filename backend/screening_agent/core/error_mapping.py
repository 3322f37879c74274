"""Shared error codes and payload helpers for screening failures."""
from typing import Any

from .errors import IncompleteAnswerSet, SessionBusyError, ValidationRejected

ERROR_CODE_VALIDATION_REJECTED = "VALIDATION_REJECTED"
ERROR_CODE_INCOMPLETE_ANSWER_SET = "INCOMPLETE_ANSWER_SET"
ERROR_CODE_SESSION_BUSY = "SESSION_BUSY"
ERROR_CODE_INTERNAL = "INTERNAL_ERROR"


def build_error_payload(
    code: str,
    message: str,
    details: str | None = None,
) -> dict[str, Any]:
    """Build a standardized error payload, omitting empty details."""
    payload: dict[str, Any] = {"code": code, "message": message}
    if details:
        payload["details"] = details
    return payload


def classify_error_code(err: BaseException) -> str:
    """Classify a screening failure into a stable error code."""
    if isinstance(err, ValidationRejected):
        return ERROR_CODE_VALIDATION_REJECTED
    if isinstance(err, IncompleteAnswerSet):
        return ERROR_CODE_INCOMPLETE_ANSWER_SET
    if isinstance(err, SessionBusyError):
        return ERROR_CODE_SESSION_BUSY
    return ERROR_CODE_INTERNAL


def build_exception_payload(err: BaseException) -> dict[str, Any]:
    """Build an error payload from an exception.

    Internal errors keep their message out of the payload so that
    contract violations never leak to the end user.
    """
    code = classify_error_code(err)
    if code == ERROR_CODE_VALIDATION_REJECTED:
        return build_error_payload(code, "Please choose one of the offered answers.", details=str(err))
    if code == ERROR_CODE_SESSION_BUSY:
        return build_error_payload(code, "Session is busy with another turn. Retry in a moment.")
    if code == ERROR_CODE_INCOMPLETE_ANSWER_SET:
        return build_error_payload(code, "Screening could not be evaluated.")
    return build_error_payload(code, "Unexpected failure during screening turn.")
