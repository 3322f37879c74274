"""Exception hierarchy for the screening core."""
from typing import Sequence


class ScreeningError(RuntimeError):
    """Base runtime error for screening failures."""


class ValidationRejected(ScreeningError):
    """Raised when an inbound value is not one of the awaited question's choices."""

    def __init__(self, question_key: str, value: str, choices: Sequence[str]):
        self.question_key = question_key
        self.value = value
        self.choices = tuple(choices)
        super().__init__(
            f"Value {value!r} is not an accepted answer for '{question_key}'. "
            f"Expected one of: {', '.join(self.choices)}."
        )


class IncompleteAnswerSet(ScreeningError):
    """Raised when the decision engine receives missing or invalid answers.

    This is a wiring defect between the sequencer and the controller,
    never a user-facing condition.
    """

    def __init__(self, missing: Sequence[str] = (), invalid: Sequence[str] = ()):
        self.missing = tuple(missing)
        self.invalid = tuple(invalid)
        parts = []
        if self.missing:
            parts.append(f"missing={', '.join(self.missing)}")
        if self.invalid:
            parts.append(f"invalid={', '.join(self.invalid)}")
        super().__init__(f"Incomplete answer set ({'; '.join(parts) or 'empty'})")


class SessionBusyError(ScreeningError):
    """Raised when a turn cannot acquire its session lock in time."""

    def __init__(self, session_id: str, timeout_s: float):
        self.session_id = session_id
        self.timeout_s = timeout_s
        super().__init__(
            f"Session '{session_id}' is processing another turn (waited {timeout_s}s)"
        )
