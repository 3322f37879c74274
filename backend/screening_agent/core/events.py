from dataclasses import dataclass, field
from typing import Any


@dataclass
class ScreeningEvent:
    """Base class for all screening session events."""
    pass


@dataclass
class PromptEvent(ScreeningEvent):
    """Next question to put to the user."""
    question_key: str
    text: str
    choices: list[str] = field(default_factory=list)

    @property
    def payload(self):
        return {"text": self.text, "choices": list(self.choices)}


@dataclass
class AnswerRejectedEvent(ScreeningEvent):
    """Inbound value was not an accepted choice; the same question follows."""
    question_key: str
    value: str
    choices: list[str] = field(default_factory=list)


@dataclass
class OutcomeEvent(ScreeningEvent):
    """Recommendation produced once per completed session."""
    outcome: str
    text: str
    rule_id: str | None = None

    @property
    def payload(self):
        return {"text": self.text}


@dataclass
class SessionCompletedEvent(ScreeningEvent):
    """Session finished and its state was discarded."""
    outcome: str
    details: dict[str, Any] = field(default_factory=dict)
