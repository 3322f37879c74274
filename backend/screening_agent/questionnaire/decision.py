"""Deterministic triage rules mapping a completed answer set to an outcome."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..core.errors import IncompleteAnswerSet
from ..core.types import AnswerMapping
from .questions import (
    CLOSE_CONTACT,
    COVID19_CONTACT,
    COVID19_LAB_EXPOSURE,
    INTERNATIONAL_TRAVEL,
    NO,
    QUESTION_KEYS,
    SYMPTOMS,
    TRAVEL,
    YES,
    YES_NO_CHOICES,
)


class Outcome(str, Enum):
    NO_FURTHER_ASSESSMENT = "no_further_assessment"
    URGENT_ASSESSMENT = "urgent_assessment"
    FURTHER_ASSESSMENT = "further_assessment"
    NONE = "none"

    @property
    def text(self) -> str | None:
        return OUTCOME_MESSAGES.get(self)


OUTCOME_MESSAGES: dict[Outcome, str] = {
    Outcome.NO_FURTHER_ASSESSMENT: (
        "no further assessment is required. Provide reassurance education. If they develop "
        "symptoms in the next 14 days, provide general advice"
    ),
    Outcome.URGENT_ASSESSMENT: (
        "Triage for medical assessment–these individuals require assessment/testing. The "
        "individual should be assessed in their local urgent care center or emergency room. "
        "Public health/ Health Links should call ahead and advise the facility that a an "
        "individual with a history of international travel in the previous 14 days or a "
        "contact of COVID-19 will be attending the facility and have symptoms of COVID-19. "
        "Inform the individual that they will be provided with a mask to wear and will be "
        "isolated upon arrival."
    ),
    Outcome.FURTHER_ASSESSMENT: (
        "Further assessment is required to determine their risk of exposure to COVID-19. If "
        "symptoms are mild (e.g. upper respiratory tract symptoms), recommend observing "
        "symptoms, to call back if symptoms worsen, and self-isolate at home until symptoms "
        "are completely resolved. If symptoms worsen, they should be assessed in their local "
        "urgent care center or emergency room, and ensure they call ahead and inform them of "
        "their travel history."
    ),
}


@dataclass(frozen=True)
class DecisionRule:
    """Rule definition; every listed condition group must hold for the rule to fire."""

    rule_id: str
    description: str
    outcome: Outcome
    required_all_no: tuple[str, ...] = ()
    required_all_yes: tuple[str, ...] = ()
    required_any_yes: tuple[str, ...] = ()

    def matches(self, answers: AnswerMapping) -> bool:
        if any(answers[key] != NO for key in self.required_all_no):
            return False
        if any(answers[key] != YES for key in self.required_all_yes):
            return False
        if self.required_any_yes and not any(answers[key] == YES for key in self.required_any_yes):
            return False
        return True


@dataclass(frozen=True)
class TriageDecision:
    """Result of one evaluation. ``rule_id`` is None when no rule fired."""

    outcome: Outcome
    rule_id: str | None
    reason: str | None = None

    @property
    def text(self) -> str | None:
        return self.outcome.text

    @property
    def emits_message(self) -> bool:
        return self.outcome is not Outcome.NONE


# Order matters: first match wins.
_RULES: tuple[DecisionRule, ...] = (
    DecisionRule(
        rule_id="all_clear",
        description="No symptoms, travel, contact or exposure reported",
        outcome=Outcome.NO_FURTHER_ASSESSMENT,
        required_all_no=QUESTION_KEYS,
    ),
    DecisionRule(
        rule_id="symptoms_with_travel_or_confirmed_exposure",
        description="Symptoms plus relevant travel, confirmed contact or lab exposure",
        outcome=Outcome.URGENT_ASSESSMENT,
        required_all_yes=(SYMPTOMS,),
        required_any_yes=(TRAVEL, INTERNATIONAL_TRAVEL, COVID19_CONTACT, COVID19_LAB_EXPOSURE),
    ),
    DecisionRule(
        rule_id="symptoms_with_close_contact",
        description="Symptoms plus close contact with an ill international traveller",
        outcome=Outcome.FURTHER_ASSESSMENT,
        required_all_yes=(SYMPTOMS, CLOSE_CONTACT),
    ),
)


def _validate_answers(answers: AnswerMapping) -> None:
    missing = [key for key in QUESTION_KEYS if key not in answers]
    invalid = [
        key for key in QUESTION_KEYS if key in answers and answers[key] not in YES_NO_CHOICES
    ]
    if missing or invalid:
        raise IncompleteAnswerSet(missing=missing, invalid=invalid)


def evaluate_outcome(answers: AnswerMapping) -> TriageDecision:
    """
    Map a completed answer set to exactly one outcome.

    Pure and deterministic. Raises IncompleteAnswerSet if any of the six
    answers is missing or not "Yes"/"No".
    """
    _validate_answers(answers)

    for rule in _RULES:
        if rule.matches(answers):
            return TriageDecision(
                outcome=rule.outcome,
                rule_id=rule.rule_id,
                reason=rule.description,
            )

    return TriageDecision(outcome=Outcome.NONE, rule_id=None, reason=None)
