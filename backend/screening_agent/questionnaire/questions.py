"""
Fixed COVID-19 screening questionnaire: six ordered yes/no questions.
Prompt texts are reproduced verbatim; the order never depends on answers.
"""

from __future__ import annotations

from dataclasses import dataclass

YES = "Yes"
NO = "No"
YES_NO_CHOICES: tuple[str, ...] = (YES, NO)


@dataclass(frozen=True)
class Question:
    key: str
    prompt: str
    choices: tuple[str, ...] = YES_NO_CHOICES

    def recognize(self, value: str) -> str | None:
        """Return the canonical choice for an inbound value, or None if it is not one.

        Matching ignores case and surrounding whitespace, and a 1-based
        choice ordinal ("1" for the first choice) is accepted.
        """
        cleaned = value.strip()
        if not cleaned:
            return None
        for choice in self.choices:
            if cleaned.casefold() == choice.casefold():
                return choice
        if cleaned.isdigit():
            ordinal = int(cleaned)
            if 1 <= ordinal <= len(self.choices):
                return self.choices[ordinal - 1]
        return None


SYMPTOMS = "symptoms"
TRAVEL = "travel"
INTERNATIONAL_TRAVEL = "internationalTravel"
CLOSE_CONTACT = "closeContact"
COVID19_CONTACT = "covid19Contact"
COVID19_LAB_EXPOSURE = "covid19LabExposure"

QUESTIONS: tuple[Question, ...] = (
    Question(
        SYMPTOMS,
        "Do you have any of the below symptoms ? Fever > 38 C or subjective fever, Cough,"
        "Shortness of breath/breathing diffuclties, other symptoms such as muscle aches, "
        "headache, sore throat, runny nose, diarrhea. Note symptoms in young children may be "
        "non-specific – e.g. lethargy, poor feeding.",
    ),
    Question(
        TRAVEL,
        "Have you travelled in the last 14 days to Hubei Province (including Wuhan) in China, "
        "Iran, or Italy?",
    ),
    Question(
        INTERNATIONAL_TRAVEL,
        "Have you travelled internationally in the last 14 days?",
    ),
    Question(
        CLOSE_CONTACT,
        "Have you had close contact (face-to-face contact within 2 meters/6 feet) with someone "
        "who is ill with cough and/or fever who has traveled internationally within 14 days "
        "prior to their illness onset? (Contact may be in Canada or during travel)",
    ),
    Question(
        COVID19_CONTACT,
        "Have you been in contact in the last 14 days with someone that is confirmed to be a "
        "case of COVID-19?",
    ),
    Question(
        COVID19_LAB_EXPOSURE,
        "Have you had laboratory exposure while working directly with specimens known to "
        "contain COVID-19?",
    ),
)

QUESTION_KEYS: tuple[str, ...] = tuple(question.key for question in QUESTIONS)


def get_question(index: int) -> Question | None:
    """Return question at index, or None if past end."""
    if index < 0 or index >= len(QUESTIONS):
        return None
    return QUESTIONS[index]


def num_questions() -> int:
    return len(QUESTIONS)
