"""Append-only per-session answer mapping."""
from __future__ import annotations

from collections.abc import Iterator, Mapping


class AnswerStore(Mapping[str, str]):
    """Question key -> selected value. Answers are appended, never rewritten."""

    def __init__(self, answers: Mapping[str, str] | None = None) -> None:
        self._answers: dict[str, str] = dict(answers or {})

    def record(self, key: str, value: str) -> None:
        if key in self._answers:
            raise ValueError(f"Answer for '{key}' is already recorded")
        self._answers[key] = value

    def __getitem__(self, key: str) -> str:
        return self._answers[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._answers)

    def __len__(self) -> int:
        return len(self._answers)

    def as_dict(self) -> dict[str, str]:
        return dict(self._answers)

    def __repr__(self) -> str:
        return f"AnswerStore({self._answers!r})"
