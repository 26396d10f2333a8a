from __future__ import annotations

from typing import Any

import pytest

from style_core.question_bank import load_bank
from style_core.types import Question

# raw values that land on a zero contribution for every non-likert question
NEUTRAL_NON_LIKERT: dict[str, Any] = {
    "Q3": 35,
    "Q5": "I don’t change my approach",
    "Q6": 35,
}


def build_answers(bank: list[Question], *, likert: int = 3, extra: dict[str, Any] | None = None) -> dict[str, Any]:
    """Answer every likert question with ``likert`` and merge ``extra`` on top."""

    answers: dict[str, Any] = {q.id: likert for q in bank if q.type == "likert"}
    answers.update(extra or {})
    return answers


def valid_values(q: Question) -> list[Any]:
    if q.type == "likert":
        return [1, 2, 3, 4, 5]
    if q.type == "multi":
        return list(q.options or [])
    return list(range(int(q.min), int(q.max) + 1))


def by_id(bank: list[Question], qid: str) -> Question:
    return next(q for q in bank if q.id == qid)


@pytest.fixture
def bank() -> list[Question]:
    return load_bank()


@pytest.fixture
def midpoint_answers(bank) -> dict[str, Any]:
    return build_answers(bank, likert=3, extra=NEUTRAL_NON_LIKERT)
