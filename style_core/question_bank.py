from __future__ import annotations
import json, importlib.resources as ir
from typing import Dict, List
from .types import Question
QUESTION_TYPES = ["likert","multi","slider"]
LIKERT_LABELS = ["Strongly Disagree","Disagree","Neutral","Agree","Strongly Agree"]
def load_bank() -> List[Question]:
    data = ir.files(__package__).joinpath("data/bank.json").read_text(encoding="utf-8")
    raw = json.loads(data)
    return [Question(**r) for r in raw]
def bank_by_id(questions: List[Question]) -> Dict[str, Question]:
    return {q.id: q for q in questions}
