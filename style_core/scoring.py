from __future__ import annotations
from typing import Any, Optional, Tuple
import math

from .config import LIKERT_MIN, LIKERT_MAX, LIKERT_CENTER
from .rules import ChoiceRule, LikertRule, LinearRule, StepRampRule, rule_for
from .types import Contribution, Question, ZERO


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, x))


def _as_int(value: Any) -> Optional[int]:
    # bool is an int subclass but never a valid answer
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    return None


def _likert_value(value: Any) -> Optional[int]:
    v = _as_int(value)
    if v is None or not (LIKERT_MIN <= v <= LIKERT_MAX):
        return None
    return v


def _slider_value(question: Question, value: Any) -> Optional[int]:
    v = _as_int(value)
    if v is None or question.min is None or question.max is None:
        return None
    if not (question.min <= v <= question.max):
        return None
    return v


def _choice_value(question: Question, value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    if question.options is not None and value not in question.options:
        return None
    return value


def is_valid_answer(question: Question, value: Any) -> bool:
    """Shape check shared by the scorer and the collection layer."""
    t = str(getattr(question, "type", ""))
    if t == "likert":
        return _likert_value(value) is not None
    if t == "multi":
        return _choice_value(question, value) is not None
    if t == "slider":
        return _slider_value(question, value) is not None
    return False


def _score_likert(rule: LikertRule, value: int) -> Tuple[float, float]:
    s = value - LIKERT_CENTER
    return s * rule.x, s * rule.y


def _score_choice(rule: ChoiceRule, value: str) -> Tuple[float, float]:
    return rule.table.get(value, (0.0, 0.0))


def _score_step_ramp(rule: StepRampRule, value: int) -> Tuple[float, float]:
    if value <= rule.low:
        return rule.floor, 0.0
    if value <= rule.mid:
        return 0.0, 0.0
    span = rule.hi - rule.mid
    if span <= 0:
        return rule.ceiling, 0.0
    dx = (value - rule.mid) / span * rule.ceiling
    lo, hi = sorted((0.0, rule.ceiling))
    return _clamp(dx, lo, hi), 0.0


def _score_linear(rule: LinearRule, value: int) -> Tuple[float, float]:
    span = rule.hi - rule.lo
    if span <= 0:
        return 0.0, 0.0
    dx = rule.peak - (value - rule.lo) / span * 2 * rule.peak
    return _clamp(dx, -abs(rule.peak), abs(rule.peak)), 0.0


def max_contribution(question: Question) -> Tuple[float, float]:
    """Declared (max_dx, max_dy) for the question, whatever was answered."""
    rule = rule_for(getattr(question, "id", ""))
    if rule is None:
        return 0.0, 0.0
    return rule.maxima


def score_question(question: Question, value: Any) -> Contribution:
    """
    Returns the question's Contribution.
    likert: value is int 1..5.
    multi: value is one of question.options.
    slider: value is int within [min, max].
    Anything else, including an unknown id or a modality that disagrees
    with the rule, is the zero contribution.
    """
    rule = rule_for(getattr(question, "id", ""))
    if rule is None or rule.kind != getattr(question, "type", None):
        return ZERO
    if value is None or not is_valid_answer(question, value):
        return ZERO
    if isinstance(rule, LikertRule):
        dx, dy = _score_likert(rule, _as_int(value))
    elif isinstance(rule, ChoiceRule):
        dx, dy = _score_choice(rule, value)
    elif isinstance(rule, StepRampRule):
        dx, dy = _score_step_ramp(rule, _as_int(value))
    elif isinstance(rule, LinearRule):
        dx, dy = _score_linear(rule, _as_int(value))
    else:
        return ZERO
    max_dx, max_dy = rule.maxima
    return Contribution(dx=float(dx), dy=float(dy), max_dx=max_dx, max_dy=max_dy)
