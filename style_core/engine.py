# style_core/engine.py
from __future__ import annotations
from datetime import datetime
from typing import Any, Dict, Iterable, List, Mapping, Optional
import logging, random

from .types import Answer, Profile, Question
from .question_bank import load_bank, bank_by_id
from .scoring import score_question, max_contribution, is_valid_answer
from .personas import classify
from .config import (
    load_config,
    make_rng,
    DEFAULT_RESPONDENT,
    NORM_SCALE,
    NORM_BOUND,
    DEBUG_TRACE,
    TRACE_FIELDS,
)
from . import export


log = logging.getLogger(__name__)


def _emit_trace(**values: object) -> None:
    if not DEBUG_TRACE:
        return
    ordered = []
    for key in TRACE_FIELDS:
        if key in values:
            ordered.append(f"{key}={values[key]}")
    if ordered:
        log.info("trace %s", " ".join(ordered))


def _normalize(raw: float, maximum: float) -> float:
    if not maximum:
        return 0.0
    scaled = raw / maximum * NORM_SCALE
    return max(-NORM_BOUND, min(NORM_BOUND, scaled))


def aggregate(questions: Iterable[Question], answers: Mapping[str, Any]) -> Profile:
    """Score every catalog question and place the totals on the persona grid.

    ``answers`` may be partial. The denominators are the declared maxima of
    the whole catalog, so unanswered questions pull the result toward the
    centre instead of being rescaled away.
    """
    x = y = 0.0
    max_x = max_y = 0.0
    for q in questions:
        raw = answers.get(q.id) if answers else None
        c = score_question(q, raw)
        mdx, mdy = max_contribution(q)
        x += c.dx
        y += c.dy
        max_x += abs(mdx)
        max_y += abs(mdy)
        _emit_trace(item_id=q.id, type=q.type, raw=raw, dx=c.dx, dy=c.dy, max_dx=mdx, max_dy=mdy)

    norm_x = _normalize(x, max_x)
    norm_y = _normalize(y, max_y)
    quadrant, persona = classify(norm_x, norm_y)
    return Profile(
        raw_x=x, raw_y=y,
        max_x=max_x, max_y=max_y,
        norm_x=norm_x, norm_y=norm_y,
        quadrant=quadrant, persona=persona,
    )


def shuffle_questions(questions: Iterable[Question], rng: Optional[random.Random] = None) -> List[Question]:
    """Fisher-Yates over a copy; the caller's sequence is left alone."""
    out = list(questions)
    r = rng or random.Random()
    for i in range(len(out) - 1, 0, -1):
        j = r.randrange(i + 1)
        out[i], out[j] = out[j], out[i]
    return out


class QuizSession:
    def __init__(
        self,
        respondent: str = "",
        questions: Optional[List[Question]] = None,
        order: Optional[List[str]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.cfg = load_config()
        self.respondent = (respondent or "").strip() or DEFAULT_RESPONDENT
        self.bank: List[Question] = list(questions) if questions is not None else load_bank()
        self._id_to_item: Dict[str, Question] = bank_by_id(self.bank)
        if order is not None:
            self.sequence = [self._id_to_item[qid] for qid in order if qid in self._id_to_item]
        else:
            self.sequence = shuffle_questions(self.bank, rng or make_rng(self.cfg))
        self.answers: Dict[str, Any] = {}
        self._idx = 0

    @property
    def total(self) -> int:
        return len(self.sequence)

    @property
    def answered_count(self) -> int:
        return len(self.answers)

    @property
    def index(self) -> int:
        return self._idx

    @property
    def done(self) -> bool:
        return self._idx >= len(self.sequence)

    @property
    def question_order(self) -> List[str]:
        return [q.id for q in self.sequence]

    def current(self) -> Optional[Question]:
        if self.done: return None
        return self.sequence[self._idx]

    def next_item(self) -> Optional[Question]:
        it = self.current()
        if it is None: return None
        if it.id not in self.answers:
            return it
        self._idx += 1
        return self.current()

    def answer_current(self, answer: Answer) -> bool:
        it = self.current()
        if it is None or answer.item_id != it.id:
            log.debug("refused answer for %s (current=%s)", answer.item_id, getattr(it, "id", None))
            return False
        if not is_valid_answer(it, answer.value):
            log.debug("refused invalid value for %s: %r", it.id, answer.value)
            return False
        self.answers[it.id] = answer.value
        return True

    def finalize(self) -> Profile:
        return aggregate(self.bank, self.answers)

    def to_record(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        return export.build_result_payload(
            respondent=self.respondent,
            answers=self.answers,
            questions=self.sequence,
            profile=self.finalize(),
            now=now,
        )
