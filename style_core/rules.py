"""Per-question weight table.

Axis X runs from steady (-) to aggressive (+); axis Y from calculated (-)
to instinctive (+). Each catalog id maps to exactly one rule descriptor;
the arithmetic lives in :mod:`style_core.scoring`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Tuple, Union


@dataclass(frozen=True)
class LikertRule:
    """Centered 1..5 score times a signed multiplier per axis (0 = axis untouched)."""

    x: float = 0.0
    y: float = 0.0
    kind: str = field(default="likert", init=False)

    @property
    def maxima(self) -> Tuple[float, float]:
        return 2 * abs(self.x), 2 * abs(self.y)


@dataclass(frozen=True)
class ChoiceRule:
    table: Dict[str, Tuple[float, float]]
    kind: str = field(default="multi", init=False)

    @property
    def maxima(self) -> Tuple[float, float]:
        if not self.table:
            return 0.0, 0.0
        return (
            max(abs(dx) for dx, _ in self.table.values()),
            max(abs(dy) for _, dy in self.table.values()),
        )


@dataclass(frozen=True)
class StepRampRule:
    """Three segments on X: floor at/below ``low``, zero up to ``mid``, ramp to ``ceiling`` at ``hi``."""

    lo: int
    hi: int
    low: int
    mid: int
    floor: float
    ceiling: float
    kind: str = field(default="slider", init=False)

    @property
    def maxima(self) -> Tuple[float, float]:
        return abs(self.ceiling), 0.0


@dataclass(frozen=True)
class LinearRule:
    """Full-range interpolation on X from ``peak`` at ``lo`` down to ``-peak`` at ``hi``."""

    lo: int
    hi: int
    peak: float
    kind: str = field(default="slider", init=False)

    @property
    def maxima(self) -> Tuple[float, float]:
        return abs(self.peak), 0.0


Rule = Union[LikertRule, ChoiceRule, StepRampRule, LinearRule]

SAFE_HAND = "Win with a safe, small hand"
LEGENDARY_HAND = "Lose spectacularly trying for something legendary"

RULES: Dict[str, Rule] = {
    "Q1": ChoiceRule({
        "0–1": (-2.0, 0.0),
        "2": (-1.0, 0.0),
        "3": (1.0, 0.0),
        "4": (2.0, 0.0),
        "As many as required": (2.0, 0.0),
    }),
    "Q2": LikertRule(y=1.0),
    "Q3": StepRampRule(lo=25, hi=150, low=30, mid=40, floor=-2.0, ceiling=2.0),
    "Q4": LikertRule(y=-1.0),
    "Q5": ChoiceRule({
        "Defer to my partner and stop being aggressive": (-1.5, -1.0),
        "I don’t change my approach": (0.0, 0.0),
        "Bid more and drag the team out of the doldrums": (1.5, -0.5),
        "Have a Margarita and trust Crom or Baphomet to deliver glory": (1.5, 1.0),
    }),
    "Q6": LinearRule(lo=25, hi=45, peak=2.0),
    "Q7": LikertRule(y=1.0),
    "Q8": LikertRule(x=-1.0),
    "Q9": LikertRule(x=1.0),
    "Q10": LikertRule(x=-1.0),
    "Q11": LikertRule(x=1.0),
    "Q12": LikertRule(x=0.8, y=0.8),
    "Q13": LikertRule(y=-1.0),
    "Q14": LikertRule(y=1.0),
    "Q15": LikertRule(y=-1.0),
    "Q16": LikertRule(y=1.0),
    "Q17": LikertRule(y=-1.0),
    "Q18": LikertRule(y=1.0),
    "Q19": LikertRule(x=-0.5, y=-0.8),
    "Q20": LikertRule(x=0.8, y=0.3),
    "Q21": LikertRule(x=0.8, y=-0.3),
    "Q22": LikertRule(x=0.8, y=0.8),
    "Q23": LikertRule(x=-1.0),
    "Q24": LikertRule(y=0.7),
    "Q25": ChoiceRule({
        SAFE_HAND: (-2.0, -1.0),
        LEGENDARY_HAND: (2.0, 1.0),
    }),
}


def rule_for(question_id: str) -> Rule | None:
    return RULES.get(question_id)


__all__ = ["LikertRule", "ChoiceRule", "StepRampRule", "LinearRule", "Rule", "RULES", "rule_for"]
