from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Literal
QuestionType = Literal["likert","multi","slider"]
Quadrant = Literal["TR","BR","TL","BL"]
PersonaKey = Literal["Maverick","Tactician","Sage","Guardian"]
@dataclass(frozen=True)
class Question:
    id: str; type: QuestionType; text: str
    options: Optional[List[str]] = None
    min: Optional[int] = None
    max: Optional[int] = None
@dataclass
class Answer:
    item_id: str; value: Any
@dataclass(frozen=True)
class Contribution:
    dx: float = 0.0
    dy: float = 0.0
    max_dx: float = 0.0
    max_dy: float = 0.0
ZERO = Contribution()
@dataclass(frozen=True)
class Profile:
    raw_x: float
    raw_y: float
    max_x: float
    max_y: float
    norm_x: float
    norm_y: float
    quadrant: Quadrant
    persona: PersonaKey
    def to_dict(self) -> Dict[str, object]:
        return {
            "rawX": self.raw_x,
            "rawY": self.raw_y,
            "normX": self.norm_x,
            "normY": self.norm_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
            "quadrant": self.quadrant,
            "persona": self.persona,
        }
