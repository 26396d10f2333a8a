# style_core/personas.py
from __future__ import annotations
from typing import Dict, Tuple
from .types import PersonaKey, Quadrant

PERSONAS: Dict[str, str] = {"TR": "Maverick", "BR": "Tactician", "TL": "Sage", "BL": "Guardian"}

def quadrant(norm_x: float, norm_y: float) -> Quadrant:
    # zero counts as the non-negative side on both axes
    if norm_x >= 0 and norm_y >= 0: return "TR"
    if norm_x >= 0: return "BR"
    if norm_y >= 0: return "TL"
    return "BL"

def persona(q: str) -> PersonaKey:
    return PERSONAS[q]  # type: ignore[return-value]

def classify(norm_x: float, norm_y: float) -> Tuple[Quadrant, PersonaKey]:
    q = quadrant(norm_x, norm_y)
    return q, persona(q)
