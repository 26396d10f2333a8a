"""Build and write the result record handed to the organizer."""
from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterable, Mapping, Optional
import json

from . import config
from .types import Profile, Question

_KEYS: tuple[str, ...] = (
    "version",
    "timestamp",
    "respondent",
    "question_order",
    "answers",
    "scores",
)


def _now(now: Optional[datetime]) -> datetime:
    if now is None:
        return datetime.now(timezone.utc)
    if now.tzinfo is None:
        return now.replace(tzinfo=timezone.utc)
    return now


def _to_basic(x: Any) -> Any:
    if x is None or isinstance(x, (bool, int, float, str)):
        return x
    if isinstance(x, Mapping):
        return {str(k): _to_basic(v) for k, v in x.items()}
    if isinstance(x, (list, tuple, set)):
        return [_to_basic(v) for v in x]
    if hasattr(x, "to_dict"):
        return _to_basic(x.to_dict())
    return str(x)


def build_result_payload(
    *,
    respondent: str,
    answers: Mapping[str, Any],
    questions: Iterable[Question],
    profile: Profile,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """Return a JSON-safe result record; key order is fixed."""

    payload = {
        "version": config.RESULT_VERSION,
        "timestamp": _now(now).isoformat(),
        "respondent": (respondent or "").strip() or config.DEFAULT_RESPONDENT,
        "question_order": [q.id for q in questions],
        "answers": _to_basic(dict(answers)),
        "scores": profile.to_dict(),
    }
    return {key: payload[key] for key in _KEYS}


def to_json(payload: Mapping[str, Any]) -> str:
    return json.dumps(_to_basic(payload), ensure_ascii=False, indent=2)


def result_filename(now: Optional[datetime] = None) -> str:
    ms = int(_now(now).timestamp() * 1000)
    return f"{config.RESULT_PREFIX}-{ms}.json"


def write_result(payload: Mapping[str, Any], out_dir: str | Path | None = None, now: Optional[datetime] = None) -> Path:
    """Write the record under ``out_dir`` (default: ``EXPORT_DIR`` from env, ``config.json`` or the module) and return its path."""

    out = Path(out_dir or config.load_config()["EXPORT_DIR"])
    out.mkdir(parents=True, exist_ok=True)
    path = out / result_filename(now)
    path.write_text(to_json(payload) + "\n", encoding="utf-8")
    return path


__all__ = ["build_result_payload", "to_json", "result_filename", "write_result"]
