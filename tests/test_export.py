from __future__ import annotations

import importlib
import json
from datetime import datetime, timezone

from style_core import config
from style_core.engine import aggregate
from style_core.export import build_result_payload, result_filename, to_json, write_result

_WHEN = datetime(2024, 5, 6, 7, 8, 9, tzinfo=timezone.utc)


def _payload(bank, answers, respondent="Dani"):
    return build_result_payload(
        respondent=respondent,
        answers=answers,
        questions=list(reversed(bank)),
        profile=aggregate(bank, answers),
        now=_WHEN,
    )


def test_payload_shape(bank):
    payload = _payload(bank, {"Q9": 5, "Q25": "Win with a safe, small hand"})
    assert list(payload) == ["version", "timestamp", "respondent", "question_order", "answers", "scores"]
    assert payload["version"] == "clean-v1"
    assert payload["timestamp"] == "2024-05-06T07:08:09+00:00"
    assert payload["question_order"][0] == "Q25"
    assert len(payload["question_order"]) == 25
    assert set(payload["scores"]) == {"rawX", "rawY", "normX", "normY", "maxX", "maxY", "quadrant", "persona"}
    assert payload["answers"] == {"Q9": 5, "Q25": "Win with a safe, small hand"}


def test_blank_respondent_is_anonymous(bank):
    assert _payload(bank, {}, respondent="  ")["respondent"] == "anonymous"


def test_json_keeps_unicode(bank):
    text = to_json(_payload(bank, {"Q1": "0–1"}))
    assert "0–1" in text
    assert json.loads(text)["answers"]["Q1"] == "0–1"


def test_result_filename_uses_epoch_millis():
    assert result_filename(_WHEN) == f"pinochle-result-{int(_WHEN.timestamp() * 1000)}.json"
    naive = datetime(2024, 5, 6, 7, 8, 9)
    assert result_filename(naive) == result_filename(_WHEN)


def test_write_result(tmp_path, bank):
    payload = _payload(bank, {"Q2": 1})
    path = write_result(payload, tmp_path / "out", now=_WHEN)
    assert path.parent == tmp_path / "out"
    assert path.name.startswith("pinochle-result-")
    assert json.loads(path.read_text(encoding="utf-8")) == payload


def test_export_dir_env_override(tmp_path, monkeypatch):
    monkeypatch.setenv("EXPORT_DIR", str(tmp_path / "env-results"))
    try:
        importlib.reload(config)
        assert config.EXPORT_DIR == str(tmp_path / "env-results")
        assert config.load_config()["EXPORT_DIR"] == str(tmp_path / "env-results")
    finally:
        monkeypatch.delenv("EXPORT_DIR", raising=False)
        importlib.reload(config)
    assert config.EXPORT_DIR == "results"


def test_bad_env_values_fall_back(monkeypatch):
    monkeypatch.setenv("SEED", "not-a-number")
    monkeypatch.setenv("EXPORT_ENABLED", "off")
    try:
        importlib.reload(config)
        assert config.SEED is None
        assert config.EXPORT_ENABLED is False
    finally:
        monkeypatch.delenv("SEED", raising=False)
        monkeypatch.delenv("EXPORT_ENABLED", raising=False)
        importlib.reload(config)
