"""Recompute profiles from exported result files and flag stored scores that disagree."""
from __future__ import annotations
import argparse, json, math
from pathlib import Path
from typing import Any, Dict, List

from style_core.engine import aggregate
from style_core.question_bank import load_bank

_NUMERIC = ("rawX", "rawY", "normX", "normY", "maxX", "maxY")


def rescore(record: Dict[str, Any], bank=None) -> Dict[str, Any]:
    bank = bank if bank is not None else load_bank()
    answers = record.get("answers") or {}
    fresh = aggregate(bank, answers).to_dict()
    stored = record.get("scores") or {}
    diffs: List[str] = []
    for key in _NUMERIC:
        try:
            if not math.isclose(float(stored.get(key)), float(fresh[key]), abs_tol=1e-9):
                diffs.append(key)
        except (TypeError, ValueError):
            diffs.append(key)
    for key in ("quadrant", "persona"):
        if stored.get(key) != fresh[key]:
            diffs.append(key)
    return {"respondent": record.get("respondent", ""), "scores": fresh, "mismatch": diffs}


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("paths", nargs="*", type=Path, default=[Path("results")])
    args = ap.parse_args(argv)

    files: List[Path] = []
    for p in args.paths:
        files.extend(sorted(p.glob("*.json")) if p.is_dir() else [p])
    if not files:
        print("No result files found.")
        return 1

    bank = load_bank()
    bad = 0
    for f in files:
        try:
            record = json.loads(f.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            print(f"{f.name}: unreadable ({e})"); bad += 1
            continue
        out = rescore(record, bank)
        s = out["scores"]
        flag = "OK" if not out["mismatch"] else "MISMATCH " + ",".join(out["mismatch"])
        print(f"{f.name}: {out['respondent'] or '-'}  {s['persona']:<9} ({s['normX']:+.2f}, {s['normY']:+.2f})  {flag}")
        if out["mismatch"]: bad += 1
    return 2 if bad else 0


if __name__ == "__main__":
    raise SystemExit(main())
