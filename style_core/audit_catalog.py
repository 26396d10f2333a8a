from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Iterable, Mapping

from .question_bank import QUESTION_TYPES, load_bank
from .rules import RULES, ChoiceRule, LinearRule, Rule, StepRampRule
from .types import Question


def _check_rule(q: Question, rule: Rule) -> list[str]:
    problems: list[str] = []
    if rule.kind != q.type:
        problems.append(f"{q.id} is '{q.type}' but its rule expects '{rule.kind}'")
        return problems

    if isinstance(rule, ChoiceRule):
        options = list(q.options or [])
        for opt in options:
            if opt not in rule.table:
                problems.append(f"{q.id} option {opt!r} has no weight")
        for key in rule.table:
            if key not in options:
                problems.append(f"{q.id} weight key {key!r} is not an option")
    elif isinstance(rule, (StepRampRule, LinearRule)):
        if (q.min, q.max) != (rule.lo, rule.hi):
            problems.append(f"{q.id} range [{q.min},{q.max}] differs from rule range [{rule.lo},{rule.hi}]")
    return problems


def audit_catalog(questions: Iterable[Question], rules: Mapping[str, Rule] = RULES) -> dict[str, object]:
    totals = {t: 0 for t in QUESTION_TYPES}
    seen: dict[str, int] = {}
    problems: list[str] = []

    items = list(questions)
    for q in items:
        seen[q.id] = seen.get(q.id, 0) + 1
        if q.type in totals:
            totals[q.type] += 1
        else:
            problems.append(f"{q.id} has unknown type '{q.type}'")

    for qid, count in seen.items():
        if count > 1:
            problems.append(f"{qid} appears {count} times")

    for qid in rules:
        if qid not in seen:
            problems.append(f"rule {qid} has no catalog question")

    checked: set[str] = set()
    for q in items:
        if q.id in checked:
            continue
        checked.add(q.id)
        rule = rules.get(q.id)
        if rule is None:
            problems.append(f"{q.id} has no weight rule")
            continue
        problems.extend(_check_rule(q, rule))

    return {"problems": problems, "totals": totals, "count": len(items)}


def print_report(summary: dict[str, object]) -> None:
    print("=== Catalog Audit ===")
    print(f"Questions: {summary['count']}")
    totals: dict[str, int] = summary["totals"]  # type: ignore[assignment]
    for t in QUESTION_TYPES:
        print(f"  {t:<7}{totals.get(t, 0):3d}")

    problems: list[str] = summary["problems"]  # type: ignore[assignment]
    if problems:
        print("\nProblems:")
        for msg in problems:
            print(f" - {msg}")
    else:
        print("\nNo problems.")


def write_summary(summary: dict[str, object], path: Path) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Check the question catalog against the weight table.")
    ap.add_argument("--out", type=Path, default=None, help="also write the summary as JSON")
    args = ap.parse_args(argv)

    summary = audit_catalog(load_bank())
    print_report(summary)
    if args.out is not None:
        write_summary(summary, args.out)
    return 2 if summary["problems"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
