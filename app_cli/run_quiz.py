from __future__ import annotations
import argparse, logging, sys
from style_core.types import Answer, Question
from style_core.engine import QuizSession
from style_core.question_bank import LIKERT_LABELS
from style_core.export import write_result, to_json
from style_core import config

def ask(prompt: str, options=None) -> str:
    if options:
        print(prompt)
        for i,opt in enumerate(options, 1): print(f"  [{i}] {opt}")
        while True:
            v = input("Your choice (number): ").strip()
            if v.isdigit() and 1 <= int(v) <= len(options): return v
            print(f"Enter a number from 1 to {len(options)}.")
    else:
        return input(prompt + " ").strip()

def read_answer(q: Question):
    """Collect one raw value shaped for the question's modality."""
    if q.type == "likert":
        return int(ask(q.text, LIKERT_LABELS))
    if q.type == "multi":
        return q.options[int(ask(q.text, q.options)) - 1]
    while True:
        v = ask(f"{q.text}\n  ({q.min}-{q.max}, Enter = {q.min}):")
        if not v: return q.min
        try: n = int(v)
        except ValueError: n = None
        if n is not None and q.min <= n <= q.max: return n
        print(f"Enter a whole number from {q.min} to {q.max}.")

def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description="Pinochle Style Insights (terminal)")
    ap.add_argument("--name", default=None, help="name or alias (optional)")
    ap.add_argument("--out-dir", default=None, help="default: EXPORT_DIR from env or config.json")
    ap.add_argument("--print", dest="echo", action="store_true", help="also print the result JSON")
    ap.add_argument("-v", "--verbose", action="store_true")
    args = ap.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format="[%(levelname)s] %(message)s")

    print("Pinochle Style Insights")
    print("Answer 25 quick, scenario-based questions. At the end a small file is saved to share with your organizer. No results are shown here.\n")
    name = args.name if args.name is not None else input("Your name or alias (optional): ")
    session = QuizSession(respondent=name)
    while True:
        item = session.next_item()
        if item is None: break
        print(f"\nQuestion {session.index + 1} of {session.total}")
        session.answer_current(Answer(item_id=item.id, value=read_answer(item)))

    record = session.to_record()
    path = write_result(record, args.out_dir)
    if args.echo: print(to_json(record))
    print(f"\nAll set! Your result file was saved to: {path}")
    return 0

if __name__ == "__main__": sys.exit(main())
