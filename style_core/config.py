from __future__ import annotations
import os, json, pathlib, random


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int | None) -> int | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


RESULT_VERSION: str = "clean-v1"
RESULT_PREFIX: str = "pinochle-result"
DEFAULT_RESPONDENT: str = "anonymous"

NORM_SCALE: float = 10.0
NORM_BOUND: float = 10.0

LIKERT_MIN: int = 1
LIKERT_MAX: int = 5
LIKERT_CENTER: int = 3

EXPORT_DIR: str = "results"
EXPORT_ENABLED: bool = True

SESSION_TTL_SEC: int = 6 * 3600

DEBUG_TRACE: bool = False
SEED: int | None = None
TRACE_FIELDS: tuple[str, ...] = ("item_id", "type", "raw", "dx", "dy", "max_dx", "max_dy")

ALLOWED_ORIGINS: list[str] = [
    "http://localhost:3000",
    "http://localhost:5173",
]
# // env overrides for ops; scoring constants are fixed.
EXPORT_DIR = os.getenv("EXPORT_DIR", EXPORT_DIR)
EXPORT_ENABLED = _env_bool("EXPORT_ENABLED", EXPORT_ENABLED)
DEBUG_TRACE = _env_bool("DEBUG_TRACE", DEBUG_TRACE)
SEED = _env_int("SEED", SEED)
SESSION_TTL_SEC = _env_int("SESSION_TTL_SEC", SESSION_TTL_SEC)
if os.getenv("ALLOWED_ORIGINS"):
    ALLOWED_ORIGINS = [o.strip() for o in os.environ["ALLOWED_ORIGINS"].split(",") if o.strip()]

def load_config() -> dict:
    cfg = {}
    p = pathlib.Path("config.json")
    if p.exists():
        try: cfg = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, ValueError): cfg = {}
    e = os.environ
    if e.get("EXPORT_DIR"): cfg["EXPORT_DIR"] = e.get("EXPORT_DIR")
    if e.get("SEED"):
        seed = _env_int("SEED", None)
        if seed is not None: cfg["SEED"] = seed
    cfg.setdefault("EXPORT_DIR", EXPORT_DIR)
    return cfg
def make_rng(cfg: dict) -> random.Random:
    s = cfg.get("SEED", SEED)
    return random.Random(int(s)) if s is not None else random.Random()
