from __future__ import annotations
from fastapi import FastAPI, HTTPException, Body, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, StrictBool, StrictFloat, StrictInt, StrictStr
import uuid, logging, time

# ---- Engine imports ----
from style_core.engine import QuizSession
from style_core.types import Answer
from style_core.question_bank import load_bank, LIKERT_LABELS
from style_core import config
from style_core.export import to_json, result_filename

log = logging.getLogger(__name__)

# sessions live only as long as the quiz; nothing is written to disk
SESS: dict[str, QuizSession] = {}
SESSION_INFO: dict[str, dict] = {}

app = FastAPI(title="Pinochle Style Insights API")

@app.get("/")
def root():
    return {"status": "ok", "service": "pinochle-style-insights"}

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=False,
    expose_headers=["Content-Disposition"],
)

# ---- Schemas ----
class StartReq(BaseModel):
    respondent: str | None = None

class FEAnswer(BaseModel):
    session_id: str
    item_id: str
    # no coercion: true must not become 1; the session rejects off-shape values
    answer: StrictBool | StrictInt | StrictFloat | StrictStr

class FEFinish(BaseModel):
    session_id: str

# ---- Helpers ----
def _serialize_item(it):
    if it is None: return None
    out = {"id": it.id, "type": it.type, "prompt": it.text}
    if it.type == "likert":
        out["options"] = [{"value": i + 1, "label": lbl} for i, lbl in enumerate(LIKERT_LABELS)]
    elif it.type == "multi":
        out["options"] = list(it.options or [])
    elif it.type == "slider":
        out["min"] = it.min
        out["max"] = it.max
    return out

def _drop(sid: str) -> None:
    SESS.pop(sid, None)
    SESSION_INFO.pop(sid, None)

def _prune_sessions(now: float | None = None) -> int:
    """Drop sessions started more than SESSION_TTL_SEC ago; return how many."""
    now = time.time() if now is None else now
    stale = [sid for sid, info in SESSION_INFO.items() if now - info["started_at"] > config.SESSION_TTL_SEC]
    for sid in stale:
        _drop(sid)
    if stale: log.info("pruned %d stale session(s)", len(stale))
    return len(stale)

def _session(sid: str) -> QuizSession:
    sess = SESS.get(sid)
    if not sess: raise HTTPException(404, "session not found")
    return sess

# ---- Health ----
@app.get("/health")
def health():
    return {
        "questions": len(load_bank()),
        "result_version": config.RESULT_VERSION,
        "export_enabled": config.EXPORT_ENABLED,
        "active_sessions": len(SESS),
    }

# ---- Session endpoints ----
@app.post("/session/start")
def start(req: StartReq | None = None):
    _prune_sessions()
    sid = str(uuid.uuid4())
    sess = QuizSession(respondent=(req.respondent if req else None) or "")
    SESS[sid] = sess
    SESSION_INFO[sid] = {"started_at": time.time()}
    log.info("session %s started (%d questions)", sid, sess.total)
    return {"session_id": sid, "total": sess.total, "item": _serialize_item(sess.next_item())}

@app.get("/api/quiz/next")
def quiz_next(session_id: str):
    sess = _session(session_id)
    item = _serialize_item(sess.next_item())
    return {"item": item, "index": sess.index, "total": sess.total, "answered": sess.answered_count}

@app.post("/api/quiz/answer")
def quiz_answer(payload: FEAnswer = Body(...)):
    sess = _session(payload.session_id)
    cur = sess.current()
    if cur is None:
        raise HTTPException(400, "quiz already complete")
    if payload.item_id != cur.id:
        raise HTTPException(400, f"expected an answer for {cur.id}")
    if not sess.answer_current(Answer(item_id=payload.item_id, value=payload.answer)):
        raise HTTPException(400, f"invalid answer for {cur.id}")
    nxt = sess.next_item()
    return {"ok": True, "next_available": nxt is not None}

@app.post("/api/quiz/finish")
def quiz_finish(payload: FEFinish):
    sess = _session(payload.session_id)
    if not config.EXPORT_ENABLED:
        raise HTTPException(404, "result export disabled")
    record = sess.to_record()
    _drop(payload.session_id)
    log.info("session %s finished (%d/%d answered)", payload.session_id, sess.answered_count, sess.total)
    return Response(
        content=to_json(record),
        media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename=\"{result_filename()}\""},
    )
