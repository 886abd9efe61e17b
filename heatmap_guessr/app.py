"""
JSON API for the daily TV heatmap puzzle.
Run: uvicorn heatmap_guessr.app:app --reload --host 0.0.0.0 --port 3001

Routes are served both at the root and under /api (the browser client's prefix).
No session state is held here: the client sends back its attempt count and
date key with every request.
"""
from __future__ import annotations

import logging
import re
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, StrictInt, StrictStr, field_validator
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from .check import evaluate_guess
from .clues import MAX_ATTEMPTS, attach_answer, build_public_payload, clamp_attempts
from .config import get_settings
from .pool import PuzzleService, get_service, init_service
from .selector import InvalidDateKey, build_archive, get_date_key, is_date_key, parse_date_key, select_puzzle

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

# Messages for request-body validation failures, keyed by field name.
_FIELD_ERRORS = {
    "guess": "guess is required",
    "attemptsUsed": f"attemptsUsed must be an integer from 0 to {MAX_ATTEMPTS - 1}",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    # Load eagerly so a missing or broken pool shows up in the boot log.
    service = init_service(settings.pool_path)
    logger.info("Serving %d puzzles (source=%s, tz=%s)", len(service), service.source, settings.timezone)
    yield


limiter = Limiter(
    key_func=get_remote_address,
    application_limits=[get_settings().rate_limit],
    headers_enabled=True,
)

app = FastAPI(title="Heatmap Guessr", lifespan=lifespan)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=[get_settings().frontend_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter()


def puzzle_service() -> PuzzleService:
    return get_service()


def today_key() -> str:
    return get_date_key()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _parse_attempts(raw: str | None) -> int:
    """Leading integer of the query value, 0 when there is none."""
    m = _LEADING_INT.match(raw or "")
    return int(m.group(1)) if m else 0


class GuessRequest(BaseModel):
    guess: StrictStr
    # Attempts used before this guess, so 4 is the last legal value.
    attemptsUsed: StrictInt = Field(ge=0, le=MAX_ATTEMPTS - 1)
    dateKey: str | None = None

    @field_validator("guess")
    @classmethod
    def guess_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("guess is required")
        return v

    @field_validator("dateKey", mode="before")
    @classmethod
    def drop_malformed_date_key(cls, v):
        # Anything that isn't YYYY-MM-DD means "today", not an error.
        return v if is_date_key(v) else None


@router.get("/puzzle/today")
def api_puzzle_today(
    attempts: str = "0",
    today: str = Depends(today_key),
    service: PuzzleService = Depends(puzzle_service),
):
    """Today's puzzle with the clues unlocked after `attempts` wrong guesses."""
    attempts_used = clamp_attempts(_parse_attempts(attempts))
    puzzle = select_puzzle(today, service.pool)
    payload = build_public_payload(puzzle, attempts_used)
    if attempts_used >= MAX_ATTEMPTS:
        attach_answer(payload, puzzle)
    return {"dateKey": today, "puzzle": payload}


@router.get("/puzzle/date/{date_key}")
def api_puzzle_for_date(
    date_key: str,
    attempts: str = "0",
    today: str = Depends(today_key),
    service: PuzzleService = Depends(puzzle_service),
):
    """Puzzle for a given day. Past days come back fully revealed."""
    try:
        day = parse_date_key(date_key)
    except InvalidDateKey as e:
        raise HTTPException(status_code=400, detail=str(e))
    today_date = parse_date_key(today)
    if day > today_date:
        raise HTTPException(status_code=400, detail="That puzzle is not available yet")

    is_past = day < today_date
    attempts_used = MAX_ATTEMPTS if is_past else clamp_attempts(_parse_attempts(attempts))
    puzzle = select_puzzle(date_key, service.pool)
    payload = build_public_payload(puzzle, attempts_used)
    if attempts_used >= MAX_ATTEMPTS:
        attach_answer(payload, puzzle)
    return {"dateKey": date_key, "puzzle": payload, "isPast": is_past}


@router.get("/puzzle/titles")
def api_titles(service: PuzzleService = Depends(puzzle_service)):
    """Autocomplete list: id, title and aliases only."""
    return {
        "titles": [
            {"id": t.id, "title": t.title, "aliases": list(t.aliases)} for t in service.titles
        ]
    }


@router.get("/puzzle/archive")
def api_archive(
    today: str = Depends(today_key),
    service: PuzzleService = Depends(puzzle_service),
):
    """Recent past puzzles (with answers) back to the launch date."""
    return {"archive": build_archive(today, service.pool)}


@router.post("/guess")
def api_guess(
    body: GuessRequest,
    today: str = Depends(today_key),
    service: PuzzleService = Depends(puzzle_service),
):
    """Check a guess. dateKey selects a past day (replay); otherwise today."""
    date_key = today
    if body.dateKey is not None:
        try:
            if parse_date_key(body.dateKey) <= parse_date_key(today):
                date_key = body.dateKey
        except InvalidDateKey:
            pass  # well-formed but not a real date: play today's

    puzzle = select_puzzle(date_key, service.pool)
    result = evaluate_guess(puzzle, body.guess, body.attemptsUsed)
    payload = build_public_payload(puzzle, result.new_attempts_used)
    out = {
        "correct": result.correct,
        "attemptsUsed": result.new_attempts_used,
        "dateKey": date_key,
        "puzzle": payload,
    }
    if result.reveal_answer:
        attach_answer(payload, puzzle)
        out["answer"] = puzzle.title
    logger.debug("Guess for %s: correct=%s attempts=%d", date_key, result.correct, result.new_attempts_used)
    return out


@router.get("/health")
def api_health():
    now = datetime.now(timezone.utc)
    return {"status": "ok", "timestamp": now.isoformat(timespec="milliseconds").replace("+00:00", "Z")}


app.include_router(router)
app.include_router(router, prefix="/api")


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError):
    for err in exc.errors():
        loc = err.get("loc") or ()
        field = loc[-1] if loc else None
        if field in _FIELD_ERRORS:
            return _error(400, _FIELD_ERRORS[field])
    return _error(400, "Invalid request body")


@app.exception_handler(StarletteHTTPException)
async def handle_http_error(request: Request, exc: StarletteHTTPException):
    # A known path with the wrong method is still an unknown route to clients.
    if exc.status_code in (404, 405):
        return _error(404, "Not found")
    return _error(exc.status_code, str(exc.detail))


# Must stay sync: the rate-limit middleware calls it without awaiting.
@app.exception_handler(RateLimitExceeded)
def handle_rate_limited(request: Request, exc: RateLimitExceeded):
    response = _error(429, "Too many requests, please try again later")
    return request.app.state.limiter._inject_headers(response, request.state.view_rate_limit)


@app.exception_handler(Exception)
async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _error(500, "Internal server error")
