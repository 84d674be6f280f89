import logging
from typing import List, Optional

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .game import CORRECT_ANSWER_POINTS, SessionStore
from .models import Question
from .questions import load_questions
from .schemas import (
    ActionIn,
    ClientConfigOut,
    EventsOut,
    GameStateOut,
    LeaderboardOut,
)

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Holiday Trivia API")

origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
origin_regex = settings.CORS_ORIGIN_REGEX or None

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins or ["*"],
    allow_origin_regex=origin_regex,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

store = SessionStore(
    load_questions(settings.QUESTIONS_FILE),
    allow_late_join=settings.ALLOW_LATE_JOIN,
    max_events=settings.MAX_EVENTS,
)


def get_store() -> SessionStore:
    return store


@app.get("/api/game", response_model=GameStateOut)
async def get_game(s: SessionStore = Depends(get_store)):
    return GameStateOut.from_snapshot(await s.read())


@app.post("/api/game", response_model=GameStateOut)
async def post_action(payload: ActionIn, s: SessionStore = Depends(get_store)):
    snap = await s.apply(payload.action, payload.params())
    return GameStateOut.from_snapshot(snap)


@app.get("/api/game/events", response_model=EventsOut)
async def list_events(
    after: Optional[int] = None,
    limit: int = Query(default=200, ge=1, le=1000),
    s: SessionStore = Depends(get_store),
):
    events = await s.list_events(after=after, limit=limit)
    latest_seq = events[-1]["seq"] if events else after
    return {"events": events, "latest_seq": latest_seq}


@app.get("/api/game/leaderboard", response_model=LeaderboardOut)
async def leaderboard(s: SessionStore = Depends(get_store)):
    return {"leaderboard": await s.leaderboard()}


@app.get("/api/questions", response_model=List[Question])
async def list_questions(s: SessionStore = Depends(get_store)):
    return list(s.questions)


@app.get("/api/config", response_model=ClientConfigOut)
async def client_config(s: SessionStore = Depends(get_store)):
    return ClientConfigOut(
        pollIntervalMs=settings.POLL_INTERVAL_MS,
        answerWindowSeconds=settings.ANSWER_WINDOW_SECONDS,
        pointsPerCorrectAnswer=CORRECT_ANSWER_POINTS,
        questionCount=len(s.questions),
    )
