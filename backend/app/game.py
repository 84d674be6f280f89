from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional

from .events import EventStore
from .models import GameSession, GameSnapshot, Phase, Question
from .utils import sort_leaderboard

logger = logging.getLogger(__name__)

CORRECT_ANSWER_POINTS = 10

JOIN = "join"
START = "start"
ANSWER = "answer"
UPDATE_SCORE = "updateScore"
NEXT_QUESTION = "nextQuestion"
FINISH = "finish"
RESET = "reset"

Event = Optional[Dict[str, Any]]


def _clean_name(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return None
    return value.strip() or None


def _clean_index(value: Any) -> Optional[int]:
    # bool is an int subclass; true/false are not option indices
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        return None
    return value


class SessionStore:
    """Owns the one game session and serializes every read and mutation.

    Actions never fail: anything malformed or out of policy leaves the
    session untouched and the caller still gets a valid snapshot back.
    """

    def __init__(
        self,
        questions: Iterable[Question] = (),
        *,
        allow_late_join: bool = True,
        max_events: int = 200,
    ):
        self.questions = tuple(questions)
        self.allow_late_join = allow_late_join
        self.events = EventStore(max_events)
        self._session = GameSession()
        self._lock = asyncio.Lock()
        self._handlers: Dict[str, Callable[[GameSession, Mapping[str, Any]], Event]] = {
            JOIN: self._join,
            START: self._start,
            ANSWER: self._answer,
            UPDATE_SCORE: self._score_correct_answer,
            "scoreCorrectAnswer": self._score_correct_answer,
            NEXT_QUESTION: self._next_question,
            FINISH: self._finish,
            RESET: self._reset,
        }

    async def read(self) -> GameSnapshot:
        async with self._lock:
            return GameSnapshot.of(self._session)

    async def apply(self, action: Any, params: Optional[Mapping[str, Any]] = None) -> GameSnapshot:
        params = params or {}
        async with self._lock:
            handler = self._handlers.get(action) if isinstance(action, str) else None
            if handler is None:
                logger.debug("Ignoring unknown action %r", action)
                return GameSnapshot.of(self._session)

            event = handler(self._session, params)
            if event is None:
                logger.debug("Action %s had no effect (params=%r)", action, dict(params))
            else:
                self.events.append(event)
                logger.info("Applied %s: %s", action, event)
            return GameSnapshot.of(self._session)

    async def leaderboard(self) -> List[dict]:
        async with self._lock:
            return sort_leaderboard(self._session.players, self._session.scores)

    async def list_events(self, after: Optional[int] = None, limit: int = 200) -> List[dict]:
        async with self._lock:
            return self.events.list(after=after, limit=limit)

    def current_question(self, s: GameSession) -> Optional[Question]:
        if 0 <= s.current_question_idx < len(self.questions):
            return self.questions[s.current_question_idx]
        return None

    # Convenience wrappers used by tests and scripts

    async def join(self, name: str) -> GameSnapshot:
        return await self.apply(JOIN, {"player_name": name})

    async def start(self) -> GameSnapshot:
        return await self.apply(START)

    async def answer(self, name: str, question_index: int, answer_index: int) -> GameSnapshot:
        return await self.apply(
            ANSWER,
            {"player_name": name, "question_index": question_index, "answer_index": answer_index},
        )

    async def score_correct_answer(self, name: str) -> GameSnapshot:
        return await self.apply(UPDATE_SCORE, {"player_name": name})

    async def next_question(self) -> GameSnapshot:
        return await self.apply(NEXT_QUESTION)

    async def finish(self) -> GameSnapshot:
        return await self.apply(FINISH)

    async def reset(self) -> GameSnapshot:
        return await self.apply(RESET)

    # Handlers run with the lock held and return the event to log, or None
    # when the session was left unchanged.

    def _join(self, s: GameSession, params: Mapping[str, Any]) -> Event:
        name = _clean_name(params.get("player_name"))
        if name is None or name in s.players:
            return None
        if s.phase != Phase.LOBBY and not self.allow_late_join:
            return None

        s.players.append(name)
        s.scores[name] = 0
        return {"type": "player_joined", "player": name, "player_count": len(s.players)}

    def _start(self, s: GameSession, params: Mapping[str, Any]) -> Event:
        if not s.players:
            return None

        s.phase = Phase.PLAYING
        s.current_question_idx = 0
        s.answers = {}
        return {"type": "game_started", "players": list(s.players)}

    def _answer(self, s: GameSession, params: Mapping[str, Any]) -> Event:
        name = _clean_name(params.get("player_name"))
        question_idx = _clean_index(params.get("question_index"))
        answer_idx = _clean_index(params.get("answer_index"))
        if name is None or name not in s.players or answer_idx is None:
            return None

        # stale submissions for a question that has already advanced
        if question_idx != s.current_question_idx:
            return None

        # write-once per player per question
        if name in s.answers:
            return None

        q = self.current_question(s)
        if q is not None and answer_idx >= len(q.options):
            return None

        s.answers[name] = answer_idx
        return {
            "type": "answer_recorded",
            "player": name,
            "question_index": s.current_question_idx,
            "answer_index": answer_idx,
        }

    def _score_correct_answer(self, s: GameSession, params: Mapping[str, Any]) -> Event:
        # Correctness is decided by the client; see DESIGN.md.
        name = _clean_name(params.get("player_name"))
        if name is None or name not in s.players:
            return None

        s.scores[name] = s.scores.get(name, 0) + CORRECT_ANSWER_POINTS
        return {
            "type": "score_awarded",
            "player": name,
            "points": CORRECT_ANSWER_POINTS,
            "score": s.scores[name],
        }

    def _next_question(self, s: GameSession, params: Mapping[str, Any]) -> Event:
        # No bounds check and no auto-finish: the host calls finish explicitly.
        s.current_question_idx += 1
        s.answers = {}
        return {
            "type": "next_question",
            "question_index": s.current_question_idx,
            "total_questions": len(self.questions),
        }

    def _finish(self, s: GameSession, params: Mapping[str, Any]) -> Event:
        s.phase = Phase.FINISHED
        return {
            "type": "game_over",
            "leaderboard": sort_leaderboard(s.players, s.scores),
        }

    def _reset(self, s: GameSession, params: Mapping[str, Any]) -> Event:
        fresh = GameSession()
        s.phase = fresh.phase
        s.players = fresh.players
        s.scores = fresh.scores
        s.current_question_idx = fresh.current_question_idx
        s.answers = fresh.answers

        self.events.reset()
        return {"type": "session_reset"}
