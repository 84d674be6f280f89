from pydantic import BaseModel
from typing import Any, Dict, List, Optional
from .models import GameSnapshot, Phase


class ActionIn(BaseModel):
    # Left untyped: the store treats missing or wrong-typed values as no-ops.
    action: Any = None
    playerName: Any = None
    answerIndex: Any = None
    questionIndex: Any = None

    def params(self) -> Dict[str, Any]:
        return {
            "player_name": self.playerName,
            "answer_index": self.answerIndex,
            "question_index": self.questionIndex,
        }


class GameStateOut(BaseModel):
    players: List[str]
    scores: Dict[str, int]
    gameState: Phase
    phase: Phase
    currentQuestionIndex: int
    selectedAnswers: Dict[str, int]

    @classmethod
    def from_snapshot(cls, snap: GameSnapshot) -> "GameStateOut":
        return cls(
            players=list(snap.players),
            scores=snap.scores,
            gameState=snap.phase,
            phase=snap.phase,
            currentQuestionIndex=snap.current_question_idx,
            selectedAnswers=snap.answers,
        )


class LeaderboardEntryOut(BaseModel):
    rank: int
    name: str
    score: int
    winner: bool


class LeaderboardOut(BaseModel):
    leaderboard: List[LeaderboardEntryOut]


class EventsOut(BaseModel):
    events: List[Dict[str, Any]]
    latest_seq: Optional[int]


class ClientConfigOut(BaseModel):
    pollIntervalMs: int
    answerWindowSeconds: int
    pointsPerCorrectAnswer: int
    questionCount: int
