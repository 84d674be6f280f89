from enum import Enum
from typing import Dict, List, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

AnswerIndex = int


class Phase(str, Enum):
    LOBBY = "lobby"
    PLAYING = "playing"
    FINISHED = "finished"


class Question(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    question: str
    movie: str
    options: Tuple[str, ...]
    correct_answer: AnswerIndex = Field(alias="correctAnswer")

    @model_validator(mode="after")
    def check_correct_answer(self):
        if not 0 <= self.correct_answer < len(self.options):
            raise ValueError(
                f"correctAnswer {self.correct_answer} is out of range for {len(self.options)} options"
            )
        return self


# States: lobby -> playing -> finished -> (reset) -> lobby
class GameSession(BaseModel):
    phase: Phase = Phase.LOBBY
    players: List[str] = Field(default_factory=list)
    scores: Dict[str, int] = Field(default_factory=dict)
    current_question_idx: int = 0
    answers: Dict[str, AnswerIndex] = Field(default_factory=dict)


class GameSnapshot(BaseModel):
    """Point-in-time copy of a ``GameSession`` handed out to callers."""

    model_config = ConfigDict(frozen=True)

    phase: Phase
    players: Tuple[str, ...]
    scores: Dict[str, int]
    current_question_idx: int
    answers: Dict[str, AnswerIndex]

    @classmethod
    def of(cls, s: GameSession) -> "GameSnapshot":
        return cls(
            phase=s.phase,
            players=tuple(s.players),
            scores=dict(s.scores),
            current_question_idx=s.current_question_idx,
            answers=dict(s.answers),
        )
