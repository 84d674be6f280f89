from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Tuple

from pydantic import TypeAdapter, ValidationError

from .models import Question

logger = logging.getLogger(__name__)

BUNDLED_QUESTIONS = Path(__file__).with_name("data") / "questions.json"

_question_list = TypeAdapter(Tuple[Question, ...])


class QuestionSetError(RuntimeError):
    pass


def load_questions(path: Optional[str | Path] = None) -> Tuple[Question, ...]:
    """Load and validate the ordered question set.

    Falls back to the bundled holiday set when ``path`` is not given. Any
    problem with the file is fatal: the server should not start with a
    question set it cannot serve.
    """

    source = Path(path) if path else BUNDLED_QUESTIONS
    try:
        raw = json.loads(source.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        raise QuestionSetError(f"Could not read question set from {source}: {exc}") from exc

    try:
        questions = _question_list.validate_python(raw)
    except ValidationError as exc:
        raise QuestionSetError(f"Invalid question set in {source}: {exc}") from exc

    if not questions:
        raise QuestionSetError(f"Question set in {source} is empty")

    ids = [q.id for q in questions]
    if len(set(ids)) != len(ids):
        raise QuestionSetError(f"Duplicate question ids in {source}")

    logger.info("Loaded %d questions from %s", len(questions), source)
    return questions
