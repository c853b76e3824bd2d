"""Question selection with built-in defaults for empty banks."""
from __future__ import annotations

import logging
from typing import Dict, List

from grading.models import Question, QuestionType
from storage.questions import query_questions

logger = logging.getLogger(__name__)

DEFAULT_QUESTIONS: Dict[str, Question] = {
    "behavioral": Question(
        id="builtin-b-1",
        text="Tell me about a time you led a team to solve a hard problem.",
        type="behavioral",
    ),
    "technical": Question(
        id="builtin-t-1",
        text="Find the first non-repeated character in a string.",
        type="technical",
    ),
}


def default_question(question_type: QuestionType) -> Question:
    return DEFAULT_QUESTIONS[question_type].model_copy()


def fetch_questions(role: str, question_type: QuestionType, limit: int) -> List[Question]:
    """Return up to ``limit`` bank questions, or the single default when none match."""

    rows = query_questions(role=role, question_type=question_type, limit=max(0, limit))
    if not rows:
        logger.info("No %s questions for role %r; using built-in default", question_type, role)
        return [default_question(question_type)]
    return [
        Question(
            id=row["id"],
            text=row["text"],
            type=row["type"],
            difficulty=row.get("difficulty"),
            ideal_answer=row.get("ideal_answer"),
        )
        for row in rows
    ]
