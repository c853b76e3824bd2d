"""LLM-backed answer grader with a defined fallback for unparseable output."""
from __future__ import annotations

import json
import logging
import sqlite3
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ValidationError

from config.registry import GRADER_KEY, bind_model, get_model
from config.routes import grader_route
from config.settings import settings
from llm_gateway import complete
from observability import log_event
from storage.responses import insert_response

from .models import RUBRIC_SCHEMAS, Feedback, Question
from .prompts import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)


class GradeOutcome(BaseModel):  # Feedback plus persistence status for one answer
    ok: bool = True
    feedback: Feedback
    saved: bool
    save_error: Optional[Dict[str, Any]] = None


def gateway_completion(*, messages: List[Dict[str, str]], temperature: float, max_tokens: int) -> str:
    """Default grading model: the configured chat completion endpoint."""

    route = grader_route()
    return complete(
        messages,
        cfg=route,
        options={"temperature": temperature, "max_tokens": max_tokens},
    )


def bind_default_grader() -> None:
    bind_model(GRADER_KEY, gateway_completion)


def grade(question: Question, answer: str, ideal_answer: Optional[str] = None) -> Feedback:
    """Score ``answer`` against the rubric for the question's type.

    Unparseable grader output degrades to the fallback feedback; configuration
    and upstream errors propagate.
    """

    prompt = build_prompt(question.type, question.text, answer, ideal_answer)
    llm = get_model(GRADER_KEY)
    raw = llm(
        messages=[
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ],
        temperature=0.0,
        max_tokens=settings.GRADER_MAX_TOKENS,
    )
    if not isinstance(raw, str):
        raw = json.dumps(raw)
    return parse_feedback(question.type, raw)


def parse_feedback(question_type: str, raw: str) -> Feedback:
    """Validate grader text against the rubric schema for ``question_type``."""

    schema = RUBRIC_SCHEMAS[question_type]
    try:
        parsed = schema.model_validate_json(_strip_code_fences(raw))
    except ValidationError as exc:
        logger.warning("Grader output did not match %s rubric: %s", question_type, exc.errors()[:1])
        return Feedback.fallback(raw)
    return Feedback(score=parsed.score, criteria=parsed.criteria)


def grade_and_store(
    *,
    session_id: Optional[str],
    question: Question,
    answer: str,
    ideal_answer: Optional[str] = None,
) -> GradeOutcome:
    """Grade one answer and persist it; a failed insert is reported, not raised."""

    feedback = grade(question, answer, ideal_answer)
    if feedback.kind == "fallback":
        log_event("grading_fallback", session_id or "-", question_id=question.id, question_type=question.type)

    saved = False
    save_error: Optional[Dict[str, Any]] = None
    try:
        insert_response(
            session_id=session_id,
            question_id=question.id,
            user_answer=answer,
            agent_feedback=feedback.model_dump(),
            score=feedback.score,
        )
        saved = True
    except sqlite3.Error as exc:
        logger.warning("Unable to store response for question %s: %s", question.id, exc)
        save_error = {"message": str(exc)}
        log_event("response_save_failed", session_id or "-", question_id=question.id, error=str(exc))

    log_event(
        "grade_done",
        session_id or "-",
        question_id=question.id,
        rubric=feedback.kind,
        score=feedback.score,
        saved=saved,
    )
    return GradeOutcome(feedback=feedback, saved=saved, save_error=save_error)


def _strip_code_fences(content: str) -> str:  # Remove common markdown fences from LLM output
    text = content.strip()
    if text.startswith("```"):
        lines = text.splitlines()
        if lines:
            lines = lines[1:]
            while lines and lines[0].strip() == "":
                lines = lines[1:]
            while lines and lines[-1].strip() == "":
                lines = lines[:-1]
            if lines and lines[-1].strip() == "```":
                lines = lines[:-1]
            text = "\n".join(lines).strip()
    return text


bind_default_grader()

__all__ = [
    "GradeOutcome",
    "bind_default_grader",
    "gateway_completion",
    "grade",
    "grade_and_store",
    "parse_feedback",
]
