"""Session controller: create a practice session and pick its questions."""
from __future__ import annotations

import logging
import sqlite3
from typing import List, Optional

from pydantic import BaseModel, Field

from config.settings import settings
from grading.models import Question
from observability import log_event
from storage.sessions import insert_session

from .question_provider import DEFAULT_QUESTIONS, fetch_questions

logger = logging.getLogger(__name__)

_DEFAULT_IDS = frozenset(q.id for q in DEFAULT_QUESTIONS.values())


class SessionServiceError(RuntimeError):
    """Raised when the session or question store fails."""


class SessionBundle(BaseModel):
    session_id: str
    role: str
    behavioral: List[Question] = Field(default_factory=list)
    technical: List[Question] = Field(default_factory=list)


def resolve_role(role: Optional[str]) -> str:
    cleaned = (role or "").strip()
    return cleaned or settings.DEFAULT_ROLE


def resolve_count(value: Optional[int], default: int) -> int:
    if value is None:
        return default
    return max(0, int(value))


def create_session(
    role: Optional[str] = None,
    *,
    behavioral_count: Optional[int] = None,
    technical_count: Optional[int] = None,
    user_id: Optional[str] = None,
) -> SessionBundle:
    """Insert a session row and return it with its behavioral and technical questions.

    The session row is written before the bank is queried, so every call
    leaves exactly one durable session behind even when only defaults are
    served.
    """

    role_name = resolve_role(role)
    n_behavioral = resolve_count(behavioral_count, settings.DEFAULT_BEHAVIORAL_COUNT)
    n_technical = resolve_count(technical_count, settings.DEFAULT_TECHNICAL_COUNT)
    try:
        record = insert_session(role=role_name, user_id=user_id or None)
        behavioral = fetch_questions(role_name, "behavioral", n_behavioral)
        technical = fetch_questions(role_name, "technical", n_technical)
    except sqlite3.Error as exc:
        logger.exception("Session store failure for role %r", role_name)
        raise SessionServiceError(f"Unable to create session: {exc}") from exc

    defaults = [q.id for q in behavioral + technical if q.id in _DEFAULT_IDS]
    if defaults:
        log_event("questions_fallback", record.id, role=role_name, reason=",".join(defaults))
    log_event(
        "session_created",
        record.id,
        role=role_name,
        count=len(behavioral) + len(technical),
    )
    return SessionBundle(
        session_id=record.id,
        role=role_name,
        behavioral=behavioral,
        technical=technical,
    )
