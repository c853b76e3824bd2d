"""Question bank queries."""
from __future__ import annotations

import datetime as dt
import uuid
from typing import Any, Dict, List, Optional

from .sqlite import get_conn


def query_questions(*, role: str, question_type: str, limit: int) -> List[Dict[str, Any]]:
    """Return questions for ``role`` and ``question_type``, newest first."""

    if limit <= 0:
        return []
    with get_conn() as conn:
        rows = conn.execute(
            """SELECT id, role, type, text, ideal_answer, difficulty
               FROM questions
               WHERE role = ? AND type = ?
               ORDER BY created_at DESC, rowid DESC
               LIMIT ?""",
            (role, question_type, limit),
        ).fetchall()
    return [dict(row) for row in rows]


def insert_question(
    *,
    role: str,
    question_type: str,
    text: str,
    ideal_answer: Optional[str] = None,
    difficulty: Optional[float] = None,
    question_id: Optional[str] = None,
    created_at: Optional[str] = None,
) -> str:
    """Add a question to the bank and return its id."""

    qid = question_id or uuid.uuid4().hex
    timestamp = created_at or dt.datetime.now(dt.timezone.utc).isoformat()
    with get_conn() as conn:
        conn.execute(
            """INSERT INTO questions (id, role, type, text, ideal_answer, difficulty, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?)""",
            (qid, role, question_type, text, ideal_answer, difficulty, timestamp),
        )
    return qid
