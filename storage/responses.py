"""Persistence helpers for graded answers."""
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .sqlite import get_conn


class ResponsePayload(BaseModel):
    session_id: Optional[str] = None
    question_id: str
    user_answer: str
    agent_feedback: Dict[str, Any] = Field(default_factory=dict)
    score: Optional[float] = None


def insert_response(**data: Any) -> int:
    """Insert one graded answer row and return its primary key."""

    payload = ResponsePayload(**data)
    timestamp = dt.datetime.now(dt.timezone.utc).isoformat()
    with get_conn() as conn:
        cur = conn.cursor()
        cur.execute(
            """INSERT INTO responses
               (session_id, question_id, user_answer, agent_feedback, score, created_at)
               VALUES (?, ?, ?, ?, ?, ?)""",
            (
                payload.session_id,
                payload.question_id,
                payload.user_answer,
                json.dumps(payload.agent_feedback, ensure_ascii=False),
                payload.score,
                timestamp,
            ),
        )
        return int(cur.lastrowid)


def list_responses(session_id: Optional[str] = None, limit: int = 50) -> List[Dict[str, Any]]:
    """Return stored responses, newest first, optionally for one session."""

    query = "SELECT id, session_id, question_id, user_answer, agent_feedback, score, created_at FROM responses"
    params: List[Any] = []
    if session_id is not None:
        query += " WHERE session_id = ?"
        params.append(session_id)
    query += " ORDER BY id DESC LIMIT ?"
    params.append(limit)
    with get_conn() as conn:
        rows = conn.execute(query, params).fetchall()
    results: List[Dict[str, Any]] = []
    for row in rows:
        item = dict(row)
        item["agent_feedback"] = json.loads(item["agent_feedback"])
        results.append(item)
    return results
