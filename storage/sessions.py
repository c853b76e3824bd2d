"""Persistence helpers for practice sessions."""
from __future__ import annotations

import datetime as dt
import uuid
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from .sqlite import get_conn


class SessionRecord(BaseModel):
    id: str
    user_id: Optional[str] = None
    role: str
    created_at: str


def insert_session(*, role: str, user_id: Optional[str] = None) -> SessionRecord:
    """Insert a session row and return it with its generated id."""

    record = SessionRecord(
        id=uuid.uuid4().hex,
        user_id=user_id,
        role=role,
        created_at=dt.datetime.now(dt.timezone.utc).isoformat(),
    )
    with get_conn() as conn:
        conn.execute(
            "INSERT INTO sessions (id, user_id, role, created_at) VALUES (?, ?, ?, ?)",
            (record.id, record.user_id, record.role, record.created_at),
        )
    return record


def get_session(session_id: str) -> Optional[SessionRecord]:
    with get_conn() as conn:
        row = conn.execute(
            "SELECT id, user_id, role, created_at FROM sessions WHERE id = ?",
            (session_id,),
        ).fetchone()
    return SessionRecord(**dict(row)) if row else None


def recent_sessions(limit: int = 20) -> List[Dict[str, Any]]:
    """Return the latest sessions, newest first."""

    with get_conn() as conn:
        rows = conn.execute(
            "SELECT id, user_id, role, created_at FROM sessions ORDER BY created_at DESC LIMIT ?",
            (limit,),
        ).fetchall()
    return [dict(row) for row in rows]
