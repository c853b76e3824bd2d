"""SQLite schema migrations."""
from __future__ import annotations

import os
import sqlite3
from typing import Iterable, Optional

from config.settings import settings

SCHEMA: Iterable[str] = [
    """
CREATE TABLE IF NOT EXISTS sessions (
  id TEXT PRIMARY KEY,
  user_id TEXT,
  role TEXT NOT NULL,
  created_at TEXT NOT NULL
);
""",
    """
CREATE TABLE IF NOT EXISTS questions (
  id TEXT PRIMARY KEY,
  role TEXT NOT NULL,
  type TEXT NOT NULL CHECK (type IN ('behavioral', 'technical')),
  text TEXT NOT NULL,
  ideal_answer TEXT,
  difficulty REAL,
  created_at TEXT NOT NULL
);
""",
    """
CREATE INDEX IF NOT EXISTS idx_questions_role_type
  ON questions (role, type, created_at DESC);
""",
    """
CREATE TABLE IF NOT EXISTS responses (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  session_id TEXT,
  question_id TEXT NOT NULL,
  user_answer TEXT NOT NULL,
  agent_feedback TEXT NOT NULL,
  score REAL,
  created_at TEXT NOT NULL
);
""",
    """
CREATE TABLE IF NOT EXISTS profiles (
  id TEXT PRIMARY KEY,
  email TEXT,
  full_name TEXT NOT NULL DEFAULT '',
  college_name TEXT NOT NULL DEFAULT '',
  city TEXT NOT NULL DEFAULT '',
  birth_date TEXT,
  highest_education TEXT NOT NULL DEFAULT '',
  phone TEXT NOT NULL DEFAULT '',
  linkedin_url TEXT NOT NULL DEFAULT '',
  github_url TEXT NOT NULL DEFAULT '',
  resume_url TEXT NOT NULL DEFAULT '',
  preferred_roles TEXT NOT NULL DEFAULT '',
  updated_at TEXT
);
""",
]


def migrate(db_path: Optional[str] = None) -> None:
    """Apply schema migrations to the SQLite database."""

    db_path = db_path or settings.DB_PATH
    directory = os.path.dirname(db_path) or "."
    os.makedirs(directory, exist_ok=True)
    conn = sqlite3.connect(db_path)
    try:
        cur = conn.cursor()
        for stmt in SCHEMA:
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


if __name__ == "__main__":
    migrate()
