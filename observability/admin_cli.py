"""Lightweight CLI helpers for inspecting practice tables and seeding the question bank."""
from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import List, Optional

from storage.migrate import migrate
from storage.questions import insert_question
from storage.responses import list_responses
from storage.sessions import recent_sessions


def tail_sessions(limit: int = 20) -> None:
    for row in recent_sessions(limit):
        print(f"[{row['created_at']}] {row['id']} role={row['role']} user={row['user_id'] or '-'}")


def tail_responses(limit: int = 20, session_id: Optional[str] = None) -> None:
    for row in list_responses(session_id=session_id, limit=limit):
        suggestions = (row["agent_feedback"].get("criteria") or {}).get("suggestions", "")
        if len(suggestions) > 80:
            suggestions = suggestions[:77] + "..."
        print(
            f"[{row['created_at']}] {row['session_id']}:{row['question_id']} score={row['score']} -> {suggestions}"
        )


def seed_questions(path: Path) -> int:
    """Load questions from a JSON list of {role, type, text, ideal_answer?, difficulty?}."""

    entries = json.loads(path.read_text(encoding="utf-8"))
    count = 0
    for entry in entries:
        insert_question(
            role=entry["role"],
            question_type=entry["type"],
            text=entry["text"],
            ideal_answer=entry.get("ideal_answer"),
            difficulty=entry.get("difficulty"),
            question_id=entry.get("id"),
        )
        count += 1
    return count


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser()
    parser.add_argument("--migrate", action="store_true", help="Create missing tables")
    parser.add_argument("--seed", type=Path, help="Seed the question bank from a JSON file")
    parser.add_argument("--tail-sessions", type=int, help="Show the latest practice sessions")
    parser.add_argument("--tail-responses", type=int, help="Show the latest graded responses")
    parser.add_argument("--session", help="Restrict --tail-responses to one session")
    args = parser.parse_args(argv)

    if args.migrate or args.seed:
        migrate()
    if args.seed:
        print(f"Seeded {seed_questions(args.seed)} questions")
    if args.tail_sessions:
        tail_sessions(args.tail_sessions)
    if args.tail_responses:
        tail_responses(args.tail_responses, session_id=args.session)


if __name__ == "__main__":
    main()
