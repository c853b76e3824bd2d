"""Terminal runner for a practice session against the HTTP API."""
from __future__ import annotations

import argparse
import sys
from typing import Callable, List, Optional, TextIO

from config.settings import settings

from .client import HttpPracticeApi, PracticeApi
from .interview_session import InterviewSession, SessionStartError

HELP = "Commands: :next  :prev  :ideal  :submit  :quit  (any other line replaces the current answer)"


def run_practice(
    api: PracticeApi,
    *,
    role: Optional[str],
    behavioral_count: Optional[int],
    technical_count: Optional[int],
    user_id: Optional[str] = None,
    input_fn: Callable[[str], str] = input,
    out: TextIO = sys.stdout,
    assume_yes: bool = False,
) -> int:
    def confirm(message: str) -> bool:
        if assume_yes:
            return True
        return input_fn(f"{message} [y/N] ").strip().lower() in ("y", "yes")

    session = InterviewSession(api, confirm=confirm)
    try:
        session.start(
            role,
            behavioral_count=behavioral_count,
            technical_count=technical_count,
            user_id=user_id,
        )
    except SessionStartError as exc:
        print(str(exc), file=out)
        return 1

    print(f"Session {session.session_id} ({session.role}), {len(session.questions)} questions", file=out)
    print(HELP, file=out)
    while True:
        question = session.current_question
        print(f"\n[{session.index + 1}/{len(session.questions)}] {question.type.upper()}: {question.text}", file=out)
        current = session.answers[question.id]
        if current:
            print(f"Current answer: {current}", file=out)
        line = input_fn("> ").strip()
        if line == ":quit":
            return 1
        if line == ":next":
            session.next()
        elif line == ":prev":
            session.previous()
        elif line == ":ideal":
            print(f"Loaded: {session.load_ideal() or '(no ideal answer)'}", file=out)
        elif line == ":submit":
            if not session.on_last_question:
                print("Move to the last question to submit.", file=out)
                continue
            board = session.submit()
            if board is None:
                continue
            break
        elif line:
            session.answer_current(line)

    print("\nResults", file=out)
    for question in session.questions:
        print(f"\n{question.type.upper()}: {question.text}", file=out)
        print(f"Your answer: {session.answers[question.id] or '(no answer provided)'}", file=out)
        print(board.render_text(question.id), file=out)
    average = board.average_score()
    if average is not None:
        print(f"\nAverage score: {average}/10", file=out)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Practice a mock interview in the terminal")
    parser.add_argument("--role", default=settings.DEFAULT_ROLE)
    parser.add_argument("--behavioral", type=int, default=1, help="Number of behavioral questions")
    parser.add_argument("--technical", type=int, default=2, help="Number of technical questions")
    parser.add_argument("--user-id", default=None)
    parser.add_argument("--api-url", default=settings.API_BASE_URL)
    parser.add_argument("--yes", action="store_true", help="Submit empty answers without asking")
    args = parser.parse_args(argv)

    with HttpPracticeApi(args.api_url) as api:
        return run_practice(
            api,
            role=args.role,
            behavioral_count=args.behavioral,
            technical_count=args.technical,
            user_id=args.user_id,
            assume_yes=args.yes,
        )


if __name__ == "__main__":
    sys.exit(main())
