"""Client-side practice session: navigation, answers and sequential submission."""
from .client import HttpPracticeApi, PracticeApi, PracticeApiError
from .interview_session import (
    EMPTY_SUBMISSION_PROMPT,
    InterviewSession,
    SessionPhase,
    SessionStartError,
    SessionStateError,
)
from .submission import GradeTask, SubmissionWorker

__all__ = [
    "EMPTY_SUBMISSION_PROMPT",
    "GradeTask",
    "HttpPracticeApi",
    "InterviewSession",
    "PracticeApi",
    "PracticeApiError",
    "SessionPhase",
    "SessionStartError",
    "SessionStateError",
    "SubmissionWorker",
]
