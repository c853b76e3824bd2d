from __future__ import annotations

import logging
import time
from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple

from api.schemas import GradeReq, SessionReq
from config.settings import settings
from grading.models import Feedback, Question
from observability import log_event
from services.feedback import FeedbackBoard

from .client import PracticeApi
from .submission import GradeTask, SubmissionWorker

logger = logging.getLogger(__name__)

EMPTY_SUBMISSION_PROMPT = "All answers are empty. Submit anyway?"


class SessionPhase(str, Enum):  # Lifecycle of one practice attempt
    IDLE = "idle"
    LOADING = "loading"
    ACTIVE = "active"
    SUBMITTING = "submitting"
    COMPLETED = "completed"


class SessionStartError(RuntimeError):  # Session could not be created
    pass


class SessionStateError(RuntimeError):  # Action not allowed in the current phase
    pass


def _decline(_message: str) -> bool:
    return False


class InterviewSession:  # Client-side driver for one practice attempt
    def __init__(
        self,
        api: PracticeApi,
        *,
        confirm: Callable[[str], bool] = _decline,
        pacing_s: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._api = api
        self._confirm = confirm
        if pacing_s is None:
            pacing_s = settings.GRADE_PACING_MS / 1000.0
        self._worker = SubmissionWorker(self._grade_task, pacing_s=pacing_s, sleep=sleep)
        self._phase = SessionPhase.IDLE
        self._session_id: Optional[str] = None
        self._role: Optional[str] = None
        self._questions: Tuple[Question, ...] = ()
        self._answers: Dict[str, str] = {}
        self._index = 0
        self._feedback: Optional[FeedbackBoard] = None

    @property
    def phase(self) -> SessionPhase:
        return self._phase

    @property
    def session_id(self) -> Optional[str]:
        return self._session_id

    @property
    def role(self) -> Optional[str]:
        return self._role

    @property
    def questions(self) -> Tuple[Question, ...]:
        return self._questions

    @property
    def answers(self) -> Mapping[str, str]:
        return MappingProxyType(dict(self._answers))

    @property
    def index(self) -> int:
        return self._index

    @property
    def current_question(self) -> Question:
        if not self._questions:
            raise SessionStateError("No questions loaded; start a session first")
        return self._questions[self._index]

    @property
    def feedback(self) -> Optional[FeedbackBoard]:
        return self._feedback

    def start(
        self,
        role: Optional[str] = None,
        *,
        behavioral_count: Optional[int] = None,
        technical_count: Optional[int] = None,
        user_id: Optional[str] = None,
    ) -> None:
        """Create a remote session and load its questions behavioral first."""

        if self._phase in (SessionPhase.LOADING, SessionPhase.SUBMITTING):
            raise SessionStateError(f"Cannot start while {self._phase.value}")
        request = SessionReq(
            role=role,
            user_id=user_id,
            behavioral_count=behavioral_count,
            technical_count=technical_count,
        )
        self._reset()
        self._phase = SessionPhase.LOADING
        try:
            resp = self._api.create_session(request)
        except Exception as exc:  # noqa: BLE001
            logger.error("Session start failed: %s", exc)
            self._reset()
            raise SessionStartError(f"Could not start session: {exc}") from exc

        questions: List[Question] = [q.model_copy(update={"type": "behavioral"}) for q in resp.behavioral]
        questions += [q.model_copy(update={"type": "technical"}) for q in resp.technical]
        if not questions:
            self._reset()
            raise SessionStartError("Session returned no questions")

        self._session_id = resp.session_id
        self._role = resp.role
        self._questions = tuple(questions)
        self._answers = {q.id: "" for q in questions}
        self._index = 0
        self._phase = SessionPhase.ACTIVE

    def _reset(self) -> None:
        self._phase = SessionPhase.IDLE
        self._session_id = None
        self._role = None
        self._questions = ()
        self._answers = {}
        self._index = 0
        self._feedback = None

    def go_to(self, index: int) -> int:
        self._require(SessionPhase.ACTIVE, SessionPhase.COMPLETED)
        self._index = min(max(index, 0), len(self._questions) - 1)
        return self._index

    def next(self) -> int:
        return self.go_to(self._index + 1)

    def previous(self) -> int:
        return self.go_to(self._index - 1)

    @property
    def on_last_question(self) -> bool:
        return bool(self._questions) and self._index == len(self._questions) - 1

    def set_answer(self, question_id: str, text: str) -> None:
        """Replace the answer for ``question_id`` only."""

        self._require(SessionPhase.ACTIVE)
        if question_id not in self._answers:
            raise KeyError(f"Unknown question id: {question_id}")
        self._answers[question_id] = text

    def answer_current(self, text: str) -> None:
        self.set_answer(self.current_question.id, text)

    def load_ideal(self) -> str:
        """Overwrite the current answer with the question's reference answer."""

        question = self.current_question
        ideal = question.ideal_answer or ""
        self.set_answer(question.id, ideal)
        return ideal

    def submit(self) -> Optional[FeedbackBoard]:
        """Grade every answer in question order.

        Returns None, without grading anything, when all answers are blank
        and the confirm callback declines.
        """

        self._require(SessionPhase.ACTIVE)
        if not self.on_last_question:
            raise SessionStateError("Submit is only available on the last question")
        if all(not answer.strip() for answer in self._answers.values()):
            if not self._confirm(EMPTY_SUBMISSION_PROMPT):
                return None

        self._phase = SessionPhase.SUBMITTING
        log_event("submission_started", self._session_id or "-", count=len(self._questions))
        tasks = [GradeTask(question=q, answer=self._answers[q.id].strip()) for q in self._questions]
        results = self._worker.run(tasks, session_id=self._session_id)
        self._feedback = FeedbackBoard(results, order=[q.id for q in self._questions])
        self._phase = SessionPhase.COMPLETED
        log_event(
            "submission_done",
            self._session_id or "-",
            count=len(results),
            score=self._feedback.average_score(),
        )
        return self._feedback

    def _grade_task(self, task: GradeTask) -> Feedback:
        request = GradeReq(
            session_id=self._session_id,
            question_id=task.question.id,
            question_text=task.question.text,
            question_type=task.question.type,
            user_answer=task.answer,
            ideal_answer=task.question.ideal_answer or "",
        )
        return self._api.grade(request).feedback

    def _require(self, *phases: SessionPhase) -> None:
        if self._phase not in phases:
            allowed = ", ".join(phase.value for phase in phases)
            raise SessionStateError(f"Action requires phase {allowed}; current phase is {self._phase.value}")


__all__ = [
    "EMPTY_SUBMISSION_PROMPT",
    "InterviewSession",
    "SessionPhase",
    "SessionStartError",
    "SessionStateError",
]
