"""Sequential grading of a finished session's answers."""
from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Sequence

from grading.models import Feedback, Question
from observability import log_event

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GradeTask:
    question: Question
    answer: str


class SubmissionWorker:
    """Grade tasks one at a time, in order, pausing ``pacing_s`` after each.

    Any failed call yields fallback feedback carrying the error text and the
    remaining tasks still run, so a run always returns one entry per task.
    """

    def __init__(
        self,
        grade_fn: Callable[[GradeTask], Feedback],
        *,
        pacing_s: float = 0.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._grade_fn = grade_fn
        self._pacing_s = max(0.0, pacing_s)
        self._sleep = sleep

    def run(self, tasks: Sequence[GradeTask], session_id: Optional[str] = None) -> Dict[str, Feedback]:
        pending = deque(tasks)
        results: Dict[str, Feedback] = {}
        while pending:
            task = pending.popleft()
            try:
                results[task.question.id] = self._grade_fn(task)
            except Exception as exc:  # noqa: BLE001
                logger.warning("Grading failed for question %s: %s", task.question.id, exc)
                log_event("submission_item_failed", session_id or "-", question_id=task.question.id, error=str(exc))
                results[task.question.id] = Feedback.fallback(f"Grading failed: {exc}")
            if self._pacing_s:
                self._sleep(self._pacing_s)
        return results


__all__ = ["GradeTask", "SubmissionWorker"]
