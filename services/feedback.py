"""Read-only aggregation of per-question feedback for display."""
from __future__ import annotations

from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from grading.models import BehavioralCriteria, Feedback, TechnicalCriteria

STAR_LABELS = {
    "situation_present": "Situation",
    "task_present": "Task",
    "action_present": "Action",
    "result_present": "Result",
}


class FeedbackView(BaseModel):  # Canonical display shape for one question
    question_id: str
    status: Literal["pending", "graded"]
    kind: Optional[Literal["behavioral", "technical", "fallback"]] = None
    score: Optional[float] = None
    checks: Dict[str, bool] = Field(default_factory=dict)
    ratings: Dict[str, str] = Field(default_factory=dict)
    suggestions: Optional[str] = None
    raw: Optional[Dict[str, Any]] = None


class FeedbackBoard:
    """Feedback keyed by question id, frozen once the submission completes."""

    def __init__(self, feedback: Mapping[str, Feedback], order: Optional[List[str]] = None) -> None:
        self._feedback = MappingProxyType(dict(feedback))
        self._order = list(order) if order is not None else list(self._feedback)

    def __contains__(self, question_id: object) -> bool:
        return question_id in self._feedback

    def __iter__(self) -> Iterator[str]:
        return iter(self._order)

    def __len__(self) -> int:
        return len(self._feedback)

    def get(self, question_id: str) -> Optional[Feedback]:
        return self._feedback.get(question_id)

    def render(self, question_id: str) -> FeedbackView:
        """Map stored feedback onto the display shape; absent feedback is pending."""

        feedback = self._feedback.get(question_id)
        if feedback is None:
            return FeedbackView(question_id=question_id, status="pending")

        criteria = feedback.criteria
        checks: Dict[str, bool] = {}
        ratings: Dict[str, str] = {}
        if isinstance(criteria, BehavioralCriteria):
            checks = {label: getattr(criteria, field) for field, label in STAR_LABELS.items()}
            ratings = {"Conciseness": _rating(criteria.conciseness, 5)}
        elif isinstance(criteria, TechnicalCriteria):
            checks = {"Complexity discussed": criteria.complexity_discussed}
            ratings = {
                "Correctness": _rating(criteria.correctness, 5),
                "Approach clarity": _rating(criteria.approach_clarity, 3),
            }
        suggestions = criteria.suggestions.strip() or None

        raw = None
        if feedback.score is None and not checks and not ratings and suggestions is None:
            raw = feedback.model_dump()
        return FeedbackView(
            question_id=question_id,
            status="graded",
            kind=feedback.kind,
            score=feedback.score,
            checks=checks,
            ratings=ratings,
            suggestions=suggestions,
            raw=raw,
        )

    def render_text(self, question_id: str) -> str:
        view = self.render(question_id)
        if view.status == "pending":
            return "No feedback yet."
        lines: List[str] = []
        if view.score is not None:
            lines.append(f"Score: {_number(view.score)}/10")
        for label, present in view.checks.items():
            lines.append(f"{label}: {'yes' if present else 'no'}")
        for label, value in view.ratings.items():
            lines.append(f"{label}: {value}")
        if view.suggestions:
            lines.append(f"Suggestions: {view.suggestions}")
        if view.raw is not None:
            lines.append(str(view.raw))
        return "\n".join(lines)

    def average_score(self) -> Optional[float]:
        scores = [fb.score for fb in self._feedback.values() if fb.score is not None]
        if not scores:
            return None
        return round(sum(scores) / len(scores), 1)


def _number(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"


def _rating(value: float, scale: int) -> str:
    return f"{_number(value)}/{scale}"


__all__ = ["FeedbackBoard", "FeedbackView"]
