"""Question and feedback models shared by the grader, the API and the session driver."""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, Field

QuestionType = Literal["behavioral", "technical"]

FALLBACK_SCORE = 6.0


class Question(BaseModel):  # Interview question served to the candidate
    id: str
    text: str
    type: QuestionType
    difficulty: Optional[float] = None
    ideal_answer: Optional[str] = None


class BehavioralCriteria(BaseModel):  # STAR rubric breakdown
    situation_present: bool
    task_present: bool
    action_present: bool
    result_present: bool
    conciseness: float = Field(ge=0.0, le=5.0)
    suggestions: str


class TechnicalCriteria(BaseModel):  # Technical rubric breakdown
    correctness: float = Field(ge=0.0, le=5.0)
    approach_clarity: float = Field(ge=0.0, le=3.0)
    complexity_discussed: bool
    suggestions: str


class FallbackCriteria(BaseModel):  # Raw grader text when the rubric could not be parsed
    suggestions: str = ""


Criteria = Union[BehavioralCriteria, TechnicalCriteria, FallbackCriteria]


class Feedback(BaseModel):  # Graded result for one answer
    score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    criteria: Criteria = Field(union_mode="left_to_right")

    @classmethod
    def fallback(cls, raw_text: str) -> "Feedback":
        return cls(score=FALLBACK_SCORE, criteria=FallbackCriteria(suggestions=raw_text))

    @property
    def kind(self) -> str:
        if isinstance(self.criteria, BehavioralCriteria):
            return "behavioral"
        if isinstance(self.criteria, TechnicalCriteria):
            return "technical"
        return "fallback"


class BehavioralFeedback(BaseModel):  # Expected grader output for behavioral questions
    score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    criteria: BehavioralCriteria


class TechnicalFeedback(BaseModel):  # Expected grader output for technical questions
    score: Optional[float] = Field(default=None, ge=0.0, le=10.0)
    criteria: TechnicalCriteria


RUBRIC_SCHEMAS: Dict[str, Any] = {
    "behavioral": BehavioralFeedback,
    "technical": TechnicalFeedback,
}
