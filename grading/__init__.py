from .grader import GradeOutcome, bind_default_grader, grade, grade_and_store, parse_feedback
from .models import (
    FALLBACK_SCORE,
    BehavioralCriteria,
    FallbackCriteria,
    Feedback,
    Question,
    QuestionType,
    TechnicalCriteria,
)

__all__ = [
    "FALLBACK_SCORE",
    "BehavioralCriteria",
    "FallbackCriteria",
    "Feedback",
    "GradeOutcome",
    "Question",
    "QuestionType",
    "TechnicalCriteria",
    "bind_default_grader",
    "grade",
    "grade_and_store",
    "parse_feedback",
]
