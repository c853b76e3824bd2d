"""Pydantic schemas for the practice session API."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from grading.models import Feedback, Question, QuestionType


class SessionReq(BaseModel):
    role: Optional[str] = None
    user_id: Optional[str] = None
    behavioral_count: Optional[int] = None
    technical_count: Optional[int] = None


class SessionResp(BaseModel):
    session_id: str
    role: str
    behavioral: List[Question] = Field(default_factory=list)
    technical: List[Question] = Field(default_factory=list)


class GradeReq(BaseModel):
    session_id: Optional[str] = None
    question_id: str
    question_text: str
    question_type: QuestionType
    user_answer: str = ""
    ideal_answer: Optional[str] = None


class GradeResp(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    feedback: Feedback
    saved: bool
    save_error: Optional[Dict[str, Any]] = Field(default=None, alias="saveErr")


class ProfileUpdate(BaseModel):
    email: Optional[str] = None
    full_name: str = ""
    college_name: str = ""
    city: str = ""
    birth_date: Optional[str] = None
    highest_education: str = ""
    phone: str = ""
    linkedin_url: str = ""
    github_url: str = ""
    resume_url: str = ""
    preferred_roles: str = ""


class ErrorResp(BaseModel):
    error: str
