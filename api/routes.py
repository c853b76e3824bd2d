"""FastAPI routes for practice sessions, grading and profiles."""
from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, HTTPException

from api.schemas import ErrorResp, GradeReq, GradeResp, ProfileUpdate, SessionReq, SessionResp
from config.routes import LlmConfigError
from grading import Question, grade_and_store
from llm_gateway import LlmGatewayError
from services.sessions import SessionServiceError, create_session
from storage.profiles import ProfileRecord, select_profile, upsert_profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", responses={500: {"model": ErrorResp}})


@router.post("/session", response_model=SessionResp)
def start_session(payload: SessionReq) -> SessionResp:
    try:
        bundle = create_session(
            payload.role,
            behavioral_count=payload.behavioral_count,
            technical_count=payload.technical_count,
            user_id=payload.user_id,
        )
    except SessionServiceError as exc:
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    return SessionResp(**bundle.model_dump())


@router.post("/grade", response_model=GradeResp, response_model_by_alias=True)
def grade_answer(payload: GradeReq) -> GradeResp:
    question = Question(id=payload.question_id, text=payload.question_text, type=payload.question_type)
    try:
        outcome = grade_and_store(
            session_id=payload.session_id,
            question=question,
            answer=payload.user_answer,
            ideal_answer=payload.ideal_answer,
        )
    except LlmConfigError as exc:
        logger.error("Grader not configured: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc
    except LlmGatewayError as exc:
        logger.exception("Grading request failed for question %s", payload.question_id)
        raise HTTPException(status_code=502, detail=f"LLM request failed: {exc}") from exc
    return GradeResp(
        ok=outcome.ok,
        feedback=outcome.feedback,
        saved=outcome.saved,
        save_error=outcome.save_error,
    )


@router.get("/profiles/{profile_id}", response_model=ProfileRecord, responses={404: {"model": ErrorResp}})
def fetch_profile(profile_id: str) -> ProfileRecord:
    record = select_profile(profile_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Profile not found")
    return record


@router.put("/profiles/{profile_id}", response_model=ProfileRecord)
def save_profile(profile_id: str, payload: ProfileUpdate) -> ProfileRecord:
    try:
        return upsert_profile(ProfileRecord(id=profile_id, **payload.model_dump()))
    except sqlite3.Error as exc:
        logger.exception("Unable to save profile %s", profile_id)
        raise HTTPException(status_code=500, detail="Unable to save profile") from exc
