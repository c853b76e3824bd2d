import json
import sqlite3

import pytest

import grading.grader as grader
from config.registry import GRADER_KEY, bind_model
from config.routes import LlmConfigError
from config.settings import settings
from grading import (
    BehavioralCriteria,
    FallbackCriteria,
    Feedback,
    Question,
    TechnicalCriteria,
    grade,
    grade_and_store,
    parse_feedback,
)
from llm_gateway import LlmGatewayError
from storage.responses import list_responses

from tests.fakes import BEHAVIORAL_REPLY, TECHNICAL_REPLY

BEHAVIORAL = Question(id="b1", text="Tell me about a conflict.", type="behavioral")
TECHNICAL = Question(id="t1", text="Reverse a linked list.", type="technical")


def test_behavioral_answer_uses_star_rubric(rubric_grader):
    feedback = grade(BEHAVIORAL, "I mediated between two teams...", "Use STAR")

    assert feedback.score == 8
    assert isinstance(feedback.criteria, BehavioralCriteria)
    assert feedback.criteria.result_present is False
    prompt = rubric_grader[0]
    assert "STAR rubric" in prompt
    assert '"situation_present"' in prompt
    assert 'Candidate answer: "I mediated between two teams..."' in prompt
    assert 'Ideal/notes: "Use STAR"' in prompt


def test_technical_answer_uses_technical_rubric(rubric_grader):
    feedback = grade(TECHNICAL, "Iterate and flip pointers.")

    assert feedback.kind == "technical"
    assert isinstance(feedback.criteria, TechnicalCriteria)
    assert feedback.criteria.complexity_discussed is True
    assert '"approach_clarity"' in rubric_grader[0]
    assert 'Ideal/notes: ""' in rubric_grader[0]


def test_grader_called_deterministically():
    seen = {}

    def fake(**kwargs):
        seen.update(kwargs)
        return json.dumps(TECHNICAL_REPLY)

    bind_model(GRADER_KEY, fake)
    grade(TECHNICAL, "answer")
    assert seen["temperature"] == 0.0
    assert seen["max_tokens"] == settings.GRADER_MAX_TOKENS
    assert seen["messages"][0]["role"] == "system"
    assert "JSON only" in seen["messages"][0]["content"]


def test_unparseable_technical_output_falls_back():
    bind_model(GRADER_KEY, lambda **_: "Looks decent, but mention complexity.")

    feedback = grade(TECHNICAL, "Use a hash map")

    assert feedback.model_dump() == {
        "score": 6,
        "criteria": {"suggestions": "Looks decent, but mention complexity."},
    }
    assert isinstance(feedback.criteria, FallbackCriteria)


def test_wrong_rubric_shape_falls_back_with_raw_text():
    raw = json.dumps(BEHAVIORAL_REPLY)
    feedback = parse_feedback("technical", raw)
    assert feedback.kind == "fallback"
    assert feedback.score == 6
    assert feedback.criteria.suggestions == raw


def test_code_fenced_json_is_accepted():
    raw = "```json\n" + json.dumps(BEHAVIORAL_REPLY) + "\n```"
    feedback = parse_feedback("behavioral", raw)
    assert feedback.kind == "behavioral"
    assert feedback.score == 8


def test_out_of_range_score_falls_back():
    reply = dict(TECHNICAL_REPLY, score=42)
    assert parse_feedback("technical", json.dumps(reply)).kind == "fallback"


def test_missing_score_is_kept_as_none():
    reply = {"criteria": TECHNICAL_REPLY["criteria"]}
    feedback = parse_feedback("technical", json.dumps(reply))
    assert feedback.kind == "technical"
    assert feedback.score is None


def test_missing_credential_is_fatal():
    with pytest.raises(LlmConfigError, match="OPENAI_API_KEY not set"):
        grade(TECHNICAL, "answer")


def test_default_model_goes_through_gateway(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    captured = {}

    def fake_complete(messages, *, cfg, client=None, options=None):
        captured.update(cfg=cfg, options=options, messages=messages)
        return json.dumps(TECHNICAL_REPLY)

    monkeypatch.setattr(grader, "complete", fake_complete)
    feedback = grade(TECHNICAL, "answer")

    assert feedback.score == 7
    assert captured["cfg"].api_key == "sk-test"
    assert captured["options"] == {"temperature": 0.0, "max_tokens": 800}


def test_upstream_error_propagates():
    def failing(**_):
        raise LlmGatewayError("LLM returned status 500: boom")

    bind_model(GRADER_KEY, failing)
    with pytest.raises(LlmGatewayError):
        grade(TECHNICAL, "answer")


def test_grade_and_store_persists_row(rubric_grader):
    outcome = grade_and_store(session_id="s1", question=BEHAVIORAL, answer="My answer")

    assert outcome.ok is True
    assert outcome.saved is True
    assert outcome.save_error is None
    rows = list_responses(session_id="s1")
    assert len(rows) == 1
    assert rows[0]["question_id"] == "b1"
    assert rows[0]["user_answer"] == "My answer"
    assert rows[0]["score"] == 8
    assert rows[0]["agent_feedback"] == outcome.feedback.model_dump()


def test_save_failure_is_reported_alongside_feedback(monkeypatch, rubric_grader):
    def broken_insert(**_):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr(grader, "insert_response", broken_insert)
    outcome = grade_and_store(session_id="s1", question=TECHNICAL, answer="x")

    assert outcome.ok is True
    assert outcome.saved is False
    assert outcome.save_error == {"message": "database is locked"}
    assert outcome.feedback.score == 7


def test_fallback_constructor():
    feedback = Feedback.fallback("raw")
    assert feedback.score == 6
    assert feedback.kind == "fallback"
