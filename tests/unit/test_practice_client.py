import httpx
import pytest

from api.schemas import GradeReq, SessionReq
from interview_session import HttpPracticeApi, InterviewSession, PracticeApiError, SessionPhase, SessionStartError

from tests.fakes import sample_questions


def _api(handler) -> HttpPracticeApi:
    client = httpx.Client(transport=httpx.MockTransport(handler), base_url="http://practice.test")
    return HttpPracticeApi(client=client)


def _grade_request() -> GradeReq:
    return GradeReq(question_id="t1", question_text="Reverse a linked list.", question_type="technical")


def test_non_json_success_reply_is_an_api_error():
    api = _api(lambda _request: httpx.Response(200, text="<html>gateway hiccup</html>"))

    with pytest.raises(PracticeApiError) as excinfo:
        api.grade(_grade_request())

    assert excinfo.value.status_code == 200
    assert excinfo.value.message == "response was not JSON"


def test_error_body_message_is_used():
    api = _api(lambda _request: httpx.Response(502, json={"error": "LLM request failed: timeout"}))

    with pytest.raises(PracticeApiError) as excinfo:
        api.create_session(SessionReq())

    assert excinfo.value.status_code == 502
    assert excinfo.value.message == "LLM request failed: timeout"


def test_non_json_session_reply_then_restart():
    replies = iter(
        [
            httpx.Response(200, text="oops"),
            httpx.Response(200, json=sample_questions().model_dump()),
        ]
    )
    session = InterviewSession(_api(lambda _request: next(replies)), pacing_s=0)

    with pytest.raises(SessionStartError, match="not JSON"):
        session.start("SWE Intern")
    assert session.phase is SessionPhase.IDLE
    assert session.questions == ()

    session.start("SWE Intern")
    assert session.phase is SessionPhase.ACTIVE
    assert [q.id for q in session.questions] == ["b1", "t1", "t2"]


def test_non_json_grade_reply_does_not_stop_submission():
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/session":
            return httpx.Response(200, json=sample_questions().model_dump())
        if b'"question_id":"b1"' in request.content.replace(b" ", b""):
            return httpx.Response(200, text="<html>gateway hiccup</html>")
        return httpx.Response(
            200,
            json={"ok": True, "feedback": {"score": 7, "criteria": {"suggestions": "fine"}}, "saved": True},
        )

    session = InterviewSession(_api(handler), pacing_s=0)
    session.start("SWE Intern")
    session.answer_current("answer")
    session.go_to(2)

    board = session.submit()

    assert session.phase is SessionPhase.COMPLETED
    assert "not JSON" in board.get("b1").criteria.suggestions
    assert board.get("b1").score == 6
    assert board.get("t1").score == 7
    assert board.get("t2").score == 7
