from grading.models import BehavioralCriteria, FallbackCriteria, Feedback, TechnicalCriteria
from services.feedback import FeedbackBoard


def _board():
    return FeedbackBoard(
        {
            "b1": Feedback(
                score=8,
                criteria=BehavioralCriteria(
                    situation_present=True,
                    task_present=True,
                    action_present=False,
                    result_present=True,
                    conciseness=4,
                    suggestions="Describe your own actions.",
                ),
            ),
            "t1": Feedback(
                score=5.5,
                criteria=TechnicalCriteria(
                    correctness=3,
                    approach_clarity=2,
                    complexity_discussed=False,
                    suggestions="State the time complexity.",
                ),
            ),
            "t2": Feedback.fallback("Not JSON at all"),
        },
        order=["b1", "t1", "t2"],
    )


def test_missing_feedback_is_pending():
    view = _board().render("unknown")
    assert view.status == "pending"
    assert view.score is None
    assert _board().render_text("unknown") == "No feedback yet."


def test_behavioral_view():
    view = _board().render("b1")
    assert view.status == "graded"
    assert view.kind == "behavioral"
    assert view.score == 8
    assert view.checks == {"Situation": True, "Task": True, "Action": False, "Result": True}
    assert view.ratings == {"Conciseness": "4/5"}
    assert view.suggestions == "Describe your own actions."
    assert view.raw is None


def test_technical_view():
    view = _board().render("t1")
    assert view.kind == "technical"
    assert view.checks == {"Complexity discussed": False}
    assert view.ratings == {"Correctness": "3/5", "Approach clarity": "2/3"}


def test_fallback_view_shows_raw_text_as_suggestions():
    view = _board().render("t2")
    assert view.kind == "fallback"
    assert view.score == 6
    assert view.suggestions == "Not JSON at all"


def test_raw_dump_when_nothing_recognized():
    board = FeedbackBoard({"q": Feedback(score=None, criteria=FallbackCriteria(suggestions="  "))})
    view = board.render("q")
    assert view.raw == {"score": None, "criteria": {"suggestions": "  "}}


def test_render_text_and_average():
    board = _board()
    text = board.render_text("b1")
    assert "Score: 8/10" in text
    assert "Action: no" in text
    assert "Suggestions: Describe your own actions." in text
    assert board.average_score() == 6.5
    assert list(board) == ["b1", "t1", "t2"]
    assert len(board) == 3


def test_board_is_read_only_copy():
    source = {"q": Feedback.fallback("x")}
    board = FeedbackBoard(source)
    source["other"] = Feedback.fallback("y")
    assert "other" not in board
