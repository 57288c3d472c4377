"""Tests for studyflow.agents.tools."""
import pytest

from studyflow.agents import tools
from studyflow.tools.errors import ModelUnavailableError


@pytest.fixture
def use_model(monkeypatch, stub_model):
    def _use(*responses):
        model = stub_model(*responses)
        monkeypatch.setattr(tools, "MODEL", model)
        return model
    return _use


def test_answer_question_success(use_model) -> None:
    use_model({"answer": "Use the quadratic formula."})
    result = tools.answer_question("How do I solve x^2 + 2x + 1 = 0?")
    assert result == {"status": "success", "answer": "Use the quadratic formula."}


def test_answer_question_reports_overload(use_model) -> None:
    use_model(ModelUnavailableError("503"))
    result = tools.answer_question("Hi")
    assert result["status"] == "error"
    assert result["error_type"] == "ModelUnavailableError"
    assert result["retryable"] is True


def test_make_flashcards_clamps(use_model) -> None:
    model = use_model({"flashcards": [{"questionText": f"Q{i}", "answerText": "A"} for i in range(5)]})
    result = tools.make_flashcards("Photosynthesis", number_of_cards=1)
    assert result["status"] == "success"
    assert result["count"] == 5
    assert result["flashcards"][0] == {"questionText": "Q0", "answerText": "A"}
    assert "Generate 5 flashcards." in model.prompts[0]


def test_plan_study_schedule_invalid_input(use_model) -> None:
    model = use_model({})
    result = tools.plan_study_schedule(exams=[], learning_pace="moderate")
    assert result["status"] == "error"
    assert result["fields"] == ["exams"]
    assert model.calls == 0


def test_plan_study_schedule_success(use_model) -> None:
    use_model({"dailySessions": [
        {"date": "2026-10-21", "sessions": []},
        {"date": "2026-10-20", "sessions": []},
    ]})
    result = tools.plan_study_schedule(exams=[{"id": "e1", "subject": "Math", "date": "2026-10-30"}])
    assert result["status"] == "success"
    assert [d["date"] for d in result["plan"]["dailySessions"]] == ["2026-10-20", "2026-10-21"]


def test_create_and_grade_test(use_model, objective_question) -> None:
    use_model({"questions": [objective_question]})
    created = tools.create_practice_test("Geography", num_subjective=0, num_objective=1)
    assert created["status"] == "success"
    assert created["total_questions"] == 1

    use_model(ModelUnavailableError("overloaded"))
    graded = tools.grade_test({"title": "Geography", "questions": created["questions"]}, {"q1": "a"})
    assert graded["status"] == "success"
    assert graded["report"]["overallScore"] == 100.0
    assert graded["report"]["questionAnalyses"][0]["isCorrect"] is True


def test_create_practice_test_too_many_questions(use_model) -> None:
    result = tools.create_practice_test("Huge", num_subjective=10, num_objective=11)
    assert result["status"] == "error"
    assert result["error_type"] == "InputValidationError"


def test_grade_test_reports_invalid_scoring_policy(monkeypatch, use_model, objective_question) -> None:
    monkeypatch.setenv("TEST_SCORING_POLICY", "curve")
    model = use_model({})

    result = tools.grade_test({"title": "Geography", "questions": [objective_question]}, {"q1": "a"})

    assert result["status"] == "error"
    assert result["error_type"] == "ConfigurationError"
    assert result["setting"] == "TEST_SCORING_POLICY"
    assert model.calls == 0


def test_grade_test_omits_unset_score(use_model, subjective_question) -> None:
    use_model(ModelUnavailableError("overloaded"))
    result = tools.grade_test({"title": "Essay", "questions": [subjective_question]}, {"q2": "Light."})
    assert result["status"] == "success"
    assert "overallScore" not in result["report"]
    assert result["report"]["questionAnalyses"][0]["questionId"] == "q2"
