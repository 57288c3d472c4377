"""Tests for studyflow.tools.contract."""
import json

import pytest

from studyflow.models.planner import StudyPlanRequest
from studyflow.models.flashcards import FlashcardSetResult
from studyflow.tools.contract import Contract
from studyflow.tools.errors import InputValidationError, OutputValidationError


def test_check_reports_field_paths() -> None:
    contract = Contract(StudyPlanRequest)
    instance, errors = contract.check({
        "exams": [{"id": "e1", "subject": "", "date": "2026-11-02"}],
        "learningPace": "frantic",
    })
    assert instance is None
    paths = [e.path for e in errors]
    assert "exams.0.subject" in paths
    assert "learningPace" in paths


def test_check_accepts_both_spellings() -> None:
    contract = Contract(StudyPlanRequest)
    camel, errors = contract.check({
        "exams": [{"id": "e1", "subject": "Math", "date": "2026-11-02"}],
        "learningPace": "moderate",
        "studyHoursPerWeek": 10,
    })
    assert errors == []
    snake, errors = contract.check({
        "exams": [{"id": "e1", "subject": "Math", "date": "2026-11-02"}],
        "learning_pace": "moderate",
        "study_hours_per_week": 10,
    })
    assert errors == []
    assert camel == snake
    assert camel.exams[0].type == "Exam"


def test_parse_input_raises_with_field_names() -> None:
    with pytest.raises(InputValidationError) as exc:
        Contract(StudyPlanRequest).parse_input({"exams": [], "learningPace": "moderate"}, flow="plan")
    assert exc.value.fields == ["exams"]
    assert "exams" in str(exc.value)


def test_describe_uses_camel_case() -> None:
    schema = Contract(StudyPlanRequest).describe()
    assert "learningPace" in schema["properties"]
    assert "learning_pace" not in schema["properties"]


def test_format_instructions_embed_schema() -> None:
    text = Contract(FlashcardSetResult).format_instructions()
    assert "FlashcardSetResult" in text
    assert '"questionText"' in text


@pytest.mark.parametrize("text", [None, "", "   "])
def test_parse_output_rejects_empty(text) -> None:
    with pytest.raises(OutputValidationError):
        Contract(FlashcardSetResult).parse_output(text)


def test_parse_output_rejects_non_json() -> None:
    with pytest.raises(OutputValidationError, match="not valid JSON"):
        Contract(FlashcardSetResult).parse_output("Here are your flashcards!")


def test_parse_output_rejects_schema_mismatch() -> None:
    with pytest.raises(OutputValidationError) as exc:
        Contract(FlashcardSetResult).parse_output(json.dumps({"flashcards": [{"questionText": "Q"}]}))
    assert exc.value.field_errors[0].path == "flashcards.0.answerText"


def test_parse_output_strips_code_fence() -> None:
    text = '```json\n{"flashcards": [{"questionText": "Q", "answerText": "A"}]}\n```'
    result = Contract(FlashcardSetResult).parse_output(text)
    assert result.flashcards[0].answer_text == "A"
