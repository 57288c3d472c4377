"""Tests for studyflow.tools.flashcards."""
import pytest

from studyflow.tools.errors import InputValidationError, OutputValidationError
from studyflow.tools.flashcards import generate_flashcard_answer, generate_multiple_flashcards


def _cards(n: int) -> dict:
    return {"flashcards": [{"questionText": f"Q{i}", "answerText": f"A{i}"} for i in range(n)]}


def test_card_count_is_clamped_to_five(stub_model) -> None:
    model = stub_model(_cards(5))

    first = generate_multiple_flashcards({"topic": "Cell biology", "numberOfCards": 2}, model=model)
    second = generate_multiple_flashcards({"topic": "Cell biology", "numberOfCards": 2}, model=model)

    assert len(first.flashcards) >= 5
    assert len(second.flashcards) >= 5
    assert all("set of 5 distinct flashcard" in p for p in model.prompts)


def test_larger_requests_are_kept(stub_model) -> None:
    model = stub_model(_cards(8))
    result = generate_multiple_flashcards({"topic": "WW2", "numberOfCards": 8}, model=model)
    assert len(result.flashcards) == 8
    assert "Generate 8 flashcards." in model.prompts[0]
    assert "Topic: WW2" in model.prompts[0]


def test_default_card_count(stub_model) -> None:
    model = stub_model(_cards(5))
    generate_multiple_flashcards({"topic": "Algebra"}, model=model)
    assert "Generate 5 flashcards." in model.prompts[0]


def test_too_few_cards_is_rejected(stub_model) -> None:
    with pytest.raises(OutputValidationError, match="at least 5"):
        generate_multiple_flashcards({"topic": "Algebra"}, model=stub_model(_cards(3)))


def test_blank_topic_rejected(stub_model) -> None:
    model = stub_model(_cards(5))
    with pytest.raises(InputValidationError):
        generate_multiple_flashcards({"topic": "   "}, model=model)
    assert model.calls == 0


def test_flashcard_answer(stub_model) -> None:
    model = stub_model({"answerText": "The powerhouse of the cell."})
    result = generate_flashcard_answer({"questionText": "What do mitochondria do?"}, model=model)
    assert result.answer_text == "The powerhouse of the cell."
    assert "Question: What do mitochondria do?" in model.prompts[0]


def test_flashcard_answer_empty_output(stub_model) -> None:
    with pytest.raises(OutputValidationError):
        generate_flashcard_answer({"questionText": "Q?"}, model=stub_model({"answerText": ""}))
