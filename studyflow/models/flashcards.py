"""Flashcard models."""
from pydantic import Field

from studyflow.models.base import FlowModel

MIN_FLASHCARDS = 5


class FlashcardPair(FlowModel):
    question_text: str = Field(..., description="The question or front text of the flashcard.")
    answer_text: str = Field(..., description="The answer or back text for the flashcard.")


class QuestionAnswerRequest(FlowModel):
    question_text: str = Field(..., min_length=1, description="The question or front text of the flashcard.")


class QuestionAnswerResult(FlowModel):
    answer_text: str = Field(..., min_length=1, description="The generated answer or back text for the flashcard.")


class FlashcardSetRequest(FlowModel):
    topic: str = Field(
        ...,
        min_length=1,
        description="The central topic, subject, or chapter for which to generate flashcards.",
    )
    number_of_cards: int = Field(
        MIN_FLASHCARDS, description="The desired number of flashcards to generate. Minimum 5."
    )


class FlashcardSetResult(FlowModel):
    flashcards: list[FlashcardPair] = Field(
        ..., description="An array of generated flashcard question and answer pairs."
    )
