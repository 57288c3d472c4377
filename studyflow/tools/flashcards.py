"""Flashcard flows: answer one card, or generate a whole set for a topic."""
import logging
from typing import Optional

from studyflow.models.flashcards import (
    MIN_FLASHCARDS,
    FlashcardSetRequest,
    FlashcardSetResult,
    QuestionAnswerRequest,
    QuestionAnswerResult,
)
from studyflow.tools.contract import Contract
from studyflow.tools.errors import OutputValidationError
from studyflow.tools.invoke import run_model
from studyflow.tools.llm import TextModel
from studyflow.tools.postprocess import clamp_flashcard_count
from studyflow.tools.prompts import render_flashcard_answer_prompt, render_multiple_flashcards_prompt

logger = logging.getLogger(__name__)

ANSWER_INPUT = Contract(QuestionAnswerRequest)
ANSWER_OUTPUT = Contract(QuestionAnswerResult)
SET_INPUT = Contract(FlashcardSetRequest)
SET_OUTPUT = Contract(FlashcardSetResult)


def generate_flashcard_answer(
    request: QuestionAnswerRequest | dict,
    model: Optional[TextModel] = None,
) -> QuestionAnswerResult:
    req = ANSWER_INPUT.parse_input(request, flow="generate_flashcard_answer")
    return run_model(
        "generate_flashcard_answer", render_flashcard_answer_prompt(req), ANSWER_OUTPUT, model=model
    )


def generate_multiple_flashcards(
    request: FlashcardSetRequest | dict,
    model: Optional[TextModel] = None,
) -> FlashcardSetResult:
    """Generate question/answer pairs for a topic; at least 5 are always requested."""
    req = SET_INPUT.parse_input(request, flow="generate_multiple_flashcards")
    req = req.model_copy(update={"number_of_cards": clamp_flashcard_count(req.number_of_cards)})

    logger.info(f"Generating {req.number_of_cards} flashcards for topic '{req.topic[:60]}'")
    result = run_model(
        "generate_multiple_flashcards", render_multiple_flashcards_prompt(req), SET_OUTPUT, model=model
    )

    if len(result.flashcards) < MIN_FLASHCARDS:
        raise OutputValidationError(
            f"Model returned {len(result.flashcards)} flashcards, at least {MIN_FLASHCARDS} required"
        )
    return result
