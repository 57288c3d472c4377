"""ADK tool wrappers for the study flows.

Each tool is a plain function with primitive arguments that calls one flow
and returns a dict with a "status" of "success" or "error", the shape ADK
agents expect from tools.
"""
import logging
from typing import Optional

from studyflow.tools.analyze_test import analyze_test_results
from studyflow.tools.chat import resolve_question, summarize_conversation
from studyflow.tools.errors import ConfigurationError, FlowError, InputValidationError, ModelUnavailableError
from studyflow.tools.flashcards import generate_flashcard_answer, generate_multiple_flashcards
from studyflow.tools.generate_test import generate_test
from studyflow.tools.llm import TextModel
from studyflow.tools.study_plan import generate_study_plan

logger = logging.getLogger(__name__)

# Overridable for tests; None means the default Gemini model
MODEL: Optional[TextModel] = None


def _error(e: Exception) -> dict:
    result = {"status": "error", "error_type": type(e).__name__, "message": str(e)}
    if isinstance(e, InputValidationError):
        result["fields"] = e.fields
    if isinstance(e, ModelUnavailableError):
        result["retryable"] = True
    if isinstance(e, ConfigurationError):
        result["setting"] = e.setting
    return result


# ============================================================================
# TUTOR AGENT TOOLS
# ============================================================================

def answer_question(question: str, image_data_uri: Optional[str] = None) -> dict:
    """
    Answer a homework question, optionally with an image given as a data URI.

    Returns:
        dict with status and answer
    """
    try:
        result = resolve_question({"question": question, "image": image_data_uri}, model=MODEL)
    except FlowError as e:
        logger.error(f"answer_question failed: {e}")
        return _error(e)
    return {"status": "success", "answer": result.answer}


def summarize_chat(conversation_history: str) -> dict:
    """Summarize a conversation transcript ("role: message" lines)."""
    try:
        result = summarize_conversation({"conversationHistory": conversation_history}, model=MODEL)
    except FlowError as e:
        return _error(e)
    return {"status": "success", "summary": result.summary}


def make_flashcards(topic: str, number_of_cards: int = 5) -> dict:
    """
    Generate flashcards for a topic. At least 5 cards are always generated.

    Returns:
        dict with status, flashcards (list of {questionText, answerText}) and count
    """
    try:
        result = generate_multiple_flashcards({"topic": topic, "numberOfCards": number_of_cards}, model=MODEL)
    except FlowError as e:
        return _error(e)
    cards = [card.to_json_dict() for card in result.flashcards]
    return {"status": "success", "flashcards": cards, "count": len(cards)}


def answer_flashcard(question_text: str) -> dict:
    """Write the back side of a flashcard."""
    try:
        result = generate_flashcard_answer({"questionText": question_text}, model=MODEL)
    except FlowError as e:
        return _error(e)
    return {"status": "success", "answer_text": result.answer_text}


# ============================================================================
# PLANNER AGENT TOOLS
# ============================================================================

def plan_study_schedule(
    exams: list[dict],
    learning_pace: str = "moderate",
    weak_areas: Optional[list[str]] = None,
    study_hours_per_week: Optional[float] = None,
    preferred_study_days: Optional[list[str]] = None,
    notes: Optional[str] = None,
) -> dict:
    """
    Build a study timetable.

    Args:
        exams: list of {"id", "subject", "date" (YYYY-MM-DD), "type"}
        learning_pace: relaxed, moderate or intensive
        weak_areas: subjects or topics needing extra time
        study_hours_per_week: weekly budget between 1 and 70
        preferred_study_days: weekday names, e.g. ["Monday", "Wednesday"]
        notes: free-form preferences

    Returns:
        dict with status and plan (planTitle, dailySessions, summaryNotes)
    """
    request = {
        "exams": exams,
        "learningPace": learning_pace,
        "weakAreas": weak_areas,
        "studyHoursPerWeek": study_hours_per_week,
        "preferredStudyDays": preferred_study_days,
        "notes": notes,
    }
    try:
        plan = generate_study_plan(request, model=MODEL)
    except FlowError as e:
        logger.error(f"plan_study_schedule failed: {e}")
        return _error(e)
    return {
        "status": "success",
        "plan": plan.to_json_dict(),
        "days": len(plan.daily_sessions),
    }


def create_practice_test(
    title: str,
    subject: Optional[str] = None,
    description: Optional[str] = None,
    num_subjective: int = 5,
    num_objective: int = 5,
) -> dict:
    """Generate a practice test (at most 20 questions in total)."""
    request = {
        "title": title,
        "subject": subject,
        "description": description,
        "numSubjective": num_subjective,
        "numObjective": num_objective,
    }
    try:
        result = generate_test(request, model=MODEL)
    except FlowError as e:
        return _error(e)
    questions = [q.to_json_dict() for q in result.questions]
    return {"status": "success", "questions": questions, "total_questions": len(questions)}


def grade_test(test: dict, user_responses: dict[str, str]) -> dict:
    """
    Grade a submitted test.

    Args:
        test: {"title", "subject", "description", "questions"} as returned by create_practice_test
        user_responses: questionId -> option id (objective) or answer text (subjective)

    Returns:
        dict with status and report; falls back to a basic report when the model is overloaded
    """
    request = {
        "testTitle": test.get("title", "Untitled test"),
        "testSubject": test.get("subject"),
        "testDescription": test.get("description"),
        "questions": test.get("questions", []),
        "userResponses": user_responses,
    }
    try:
        report = analyze_test_results(request, model=MODEL)
    except FlowError as e:
        return _error(e)
    return {"status": "success", "report": report.to_json_dict()}
