"""Deterministic rules applied around model calls: sorting, ID backfill, answer resolution, scoring."""
import re
import time
from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional

from studyflow.models.assessment import (
    GeneratedQuestion,
    QuestionAnalysis,
    TestAnalysisReport,
    TestAnalysisRequest,
    TestQuestion,
)
from studyflow.models.flashcards import MIN_FLASHCARDS
from studyflow.models.planner import StudyPlanResult

NO_ANSWER = "No answer provided"
INVALID_OPTION = "Invalid option selected by user"
BASIC_REPORT_FEEDBACK = "AI feedback unavailable: AI-powered feedback is temporarily unavailable for this question."
BASIC_REPORT_SUMMARY = (
    "Basic report generated. AI analysis is temporarily unavailable. "
    "This report primarily reflects performance on objective questions."
)

CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})\s*([AaPp][Mm])?\s*$")


class ScoringPolicy(str, Enum):
    """How the overall percentage of a test is computed."""
    OBJECTIVE_ONLY = "objective_only"  # percentage of objective questions answered correctly
    BLENDED = "blended"  # objective: 10 points pass/fail, subjective: suggested score out of 10


# ============================================================================
# STUDY PLAN
# ============================================================================

def parse_clock_time(value: str) -> Optional[int]:
    """
    Convert "hh:mm AM/PM" (or 24-hour "HH:MM") to minutes since midnight.

    Returns None when the string is not a recognizable time.
    """
    match = CLOCK_RE.match(value or "")
    if not match:
        return None

    hours, minutes = int(match.group(1)), int(match.group(2))
    modifier = (match.group(3) or "").upper()
    if minutes > 59:
        return None
    if modifier:
        if not 1 <= hours <= 12:
            return None
        if modifier == "PM" and hours < 12:
            hours += 12
        if modifier == "AM" and hours == 12:
            hours = 0
    elif hours > 23:
        return None
    return hours * 60 + minutes


def _session_sort_key(start_time: str) -> tuple[int, int]:
    minutes = parse_clock_time(start_time)
    # unparseable times keep their relative order after all parseable ones
    return (1, 0) if minutes is None else (0, minutes)


def sort_study_plan(plan: StudyPlanResult) -> StudyPlanResult:
    """Return a copy of the plan with days in date order and sessions in start-time order."""
    days = []
    for day in sorted(plan.daily_sessions, key=lambda d: date.fromisoformat(d.date)):
        sessions = sorted(day.sessions, key=lambda s: _session_sort_key(s.start_time))
        days.append(day.model_copy(update={"sessions": sessions}))
    return plan.model_copy(update={"daily_sessions": days})


# ============================================================================
# TEST GENERATION
# ============================================================================

def backfill_question_ids(questions: list[GeneratedQuestion], stamp: Optional[int] = None) -> list[dict]:
    """
    Give every question and option an id and normalize the per-type shape.

    Missing question ids become ``q_<stamp>_<index>``, missing option ids
    ``<question id>_opt<index>``. Subjective questions lose options and key;
    objective questions always get an options list, and an empty
    answer key counts as missing.
    """
    if stamp is None:
        stamp = time.time_ns() // 1_000_000

    normalized = []
    for index, question in enumerate(questions):
        question_id = question.id or f"q_{stamp}_{index}"
        data = question.model_dump(by_alias=True)
        data["id"] = question_id

        if question.type == "objective":
            data["options"] = [
                {"id": opt.id or f"{question_id}_opt{opt_index}", "text": opt.text}
                for opt_index, opt in enumerate(question.options or [])
            ]
            data["correctAnswerKey"] = question.correct_answer_key or None
        else:
            data["options"] = None
            data["correctAnswerKey"] = None
        normalized.append(data)
    return normalized


# ============================================================================
# TEST ANALYSIS
# ============================================================================

@dataclass
class AnalysisQuestion:
    """A question paired with the resolved display text of the user's answer."""
    question: TestQuestion
    user_answer_text: str
    display_number: int


def resolve_user_answer(question: TestQuestion, raw_answer: Optional[str]) -> str:
    """Turn a stored response (option id or free text) into display text."""
    if raw_answer is None or not raw_answer.strip():
        return NO_ANSWER
    if question.type == "objective":
        text = question.option_text(raw_answer)
        return text if text is not None else INVALID_OPTION
    return raw_answer


def prepare_questions_for_analysis(request: TestAnalysisRequest) -> list[AnalysisQuestion]:
    return [
        AnalysisQuestion(
            question=question,
            user_answer_text=resolve_user_answer(question, request.user_responses.get(question.id)),
            display_number=index + 1,
        )
        for index, question in enumerate(request.questions)
    ]


def compute_overall_score(
    questions: list[TestQuestion],
    analyses: list[QuestionAnalysis],
    policy: ScoringPolicy = ScoringPolicy.OBJECTIVE_ONLY,
) -> Optional[float]:
    """
    Compute the overall percentage for a report under the given policy.

    Returns None when no question is scorable under the policy.
    """
    by_id = {a.question_id: a for a in analyses}
    earned = 0.0
    possible = 0.0

    for question in questions:
        analysis = by_id.get(question.id)
        if question.type == "objective":
            possible += 10
            if analysis is not None and analysis.is_correct:
                earned += 10
        elif policy == ScoringPolicy.BLENDED:
            possible += 10
            if analysis is None:
                continue
            if analysis.suggested_score_out_of_ten is not None:
                earned += analysis.suggested_score_out_of_ten
            elif analysis.is_correct:
                earned += 10

    if possible == 0:
        return None
    return round(earned / possible * 100, 2)


def build_basic_report(request: TestAnalysisRequest) -> TestAnalysisReport:
    """
    Grade a test without the model.

    Objective questions are marked by comparing the stored option id with
    ``correct_answer_key``; subjective questions get placeholder feedback and
    no score.
    """
    analyses = []
    for prepared in prepare_questions_for_analysis(request):
        question = prepared.question
        raw_answer = request.user_responses.get(question.id)
        is_correct = (
            question.type == "objective"
            and raw_answer is not None
            and question.correct_answer_key is not None
            and raw_answer == question.correct_answer_key
        )
        analyses.append(QuestionAnalysis(
            question_id=question.id,
            question_text=question.question_text,
            user_answer_text=prepared.user_answer_text,
            correct_answer_text=question.correct_answer_text or _correct_option_text(question),
            is_correct=is_correct,
            feedback=BASIC_REPORT_FEEDBACK,
        ))

    return TestAnalysisReport(
        overall_score=compute_overall_score(request.questions, analyses, ScoringPolicy.OBJECTIVE_ONLY),
        overall_feedback=BASIC_REPORT_SUMMARY,
        question_analyses=analyses,
    )


def _correct_option_text(question: TestQuestion) -> Optional[str]:
    if question.correct_answer_key is None:
        return None
    return question.option_text(question.correct_answer_key)


def order_analyses(questions: list[TestQuestion], analyses: list[QuestionAnalysis]) -> list[QuestionAnalysis]:
    """Put analyses in the order the questions appear in the test."""
    position = {q.id: i for i, q in enumerate(questions)}
    return sorted(analyses, key=lambda a: position.get(a.question_id, len(position)))


# ============================================================================
# FLASHCARDS
# ============================================================================

def clamp_flashcard_count(requested: Optional[int]) -> int:
    """At least MIN_FLASHCARDS cards are always requested."""
    return max(requested or MIN_FLASHCARDS, MIN_FLASHCARDS)
