"""Generate a personalized study plan from upcoming exams."""
import logging
from datetime import date
from typing import Optional

from studyflow.models.planner import StudyPlanRequest, StudyPlanResult
from studyflow.tools.contract import Contract
from studyflow.tools.invoke import run_model
from studyflow.tools.llm import TextModel
from studyflow.tools.postprocess import sort_study_plan
from studyflow.tools.prompts import render_study_plan_prompt

logger = logging.getLogger(__name__)

PLAN_INPUT = Contract(StudyPlanRequest)
PLAN_OUTPUT = Contract(StudyPlanResult)


def generate_study_plan(
    request: StudyPlanRequest | dict,
    model: Optional[TextModel] = None,
    today: Optional[date] = None,
) -> StudyPlanResult:
    """
    Generate a day-by-day study timetable.

    Args:
        request: Exams, weak areas, pace and scheduling preferences
        model: Model to call (defaults to Gemini from the environment)
        today: Planning start date, defaults to the current date

    Returns:
        StudyPlanResult with days sorted by date and sessions by start time
    """
    req = PLAN_INPUT.parse_input(request, flow="generate_study_plan")

    current_date = (today or date.today()).isoformat()
    preferred_days = ", ".join(req.preferred_study_days) if req.preferred_study_days else None

    logger.info(
        f"Generating study plan for {len(req.exams)} exam(s), pace={req.learning_pace}, start={current_date}"
    )
    prompt = render_study_plan_prompt(req, current_date=current_date, preferred_study_days=preferred_days)
    plan = run_model("generate_study_plan", prompt, PLAN_OUTPUT, model=model)

    plan = sort_study_plan(plan)
    total_sessions = sum(len(day.sessions) for day in plan.daily_sessions)
    logger.info(f"Study plan ready: {len(plan.daily_sessions)} days, {total_sessions} sessions")
    return plan
