"""Planner agent: builds study plans and practice tests."""
import os

from google.adk.agents.llm_agent import Agent

from studyflow.agents.tools import create_practice_test, grade_test, plan_study_schedule

planner_agent = Agent(
    model=os.getenv("CHAT_MODEL", "gemini-2.5-flash"),
    name="planner_agent",
    description="Creates study plans from exam dates and generates and grades practice tests.",
    instruction=(
        "Collect the student's exams (subject and YYYY-MM-DD date), weak areas and learning pace, "
        "then call plan_study_schedule. Use create_practice_test for practice tests of at most 20 "
        "questions and grade_test to grade the student's answers."
    ),
    tools=[plan_study_schedule, create_practice_test, grade_test],
)
