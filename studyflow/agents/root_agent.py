"""Root agent: ADK entrypoint; routes to tutor or planner."""
import os

from google.adk.agents.llm_agent import Agent

from studyflow.agents.planner_agent import planner_agent
from studyflow.agents.tutor_agent import tutor_agent

root_agent = Agent(
    model=os.getenv("CHAT_MODEL", "gemini-2.5-flash"),
    name="root_agent",
    description="A helpful assistant for homework help, flashcards, practice tests and study planning.",
    instruction=(
        "Route homework questions, flashcards and conversation summaries to tutor_agent. "
        "Route study plans and practice tests to planner_agent."
    ),
    sub_agents=[tutor_agent, planner_agent],
)
