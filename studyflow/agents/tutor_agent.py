"""Tutor agent: answers homework questions and builds flashcards."""
import os

from google.adk.agents.llm_agent import Agent

from studyflow.agents.tools import answer_flashcard, answer_question, make_flashcards, summarize_chat

tutor_agent = Agent(
    model=os.getenv("CHAT_MODEL", "gemini-2.5-flash"),
    name="tutor_agent",
    description="Answers homework questions and creates flashcards for review.",
    instruction=(
        "Answer student questions with answer_question. When the student wants to review a topic, "
        "create cards with make_flashcards, or fill in a single card with answer_flashcard. "
        "Use summarize_chat to recap a long conversation."
    ),
    tools=[answer_question, make_flashcards, answer_flashcard, summarize_chat],
)
