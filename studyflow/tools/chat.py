"""Homework chat flows: answer a question, summarize a conversation."""
import logging
from typing import Optional

from studyflow.models.chat import (
    ResolveQuestionRequest,
    ResolveQuestionResult,
    SummarizeConversationRequest,
    SummarizeConversationResult,
)
from studyflow.tools.contract import Contract
from studyflow.tools.errors import FlowError
from studyflow.tools.invoke import run_model
from studyflow.tools.llm import TextModel
from studyflow.tools.prompts import render_resolve_question_prompt, render_summarize_conversation_prompt

logger = logging.getLogger(__name__)

RESOLVE_INPUT = Contract(ResolveQuestionRequest)
RESOLVE_OUTPUT = Contract(ResolveQuestionResult)
SUMMARY_INPUT = Contract(SummarizeConversationRequest)
SUMMARY_OUTPUT = Contract(SummarizeConversationResult)

TITLE_MAX_CHARS = 50


def resolve_question(
    request: ResolveQuestionRequest | dict,
    model: Optional[TextModel] = None,
) -> ResolveQuestionResult:
    """Answer a student question, optionally with an attached data-URI image. No retries."""
    req = RESOLVE_INPUT.parse_input(request, flow="resolve_question")
    prompt = render_resolve_question_prompt(req)
    return run_model("resolve_question", prompt, RESOLVE_OUTPUT, model=model, image=req.image)


def summarize_conversation(
    request: SummarizeConversationRequest | dict,
    model: Optional[TextModel] = None,
) -> SummarizeConversationResult:
    req = SUMMARY_INPUT.parse_input(request, flow="summarize_conversation")
    prompt = render_summarize_conversation_prompt(req)
    return run_model("summarize_conversation", prompt, SUMMARY_OUTPUT, model=model)


def truncated_title(text: str, max_chars: int = TITLE_MAX_CHARS) -> str:
    return text[:max_chars] + ("..." if len(text) > max_chars else "")


def conversation_title(first_message: str, role: str = "user", model: Optional[TextModel] = None) -> str:
    """
    Title for a new conversation.

    Uses the summary of the first message; any flow failure falls back to
    the first 50 characters of the message.
    """
    fallback = truncated_title(first_message)
    try:
        result = summarize_conversation(
            SummarizeConversationRequest(conversation_history=f"{role}: {first_message}"),
            model=model,
        )
    except FlowError as e:
        logger.warning(f"Summarization for title failed, using default title: {e}")
        return fallback
    return result.summary
