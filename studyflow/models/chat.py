"""Homework chat models: question answering and conversation summaries."""
import re
from typing import Optional

from pydantic import Field, field_validator

from studyflow.models.base import FlowModel

DATA_URI_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>[A-Za-z0-9+/=\s]+)$")


class ResolveQuestionRequest(FlowModel):
    question: str = Field(..., min_length=1, description="The question to be answered.")
    image: Optional[str] = Field(
        None,
        description="An optional image associated with the question, as a data URI that must include "
                    "a MIME type and use Base64 encoding. Expected format: 'data:<mimetype>;base64,<encoded_data>'.",
    )

    @field_validator("image")
    @classmethod
    def validate_data_uri(cls, v: Optional[str]) -> Optional[str]:
        if v is None or v == "":
            return None
        if not DATA_URI_RE.match(v):
            raise ValueError("image must be a base64 data URI (data:<mimetype>;base64,<data>)")
        return v


class ResolveQuestionResult(FlowModel):
    answer: str = Field(..., min_length=1, description="The generated answer to the question.")


class SummarizeConversationRequest(FlowModel):
    conversation_history: str = Field(
        ..., min_length=1, description="The complete conversation history between the user and the assistant."
    )


class SummarizeConversationResult(FlowModel):
    summary: str = Field(
        ..., min_length=1,
        description="A concise summary of the conversation, highlighting key topics and conclusions.",
    )
