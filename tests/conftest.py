"""Shared fixtures: a stub model that records prompts and replays canned responses."""
import json
from typing import Optional

import pytest


class StubModel:
    """Returns queued responses in order; dicts are JSON-encoded, exceptions are raised."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts: list[str] = []
        self.images: list[Optional[str]] = []

    def generate(self, prompt: str, image: Optional[str] = None) -> Optional[str]:
        self.prompts.append(prompt)
        self.images.append(image)
        if not self.responses:
            raise AssertionError("StubModel called more times than expected")
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(response, Exception):
            raise response
        if isinstance(response, (dict, list)):
            return json.dumps(response)
        return response

    @property
    def calls(self) -> int:
        return len(self.prompts)


@pytest.fixture
def stub_model():
    return StubModel


@pytest.fixture
def objective_question() -> dict:
    return {
        "id": "q1",
        "type": "objective",
        "questionText": "What is the capital of France?",
        "options": [{"id": "a", "text": "Paris"}, {"id": "b", "text": "Rome"}],
        "correctAnswerKey": "a",
        "correctAnswerText": "Paris",
    }


@pytest.fixture
def subjective_question() -> dict:
    return {
        "id": "q2",
        "type": "subjective",
        "questionText": "Explain photosynthesis.",
        "correctAnswerText": "Plants convert light, water and CO₂ into glucose and oxygen.",
    }
