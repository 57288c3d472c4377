"""Tests for studyflow.tools.llm (no network: the genai client is faked)."""
from types import SimpleNamespace

import httpx
import pytest
from google.genai import errors as genai_errors

from studyflow.tools.errors import ConfigurationError, ModelFailure, ModelRequestError, ModelUnavailableError
from studyflow.tools.llm import GeminiModel, classify_api_error, get_model, image_part


class FakeModels:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return SimpleNamespace(text=self.result)


def _gemini(result=None, error=None) -> tuple[GeminiModel, FakeModels]:
    models = FakeModels(result, error)
    return GeminiModel(api_key="test-key", client=SimpleNamespace(models=models)), models


def _api_error(cls, code: int) -> genai_errors.APIError:
    return cls(code, {"error": {"code": code, "message": "boom", "status": "X"}})


def test_generate_returns_text_in_json_mode() -> None:
    model, fake = _gemini('{"answer": "42"}')
    assert model.generate("prompt") == '{"answer": "42"}'
    call = fake.calls[0]
    assert call["contents"] == ["prompt"]
    assert call["config"].response_mime_type == "application/json"


def test_generate_attaches_image() -> None:
    model, fake = _gemini('{"answer": "cat"}')
    model.generate("what is this?", image="data:image/png;base64,iVBORw0KGgo=")
    contents = fake.calls[0]["contents"]
    assert len(contents) == 2
    assert contents[1].inline_data.mime_type == "image/png"


@pytest.mark.parametrize("code, failure", [(503, ModelFailure.OVERLOADED), (429, ModelFailure.OVERLOADED),
                                           (504, ModelFailure.TIMEOUT)])
def test_unavailable_codes(code, failure) -> None:
    cls = genai_errors.ServerError if code >= 500 else genai_errors.ClientError
    model, _ = _gemini(error=_api_error(cls, code))
    with pytest.raises(ModelUnavailableError) as exc:
        model.generate("prompt")
    assert exc.value.failure == failure


def test_other_api_errors() -> None:
    err = classify_api_error(_api_error(genai_errors.ClientError, 400))
    assert isinstance(err, ModelRequestError)
    assert err.failure == ModelFailure.OTHER


def test_transport_errors() -> None:
    model, _ = _gemini(error=httpx.ReadTimeout("slow"))
    with pytest.raises(ModelUnavailableError) as exc:
        model.generate("prompt")
    assert exc.value.failure == ModelFailure.TIMEOUT

    model, _ = _gemini(error=httpx.ConnectError("refused"))
    with pytest.raises(ModelUnavailableError) as exc:
        model.generate("prompt")
    assert exc.value.failure == ModelFailure.UNREACHABLE


def test_image_part_rejects_non_data_uri() -> None:
    with pytest.raises(ValueError):
        image_part("http://example.com/x.png")


def test_get_model_requires_api_key(monkeypatch) -> None:
    monkeypatch.delenv("GOOGLE_API_KEY", raising=False)
    with pytest.raises(ConfigurationError) as exc:
        get_model()
    assert exc.value.setting == "GOOGLE_API_KEY"


def test_get_model_rejects_non_numeric_temperature(monkeypatch) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.setenv("MODEL_TEMPERATURE", "warm")
    with pytest.raises(ConfigurationError, match="MODEL_TEMPERATURE") as exc:
        get_model()
    assert exc.value.setting == "MODEL_TEMPERATURE"


def test_get_model_reads_environment(monkeypatch) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "test-key")
    monkeypatch.setenv("CHAT_MODEL", "gemini-2.0-flash")
    monkeypatch.setenv("MODEL_TEMPERATURE", "0.1")
    model = get_model()
    assert model.model_name == "gemini-2.0-flash"
    assert model.temperature == 0.1
