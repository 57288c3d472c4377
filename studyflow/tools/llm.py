"""Gemini model boundary: the only module that talks to google-genai."""
import base64
import binascii
import logging
import os
from typing import Optional, Protocol

import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from studyflow.models.chat import DATA_URI_RE
from studyflow.tools.errors import ConfigurationError, ModelFailure, ModelRequestError, ModelUnavailableError

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "gemini-2.5-flash"
DEFAULT_TEMPERATURE = 0.4

# HTTP status codes the endpoint uses when it is overloaded or rate limiting
OVERLOADED_CODES = {429, 503}
TIMEOUT_CODES = {504}


class TextModel(Protocol):
    """Anything that turns a prompt (plus optional data-URI image) into raw response text."""

    def generate(self, prompt: str, image: Optional[str] = None) -> Optional[str]:
        ...


class GeminiModel:
    """Calls Gemini in JSON mode and maps failures to typed errors."""

    def __init__(
        self,
        api_key: str,
        model_name: str = DEFAULT_MODEL,
        temperature: float = DEFAULT_TEMPERATURE,
        client: Optional[genai.Client] = None,
    ):
        self.model_name = model_name
        self.temperature = temperature
        self.client = client or genai.Client(api_key=api_key)

    def generate(self, prompt: str, image: Optional[str] = None) -> Optional[str]:
        contents: list = [prompt]
        if image:
            contents.append(image_part(image))

        logger.info(f"Calling LLM ({self.model_name}), prompt length: {len(prompt)} chars, image: {bool(image)}")
        logger.debug(f"PROMPT:\n{prompt}")

        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=contents,
                config=types.GenerateContentConfig(
                    temperature=self.temperature,
                    response_mime_type="application/json",
                ),
            )
        except genai_errors.APIError as e:
            raise classify_api_error(e) from e
        except httpx.TimeoutException as e:
            logger.error(f"LLM call timed out: {e}")
            raise ModelUnavailableError(f"Model request timed out: {e}", ModelFailure.TIMEOUT) from e
        except httpx.TransportError as e:
            logger.error(f"LLM endpoint unreachable: {e}")
            raise ModelUnavailableError(f"Model endpoint unreachable: {e}", ModelFailure.UNREACHABLE) from e

        text = response.text
        logger.info(f"LLM response received, length: {len(text) if text else 0} chars")
        logger.debug(f"RAW LLM RESPONSE:\n{text}")
        return text


def classify_api_error(e: genai_errors.APIError) -> Exception:
    """Map an SDK API error onto ModelUnavailableError or ModelRequestError by status code."""
    code = getattr(e, "code", None)
    message = f"Model request failed ({code}): {getattr(e, 'message', None) or e}"
    logger.error(message)
    if code in OVERLOADED_CODES:
        return ModelUnavailableError(message, ModelFailure.OVERLOADED)
    if code in TIMEOUT_CODES:
        return ModelUnavailableError(message, ModelFailure.TIMEOUT)
    return ModelRequestError(message)


def image_part(data_uri: str) -> types.Part:
    """Decode a base64 data URI into an inline image part."""
    match = DATA_URI_RE.match(data_uri)
    if not match:
        raise ValueError("image must be a base64 data URI")
    try:
        data = base64.b64decode(match.group("data"), validate=False)
    except (binascii.Error, ValueError) as e:
        raise ValueError(f"image data is not valid base64: {e}") from e
    return types.Part.from_bytes(data=data, mime_type=match.group("mime"))


def get_model() -> GeminiModel:
    """Build the default model from environment configuration."""
    api_key = os.getenv("GOOGLE_API_KEY")
    if not api_key:
        logger.error("GOOGLE_API_KEY environment variable not set")
        raise ConfigurationError("GOOGLE_API_KEY", "environment variable not set")

    model_name = os.getenv("CHAT_MODEL", DEFAULT_MODEL)
    raw_temperature = os.getenv("MODEL_TEMPERATURE", str(DEFAULT_TEMPERATURE))
    try:
        temperature = float(raw_temperature)
    except ValueError:
        raise ConfigurationError("MODEL_TEMPERATURE", f"must be a number (got '{raw_temperature}')")
    return GeminiModel(api_key=api_key, model_name=model_name, temperature=temperature)
