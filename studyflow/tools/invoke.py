"""Shared model call used by every flow: prompt + output contract -> validated output."""
import logging
from typing import Optional, TypeVar

from pydantic import BaseModel

from studyflow.tools.contract import Contract
from studyflow.tools.errors import OutputValidationError
from studyflow.tools.llm import TextModel, get_model

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def run_model(
    flow: str,
    prompt: str,
    output: Contract[M],
    model: Optional[TextModel] = None,
    image: Optional[str] = None,
) -> M:
    """
    Send one prompt to the model and validate the answer against ``output``.

    Raises:
        ModelUnavailableError / ModelRequestError: the call itself failed
        OutputValidationError: empty, non-JSON, or schema-violating output
    """
    if model is None:
        model = get_model()

    full_prompt = f"{prompt}\n\n{output.format_instructions()}"
    text = model.generate(full_prompt, image=image)

    try:
        result = output.parse_output(text)
    except OutputValidationError as e:
        logger.error(f"[{flow}] {e}")
        raise

    logger.info(f"[{flow}] model output validated as {output.name}")
    return result
