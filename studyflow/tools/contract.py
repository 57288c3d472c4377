"""Schema contracts: validate values against pydantic models and describe them for prompts."""
import json
import logging
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ValidationError

from studyflow.tools.errors import FieldError, InputValidationError, OutputValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def field_errors_from(exc: ValidationError) -> list[FieldError]:
    """Flatten a pydantic ValidationError into dotted-path field errors."""
    errors = []
    for err in exc.errors():
        path = ".".join(str(part) for part in err["loc"]) or "<root>"
        errors.append(FieldError(path=path, message=err["msg"]))
    return errors


class Contract(Generic[M]):
    """
    Wraps a pydantic model as the input or output contract of a flow.

    The same contract rejects bad data (``check``/``parse_input``/``parse_output``)
    and renders the JSON schema the model is asked to target
    (``describe``/``format_instructions``).
    """

    def __init__(self, model: type[M], name: Optional[str] = None):
        self.model = model
        self.name = name or model.__name__

    def check(self, value: Any) -> tuple[Optional[M], list[FieldError]]:
        """
        Validate a candidate value.

        Returns:
            Tuple of (instance, field_errors)
            Returns (instance, []) on success
            Returns (None, errors) on failure
        """
        if isinstance(value, self.model):
            value = value.model_dump(by_alias=True)
        try:
            return self.model.model_validate(value), []
        except ValidationError as e:
            return None, field_errors_from(e)

    def describe(self) -> dict:
        """Return the JSON schema of the contract (camelCase field names)."""
        return self.model.model_json_schema(by_alias=True)

    def format_instructions(self) -> str:
        """Human-readable output contract embedded at the end of a prompt."""
        schema = json.dumps(self.describe(), indent=2)
        return (
            "Respond ONLY with a JSON object that strictly conforms to this JSON schema "
            f"({self.name}). Do not wrap it in markdown and do not add commentary.\n"
            f"{schema}"
        )

    def parse_input(self, value: Any, flow: Optional[str] = None) -> M:
        instance, errors = self.check(value)
        if instance is None:
            logger.info(f"Rejected {self.name} input: {len(errors)} field error(s)")
            raise InputValidationError(errors, flow=flow)
        return instance

    def parse_output(self, text: Optional[str]) -> M:
        """Parse raw model text as JSON and validate it against the contract."""
        if text is None or not text.strip():
            raise OutputValidationError(f"Model returned an empty response for {self.name}")

        try:
            data = json.loads(_strip_code_fence(text))
        except json.JSONDecodeError as e:
            logger.debug(f"Unparseable model output: {text[:500]}")
            raise OutputValidationError(
                f"Model output for {self.name} is not valid JSON: {e.msg} at line {e.lineno}, column {e.colno}"
            ) from e

        if data is None:
            raise OutputValidationError(f"Model returned null for {self.name}")

        instance, errors = self.check(data)
        if instance is None:
            raise OutputValidationError(f"Model output does not match {self.name}", errors)
        return instance


def _strip_code_fence(text: str) -> str:
    """Remove a ```json ... ``` fence some models wrap around JSON mode output."""
    stripped = text.strip()
    if stripped.startswith("```"):
        stripped = stripped.split("\n", 1)[1] if "\n" in stripped else ""
        if stripped.rstrip().endswith("```"):
            stripped = stripped.rstrip()[:-3]
    return stripped.strip()
