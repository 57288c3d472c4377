"""Typed failures raised by the AI flows."""
from dataclasses import dataclass
from enum import Enum


class ModelFailure(str, Enum):
    """Why a model invocation did not produce a usable result."""
    OVERLOADED = "overloaded"
    TIMEOUT = "timeout"
    UNREACHABLE = "unreachable"
    MALFORMED = "malformed"
    OTHER = "other"


@dataclass
class FieldError:
    """A single schema violation."""
    path: str  # dotted path, e.g. "exams.0.subject"
    message: str

    def __str__(self) -> str:
        return f"{self.path}: {self.message}"


class FlowError(Exception):
    """Base class for every error a flow raises."""


class InputValidationError(FlowError):
    """Caller-supplied input failed its schema. Raised before any model call."""

    def __init__(self, field_errors: list[FieldError], flow: str | None = None):
        self.field_errors = field_errors
        self.flow = flow
        details = "; ".join(str(e) for e in field_errors) or "invalid input"
        prefix = f"{flow}: " if flow else ""
        super().__init__(f"{prefix}invalid input ({details})")

    @property
    def fields(self) -> list[str]:
        return [e.path for e in self.field_errors]


class ModelUnavailableError(FlowError):
    """The model endpoint is overloaded, timed out or cannot be reached."""

    def __init__(self, message: str, failure: ModelFailure = ModelFailure.OVERLOADED):
        self.failure = failure
        super().__init__(message)


class ModelRequestError(FlowError):
    """The model endpoint rejected the request for any other reason."""

    failure = ModelFailure.OTHER


class ConfigurationError(FlowError):
    """A required environment setting is missing or has an invalid value."""

    def __init__(self, setting: str, message: str):
        self.setting = setting
        super().__init__(f"{setting}: {message}")


class OutputValidationError(FlowError):
    """The model returned nothing, non-JSON text, or JSON that fails the output schema."""

    failure = ModelFailure.MALFORMED

    def __init__(self, message: str, field_errors: list[FieldError] | None = None):
        self.field_errors = field_errors or []
        if self.field_errors:
            message = f"{message} ({'; '.join(str(e) for e in self.field_errors)})"
        super().__init__(message)
