"""Shared pydantic base for flow contracts."""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class FlowModel(BaseModel):
    """
    Base model for every flow input/output.

    Python code uses snake_case attributes; the JSON exchanged with the model
    and with callers uses camelCase (``questionText``, ``dailySessions``).
    Both spellings are accepted when validating.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    def to_json_dict(self) -> dict:
        """Dump with camelCase keys, dropping unset optional fields."""
        return self.model_dump(by_alias=True, exclude_none=True)
