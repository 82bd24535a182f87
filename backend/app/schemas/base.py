"""Schema Base — shared camelCase configuration for every API model."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Accepts snake_case or camelCase on input, emits camelCase."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MessageResponse(ApiModel):
    """Confirmation envelope for operations with no record to return."""
    message: str
