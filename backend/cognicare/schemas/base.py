"""Schema Base — camelCase wire aliases over snake_case fields."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts both the camelCase keys clients send and the snake_case field names."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
