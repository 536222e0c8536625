"""
Shared pydantic base
Python code uses snake_case, JSON on the wire is camelCase
"""

from pydantic import BaseModel as PydanticBaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseModel(PydanticBaseModel):
    """camelCase aliases, either spelling accepted on input, unknown fields rejected"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

    def model_dump(self, **kwargs):
        # responses go out camelCase unless the caller asks otherwise
        kwargs.setdefault("by_alias", True)
        return super().model_dump(**kwargs)
