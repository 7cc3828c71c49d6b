"""Base pydantic models for the HTTP contracts.

Requests accept camelCase or snake_case keys and reject unknown fields;
responses serialize with camelCase aliases.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


class StatusResponse(ApiModel):
    status: str = "ok"
