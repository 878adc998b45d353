"""
Name: Shared HTTP Schema Helpers

Responsibilities:
  - camelCase base model for request/response DTOs
  - Generic message response
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """R: Accept and emit camelCase keys; snake_case names also accepted."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class MessageRes(BaseModel):
    message: str
