"""Shared Schema Base — camelCase JSON contract over snake_case attributes.

Invariants:
    - Every API model accepts both the camelCase alias and the attribute name
    - Response models read straight from ORM objects (from_attributes)
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for response models and lenient request bodies."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True,
    )


class StrictApiModel(ApiModel):
    """Request body base that rejects unknown fields."""
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, extra="forbid",
    )


class MessageResponse(ApiModel):
    message: str


class UploadResponse(ApiModel):
    url: str
    message: str = "Image uploaded successfully"
