"""
Shared Schemas

- CamelModel: base for every model that crosses the wire or the store.
  Python attributes are snake_case, JSON/document keys are camelCase
  (created_by <-> createdBy), matching the persisted Firestore layout.
- ApiResponse: the uniform {success, data, error} envelope.
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class CamelModel(BaseModel):
    """Base model serialised with camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ApiResponse(BaseModel, Generic[T]):
    """
    Uniform response envelope.

    Exactly one of data/error is present in a serialised response.
    """

    success: bool = Field(..., description="Whether the operation succeeded")
    data: Optional[T] = Field(default=None, description="Payload on success")
    error: Optional[str] = Field(default=None, description="Message on failure")

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"success": True, "data": {"message": "Joined club!", "clubId": "c1"}},
                {"success": False, "error": "Club not found"},
            ]
        },
    )


class MessageResponse(CamelModel):
    """Informational result of a mutating operation."""

    message: str = Field(..., description="Human readable outcome")
