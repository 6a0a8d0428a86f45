"""Shared schema base classes and generic response bodies."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Accepts and emits camelCase keys (firstName) while Python code uses snake_case."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(BaseModel):
    """Acknowledgement body for deletes and other bodiless actions."""

    message: str


class ErrorDetail(BaseModel):
    path: str
    message: str


class ErrorResponse(BaseModel):
    """Shape of every error body."""

    error: str
    code: str | None = None
    details: list[ErrorDetail] | None = Field(default=None)
    retry_after: int | None = Field(default=None, alias="retryAfter")


def partial_update(body: BaseModel) -> dict[str, Any]:
    """Fields the client actually sent, keyed by attribute name."""
    return body.model_dump(exclude_unset=True)


def reject_null(value: Any) -> Any:
    """Before-validator for update fields that may be omitted but never cleared."""
    if value is None:
        raise ValueError("may not be null")
    return value
