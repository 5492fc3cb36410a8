"""Wire models for native messaging requests and responses.

Requests are a closed set discriminated by the 'action' field.
Responses carry no discriminator; their shape is inferred from
which fields are present.
"""
from __future__ import annotations

from typing import Annotated, Literal, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SaveRequest(BaseModel):
    """Write content to an absolute path."""

    model_config = ConfigDict(frozen=True, strict=True)

    action: Literal["save"]
    path: str
    content: str


class PingRequest(BaseModel):
    """Connection test."""

    model_config = ConfigDict(frozen=True, strict=True)

    action: Literal["ping"]


Request = Annotated[
    SaveRequest | PingRequest,
    Field(discriminator="action"),
]


class SaveResult(BaseModel):
    """Outcome of a save request.

    full_path is present only on success, error only on
    failure.
    """

    model_config = ConfigDict(frozen=True)

    success: bool
    full_path: str | None = None
    error: str | None = None

    @model_validator(mode="after")
    def _check_fields_match_success(self) -> Self:
        if self.success and (self.full_path is None or self.error is not None):
            msg = "successful SaveResult needs full_path and no error"
            raise ValueError(msg)
        if not self.success and (self.error is None or self.full_path is not None):
            msg = "failed SaveResult needs error and no full_path"
            raise ValueError(msg)
        return self

    @classmethod
    def ok(cls, full_path: str) -> SaveResult:
        """Build a successful result."""
        return cls(success=True, full_path=full_path)

    @classmethod
    def failed(cls, error: str) -> SaveResult:
        """Build a failed result."""
        return cls(success=False, error=error)


class Pong(BaseModel):
    """Reply to a ping."""

    model_config = ConfigDict(frozen=True)

    success: Literal[True] = True


class ErrorResponse(BaseModel):
    """Protocol-level failure."""

    model_config = ConfigDict(frozen=True)

    success: Literal[False] = False
    error: str


Response = SaveResult | Pong | ErrorResponse
