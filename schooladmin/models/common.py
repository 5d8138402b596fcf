# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Common result types shared by every admin action.

Every create/update/delete operation ends in an ActionResult: ``Ok`` or
``Err(kind, message)``. The API serialises it as ActionResponse, the
shape the dashboard forms consume.
"""

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

GENERIC_ERROR_MESSAGE = "Something went wrong!"


class ErrorKind(str, Enum):
    """Failure taxonomy of admin actions."""

    VALIDATION_FAILURE = "validation_failure"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    MISSING_IDENTIFIER = "missing_identifier"
    DUPLICATE_FIELD = "duplicate_field"
    EXTERNAL_PROVIDER_REJECTED = "external_provider_rejected"
    NOT_FOUND = "not_found"
    FORBIDDEN = "forbidden"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Ok:
    """Successful action. Carries no payload."""

    @property
    def success(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed action.

    Attributes:
        kind: Failure category.
        message: Human-readable message shown to the administrator.
    """

    kind: ErrorKind
    message: str

    @property
    def success(self) -> bool:
        return False

    @classmethod
    def generic(cls) -> "Err":
        """Failure reported without detail."""
        return cls(ErrorKind.UNKNOWN, GENERIC_ERROR_MESSAGE)


ActionResult = Ok | Err

OK = Ok()


class SchoolModel(BaseModel):
    """Base for request schemas: accepts snake_case and camelCase keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


class ActionResponse(BaseModel):
    """Wire form of an ActionResult."""

    success: bool = Field(description="Whether the action was applied")
    error: str | None = Field(default=None, description="Message for the administrator")
    error_kind: ErrorKind | None = Field(default=None, description="Failure category")

    @classmethod
    def from_result(cls, result: ActionResult) -> "ActionResponse":
        """Serialise an action result."""
        if isinstance(result, Err):
            return cls(success=False, error=result.message, error_kind=result.kind)
        return cls(success=True)
