# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Store errors and translation of failures into action results.

Stores raise the StoreError family so that services never look at driver
exceptions directly. ``translate_error`` turns any failure into the
``Err`` shown to the administrator:

1. unique-constraint violations (``code == UNIQUE_VIOLATION_CODE``) become
   "Duplicate value for field: <fields>";
2. identity-provider validation lists (an ``errors`` list) become the
   provider messages joined by ", ";
3. errors that carry their own ``kind`` keep it;
4. anything else is reported with its message or a fallback.
"""

import re
from typing import Any

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from schooladmin.models.common import Err, ErrorKind

UNIQUE_VIOLATION_CODE = "P2002"
UNEXPECTED_ERROR_MESSAGE = "Unexpected error occurred"

# SQLSTATE for unique_violation
_PG_UNIQUE_VIOLATION = "23505"
_PG_KEY_DETAIL = re.compile(r"Key \((?P<columns>[^)]+)\)=\(.*\) already exists")
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: (?P<columns>.+)$", re.MULTILINE)
_DRIVER_CLASS_PREFIX = re.compile(r"^<class '[^']+'>:\s*")


class StoreError(Exception):
    """Base exception for persistence store failures.

    Attributes:
        message: Human-readable error description.
        code: Machine-readable failure code, if any.
        meta: Extra details about the failure.
    """

    code: str | None = None

    def __init__(self, message: str, meta: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.meta = meta or {}


class UniqueConstraintError(StoreError):
    """A unique constraint rejected the write.

    ``meta["target"]`` lists the offending field names.
    """

    code = UNIQUE_VIOLATION_CODE

    def __init__(self, fields: list[str]) -> None:
        super().__init__(
            f"Unique constraint failed on the fields: ({', '.join(fields)})",
            meta={"target": list(fields)},
        )

    @property
    def fields(self) -> list[str]:
        return self.meta["target"]


class ConstraintViolationError(StoreError):
    """A foreign key, NOT NULL or check constraint rejected the write.

    Carries only the driver's first message line, never the statement or
    its bound parameters.
    """

    def __init__(self, message: str, constraint: str | None = None) -> None:
        super().__init__(message, meta={"constraint": constraint} if constraint else None)


class RowNotFoundError(StoreError):
    """The row to update or delete does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, row_id: Any) -> None:
        super().__init__(f"{entity} {row_id} not found", meta={"id": row_id})
        self.entity = entity


def unique_violation_fields(error: IntegrityError) -> list[str] | None:
    """Extract the offending columns from a unique-constraint violation.

    Args:
        error: IntegrityError raised by SQLAlchemy.

    Returns:
        Column names, or None if the error is not a unique violation.
    """
    orig = error.orig
    text = str(orig)
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)

    match = _PG_KEY_DETAIL.search(text)
    if match:
        return [c.strip() for c in match.group("columns").split(",")]

    match = _SQLITE_UNIQUE.search(text)
    if match:
        # "teachers.email, teachers.phone"
        return [c.strip().rsplit(".", 1)[-1] for c in match.group("columns").split(",")]

    if sqlstate == _PG_UNIQUE_VIOLATION or "duplicate key value" in text:
        constraint = getattr(getattr(orig, "__cause__", None), "constraint_name", None)
        return [constraint] if constraint else ["unknown"]

    return None


def integrity_error_message(error: IntegrityError) -> str:
    """First line of the driver message, without statement or parameters.

    The DETAIL line of a Postgres error echoes the offending values, so
    only the headline is kept.
    """
    lines = str(error.orig).strip().splitlines()
    if not lines:
        return UNEXPECTED_ERROR_MESSAGE
    return _DRIVER_CLASS_PREFIX.sub("", lines[0]).strip() or UNEXPECTED_ERROR_MESSAGE


def translate_integrity_error(error: IntegrityError) -> StoreError:
    """Map an IntegrityError onto the store error family.

    Returns a UniqueConstraintError for unique violations and a
    ConstraintViolationError otherwise, ready to be raised ``from`` the
    driver error.
    """
    fields = unique_violation_fields(error)
    if fields is not None:
        return UniqueConstraintError(fields)
    constraint = getattr(getattr(error.orig, "__cause__", None), "constraint_name", None)
    return ConstraintViolationError(integrity_error_message(error), constraint)


async def commit_or_translate(db: AsyncSession) -> None:
    """Commit the session, mapping integrity errors onto StoreError.

    Raises:
        UniqueConstraintError: If a unique constraint rejected the write.
        ConstraintViolationError: For any other integrity failure.
    """
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise translate_integrity_error(e) from e


def translate_error(error: BaseException) -> Err:
    """Translate a failure into the result reported to the administrator.

    SQLAlchemy errors render their statement and bound parameters in
    ``str()``; they are never reported verbatim.

    Args:
        error: Any exception raised while performing an action.

    Returns:
        The Err describing the failure.
    """
    if isinstance(error, IntegrityError):
        error = translate_integrity_error(error)
    elif isinstance(error, SQLAlchemyError):
        return Err(ErrorKind.UNKNOWN, UNEXPECTED_ERROR_MESSAGE)

    if getattr(error, "code", None) == UNIQUE_VIOLATION_CODE:
        meta = getattr(error, "meta", None) or {}
        target = meta.get("target") or []
        return Err(
            ErrorKind.DUPLICATE_FIELD,
            f"Duplicate value for field: {', '.join(str(t) for t in target)}",
        )

    errors = getattr(error, "errors", None)
    if isinstance(errors, list) and errors:
        return Err(
            ErrorKind.EXTERNAL_PROVIDER_REJECTED,
            ", ".join(_error_message(e) for e in errors),
        )

    message = getattr(error, "message", None) or str(error) or UNEXPECTED_ERROR_MESSAGE

    kind = getattr(error, "kind", None)
    if isinstance(kind, ErrorKind):
        return Err(kind, message)

    return Err(ErrorKind.UNKNOWN, message)


def _error_message(item: Any) -> str:
    if isinstance(item, dict):
        return str(item.get("message", ""))
    return str(getattr(item, "message", item))
