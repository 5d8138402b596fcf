# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy-backed stores for person rows and class occupancy.

Each store commits its own unit of work. Driver integrity errors are
mapped onto the StoreError family before they leave the store.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from schooladmin.domains.auth.password import PasswordHasher
from schooladmin.domains.errors import RowNotFoundError, commit_or_translate
from schooladmin.domains.provisioning.ports import ClassOccupancy
from schooladmin.domains.provisioning.service import (
    CapacityExceededError,
    ClassNotFoundError,
)
from schooladmin.infrastructure.database.models import (
    Class,
    Parent,
    Student,
    Subject,
    Teacher,
)

logger = logging.getLogger(__name__)


class SqlPersonStore:
    """Profile rows of one person kind.

    Subclasses set ``model``. A ``password`` in the incoming fields is
    stored as ``password_hash``.

    Attributes:
        db: Async database session.
        _hasher: Password hasher for local hashes.
    """

    model: ClassVar[type[Teacher] | type[Student] | type[Parent]]
    relation_keys: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, db: AsyncSession, password_hasher: PasswordHasher) -> None:
        self.db = db
        self._hasher = password_hasher

    async def create(self, fields: dict[str, Any]) -> None:
        row = self.model(**self._columns(fields))
        await self._apply_relations(row, fields)
        self.db.add(row)
        await commit_or_translate(self.db)

        logger.info("Created %s row: %s", self.model.__tablename__, row.id)

    async def update(self, person_id: str, fields: dict[str, Any]) -> None:
        row = await self._get(person_id)
        for column, value in self._columns(fields).items():
            setattr(row, column, value)
        await self._apply_relations(row, fields)
        await commit_or_translate(self.db)

        logger.info("Updated %s row: %s", self.model.__tablename__, person_id)

    async def delete(self, person_id: str) -> None:
        row = await self._get(person_id)
        await self.db.delete(row)
        await commit_or_translate(self.db)

        logger.info("Deleted %s row: %s", self.model.__tablename__, person_id)

    def _columns(self, fields: dict[str, Any]) -> dict[str, Any]:
        """Column values from incoming fields, hashing any password."""
        columns = {k: v for k, v in fields.items() if k not in self.relation_keys}
        password = columns.pop("password", None)
        if password:
            columns["password_hash"] = self._hasher.hash(password)
        return columns

    async def _apply_relations(self, row: Any, fields: dict[str, Any]) -> None:
        """Hook for many-to-many relations. No-op by default."""

    def _load_options(self) -> list[Any]:
        return []

    async def _get(self, person_id: str) -> Any:
        stmt = select(self.model).where(self.model.id == person_id)
        options = self._load_options()
        if options:
            stmt = stmt.options(*options)
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            raise RowNotFoundError(self.model.__name__, person_id)
        return row


class SqlTeacherStore(SqlPersonStore):
    """Teacher rows. ``subject_ids`` is the complete subject set."""

    model = Teacher
    relation_keys = frozenset({"subject_ids"})

    def _load_options(self) -> list[Any]:
        return [selectinload(Teacher.subjects)]

    async def _apply_relations(self, row: Any, fields: dict[str, Any]) -> None:
        if "subject_ids" not in fields:
            return

        subject_ids = set(fields["subject_ids"] or [])
        subjects: list[Subject] = []
        if subject_ids:
            result = await self.db.execute(select(Subject).where(Subject.id.in_(subject_ids)))
            subjects = list(result.scalars().all())

            missing = subject_ids - {s.id for s in subjects}
            if missing:
                raise RowNotFoundError("Subject", sorted(missing))

        # Replaces the previous set
        row.subjects = subjects


class SqlStudentStore(SqlPersonStore):
    """Student rows, with a locked capacity re-check on insert."""

    model = Student

    async def create(self, fields: dict[str, Any]) -> None:
        await self._reserve_seat(fields["class_id"])
        await super().create(fields)

    async def _reserve_seat(self, class_id: int) -> None:
        """Lock the class row and verify a seat is still free.

        The lock is held until the insert commits, so concurrent inserts
        into the same class are serialised.

        Raises:
            ClassNotFoundError: If the class does not exist.
            CapacityExceededError: If the class filled up meanwhile.
        """
        result = await self.db.execute(
            select(Class.capacity).where(Class.id == class_id).with_for_update()
        )
        capacity = result.scalar_one_or_none()
        if capacity is None:
            await self.db.rollback()
            raise ClassNotFoundError(class_id)

        count_result = await self.db.execute(
            select(func.count()).select_from(Student).where(Student.class_id == class_id)
        )
        if (count_result.scalar() or 0) >= capacity:
            await self.db.rollback()
            raise CapacityExceededError()


class SqlParentStore(SqlPersonStore):
    """Parent rows."""

    model = Parent


class SqlClassRoster:
    """Class occupancy read from the classes and students tables."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def find_one(self, class_id: int) -> ClassOccupancy | None:
        stmt = (
            select(Class.capacity, func.count(Student.id))
            .outerjoin(Student, Student.class_id == Class.id)
            .where(Class.id == class_id)
            .group_by(Class.id, Class.capacity)
        )
        result = await self.db.execute(stmt)
        row = result.one_or_none()
        if row is None:
            return None

        capacity, occupant_count = row
        return ClassOccupancy(
            class_id=class_id,
            capacity=capacity,
            occupant_count=occupant_count,
        )
