# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Record services for single-table school entities.

Subjects, classes, lessons, exams, assignments, results, attendance,
events and announcements are plain rows without an identity account.
Each service maps a validated form onto its table and reports the outcome
as an ActionResult:

- update without an id fails with MISSING_IDENTIFIER
- update/delete of an unknown row fails with NOT_FOUND
- unique-constraint violations are translated field by field
- everything else is logged and reported as the generic failure

Example:
    >>> service = SubjectService(db)
    >>> result = await service.create(SubjectSchema(name="Math", teachers=["t1"]))
    >>> result.success
    True
"""

from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from schooladmin.domains.errors import StoreError, commit_or_translate, translate_error
from schooladmin.domains.records.policy import Actor, ExamAccessPolicy, OpenExamAccessPolicy
from schooladmin.infrastructure.database.models import (
    Announcement,
    Assignment,
    Attendance,
    Base,
    Class,
    Event,
    Exam,
    Lesson,
    Result,
    Subject,
    Teacher,
)
from schooladmin.models.common import OK, ActionResult, Err, ErrorKind, SchoolModel
from schooladmin.models.records import (
    AnnouncementSchema,
    AssignmentSchema,
    AttendanceSchema,
    ClassSchema,
    EventSchema,
    ExamSchema,
    LessonSchema,
    ResultSchema,
    SubjectSchema,
)
from schooladmin.utils.logging import get_logger

logger = get_logger(__name__)

EXAM_ACCESS_DENIED_MESSAGE = "Not allowed to manage exams for this lesson"

SchemaT = TypeVar("SchemaT", bound=SchoolModel)


class RecordServiceError(Exception):
    """Base exception for record service errors."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RecordNotFoundError(RecordServiceError):
    """Raised when a referenced record does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, entity: str, record_id: Any) -> None:
        super().__init__(f"{entity} {record_id} not found")
        self.entity = entity
        self.record_id = record_id


class AccessDeniedError(RecordServiceError):
    """Raised when the access policy rejects the actor."""

    kind = ErrorKind.FORBIDDEN

    def __init__(self, message: str = EXAM_ACCESS_DENIED_MESSAGE) -> None:
        super().__init__(message)


class RecordService(Generic[SchemaT]):
    """Create, update and delete rows of one table.

    Subclasses set ``model`` and ``entity``. Form fields listed in
    ``relation_keys`` are not columns; ``_apply_relations`` handles them.

    Attributes:
        db: Async database session.
    """

    model: ClassVar[type[Base]]
    entity: ClassVar[str]
    relation_keys: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, data: SchemaT, actor: Actor | None = None) -> ActionResult:
        """Insert a new row.

        Args:
            data: Validated form. Its id, if any, is ignored.
            actor: User performing the action.

        Returns:
            OK, or the failure.
        """
        try:
            await self._authorize(actor, data)
            row = self.model(**self._fields(data))
            await self._apply_relations(row, data)
            self.db.add(row)
            await commit_or_translate(self.db)
        except Exception as e:
            return await self._failure("create", e)

        logger.info("record_created", entity=self.entity, record_id=getattr(row, "id", None))
        return OK

    async def update(self, data: SchemaT, actor: Actor | None = None) -> ActionResult:
        """Overwrite an existing row with the form values.

        Args:
            data: Validated form including the row id.
            actor: User performing the action.

        Returns:
            OK, or the failure.
        """
        record_id = getattr(data, "id", None)
        if not record_id:
            return Err(ErrorKind.MISSING_IDENTIFIER, f"Missing {self.entity} ID")

        try:
            await self._authorize(actor, data)
            row = await self._get(record_id)
            await self._authorize_row(actor, row)

            for column, value in self._fields(data).items():
                setattr(row, column, value)
            await self._apply_relations(row, data)
            await commit_or_translate(self.db)
        except Exception as e:
            return await self._failure("update", e, record_id=record_id)

        logger.info("record_updated", entity=self.entity, record_id=record_id)
        return OK

    async def delete(self, record_id: int, actor: Actor | None = None) -> ActionResult:
        """Delete a row by id.

        Args:
            record_id: Primary key of the row.
            actor: User performing the action.

        Returns:
            OK, or the failure.
        """
        if not record_id:
            return Err(ErrorKind.MISSING_IDENTIFIER, f"Missing {self.entity} ID")

        try:
            row = await self._get(record_id)
            await self._authorize_row(actor, row)
            await self.db.delete(row)
            await commit_or_translate(self.db)
        except Exception as e:
            return await self._failure("delete", e, record_id=record_id)

        logger.info("record_deleted", entity=self.entity, record_id=record_id)
        return OK

    def _fields(self, data: SchemaT) -> dict[str, Any]:
        """Column values of the form."""
        return data.model_dump(exclude={"id"} | set(self.relation_keys))

    async def _apply_relations(self, row: Any, data: SchemaT) -> None:
        """Hook for many-to-many relations. No-op by default."""

    async def _authorize(self, actor: Actor | None, data: SchemaT) -> None:
        """Hook to check the form against an access policy."""

    async def _authorize_row(self, actor: Actor | None, row: Any) -> None:
        """Hook to check an existing row against an access policy."""

    def _load_options(self) -> list[Any]:
        return []

    async def _get(self, record_id: int) -> Any:
        stmt = select(self.model).where(self.model.id == record_id)
        options = self._load_options()
        if options:
            stmt = stmt.options(*options)
        result = await self.db.execute(stmt)
        row = result.scalar_one_or_none()
        if row is None:
            raise RecordNotFoundError(self.model.__name__, record_id)
        return row

    async def _failure(self, action: str, error: Exception, **context: Any) -> Err:
        """Roll back and turn an exception into the reported failure."""
        await self.db.rollback()

        if isinstance(error, (RecordServiceError, StoreError)):
            logger.warning(
                "record_action_rejected",
                entity=self.entity,
                action=action,
                error=str(error),
                **context,
            )
            return translate_error(error)

        logger.error(
            "record_action_failed",
            entity=self.entity,
            action=action,
            error=str(error),
            **context,
        )
        return Err.generic()


class SubjectService(RecordService[SubjectSchema]):
    """Subjects. ``teachers`` is the complete set of teacher ids."""

    model = Subject
    entity = "subject"
    relation_keys = frozenset({"teachers"})

    def _load_options(self) -> list[Any]:
        return [selectinload(Subject.teachers)]

    async def _apply_relations(self, row: Any, data: SubjectSchema) -> None:
        teacher_ids = set(data.teachers)
        teachers: list[Teacher] = []
        if teacher_ids:
            result = await self.db.execute(select(Teacher).where(Teacher.id.in_(teacher_ids)))
            teachers = list(result.scalars().all())

            missing = teacher_ids - {t.id for t in teachers}
            if missing:
                raise RecordNotFoundError("Teacher", ", ".join(sorted(missing)))

        row.teachers = teachers


class ClassService(RecordService[ClassSchema]):
    model = Class
    entity = "class"


class LessonService(RecordService[LessonSchema]):
    model = Lesson
    entity = "lesson"


class ExamService(RecordService[ExamSchema]):
    """Exams, guarded by an ExamAccessPolicy.

    The policy is checked against the lesson in the form and, for updates
    and deletes, against the lesson the exam currently belongs to.
    """

    model = Exam
    entity = "exam"

    def __init__(self, db: AsyncSession, policy: ExamAccessPolicy | None = None) -> None:
        super().__init__(db)
        self.policy = policy or OpenExamAccessPolicy()

    async def _authorize(self, actor: Actor | None, data: ExamSchema) -> None:
        await self._check_lesson(actor, data.lesson_id)

    async def _authorize_row(self, actor: Actor | None, row: Any) -> None:
        await self._check_lesson(actor, row.lesson_id)

    async def _check_lesson(self, actor: Actor | None, lesson_id: int) -> None:
        if not await self.policy.can_manage_lesson(actor, lesson_id):
            raise AccessDeniedError()


class AssignmentService(RecordService[AssignmentSchema]):
    model = Assignment
    entity = "assignment"


class ResultService(RecordService[ResultSchema]):
    model = Result
    entity = "result"


class AttendanceService(RecordService[AttendanceSchema]):
    model = Attendance
    entity = "attendance"


class EventService(RecordService[EventSchema]):
    model = Event
    entity = "event"


class AnnouncementService(RecordService[AnnouncementSchema]):
    model = Announcement
    entity = "announcement"
