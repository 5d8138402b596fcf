# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the school record services."""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError

from schooladmin.domains.records import (
    EXAM_ACCESS_DENIED_MESSAGE,
    Actor,
    AnnouncementService,
    ClassService,
    ExamService,
    ResultService,
    SubjectService,
)
from schooladmin.infrastructure.database.models import (
    Announcement,
    Class,
    Exam,
    Result,
    Subject,
    Teacher,
)
from schooladmin.models.common import GENERIC_ERROR_MESSAGE, OK, Err, ErrorKind
from schooladmin.models.records import (
    AnnouncementSchema,
    ClassSchema,
    ExamSchema,
    ResultSchema,
    SubjectSchema,
)

NOW = datetime(2025, 3, 3, 9, 0, tzinfo=timezone.utc)


def _scalar(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


def _scalars(values):
    result = MagicMock()
    result.scalars.return_value.all.return_value = list(values)
    return result


def _teacher(teacher_id: str) -> Teacher:
    return Teacher(id=teacher_id, username=teacher_id, name="T", surname=teacher_id)


class TestSubjectService:
    """Tests for subjects and their teacher set."""

    @pytest.mark.asyncio
    async def test_create_connects_teachers(self, mock_db):
        mock_db.execute.return_value = _scalars([_teacher("t1"), _teacher("t2")])
        service = SubjectService(mock_db)

        result = await service.create(SubjectSchema(name="Math", teachers=["t1", "t2"]))

        assert result == OK
        row = mock_db.add.call_args.args[0]
        assert isinstance(row, Subject)
        assert row.name == "Math"
        assert {t.id for t in row.teachers} == {"t1", "t2"}
        mock_db.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_without_teachers(self, mock_db):
        service = SubjectService(mock_db)

        result = await service.create(SubjectSchema(name="Art"))

        assert result.success
        mock_db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_with_unknown_teacher(self, mock_db):
        mock_db.execute.return_value = _scalars([_teacher("t1")])
        service = SubjectService(mock_db)

        result = await service.create(SubjectSchema(name="Math", teachers=["t1", "t9"]))

        assert result == Err(ErrorKind.NOT_FOUND, "Teacher t9 not found")
        mock_db.add.assert_not_called()
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_update_replaces_teacher_set(self, mock_db):
        row = Subject(id=4, name="Math", teachers=[_teacher("t1"), _teacher("t2")])
        mock_db.execute.side_effect = [
            _scalar(row),
            _scalars([_teacher("t2"), _teacher("t3")]),
        ]
        service = SubjectService(mock_db)

        result = await service.update(
            SubjectSchema(id=4, name="Mathematics", teachers=["t2", "t3"])
        )

        assert result.success
        assert row.name == "Mathematics"
        assert {t.id for t in row.teachers} == {"t2", "t3"}

    @pytest.mark.asyncio
    async def test_update_without_id(self, mock_db):
        service = SubjectService(mock_db)

        result = await service.update(SubjectSchema(name="Math"))

        assert result == Err(ErrorKind.MISSING_IDENTIFIER, "Missing subject ID")
        mock_db.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_update_unknown_row(self, mock_db):
        mock_db.execute.return_value = _scalar(None)
        service = SubjectService(mock_db)

        result = await service.update(SubjectSchema(id=4, name="Math"))

        assert result == Err(ErrorKind.NOT_FOUND, "Subject 4 not found")

    @pytest.mark.asyncio
    async def test_duplicate_name(self, mock_db):
        mock_db.commit.side_effect = IntegrityError(
            "INSERT INTO subjects ...",
            {},
            Exception("DETAIL:  Key (name)=(Math) already exists."),
        )
        service = SubjectService(mock_db)

        result = await service.create(SubjectSchema(name="Math"))

        assert result == Err(ErrorKind.DUPLICATE_FIELD, "Duplicate value for field: name")


class TestClassService:
    @pytest.mark.asyncio
    async def test_create_with_empty_supervisor(self, mock_db):
        service = ClassService(mock_db)

        result = await service.create(
            ClassSchema(name="1A", capacity=30, grade_id=1, supervisor_id="")
        )

        assert result.success
        row = mock_db.add.call_args.args[0]
        assert isinstance(row, Class)
        assert row.capacity == 30
        assert row.supervisor_id is None

    @pytest.mark.asyncio
    async def test_unexpected_failure_is_generic(self, mock_db):
        mock_db.commit.side_effect = RuntimeError("connection reset")
        service = ClassService(mock_db)

        result = await service.create(ClassSchema(name="1A", capacity=30, grade_id=1))

        assert result == Err(ErrorKind.UNKNOWN, GENERIC_ERROR_MESSAGE)
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_delete(self, mock_db):
        row = Class(id=3, name="1A", capacity=30, grade_id=1)
        mock_db.execute.return_value = _scalar(row)
        service = ClassService(mock_db)

        result = await service.delete(3)

        assert result.success
        mock_db.delete.assert_awaited_once_with(row)

    @pytest.mark.asyncio
    async def test_delete_unknown(self, mock_db):
        mock_db.execute.return_value = _scalar(None)
        service = ClassService(mock_db)

        result = await service.delete(3)

        assert result == Err(ErrorKind.NOT_FOUND, "Class 3 not found")
        mock_db.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_without_id(self, mock_db):
        result = await ClassService(mock_db).delete(0)

        assert result.kind == ErrorKind.MISSING_IDENTIFIER


class TestOptionalReferences:
    """Falsy optional foreign keys are stored as NULL."""

    @pytest.mark.asyncio
    async def test_result_without_exam(self, mock_db):
        service = ResultService(mock_db)

        await service.create(
            ResultSchema(score=90, exam_id=0, assignment_id=5, student_id="acc_s")
        )

        row = mock_db.add.call_args.args[0]
        assert isinstance(row, Result)
        assert row.exam_id is None
        assert row.assignment_id == 5

    @pytest.mark.asyncio
    async def test_school_wide_announcement(self, mock_db):
        service = AnnouncementService(mock_db)

        await service.create(
            AnnouncementSchema.model_validate(
                {"title": "Holiday", "description": "No school", "date": NOW, "classId": ""}
            )
        )

        row = mock_db.add.call_args.args[0]
        assert isinstance(row, Announcement)
        assert row.class_id is None


class TestExamService:
    """Tests for the exam access policy hook."""

    @pytest.fixture
    def exam_form(self):
        return ExamSchema(title="Midterm", start_time=NOW, end_time=NOW, lesson_id=12)

    @pytest.fixture
    def deny_policy(self):
        policy = MagicMock()
        policy.can_manage_lesson = AsyncMock(return_value=False)
        return policy

    @pytest.mark.asyncio
    async def test_create_with_default_policy(self, mock_db, exam_form):
        result = await ExamService(mock_db).create(exam_form, actor=Actor("t1", "teacher"))

        assert result.success
        assert isinstance(mock_db.add.call_args.args[0], Exam)

    @pytest.mark.asyncio
    async def test_create_denied(self, mock_db, exam_form, deny_policy):
        actor = Actor("t1", "teacher")
        service = ExamService(mock_db, deny_policy)

        result = await service.create(exam_form, actor=actor)

        assert result == Err(ErrorKind.FORBIDDEN, EXAM_ACCESS_DENIED_MESSAGE)
        deny_policy.can_manage_lesson.assert_awaited_once_with(actor, 12)
        mock_db.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_checks_current_lesson(self, mock_db, exam_form):
        """Moving an exam needs access to both the old and the new lesson."""
        row = Exam(id=8, title="Midterm", start_time=NOW, end_time=NOW, lesson_id=40)
        mock_db.execute.return_value = _scalar(row)
        policy = MagicMock()
        policy.can_manage_lesson = AsyncMock(side_effect=lambda actor, lesson_id: lesson_id == 12)
        service = ExamService(mock_db, policy)

        result = await service.update(
            exam_form.model_copy(update={"id": 8}), actor=Actor("t1", "teacher")
        )

        assert result.kind == ErrorKind.FORBIDDEN
        assert row.lesson_id == 40
        mock_db.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_denied(self, mock_db, deny_policy):
        row = Exam(id=8, title="Midterm", start_time=NOW, end_time=NOW, lesson_id=40)
        mock_db.execute.return_value = _scalar(row)
        service = ExamService(mock_db, deny_policy)

        result = await service.delete(8, actor=Actor("t1", "teacher"))

        assert result.kind == ErrorKind.FORBIDDEN
        mock_db.delete.assert_not_awaited()
