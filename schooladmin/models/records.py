# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request schemas for single-table school records."""

from datetime import datetime
from typing import Annotated, Any

from pydantic import BeforeValidator, Field

from schooladmin.infrastructure.database.models.school import Day
from schooladmin.models.common import SchoolModel


def _falsy_to_none(value: Any) -> Any:
    """Optional foreign keys arrive as 0 or "" from empty selects."""
    if value in (0, "", None):
        return None
    return value


OptionalIntRef = Annotated[int | None, BeforeValidator(_falsy_to_none)]
OptionalStrRef = Annotated[str | None, BeforeValidator(_falsy_to_none)]


class SubjectSchema(SchoolModel):
    """Subject form. ``teachers`` is the complete set of teacher ids."""

    id: int | None = None
    name: str = Field(min_length=1)
    teachers: list[str] = Field(default_factory=list)


class ClassSchema(SchoolModel):
    """Class form."""

    id: int | None = None
    name: str = Field(min_length=1)
    capacity: int = Field(ge=1)
    grade_id: int
    supervisor_id: OptionalStrRef = None


class LessonSchema(SchoolModel):
    """Lesson form."""

    id: int | None = None
    name: str = Field(min_length=1)
    day: Day
    start_time: datetime
    end_time: datetime
    subject_id: int
    class_id: int
    teacher_id: str = Field(min_length=1)


class ExamSchema(SchoolModel):
    """Exam form."""

    id: int | None = None
    title: str = Field(min_length=1)
    start_time: datetime
    end_time: datetime
    lesson_id: int


class AssignmentSchema(SchoolModel):
    """Assignment form."""

    id: int | None = None
    title: str = Field(min_length=1)
    start_date: datetime
    due_date: datetime
    lesson_id: int


class ResultSchema(SchoolModel):
    """Result form. Exactly one of exam/assignment is normally set."""

    id: int | None = None
    score: int = Field(ge=0)
    exam_id: OptionalIntRef = None
    assignment_id: OptionalIntRef = None
    student_id: str = Field(min_length=1)


class AttendanceSchema(SchoolModel):
    """Attendance form."""

    id: int | None = None
    date: datetime
    present: bool
    student_id: str = Field(min_length=1)
    lesson_id: int


class EventSchema(SchoolModel):
    """Event form. No class means a school-wide event."""

    id: int | None = None
    title: str = Field(min_length=1)
    description: str
    start_time: datetime
    end_time: datetime
    class_id: OptionalIntRef = None


class AnnouncementSchema(SchoolModel):
    """Announcement form. No class means a school-wide announcement."""

    id: int | None = None
    title: str = Field(min_length=1)
    description: str
    date: datetime
    class_id: OptionalIntRef = None
