# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy ORM models.

Importing this package registers every table on Base.metadata.
"""

from schooladmin.infrastructure.database.models.base import Base, TimestampMixin
from schooladmin.infrastructure.database.models.people import (
    Parent,
    Sex,
    Student,
    Teacher,
    teacher_subjects,
)
from schooladmin.infrastructure.database.models.school import (
    Announcement,
    Assignment,
    Attendance,
    Class,
    Day,
    Event,
    Exam,
    Grade,
    Lesson,
    Result,
    Subject,
)

__all__ = [
    "Base",
    "TimestampMixin",
    # People
    "Teacher",
    "Student",
    "Parent",
    "Sex",
    "teacher_subjects",
    # School
    "Grade",
    "Class",
    "Subject",
    "Lesson",
    "Day",
    "Exam",
    "Assignment",
    "Result",
    "Attendance",
    "Event",
    "Announcement",
]
