# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School organisation and activity models.

Grades, classes, subjects and lessons describe how the school is organised;
exams, assignments, results, attendance, events and announcements hang off
them.
"""

from __future__ import annotations

import enum
from datetime import datetime

from sqlalchemy import Boolean, DateTime, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from schooladmin.infrastructure.database.models.base import Base
from schooladmin.infrastructure.database.models.people import (
    Student,
    Teacher,
    teacher_subjects,
)


class Day(str, enum.Enum):
    """School day a lesson takes place on."""

    MONDAY = "MONDAY"
    TUESDAY = "TUESDAY"
    WEDNESDAY = "WEDNESDAY"
    THURSDAY = "THURSDAY"
    FRIDAY = "FRIDAY"


class Grade(Base):
    """Grade level (year group)."""

    __tablename__ = "grades"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    level: Mapped[int] = mapped_column(Integer, unique=True, nullable=False)

    students: Mapped[list[Student]] = relationship(back_populates="grade")
    classes: Mapped[list[Class]] = relationship(back_populates="grade")


class Class(Base):
    """Class (section) with a fixed student capacity."""

    __tablename__ = "classes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    capacity: Mapped[int] = mapped_column(Integer, nullable=False)
    supervisor_id: Mapped[str | None] = mapped_column(
        String(64), ForeignKey("teachers.id"), nullable=True
    )
    grade_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("grades.id"), nullable=False, index=True
    )

    supervisor: Mapped[Teacher | None] = relationship(back_populates="classes")
    grade: Mapped[Grade] = relationship(back_populates="classes")
    students: Mapped[list[Student]] = relationship(back_populates="class_")
    lessons: Mapped[list[Lesson]] = relationship(back_populates="class_")
    events: Mapped[list[Event]] = relationship(back_populates="class_")
    announcements: Mapped[list[Announcement]] = relationship(back_populates="class_")


class Subject(Base):
    """Subject taught by one or more teachers."""

    __tablename__ = "subjects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    teachers: Mapped[list[Teacher]] = relationship(
        secondary=teacher_subjects,
        back_populates="subjects",
    )
    lessons: Mapped[list[Lesson]] = relationship(back_populates="subject")


class Lesson(Base):
    """Weekly lesson slot of a subject for a class."""

    __tablename__ = "lessons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    day: Mapped[Day] = mapped_column(Enum(Day, name="day"), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    subject_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("subjects.id"), nullable=False, index=True
    )
    class_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("classes.id"), nullable=False, index=True
    )
    teacher_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("teachers.id"), nullable=False, index=True
    )

    subject: Mapped[Subject] = relationship(back_populates="lessons")
    class_: Mapped[Class] = relationship(back_populates="lessons")
    teacher: Mapped[Teacher] = relationship(back_populates="lessons")
    exams: Mapped[list[Exam]] = relationship(back_populates="lesson")
    assignments: Mapped[list[Assignment]] = relationship(back_populates="lesson")


class Exam(Base):
    """Exam held during a lesson."""

    __tablename__ = "exams"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    lesson_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("lessons.id"), nullable=False, index=True
    )

    lesson: Mapped[Lesson] = relationship(back_populates="exams")


class Assignment(Base):
    """Homework assignment set in a lesson."""

    __tablename__ = "assignments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    start_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    due_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    lesson_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("lessons.id"), nullable=False, index=True
    )

    lesson: Mapped[Lesson] = relationship(back_populates="assignments")


class Result(Base):
    """Score of a student on an exam or an assignment."""

    __tablename__ = "results"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    score: Mapped[int] = mapped_column(Integer, nullable=False)
    exam_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("exams.id"), nullable=True
    )
    assignment_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("assignments.id"), nullable=True
    )
    student_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("students.id"), nullable=False, index=True
    )


class Attendance(Base):
    """Presence of a student at a lesson on a date."""

    __tablename__ = "attendances"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    present: Mapped[bool] = mapped_column(Boolean, nullable=False)
    student_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("students.id"), nullable=False, index=True
    )
    lesson_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("lessons.id"), nullable=False, index=True
    )


class Event(Base):
    """School or class event."""

    __tablename__ = "events"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    end_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    class_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("classes.id"), nullable=True
    )

    class_: Mapped[Class | None] = relationship(back_populates="events")


class Announcement(Base):
    """School or class announcement."""

    __tablename__ = "announcements"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    class_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("classes.id"), nullable=True
    )

    class_: Mapped[Class | None] = relationship(back_populates="announcements")
