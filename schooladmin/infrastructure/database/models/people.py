# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Person models: teachers, students and parents.

Each person row is keyed by the id of its identity-provider account. The
two stores are joined 1:1 on that id; there is no generated local key.
"""

from __future__ import annotations

import enum
from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Column, DateTime, Enum, ForeignKey, Integer, String, Table
from sqlalchemy.orm import Mapped, mapped_column, relationship

from schooladmin.infrastructure.database.models.base import Base, TimestampMixin

if TYPE_CHECKING:
    from schooladmin.infrastructure.database.models.school import (
        Class,
        Grade,
        Lesson,
        Subject,
    )


class Sex(str, enum.Enum):
    """Sex recorded on a person profile."""

    MALE = "MALE"
    FEMALE = "FEMALE"


teacher_subjects = Table(
    "teacher_subjects",
    Base.metadata,
    Column(
        "teacher_id",
        String(64),
        ForeignKey("teachers.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "subject_id",
        Integer,
        ForeignKey("subjects.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Teacher(Base, TimestampMixin):
    """Teacher profile row."""

    __tablename__ = "teachers"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), unique=True, nullable=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    img: Mapped[str | None] = mapped_column(String(500), nullable=True)
    blood_type: Mapped[str] = mapped_column(String(5), nullable=False)
    sex: Mapped[Sex] = mapped_column(Enum(Sex, name="sex"), nullable=False)
    birthday: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    subjects: Mapped[list[Subject]] = relationship(
        secondary=teacher_subjects,
        back_populates="teachers",
    )
    lessons: Mapped[list[Lesson]] = relationship(back_populates="teacher")
    classes: Mapped[list[Class]] = relationship(back_populates="supervisor")


class Parent(Base, TimestampMixin):
    """Parent profile row."""

    __tablename__ = "parents"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    phone: Mapped[str] = mapped_column(String(30), unique=True, nullable=False)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    students: Mapped[list[Student]] = relationship(back_populates="parent")


class Student(Base, TimestampMixin):
    """Student profile row."""

    __tablename__ = "students"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    username: Mapped[str] = mapped_column(String(20), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    surname: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    phone: Mapped[str | None] = mapped_column(String(30), unique=True, nullable=True)
    address: Mapped[str] = mapped_column(String(255), nullable=False)
    img: Mapped[str | None] = mapped_column(String(500), nullable=True)
    blood_type: Mapped[str] = mapped_column(String(5), nullable=False)
    sex: Mapped[Sex] = mapped_column(Enum(Sex, name="sex"), nullable=False)
    birthday: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)

    parent_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("parents.id"), nullable=False, index=True
    )
    class_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("classes.id"), nullable=False, index=True
    )
    grade_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("grades.id"), nullable=False, index=True
    )

    parent: Mapped[Parent] = relationship(back_populates="students")
    class_: Mapped[Class] = relationship(back_populates="students")
    grade: Mapped[Grade] = relationship(back_populates="students")
