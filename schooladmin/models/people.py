# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request schemas for identity-backed people: teachers, students, parents.

Each schema carries the fields of both stores. ``account_emails`` gives the
identity-provider view, ``profile_fields`` the local-row view.
"""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import EmailStr, Field, field_validator

from schooladmin.infrastructure.database.models.people import Sex
from schooladmin.models.common import SchoolModel

MIN_PASSWORD_LENGTH = 8


class PersonKind(str, Enum):
    """Kind of person; doubles as the role tag stored on the account."""

    TEACHER = "teacher"
    STUDENT = "student"
    PARENT = "parent"


class PersonSchema(SchoolModel):
    """Fields shared by every identity-backed person.

    An empty ``password`` means "leave the password unchanged" on update.
    """

    id: str | None = None
    username: str = Field(min_length=3, max_length=20)
    password: str = ""
    name: str = Field(min_length=1)
    surname: str = Field(min_length=1)
    email: EmailStr | None = None
    phone: str | None = None
    address: str = Field(min_length=1)

    @field_validator("email", "phone", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("password")
    @classmethod
    def _password_length(cls, value: str) -> str:
        if value and len(value) < MIN_PASSWORD_LENGTH:
            raise ValueError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )
        return value

    def account_emails(self) -> list[str]:
        """Email addresses for the identity account (zero or one)."""
        return [str(self.email)] if self.email else []

    def profile_fields(self) -> dict[str, Any]:
        """Fields written to the local row, password excluded."""
        return {
            "username": self.username,
            "name": self.name,
            "surname": self.surname,
            "email": str(self.email) if self.email else None,
            "phone": self.phone or None,
            "address": self.address,
        }


class TeacherSchema(PersonSchema):
    """Teacher form."""

    img: str | None = None
    blood_type: str = Field(min_length=1, max_length=5)
    sex: Sex
    birthday: datetime
    subjects: list[int] = Field(default_factory=list)

    def profile_fields(self) -> dict[str, Any]:
        return {
            **super().profile_fields(),
            "img": self.img or None,
            "blood_type": self.blood_type,
            "sex": self.sex,
            "birthday": self.birthday,
            "subject_ids": list(self.subjects),
        }


class StudentSchema(PersonSchema):
    """Student form."""

    img: str | None = None
    blood_type: str = Field(min_length=1, max_length=5)
    sex: Sex
    birthday: datetime
    grade_id: int
    class_id: int
    parent_id: str = Field(min_length=1)

    def profile_fields(self) -> dict[str, Any]:
        return {
            **super().profile_fields(),
            "img": self.img or None,
            "blood_type": self.blood_type,
            "sex": self.sex,
            "birthday": self.birthday,
            "grade_id": self.grade_id,
            "class_id": self.class_id,
            "parent_id": self.parent_id,
        }


class ParentSchema(PersonSchema):
    """Parent form. Phone is mandatory for parents."""

    phone: str = Field(min_length=1)


# Creation requires an initial password.


class TeacherCreateRequest(TeacherSchema):
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class StudentCreateRequest(StudentSchema):
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class ParentCreateRequest(ParentSchema):
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
