# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exam access policy.

Decides whether the acting user may create, update or delete an exam
attached to a given lesson. The dashboard asserts the actor; nothing here
verifies who the actor is.
"""

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from schooladmin.infrastructure.database.models import Lesson

TEACHER_ROLE = "teacher"


@dataclass(frozen=True)
class Actor:
    """User performing an admin action.

    Attributes:
        id: Identity account id of the user.
        role: Role tag (admin, teacher, ...), lowercase.
    """

    id: str
    role: str


class ExamAccessPolicy(Protocol):
    """Authorisation hook for exam writes."""

    async def can_manage_lesson(self, actor: Actor | None, lesson_id: int) -> bool:
        """Return True if the actor may manage exams of this lesson."""
        ...


class OpenExamAccessPolicy:
    """Allows every actor."""

    async def can_manage_lesson(self, actor: Actor | None, lesson_id: int) -> bool:
        return True


class TeacherLessonScopePolicy:
    """Teachers may only manage exams of lessons they teach.

    Actors with any other role (or no actor at all) are allowed.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def can_manage_lesson(self, actor: Actor | None, lesson_id: int) -> bool:
        if actor is None or actor.role != TEACHER_ROLE:
            return True

        result = await self.db.execute(
            select(Lesson.id).where(Lesson.id == lesson_id, Lesson.teacher_id == actor.id)
        )
        return result.scalar_one_or_none() is not None


def build_exam_access_policy(name: str, db: AsyncSession) -> ExamAccessPolicy:
    """Build the policy configured by SCHOOL_EXAM_ACCESS_POLICY.

    Args:
        name: "open" or "teacher_scoped".
        db: Session used by policies that query lessons.

    Raises:
        ValueError: If the policy name is unknown.
    """
    if name == "open":
        return OpenExamAccessPolicy()
    if name == "teacher_scoped":
        return TeacherLessonScopePolicy(db)
    raise ValueError(f"Unknown exam access policy: {name}")
