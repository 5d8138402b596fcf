# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial school schema.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2025-03-02

This migration creates all tables based on the SQLAlchemy models in
schooladmin/infrastructure/database/models/.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

sex_enum = postgresql.ENUM("MALE", "FEMALE", name="sex", create_type=False)
day_enum = postgresql.ENUM(
    "MONDAY", "TUESDAY", "WEDNESDAY", "THURSDAY", "FRIDAY", name="day", create_type=False
)


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("now()"),
    )


def _person_columns() -> list[sa.Column]:
    """Columns shared by teachers, students and parents."""
    return [
        sa.Column("id", sa.String(64), nullable=False),
        sa.Column("username", sa.String(20), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("surname", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=True),
    ]


def upgrade() -> None:
    """Create school tables."""
    bind = op.get_bind()
    sex_enum.create(bind, checkfirst=True)
    day_enum.create(bind, checkfirst=True)

    # ==========================================================================
    # 1. grades, teachers, parents
    # ==========================================================================
    op.create_table(
        "grades",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("level", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_grades"),
        sa.UniqueConstraint("level", name="uq_grades_level"),
    )

    op.create_table(
        "teachers",
        *_person_columns(),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("img", sa.String(500), nullable=True),
        sa.Column("blood_type", sa.String(5), nullable=False),
        sa.Column("sex", sex_enum, nullable=False),
        sa.Column("birthday", sa.DateTime(timezone=True), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_teachers"),
        sa.UniqueConstraint("username", name="uq_teachers_username"),
        sa.UniqueConstraint("email", name="uq_teachers_email"),
        sa.UniqueConstraint("phone", name="uq_teachers_phone"),
    )

    op.create_table(
        "parents",
        *_person_columns(),
        sa.Column("phone", sa.String(30), nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_parents"),
        sa.UniqueConstraint("username", name="uq_parents_username"),
        sa.UniqueConstraint("email", name="uq_parents_email"),
        sa.UniqueConstraint("phone", name="uq_parents_phone"),
    )

    # ==========================================================================
    # 2. classes, subjects, students
    # ==========================================================================
    op.create_table(
        "classes",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("capacity", sa.Integer, nullable=False),
        sa.Column("supervisor_id", sa.String(64), nullable=True),
        sa.Column("grade_id", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_classes"),
        sa.UniqueConstraint("name", name="uq_classes_name"),
        sa.ForeignKeyConstraint(
            ["supervisor_id"], ["teachers.id"], name="fk_classes_supervisor_id_teachers"
        ),
        sa.ForeignKeyConstraint(["grade_id"], ["grades.id"], name="fk_classes_grade_id_grades"),
    )
    op.create_index("ix_classes_grade_id", "classes", ["grade_id"])

    op.create_table(
        "subjects",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_subjects"),
        sa.UniqueConstraint("name", name="uq_subjects_name"),
    )

    op.create_table(
        "teacher_subjects",
        sa.Column("teacher_id", sa.String(64), nullable=False),
        sa.Column("subject_id", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("teacher_id", "subject_id", name="pk_teacher_subjects"),
        sa.ForeignKeyConstraint(
            ["teacher_id"],
            ["teachers.id"],
            name="fk_teacher_subjects_teacher_id_teachers",
            ondelete="CASCADE",
        ),
        sa.ForeignKeyConstraint(
            ["subject_id"],
            ["subjects.id"],
            name="fk_teacher_subjects_subject_id_subjects",
            ondelete="CASCADE",
        ),
    )

    op.create_table(
        "students",
        *_person_columns(),
        sa.Column("phone", sa.String(30), nullable=True),
        sa.Column("img", sa.String(500), nullable=True),
        sa.Column("blood_type", sa.String(5), nullable=False),
        sa.Column("sex", sex_enum, nullable=False),
        sa.Column("birthday", sa.DateTime(timezone=True), nullable=False),
        sa.Column("parent_id", sa.String(64), nullable=False),
        sa.Column("class_id", sa.Integer, nullable=False),
        sa.Column("grade_id", sa.Integer, nullable=False),
        _created_at(),
        sa.PrimaryKeyConstraint("id", name="pk_students"),
        sa.UniqueConstraint("username", name="uq_students_username"),
        sa.UniqueConstraint("email", name="uq_students_email"),
        sa.UniqueConstraint("phone", name="uq_students_phone"),
        sa.ForeignKeyConstraint(
            ["parent_id"], ["parents.id"], name="fk_students_parent_id_parents"
        ),
        sa.ForeignKeyConstraint(
            ["class_id"], ["classes.id"], name="fk_students_class_id_classes"
        ),
        sa.ForeignKeyConstraint(
            ["grade_id"], ["grades.id"], name="fk_students_grade_id_grades"
        ),
    )
    op.create_index("ix_students_parent_id", "students", ["parent_id"])
    op.create_index("ix_students_class_id", "students", ["class_id"])
    op.create_index("ix_students_grade_id", "students", ["grade_id"])

    # ==========================================================================
    # 3. lessons and what hangs off them
    # ==========================================================================
    op.create_table(
        "lessons",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("day", day_enum, nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("subject_id", sa.Integer, nullable=False),
        sa.Column("class_id", sa.Integer, nullable=False),
        sa.Column("teacher_id", sa.String(64), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_lessons"),
        sa.ForeignKeyConstraint(
            ["subject_id"], ["subjects.id"], name="fk_lessons_subject_id_subjects"
        ),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], name="fk_lessons_class_id_classes"),
        sa.ForeignKeyConstraint(
            ["teacher_id"], ["teachers.id"], name="fk_lessons_teacher_id_teachers"
        ),
    )
    op.create_index("ix_lessons_subject_id", "lessons", ["subject_id"])
    op.create_index("ix_lessons_class_id", "lessons", ["class_id"])
    op.create_index("ix_lessons_teacher_id", "lessons", ["teacher_id"])

    op.create_table(
        "exams",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("lesson_id", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_exams"),
        sa.ForeignKeyConstraint(["lesson_id"], ["lessons.id"], name="fk_exams_lesson_id_lessons"),
    )
    op.create_index("ix_exams_lesson_id", "exams", ["lesson_id"])

    op.create_table(
        "assignments",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("start_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("lesson_id", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_assignments"),
        sa.ForeignKeyConstraint(
            ["lesson_id"], ["lessons.id"], name="fk_assignments_lesson_id_lessons"
        ),
    )
    op.create_index("ix_assignments_lesson_id", "assignments", ["lesson_id"])

    op.create_table(
        "results",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("score", sa.Integer, nullable=False),
        sa.Column("exam_id", sa.Integer, nullable=True),
        sa.Column("assignment_id", sa.Integer, nullable=True),
        sa.Column("student_id", sa.String(64), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_results"),
        sa.ForeignKeyConstraint(["exam_id"], ["exams.id"], name="fk_results_exam_id_exams"),
        sa.ForeignKeyConstraint(
            ["assignment_id"], ["assignments.id"], name="fk_results_assignment_id_assignments"
        ),
        sa.ForeignKeyConstraint(
            ["student_id"], ["students.id"], name="fk_results_student_id_students"
        ),
    )
    op.create_index("ix_results_student_id", "results", ["student_id"])

    op.create_table(
        "attendances",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("present", sa.Boolean, nullable=False),
        sa.Column("student_id", sa.String(64), nullable=False),
        sa.Column("lesson_id", sa.Integer, nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_attendances"),
        sa.ForeignKeyConstraint(
            ["student_id"], ["students.id"], name="fk_attendances_student_id_students"
        ),
        sa.ForeignKeyConstraint(
            ["lesson_id"], ["lessons.id"], name="fk_attendances_lesson_id_lessons"
        ),
    )
    op.create_index("ix_attendances_student_id", "attendances", ["student_id"])
    op.create_index("ix_attendances_lesson_id", "attendances", ["lesson_id"])

    # ==========================================================================
    # 4. events and announcements
    # ==========================================================================
    op.create_table(
        "events",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("start_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("end_time", sa.DateTime(timezone=True), nullable=False),
        sa.Column("class_id", sa.Integer, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_events"),
        sa.ForeignKeyConstraint(["class_id"], ["classes.id"], name="fk_events_class_id_classes"),
    )

    op.create_table(
        "announcements",
        sa.Column("id", sa.Integer, autoincrement=True, nullable=False),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("class_id", sa.Integer, nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_announcements"),
        sa.ForeignKeyConstraint(
            ["class_id"], ["classes.id"], name="fk_announcements_class_id_classes"
        ),
    )


def downgrade() -> None:
    """Drop school tables."""
    for table in (
        "announcements",
        "events",
        "attendances",
        "results",
        "assignments",
        "exams",
        "lessons",
        "students",
        "teacher_subjects",
        "subjects",
        "classes",
        "parents",
        "teachers",
        "grades",
    ):
        op.drop_table(table)

    bind = op.get_bind()
    day_enum.drop(bind, checkfirst=True)
    sex_enum.drop(bind, checkfirst=True)
