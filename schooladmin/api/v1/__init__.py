# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.

Modules:
    teachers: Identity-backed teacher endpoints.
    students: Identity-backed student endpoints.
    parents: Identity-backed parent endpoints.
    records: Subject, class, lesson, exam, assignment, result,
        attendance, event and announcement endpoints.
"""

from fastapi import APIRouter

from schooladmin.api.v1 import parents, records, students, teachers

# Create the main v1 router
router = APIRouter(prefix="/api/v1")

# People
router.include_router(teachers.router, prefix="/teachers", tags=["Teachers"])
router.include_router(students.router, prefix="/students", tags=["Students"])
router.include_router(parents.router, prefix="/parents", tags=["Parents"])

# Records
router.include_router(records.subjects_router, prefix="/subjects", tags=["Subjects"])
router.include_router(records.classes_router, prefix="/classes", tags=["Classes"])
router.include_router(records.lessons_router, prefix="/lessons", tags=["Lessons"])
router.include_router(records.exams_router, prefix="/exams", tags=["Exams"])
router.include_router(records.assignments_router, prefix="/assignments", tags=["Assignments"])
router.include_router(records.results_router, prefix="/results", tags=["Results"])
router.include_router(records.attendance_router, prefix="/attendance", tags=["Attendance"])
router.include_router(records.events_router, prefix="/events", tags=["Events"])
router.include_router(
    records.announcements_router, prefix="/announcements", tags=["Announcements"]
)

__all__ = ["router"]
