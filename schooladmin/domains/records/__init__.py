# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School records domain package.

This package handles rows that have no identity account:
- RecordService and one subclass per entity
- ExamAccessPolicy implementations for exam writes
"""

from schooladmin.domains.records.policy import (
    Actor,
    ExamAccessPolicy,
    OpenExamAccessPolicy,
    TeacherLessonScopePolicy,
    build_exam_access_policy,
)
from schooladmin.domains.records.service import (
    EXAM_ACCESS_DENIED_MESSAGE,
    AccessDeniedError,
    AnnouncementService,
    AssignmentService,
    AttendanceService,
    ClassService,
    EventService,
    ExamService,
    LessonService,
    RecordNotFoundError,
    RecordService,
    RecordServiceError,
    ResultService,
    SubjectService,
)

__all__ = [
    "Actor",
    "ExamAccessPolicy",
    "OpenExamAccessPolicy",
    "TeacherLessonScopePolicy",
    "build_exam_access_policy",
    "RecordService",
    "RecordServiceError",
    "RecordNotFoundError",
    "AccessDeniedError",
    "EXAM_ACCESS_DENIED_MESSAGE",
    "SubjectService",
    "ClassService",
    "LessonService",
    "ExamService",
    "AssignmentService",
    "ResultService",
    "AttendanceService",
    "EventService",
    "AnnouncementService",
]
