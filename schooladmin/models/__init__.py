# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request/response models and action result types."""

from schooladmin.models.common import (
    GENERIC_ERROR_MESSAGE,
    OK,
    ActionResponse,
    ActionResult,
    Err,
    ErrorKind,
    Ok,
)
from schooladmin.models.people import (
    ParentCreateRequest,
    ParentSchema,
    PersonKind,
    PersonSchema,
    StudentCreateRequest,
    StudentSchema,
    TeacherCreateRequest,
    TeacherSchema,
)
from schooladmin.models.records import (
    AnnouncementSchema,
    AssignmentSchema,
    AttendanceSchema,
    ClassSchema,
    EventSchema,
    ExamSchema,
    LessonSchema,
    ResultSchema,
    SubjectSchema,
)

__all__ = [
    # Results
    "ActionResult",
    "ActionResponse",
    "Ok",
    "Err",
    "OK",
    "ErrorKind",
    "GENERIC_ERROR_MESSAGE",
    # People
    "PersonKind",
    "PersonSchema",
    "TeacherSchema",
    "StudentSchema",
    "ParentSchema",
    "TeacherCreateRequest",
    "StudentCreateRequest",
    "ParentCreateRequest",
    # Records
    "SubjectSchema",
    "ClassSchema",
    "LessonSchema",
    "ExamSchema",
    "AssignmentSchema",
    "ResultSchema",
    "AttendanceSchema",
    "EventSchema",
    "AnnouncementSchema",
]
