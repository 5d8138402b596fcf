# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""School record API endpoints.

Subjects, classes, lessons, exams, assignments, results, attendance,
events and announcements share the same three endpoints:
- POST / - Create a record
- PUT /{record_id} - Update a record
- DELETE /{record_id} - Delete a record

Each answers 200 with an ActionResponse.
"""

import logging
from typing import Callable

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from schooladmin.api.dependencies import get_actor, get_db, get_exam_access_policy
from schooladmin.domains.records import (
    Actor,
    AnnouncementService,
    AssignmentService,
    AttendanceService,
    ClassService,
    EventService,
    ExamAccessPolicy,
    ExamService,
    LessonService,
    RecordService,
    ResultService,
    SubjectService,
)
from schooladmin.models.common import ActionResponse, SchoolModel
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

logger = logging.getLogger(__name__)


def _service_dependency(service_cls: type[RecordService]) -> Callable[..., RecordService]:
    """Dependency building a record service on the request session."""

    def get_service(db: AsyncSession = Depends(get_db)) -> RecordService:
        return service_cls(db)

    return get_service


def get_exam_service(
    db: AsyncSession = Depends(get_db),
    policy: ExamAccessPolicy = Depends(get_exam_access_policy),
) -> ExamService:
    """Get exam service guarded by the configured access policy."""
    return ExamService(db, policy)


def build_record_router(
    entity: str,
    schema: type[SchoolModel],
    get_service: Callable[..., RecordService],
) -> APIRouter:
    """Build the create/update/delete router for one record type.

    Args:
        entity: Singular entity name, used in summaries and operation ids.
        schema: Request body model.
        get_service: Dependency returning the record service.

    Returns:
        Router to mount under the entity prefix.
    """
    router = APIRouter()

    @router.post(
        "",
        response_model=ActionResponse,
        summary=f"Create {entity}",
        operation_id=f"create_{entity}",
    )
    async def create_record(
        data: schema,  # type: ignore[valid-type]
        service: RecordService = Depends(get_service),
        actor: Actor | None = Depends(get_actor),
    ) -> ActionResponse:
        logger.info("Creating %s", entity)
        result = await service.create(data, actor=actor)
        return ActionResponse.from_result(result)

    @router.put(
        "/{record_id}",
        response_model=ActionResponse,
        summary=f"Update {entity}",
        operation_id=f"update_{entity}",
    )
    async def update_record(
        record_id: int,
        data: schema,  # type: ignore[valid-type]
        service: RecordService = Depends(get_service),
        actor: Actor | None = Depends(get_actor),
    ) -> ActionResponse:
        logger.info("Updating %s: %s", entity, record_id)
        result = await service.update(data.model_copy(update={"id": record_id}), actor=actor)
        return ActionResponse.from_result(result)

    @router.delete(
        "/{record_id}",
        response_model=ActionResponse,
        summary=f"Delete {entity}",
        operation_id=f"delete_{entity}",
    )
    async def delete_record(
        record_id: int,
        service: RecordService = Depends(get_service),
        actor: Actor | None = Depends(get_actor),
    ) -> ActionResponse:
        logger.info("Deleting %s: %s", entity, record_id)
        result = await service.delete(record_id, actor=actor)
        return ActionResponse.from_result(result)

    return router


subjects_router = build_record_router(
    "subject", SubjectSchema, _service_dependency(SubjectService)
)
classes_router = build_record_router("class", ClassSchema, _service_dependency(ClassService))
lessons_router = build_record_router("lesson", LessonSchema, _service_dependency(LessonService))
exams_router = build_record_router("exam", ExamSchema, get_exam_service)
assignments_router = build_record_router(
    "assignment", AssignmentSchema, _service_dependency(AssignmentService)
)
results_router = build_record_router("result", ResultSchema, _service_dependency(ResultService))
attendance_router = build_record_router(
    "attendance", AttendanceSchema, _service_dependency(AttendanceService)
)
events_router = build_record_router("event", EventSchema, _service_dependency(EventService))
announcements_router = build_record_router(
    "announcement", AnnouncementSchema, _service_dependency(AnnouncementService)
)
