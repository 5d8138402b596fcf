# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Student management API endpoints.

This module provides endpoints for identity-backed students:
- POST / - Create account and student row (class capacity checked first)
- PUT /{student_id} - Update account and student row
- DELETE /{student_id} - Delete account and student row
"""

import logging

from fastapi import APIRouter, Depends

from schooladmin.api.dependencies import get_student_provisioner
from schooladmin.domains.provisioning import PersonProvisioner
from schooladmin.models.common import ActionResponse
from schooladmin.models.people import StudentCreateRequest, StudentSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ActionResponse,
    summary="Create student",
    description="Create the login account, then the student row. Fails if the class is full.",
)
async def create_student(
    data: StudentCreateRequest,
    provisioner: PersonProvisioner = Depends(get_student_provisioner),
) -> ActionResponse:
    """Create a student.

    Args:
        data: Student form with initial password, class, grade and parent.
        provisioner: Student provisioner.

    Returns:
        Action outcome.
    """
    logger.info("Creating student: %s in class %s", data.username, data.class_id)
    result = await provisioner.create(data)
    return ActionResponse.from_result(result)


@router.put(
    "/{student_id}",
    response_model=ActionResponse,
    summary="Update student",
)
async def update_student(
    student_id: str,
    data: StudentSchema,
    provisioner: PersonProvisioner = Depends(get_student_provisioner),
) -> ActionResponse:
    """Update a student. An empty password keeps the current one."""
    logger.info("Updating student: %s", student_id)
    result = await provisioner.update(data.model_copy(update={"id": student_id}))
    return ActionResponse.from_result(result)


@router.delete(
    "/{student_id}",
    response_model=ActionResponse,
    summary="Delete student",
)
async def delete_student(
    student_id: str,
    provisioner: PersonProvisioner = Depends(get_student_provisioner),
) -> ActionResponse:
    logger.info("Deleting student: %s", student_id)
    result = await provisioner.delete(student_id)
    return ActionResponse.from_result(result)
