# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Teacher management API endpoints.

This module provides endpoints for identity-backed teachers:
- POST / - Create account and teacher row
- PUT /{teacher_id} - Update account and teacher row
- DELETE /{teacher_id} - Delete account and teacher row

Every endpoint answers 200 with an ActionResponse; failures are reported
in the body.
"""

import logging

from fastapi import APIRouter, Depends

from schooladmin.api.dependencies import get_teacher_provisioner
from schooladmin.domains.provisioning import PersonProvisioner
from schooladmin.models.common import ActionResponse
from schooladmin.models.people import TeacherCreateRequest, TeacherSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_model=ActionResponse,
    summary="Create teacher",
    description="Create the login account, then the teacher row with its subjects.",
)
async def create_teacher(
    data: TeacherCreateRequest,
    provisioner: PersonProvisioner = Depends(get_teacher_provisioner),
) -> ActionResponse:
    """Create a teacher.

    Args:
        data: Teacher form with initial password and subject ids.
        provisioner: Teacher provisioner.

    Returns:
        Action outcome.
    """
    logger.info("Creating teacher: %s", data.username)
    result = await provisioner.create(data)
    return ActionResponse.from_result(result)


@router.put(
    "/{teacher_id}",
    response_model=ActionResponse,
    summary="Update teacher",
    description="Update the login account, then the teacher row. The subject list replaces the current one.",
)
async def update_teacher(
    teacher_id: str,
    data: TeacherSchema,
    provisioner: PersonProvisioner = Depends(get_teacher_provisioner),
) -> ActionResponse:
    """Update a teacher.

    Args:
        teacher_id: Teacher account id.
        data: Teacher form. An empty password keeps the current one.
        provisioner: Teacher provisioner.

    Returns:
        Action outcome.
    """
    logger.info("Updating teacher: %s", teacher_id)
    result = await provisioner.update(data.model_copy(update={"id": teacher_id}))
    return ActionResponse.from_result(result)


@router.delete(
    "/{teacher_id}",
    response_model=ActionResponse,
    summary="Delete teacher",
)
async def delete_teacher(
    teacher_id: str,
    provisioner: PersonProvisioner = Depends(get_teacher_provisioner),
) -> ActionResponse:
    """Delete a teacher's account and row."""
    logger.info("Deleting teacher: %s", teacher_id)
    result = await provisioner.delete(teacher_id)
    return ActionResponse.from_result(result)
