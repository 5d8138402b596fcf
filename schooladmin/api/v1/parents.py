# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Parent management API endpoints.

- POST / - Create account and parent row
- PUT /{parent_id} - Update account and parent row
- DELETE /{parent_id} - Delete account and parent row
"""

import logging

from fastapi import APIRouter, Depends

from schooladmin.api.dependencies import get_parent_provisioner
from schooladmin.domains.provisioning import PersonProvisioner
from schooladmin.models.common import ActionResponse
from schooladmin.models.people import ParentCreateRequest, ParentSchema

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=ActionResponse, summary="Create parent")
async def create_parent(
    data: ParentCreateRequest,
    provisioner: PersonProvisioner = Depends(get_parent_provisioner),
) -> ActionResponse:
    """Create a parent. The email is optional, the phone is not."""
    logger.info("Creating parent: %s", data.username)
    result = await provisioner.create(data)
    return ActionResponse.from_result(result)


@router.put("/{parent_id}", response_model=ActionResponse, summary="Update parent")
async def update_parent(
    parent_id: str,
    data: ParentSchema,
    provisioner: PersonProvisioner = Depends(get_parent_provisioner),
) -> ActionResponse:
    logger.info("Updating parent: %s", parent_id)
    result = await provisioner.update(data.model_copy(update={"id": parent_id}))
    return ActionResponse.from_result(result)


@router.delete("/{parent_id}", response_model=ActionResponse, summary="Delete parent")
async def delete_parent(
    parent_id: str,
    provisioner: PersonProvisioner = Depends(get_parent_provisioner),
) -> ActionResponse:
    logger.info("Deleting parent: %s", parent_id)
    result = await provisioner.delete(parent_id)
    return ActionResponse.from_result(result)
