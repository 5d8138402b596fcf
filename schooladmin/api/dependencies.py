# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection.

This module provides dependencies for route handlers:
- Database session management
- Identity provider client access
- Provisioners and record services
- Actor resolution for access policies
"""

import logging
from typing import AsyncGenerator

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from schooladmin.core.config import get_settings
from schooladmin.domains.auth import PasswordHasher
from schooladmin.domains.provisioning import (
    PersonProvisioner,
    SqlClassRoster,
    SqlParentStore,
    SqlStudentStore,
    SqlTeacherStore,
)
from schooladmin.domains.records import (
    Actor,
    ExamAccessPolicy,
    build_exam_access_policy,
)
from schooladmin.infrastructure.database import get_session
from schooladmin.infrastructure.identity import IdentityProviderClient
from schooladmin.models.people import PersonKind

logger = logging.getLogger(__name__)

ACTOR_ID_HEADER = "X-Actor-Id"
ACTOR_ROLE_HEADER = "X-Actor-Role"


# =========================================================================
# Infrastructure Dependencies
# =========================================================================


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the request.

    Yields:
        AsyncSession bound to the application engine.
    """
    async with get_session() as session:
        yield session


def get_identity_client(request: Request) -> IdentityProviderClient:
    """Get the shared identity provider client.

    Raises:
        HTTPException: If the client was not initialized at startup.
    """
    client = getattr(request.app.state, "identity_client", None)
    if client is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Identity provider client not initialized",
        )
    return client


def get_password_hasher() -> PasswordHasher:
    """Get password hasher instance.

    Returns:
        PasswordHasher using the configured work factor.
    """
    settings = get_settings()
    return PasswordHasher(rounds=settings.school.password_hash_rounds)


def get_actor(request: Request) -> Actor | None:
    """Read the acting user asserted by the dashboard.

    The headers are trusted as sent; verifying them is the job of the
    upstream dashboard.

    Returns:
        Actor, or None if no actor id header was sent.
    """
    actor_id = request.headers.get(ACTOR_ID_HEADER)
    if not actor_id:
        return None
    role = request.headers.get(ACTOR_ROLE_HEADER, "")
    return Actor(id=actor_id, role=role.strip().lower())


# =========================================================================
# Service Dependencies
# =========================================================================


def get_teacher_provisioner(
    db: AsyncSession = Depends(get_db),
    identity: IdentityProviderClient = Depends(get_identity_client),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> PersonProvisioner:
    """Get the provisioner for teachers."""
    return PersonProvisioner(PersonKind.TEACHER, identity, SqlTeacherStore(db, hasher))


def get_student_provisioner(
    db: AsyncSession = Depends(get_db),
    identity: IdentityProviderClient = Depends(get_identity_client),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> PersonProvisioner:
    """Get the provisioner for students."""
    return PersonProvisioner(
        PersonKind.STUDENT,
        identity,
        SqlStudentStore(db, hasher),
        roster=SqlClassRoster(db),
    )


def get_parent_provisioner(
    db: AsyncSession = Depends(get_db),
    identity: IdentityProviderClient = Depends(get_identity_client),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> PersonProvisioner:
    """Get the provisioner for parents."""
    return PersonProvisioner(PersonKind.PARENT, identity, SqlParentStore(db, hasher))


def get_exam_access_policy(db: AsyncSession = Depends(get_db)) -> ExamAccessPolicy:
    """Get the configured exam access policy.

    Returns:
        Policy selected by SCHOOL_EXAM_ACCESS_POLICY.
    """
    settings = get_settings()
    return build_exam_access_policy(settings.school.exam_access_policy, db)
