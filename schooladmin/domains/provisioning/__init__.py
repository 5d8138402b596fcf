# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Person provisioning domain package.

This package keeps identity-provider accounts and local profile rows of
teachers, students and parents consistent:
- PersonProvisioner: create/update/delete with compensation
- Ports: IdentityDirectory, PersonStore, ClassRoster
- SQL stores backing the ports

Example:
    >>> from schooladmin.domains.provisioning import PersonProvisioner
    >>> provisioner = PersonProvisioner(PersonKind.PARENT, identity, store)
    >>> result = await provisioner.create(parent_form)
"""

from schooladmin.domains.provisioning.ports import (
    ClassOccupancy,
    ClassRoster,
    IdentityDirectory,
    PersonStore,
)
from schooladmin.domains.provisioning.service import (
    CLASS_FULL_MESSAGE,
    CapacityExceededError,
    ClassNotFoundError,
    PersonProvisioner,
    PersonProvisioningError,
)
from schooladmin.domains.provisioning.stores import (
    SqlClassRoster,
    SqlParentStore,
    SqlPersonStore,
    SqlStudentStore,
    SqlTeacherStore,
)

__all__ = [
    "PersonProvisioner",
    "PersonProvisioningError",
    "CapacityExceededError",
    "ClassNotFoundError",
    "CLASS_FULL_MESSAGE",
    "ClassOccupancy",
    "ClassRoster",
    "IdentityDirectory",
    "PersonStore",
    "SqlPersonStore",
    "SqlTeacherStore",
    "SqlStudentStore",
    "SqlParentStore",
    "SqlClassRoster",
]
