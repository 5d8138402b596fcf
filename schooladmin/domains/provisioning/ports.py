# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Collaborator interfaces of the person provisioner.

The provisioner talks to three narrow collaborators, each replaceable by an
in-memory fake in tests:

- IdentityDirectory: login accounts in the hosted identity provider
- PersonStore: the local profile rows of one person kind
- ClassRoster: class occupancy, for the student capacity precondition
"""

from dataclasses import dataclass
from typing import Any, Protocol

from schooladmin.infrastructure.identity.client import IdentityAccount


@dataclass(frozen=True)
class ClassOccupancy:
    """Capacity and current number of students of a class."""

    class_id: int
    capacity: int
    occupant_count: int

    @property
    def is_full(self) -> bool:
        return self.occupant_count >= self.capacity


class IdentityDirectory(Protocol):
    """Login accounts in the identity provider."""

    async def create_account(
        self,
        handle: str,
        emails: list[str],
        password: str,
        first_name: str,
        last_name: str,
        metadata: dict[str, Any],
    ) -> IdentityAccount: ...

    async def update_account(
        self,
        account_id: str,
        handle: str | None = None,
        password: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> None: ...

    async def delete_account(self, account_id: str) -> None: ...


class PersonStore(Protocol):
    """Local profile rows of one person kind, keyed by account id."""

    async def create(self, fields: dict[str, Any]) -> None: ...

    async def update(self, person_id: str, fields: dict[str, Any]) -> None: ...

    async def delete(self, person_id: str) -> None: ...


class ClassRoster(Protocol):
    """Read access to class occupancy."""

    async def find_one(self, class_id: int) -> ClassOccupancy | None: ...
