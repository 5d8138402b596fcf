# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Person provisioning service.

Teachers, students and parents exist in two systems at once: a login
account in the identity provider and a profile row in the local database,
joined by the account id. PersonProvisioner sequences the two writes and
keeps them consistent under partial failure.

Create flow:
1. (students) class capacity precondition, before any external call
2. identity account created; its id becomes the row's primary key
3. local row inserted
If step 3 fails the account from step 2 is deleted again (compensation).
A failing compensation is logged; the original failure is what the caller
sees.

Update flow: account, then row. No compensation: a failure after the
account update leaves the account changed and is reported as-is.

Delete flow: account, then row. Failures are reported generically, and a
failure between the two steps leaves a row without an account.

Example:
    >>> provisioner = PersonProvisioner(PersonKind.TEACHER, identity, store)
    >>> result = await provisioner.create(teacher_form)
    >>> result.success
    True
"""

from typing import Any

from schooladmin.domains.errors import translate_error
from schooladmin.domains.provisioning.ports import (
    ClassRoster,
    IdentityDirectory,
    PersonStore,
)
from schooladmin.models.common import OK, ActionResult, Err, ErrorKind
from schooladmin.models.people import PersonKind, PersonSchema, StudentSchema
from schooladmin.utils.logging import get_logger

logger = get_logger(__name__)

CLASS_FULL_MESSAGE = "Class is already full"


class PersonProvisioningError(Exception):
    """Base exception for person provisioning errors."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class CapacityExceededError(PersonProvisioningError):
    """Raised when a student would exceed the capacity of their class."""

    kind = ErrorKind.CAPACITY_EXCEEDED

    def __init__(self, message: str = CLASS_FULL_MESSAGE) -> None:
        super().__init__(message)


class ClassNotFoundError(PersonProvisioningError):
    """Raised when a student references a class that does not exist."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, class_id: int) -> None:
        super().__init__("Class not found")
        self.class_id = class_id


class PersonProvisioner:
    """Create, update and delete identity-backed people of one kind.

    Attributes:
        kind: Person kind handled; also the role tag on the account.
        _identity: Identity provider accounts.
        _store: Local profile rows.
        _roster: Class occupancy lookup (students only).
    """

    def __init__(
        self,
        kind: PersonKind,
        identity: IdentityDirectory,
        store: PersonStore,
        roster: ClassRoster | None = None,
    ) -> None:
        """Initialize the provisioner.

        Args:
            kind: Person kind handled by this provisioner.
            identity: Identity provider accounts.
            store: Local profile rows of this kind.
            roster: Class occupancy lookup, required for students.

        Raises:
            ValueError: If a student provisioner is built without a roster.
        """
        if kind is PersonKind.STUDENT and roster is None:
            raise ValueError("Student provisioning requires a class roster")

        self.kind = kind
        self._identity = identity
        self._store = store
        self._roster = roster

    async def create(self, data: PersonSchema) -> ActionResult:
        """Provision the account, then insert the profile row.

        Args:
            data: Validated person form, including the initial password.

        Returns:
            OK, or the translated failure.
        """
        log = logger.bind(kind=self.kind.value, username=data.username)
        account_id: str | None = None

        try:
            await self._check_preconditions(data)

            account = await self._identity.create_account(
                handle=data.username,
                emails=data.account_emails(),
                password=data.password,
                first_name=data.name,
                last_name=data.surname,
                metadata={"role": self.kind.value},
            )
            account_id = account.id

            await self._store.create(self._row_fields(data, person_id=account_id))
        except Exception as e:
            log.error("person_create_failed", account_id=account_id, error=str(e))
            if account_id is not None:
                await self._rollback_account(account_id)
            return translate_error(e)

        log.info("person_created", person_id=account_id)
        return OK

    async def update(self, data: PersonSchema) -> ActionResult:
        """Update the account, then the profile row.

        An empty password leaves the password unchanged in both systems.

        Args:
            data: Validated person form with the person id.

        Returns:
            OK, or the translated failure.
        """
        if not data.id:
            return Err(ErrorKind.MISSING_IDENTIFIER, f"Missing {self.kind.value} ID")

        log = logger.bind(kind=self.kind.value, person_id=data.id)
        account_updated = False

        try:
            await self._identity.update_account(
                data.id,
                handle=data.username,
                password=data.password or None,
                first_name=data.name,
                last_name=data.surname,
            )
            account_updated = True

            await self._store.update(data.id, self._row_fields(data))
        except Exception as e:
            if account_updated:
                # Account keeps its new values; nothing is rolled back
                log.warning("person_update_partial", error=str(e))
            else:
                log.error("person_update_failed", error=str(e))
            return translate_error(e)

        log.info("person_updated")
        return OK

    async def delete(self, person_id: str) -> ActionResult:
        """Delete the account, then the profile row.

        Args:
            person_id: Account id (and row primary key).

        Returns:
            OK, or a generic failure.
        """
        if not person_id:
            return Err(ErrorKind.MISSING_IDENTIFIER, f"Missing {self.kind.value} ID")

        log = logger.bind(kind=self.kind.value, person_id=person_id)

        try:
            await self._identity.delete_account(person_id)
            await self._store.delete(person_id)
        except Exception as e:
            log.error("person_delete_failed", error=str(e))
            return Err.generic()

        log.info("person_deleted")
        return OK

    async def _check_preconditions(self, data: PersonSchema) -> None:
        """Reject a student whose class is unknown or already full.

        Raises:
            ClassNotFoundError: If the class does not exist.
            CapacityExceededError: If the class has no free seat.
        """
        if self.kind is not PersonKind.STUDENT or self._roster is None:
            return
        if not isinstance(data, StudentSchema):
            raise TypeError(f"Expected StudentSchema, got {type(data).__name__}")

        occupancy = await self._roster.find_one(data.class_id)
        if occupancy is None:
            raise ClassNotFoundError(data.class_id)
        if occupancy.is_full:
            raise CapacityExceededError()

    async def _rollback_account(self, account_id: str) -> None:
        """Delete an account whose profile row could not be written."""
        try:
            await self._identity.delete_account(account_id)
        except Exception as e:
            logger.error(
                "person_rollback_failed",
                kind=self.kind.value,
                account_id=account_id,
                error=str(e),
            )
            return
        logger.info("person_rolled_back", kind=self.kind.value, account_id=account_id)

    @staticmethod
    def _row_fields(data: PersonSchema, person_id: str | None = None) -> dict[str, Any]:
        """Local row fields; the password only when one was supplied."""
        fields = data.profile_fields()
        if person_id is not None:
            fields["id"] = person_id
        if data.password:
            fields["password"] = data.password
        return fields
