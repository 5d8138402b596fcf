# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for store errors and error translation."""

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from schooladmin.domains.errors import (
    UNEXPECTED_ERROR_MESSAGE,
    ConstraintViolationError,
    RowNotFoundError,
    StoreError,
    UniqueConstraintError,
    commit_or_translate,
    translate_error,
    unique_violation_fields,
)
from schooladmin.domains.provisioning import CapacityExceededError, ClassNotFoundError
from schooladmin.infrastructure.identity import IdentityProviderError
from schooladmin.models.common import Err, ErrorKind


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO teachers ...", {}, Exception(message))


class DuplicateLike(Exception):
    """Third-party style error carrying code and meta."""

    def __init__(self, target):
        super().__init__("duplicate")
        self.code = "P2002"
        self.meta = {"target": target}


class TestTranslateError:
    """Tests for translate_error ordering."""

    def test_unique_violation_single_field(self):
        result = translate_error(UniqueConstraintError(["email"]))

        assert result == Err(ErrorKind.DUPLICATE_FIELD, "Duplicate value for field: email")

    def test_unique_violation_multiple_fields(self):
        result = translate_error(DuplicateLike(["username", "phone"]))

        assert result.message == "Duplicate value for field: username, phone"

    def test_provider_errors_are_joined(self):
        error = IdentityProviderError(
            "That username is taken",
            status_code=422,
            errors=[{"message": "That username is taken"}, {"message": "Password too weak"}],
        )

        result = translate_error(error)

        assert result == Err(
            ErrorKind.EXTERNAL_PROVIDER_REJECTED,
            "That username is taken, Password too weak",
        )

    def test_empty_error_list_falls_back_to_message(self):
        error = IdentityProviderError("Identity provider returned 500", status_code=500)

        result = translate_error(error)

        assert result == Err(ErrorKind.UNKNOWN, "Identity provider returned 500")

    def test_domain_errors_keep_their_kind(self):
        assert translate_error(CapacityExceededError()).kind == ErrorKind.CAPACITY_EXCEEDED
        assert translate_error(ClassNotFoundError(4)) == Err(ErrorKind.NOT_FOUND, "Class not found")
        assert translate_error(RowNotFoundError("Teacher", "t1")) == Err(
            ErrorKind.NOT_FOUND, "Teacher t1 not found"
        )

    def test_plain_exception_uses_message(self):
        assert translate_error(RuntimeError("boom")) == Err(ErrorKind.UNKNOWN, "boom")

    def test_exception_without_message(self):
        assert translate_error(RuntimeError()) == Err(ErrorKind.UNKNOWN, UNEXPECTED_ERROR_MESSAGE)

    def test_integrity_error_hides_statement_and_parameters(self):
        error = IntegrityError(
            "INSERT INTO teachers (id, username, password_hash, email) VALUES ($1, $2, $3, $4)",
            ("acc_1", "jdoe", "$2b$12$abcdefghijkl", "jane@school.org"),
            Exception('null value in column "name" of relation "teachers"'),
        )

        result = translate_error(error)

        assert result == Err(
            ErrorKind.UNKNOWN, 'null value in column "name" of relation "teachers"'
        )

    def test_driver_class_prefix_is_dropped(self):
        error = _integrity_error(
            "<class 'asyncpg.exceptions.ForeignKeyViolationError'>: insert or update on "
            'table "students" violates foreign key constraint "students_grade_id_fkey"'
        )

        assert translate_error(error).message == (
            'insert or update on table "students" violates foreign key constraint '
            '"students_grade_id_fkey"'
        )

    def test_other_database_errors_are_not_echoed(self):
        error = OperationalError(
            "UPDATE parents SET phone=$1", ("555-0199",), Exception("connection reset")
        )

        assert translate_error(error) == Err(ErrorKind.UNKNOWN, UNEXPECTED_ERROR_MESSAGE)


class TestUniqueViolationFields:
    def test_postgres_detail(self):
        error = _integrity_error(
            'duplicate key value violates unique constraint "uq_teachers_email"\n'
            "DETAIL:  Key (email)=(jane@school.org) already exists."
        )

        assert unique_violation_fields(error) == ["email"]

    def test_sqlite_message(self):
        error = _integrity_error("UNIQUE constraint failed: teachers.email, teachers.phone")

        assert unique_violation_fields(error) == ["email", "phone"]

    def test_not_a_unique_violation(self):
        error = _integrity_error("NOT NULL constraint failed: teachers.name")

        assert unique_violation_fields(error) is None

    def test_foreign_key_detail_is_not_a_duplicate(self):
        error = _integrity_error(
            'insert or update on table "students" violates foreign key constraint '
            '"students_parent_id_fkey"\n'
            'DETAIL:  Key (parent_id)=(acc_missing) is not present in table "parents".'
        )

        assert unique_violation_fields(error) is None


class TestCommitOrTranslate:
    @pytest.mark.asyncio
    async def test_commit_success(self, mock_db):
        await commit_or_translate(mock_db)

        mock_db.commit.assert_awaited_once()
        mock_db.rollback.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unique_violation_is_translated(self, mock_db):
        mock_db.commit.side_effect = _integrity_error(
            "DETAIL:  Key (username)=(jdoe) already exists."
        )

        with pytest.raises(UniqueConstraintError) as exc_info:
            await commit_or_translate(mock_db)

        assert exc_info.value.fields == ["username"]
        assert isinstance(exc_info.value, StoreError)
        mock_db.rollback.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_other_integrity_error_is_translated(self, mock_db):
        mock_db.commit.side_effect = _integrity_error(
            "insert or update on table \"students\" violates foreign key constraint"
            " \"students_parent_id_fkey\"\n"
            "DETAIL:  Key (parent_id)=(acc_missing) is not present in table \"parents\"."
        )

        with pytest.raises(ConstraintViolationError) as exc_info:
            await commit_or_translate(mock_db)

        assert "students_parent_id_fkey" in exc_info.value.message
        assert "acc_missing" not in exc_info.value.message
        assert isinstance(exc_info.value.__cause__, IntegrityError)

        mock_db.rollback.assert_awaited_once()
