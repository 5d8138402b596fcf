# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for password hashing of local person rows."""

import pytest

from schooladmin.domains.auth import PasswordHasher


class TestPasswordHasher:
    """Tests for PasswordHasher class."""

    def test_hash_password_returns_bcrypt_hash(self) -> None:
        """Test that hashing returns a bcrypt hash string."""
        hasher = PasswordHasher(rounds=4)

        hashed = hasher.hash("s3cretpass")

        assert hashed.startswith("$2b$04$")
        assert len(hashed) == 60

    def test_hash_produces_different_hashes_for_same_password(self) -> None:
        """Salted hashes differ for the same password."""
        hasher = PasswordHasher(rounds=4)

        assert hasher.hash("s3cretpass") != hasher.hash("s3cretpass")

    def test_verify_correct_password(self) -> None:
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("correct_password")

        assert hasher.verify("correct_password", hashed) is True

    def test_verify_incorrect_password(self) -> None:
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("correct_password")

        assert hasher.verify("wrong_password", hashed) is False

    def test_verify_empty_inputs_return_false(self) -> None:
        hasher = PasswordHasher(rounds=4)
        hashed = hasher.hash("valid_password")

        assert hasher.verify("", hashed) is False
        assert hasher.verify("password", "") is False

    def test_verify_invalid_hash_returns_false(self) -> None:
        """Test that verification fails with invalid hash format."""
        hasher = PasswordHasher(rounds=4)

        assert hasher.verify("password", "not_a_valid_bcrypt_hash") is False

    def test_hash_empty_password_raises_error(self) -> None:
        hasher = PasswordHasher()

        with pytest.raises(ValueError, match="Password cannot be empty"):
            hasher.hash("")

    def test_unicode_password(self) -> None:
        hasher = PasswordHasher(rounds=4)
        password = "şifre_parola_密码"

        assert hasher.verify(password, hasher.hash(password)) is True
