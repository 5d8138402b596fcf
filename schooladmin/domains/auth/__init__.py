# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Credential helpers for local person rows."""

from schooladmin.domains.auth.password import PasswordHasher

__all__ = ["PasswordHasher"]
