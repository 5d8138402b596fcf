# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity provider integration (hosted login accounts)."""

from schooladmin.infrastructure.identity.client import IdentityAccount, IdentityProviderClient
from schooladmin.infrastructure.identity.exceptions import (
    IdentityProviderError,
    IdentityProviderUnavailableError,
)

__all__ = [
    "IdentityAccount",
    "IdentityProviderClient",
    "IdentityProviderError",
    "IdentityProviderUnavailableError",
]
