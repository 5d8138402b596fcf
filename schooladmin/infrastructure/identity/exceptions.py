# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Custom exceptions for the identity provider client.

- IdentityProviderError: the provider answered with an error response
- IdentityProviderUnavailableError: the provider could not be reached
"""

from typing import Any


class IdentityProviderError(Exception):
    """Error response from the identity provider.

    The provider reports problems as a list of error objects, each with at
    least a ``message``. The list is kept as-is on ``errors`` so callers can
    present every message.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the provider, if any.
        errors: Provider error objects (``[{"message": ...}, ...]``).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        errors: list[dict[str, Any]] | None = None,
    ) -> None:
        """Initialize identity provider error.

        Args:
            message: Human-readable error description.
            status_code: HTTP status code from the provider response.
            errors: Provider error objects.
        """
        self.message = message
        self.status_code = status_code
        self.errors = errors or []
        super().__init__(message)

    def __str__(self) -> str:
        """Return string representation with status code."""
        if self.status_code:
            return f"[{self.status_code}] {self.message}"
        return self.message


class IdentityProviderUnavailableError(IdentityProviderError):
    """The identity provider could not be reached (network, timeout)."""
