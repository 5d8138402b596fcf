# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Identity provider API client.

Async HTTP client for a Clerk-compatible user directory. Login accounts for
teachers, students and parents are created, updated and deleted here; the
account id returned on creation becomes the primary key of the local
profile row.

Example:
    client = IdentityProviderClient.from_settings(settings.identity)

    account = await client.create_account(
        handle="jdoe",
        emails=["jdoe@school.example"],
        password="s3cret-pass",
        first_name="John",
        last_name="Doe",
        metadata={"role": "teacher"},
    )
    await client.delete_account(account.id)
    await client.close()
"""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from schooladmin.core.config.settings import IdentityProviderSettings
from schooladmin.infrastructure.identity.exceptions import (
    IdentityProviderError,
    IdentityProviderUnavailableError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IdentityAccount:
    """Account as returned by the identity provider.

    Attributes:
        id: Opaque account id assigned by the provider.
        username: Login handle.
    """

    id: str
    username: str | None = None


class IdentityProviderClient:
    """Async client for the identity provider's user-management API.

    Attributes:
        _client: Underlying httpx client bound to the provider base URL.
    """

    def __init__(self, client: httpx.AsyncClient) -> None:
        """Initialize the client.

        Args:
            client: httpx client configured with base URL and auth headers.
        """
        self._client = client

    @classmethod
    def from_settings(
        cls,
        settings: IdentityProviderSettings,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "IdentityProviderClient":
        """Build a client from identity provider settings.

        Args:
            settings: Identity provider configuration.
            transport: Optional transport override (used by tests).

        Returns:
            Configured IdentityProviderClient.
        """
        client = httpx.AsyncClient(
            base_url=settings.api_url,
            headers=settings.auth_headers,
            timeout=settings.timeout,
            transport=transport,
        )
        return cls(client)

    async def close(self) -> None:
        """Close the underlying HTTP connection pool."""
        await self._client.aclose()

    async def create_account(
        self,
        handle: str,
        emails: list[str],
        password: str,
        first_name: str,
        last_name: str,
        metadata: dict[str, Any],
    ) -> IdentityAccount:
        """Create a login account.

        Args:
            handle: Login username.
            emails: Zero or one email address.
            password: Initial password.
            first_name: Display first name.
            last_name: Display last name.
            metadata: Public metadata stored on the account (role tag).

        Returns:
            The created account.

        Raises:
            IdentityProviderError: If the provider rejects the request.
        """
        payload = {
            "username": handle,
            "email_address": emails,
            "password": password,
            "first_name": first_name,
            "last_name": last_name,
            "public_metadata": metadata,
        }
        data = await self._request("POST", "/users", json=payload)
        account = IdentityAccount(id=data["id"], username=data.get("username"))
        logger.info("Identity account created: %s (%s)", account.id, handle)
        return account

    async def update_account(
        self,
        account_id: str,
        handle: str | None = None,
        password: str | None = None,
        first_name: str | None = None,
        last_name: str | None = None,
    ) -> None:
        """Update a login account.

        Only the supplied fields are sent; everything else on the account
        is left untouched.

        Args:
            account_id: Provider account id.
            handle: New login username.
            password: New password.
            first_name: New display first name.
            last_name: New display last name.

        Raises:
            IdentityProviderError: If the provider rejects the request.
        """
        payload: dict[str, Any] = {}
        if handle is not None:
            payload["username"] = handle
        if password is not None:
            payload["password"] = password
        if first_name is not None:
            payload["first_name"] = first_name
        if last_name is not None:
            payload["last_name"] = last_name

        await self._request("PATCH", f"/users/{account_id}", json=payload)
        logger.info("Identity account updated: %s", account_id)

    async def delete_account(self, account_id: str) -> None:
        """Delete a login account.

        Args:
            account_id: Provider account id.

        Raises:
            IdentityProviderError: If the provider rejects the request.
        """
        await self._request("DELETE", f"/users/{account_id}")
        logger.info("Identity account deleted: %s", account_id)

    async def _request(
        self,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and decode the JSON body.

        Args:
            method: HTTP method.
            path: Path relative to the API base URL.
            json: Optional JSON body.

        Returns:
            Decoded response body (empty dict when there is none).

        Raises:
            IdentityProviderError: On an error response.
            IdentityProviderUnavailableError: On transport failure.
        """
        try:
            response = await self._client.request(method, path, json=json)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            errors = _parse_errors(e.response)
            logger.warning(
                "Identity provider rejected %s %s: status=%s errors=%s",
                method,
                path,
                e.response.status_code,
                errors,
            )
            message = errors[0].get("message") if errors else None
            raise IdentityProviderError(
                message or f"Identity provider returned {e.response.status_code}",
                status_code=e.response.status_code,
                errors=errors,
            ) from e
        except httpx.HTTPError as e:
            logger.error("Identity provider unreachable: %s %s: %s", method, path, str(e))
            raise IdentityProviderUnavailableError(
                f"Identity provider unreachable: {e}"
            ) from e

        if not response.content:
            return {}
        return response.json()


def _parse_errors(response: httpx.Response) -> list[dict[str, Any]]:
    """Extract the provider's error list from an error response."""
    try:
        body = response.json()
    except ValueError:
        return []
    errors = body.get("errors") if isinstance(body, dict) else None
    if not isinstance(errors, list):
        return []
    return [e for e in errors if isinstance(e, dict)]
