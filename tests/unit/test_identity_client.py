# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for IdentityProviderClient using httpx.MockTransport."""

import json

import httpx
import pytest
from pydantic import SecretStr

from schooladmin.core.config.settings import IdentityProviderSettings
from schooladmin.domains.errors import translate_error
from schooladmin.infrastructure.identity import (
    IdentityProviderClient,
    IdentityProviderError,
    IdentityProviderUnavailableError,
)
from schooladmin.models.common import ErrorKind


@pytest.fixture
def identity_settings():
    return IdentityProviderSettings(
        api_url="https://identity.test/v1",
        secret_key=SecretStr("sk_test_123"),
    )


def _client(settings, handler) -> tuple[IdentityProviderClient, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def record(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return handler(request)

    client = IdentityProviderClient.from_settings(settings, transport=httpx.MockTransport(record))
    return client, requests


class TestCreateAccount:
    @pytest.mark.asyncio
    async def test_create_account_posts_user(self, identity_settings):
        client, requests = _client(
            identity_settings,
            lambda r: httpx.Response(200, json={"id": "user_abc", "username": "jdoe"}),
        )

        account = await client.create_account(
            handle="jdoe",
            emails=["jane@school.org"],
            password="s3cretpass",
            first_name="Jane",
            last_name="Doe",
            metadata={"role": "teacher"},
        )
        await client.close()

        assert account.id == "user_abc"
        [request] = requests
        assert request.method == "POST"
        assert request.url == "https://identity.test/v1/users"
        assert request.headers["Authorization"] == "Bearer sk_test_123"
        assert json.loads(request.content) == {
            "username": "jdoe",
            "email_address": ["jane@school.org"],
            "password": "s3cretpass",
            "first_name": "Jane",
            "last_name": "Doe",
            "public_metadata": {"role": "teacher"},
        }

    @pytest.mark.asyncio
    async def test_validation_errors_translate_to_joined_messages(self, identity_settings):
        client, _ = _client(
            identity_settings,
            lambda r: httpx.Response(
                422, json={"errors": [{"message": "a"}, {"message": "b"}]}
            ),
        )

        with pytest.raises(IdentityProviderError) as exc_info:
            await client.create_account(
                handle="jdoe",
                emails=[],
                password="s3cretpass",
                first_name="Jane",
                last_name="Doe",
                metadata={"role": "teacher"},
            )

        error = exc_info.value
        assert error.status_code == 422
        assert str(error) == "[422] a"
        result = translate_error(error)
        assert result.kind == ErrorKind.EXTERNAL_PROVIDER_REJECTED
        assert result.message == "a, b"

    @pytest.mark.asyncio
    async def test_error_without_body(self, identity_settings):
        client, _ = _client(identity_settings, lambda r: httpx.Response(500))

        with pytest.raises(IdentityProviderError) as exc_info:
            await client.delete_account("user_abc")

        assert exc_info.value.message == "Identity provider returned 500"
        assert exc_info.value.errors == []

    @pytest.mark.asyncio
    async def test_transport_failure(self, identity_settings):
        def fail(request):
            raise httpx.ConnectError("connection refused", request=request)

        client, _ = _client(identity_settings, fail)

        with pytest.raises(IdentityProviderUnavailableError):
            await client.delete_account("user_abc")


class TestUpdateAndDelete:
    @pytest.mark.asyncio
    async def test_update_sends_only_supplied_fields(self, identity_settings):
        client, requests = _client(
            identity_settings, lambda r: httpx.Response(200, json={"id": "user_abc"})
        )

        await client.update_account("user_abc", handle="jdoe2", first_name="Janet")

        [request] = requests
        assert request.method == "PATCH"
        assert request.url.path == "/v1/users/user_abc"
        assert json.loads(request.content) == {"username": "jdoe2", "first_name": "Janet"}

    @pytest.mark.asyncio
    async def test_delete_account(self, identity_settings):
        client, requests = _client(identity_settings, lambda r: httpx.Response(204))

        await client.delete_account("user_abc")

        [request] = requests
        assert request.method == "DELETE"
        assert request.url.path == "/v1/users/user_abc"
