"""Tests for tenantry/infrastructure/security/api_key_authenticator.py.

Keys are created through ApiKeyService so the stored hash is exactly what
authentication looks up.
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest

from tenantry.application.commands import CreateApiKey, UpdateApiKey
from tenantry.core.result import Success
from tenantry.domain.enums import ApiKeyStatus, ResourceType
from tenantry.domain.roles import ADMIN_ROLE, USER_ROLE
from tenantry.infrastructure.security.api_key_authenticator import API_KEY_HEADER
from tests.conftest import FIXED_NOW, make_user


@pytest.fixture
def authenticator(services):
    return services.authenticator


async def issue_key(services, store, actor, roles=None, **kwargs):
    await store.upsert(
        ResourceType.USER, make_user(actor.id, email=actor.email, roles=roles)
    )
    result = await services.api_keys.authorize_and_create(actor, CreateApiKey(**kwargs))
    assert isinstance(result, Success)
    return result.value


class TestResolve:
    def test_header_name(self):
        assert API_KEY_HEADER == "x-api-key"

    @pytest.mark.asyncio
    async def test_valid_key_resolves_owner(
        self, authenticator, services, store, user_actor, clock
    ):
        created = await issue_key(services, store, user_actor)
        clock.advance(timedelta(minutes=1))

        actor = await authenticator.resolve(created.raw_secret)

        assert actor is not None
        assert actor.id == user_actor.id
        assert actor.role is USER_ROLE
        assert actor.email == user_actor.email
        stored = await store.load_by_id(ResourceType.APIKEY, created.api_key.id)
        assert stored.last_used_at == clock.now()

    @pytest.mark.asyncio
    async def test_roles_come_from_stored_user(
        self, authenticator, services, store, admin_actor
    ):
        created = await issue_key(services, store, admin_actor, roles=["admin"])

        actor = await authenticator.resolve(f"  {created.raw_secret}  ")

        assert actor is not None
        assert actor.role is ADMIN_ROLE

    @pytest.mark.asyncio
    @pytest.mark.parametrize("credential", [None, "", "sk_wrongprefix"])
    async def test_malformed_never_touches_store(
        self, authenticator, store, credential, monkeypatch
    ):
        lookup = AsyncMock()
        monkeypatch.setattr(store, "load_by_attributes", lookup)

        assert await authenticator.resolve(credential) is None
        lookup.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_key(self, authenticator, services, store, user_actor, mock_logger):
        created = await issue_key(services, store, user_actor)

        assert await authenticator.resolve(created.raw_secret + "a") is None
        mock_logger.info.assert_any_call("api_key_rejected", reason="unknown")

    @pytest.mark.asyncio
    async def test_inactive_key(self, authenticator, services, store, user_actor):
        created = await issue_key(services, store, user_actor)
        await services.api_keys.authorize_and_update(
            user_actor,
            UpdateApiKey(api_key_id=created.api_key.id, status=ApiKeyStatus.INACTIVE),
        )

        assert await authenticator.resolve(created.raw_secret) is None

    @pytest.mark.asyncio
    async def test_expired_key(self, authenticator, services, store, user_actor, clock):
        created = await issue_key(
            services, store, user_actor, expires_at=FIXED_NOW + timedelta(hours=1)
        )

        clock.advance(timedelta(hours=1))

        assert await authenticator.resolve(created.raw_secret) is None

    @pytest.mark.asyncio
    async def test_deleted_owner(self, authenticator, services, store, user_actor):
        created = await issue_key(services, store, user_actor)
        await store.delete(ResourceType.USER, user_actor.id)

        assert await authenticator.resolve(created.raw_secret) is None

    @pytest.mark.asyncio
    async def test_owner_with_unknown_role(self, authenticator, services, store, user_actor):
        created = await issue_key(services, store, user_actor, roles=["wizard"])

        assert await authenticator.resolve(created.raw_secret) is None
