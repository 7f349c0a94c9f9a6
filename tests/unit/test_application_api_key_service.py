"""Tests for tenantry/application/services/api_key_service.py."""

from datetime import timedelta

import pytest

from tenantry.application.commands import CreateApiKey, UpdateApiKey
from tenantry.application.queries import ListResources
from tenantry.core.enums import ErrorCode
from tenantry.core.errors import AuthorizationError, NotFoundError, ValidationError
from tenantry.core.result import Failure, Success
from tenantry.domain.enums import ApiKeyStatus, ResourceType
from tests.conftest import FIXED_NOW


@pytest.fixture
def api_keys(services):
    return services.api_keys


async def create(api_keys, actor, **kwargs):
    result = await api_keys.authorize_and_create(actor, CreateApiKey(**kwargs))
    assert isinstance(result, Success), result
    return result.value


class TestCreateApiKey:
    @pytest.mark.asyncio
    async def test_raw_key_returned_once_and_hash_stored(
        self, api_keys, store, user_actor, mock_logger
    ):
        created = await create(api_keys, user_actor, labels={"ci": "true"})

        api_key = created.api_key
        assert created.raw_secret.startswith("gm_")
        assert api_key.key_prefix == created.raw_secret[:8]
        assert api_key.key_hash != created.raw_secret
        assert len(api_key.key_hash) == 64
        assert api_key.status is ApiKeyStatus.ACTIVE
        assert api_key.owner_id == user_actor.id
        assert api_key.labels == {"ci": "true"}
        assert created.raw_secret not in repr(created)
        stored = await store.load_by_id(ResourceType.APIKEY, api_key.id)
        assert stored == api_key
        logged = [c for c in mock_logger.info.call_args_list if c.args[0] == "apikey_created"]
        assert len(logged) == 1
        assert created.raw_secret not in str(logged[0])

    @pytest.mark.asyncio
    async def test_keys_are_distinct(self, api_keys, user_actor):
        first = await create(api_keys, user_actor)
        second = await create(api_keys, user_actor)

        assert first.raw_secret != second.raw_secret
        assert first.api_key.key_hash != second.api_key.key_hash

    @pytest.mark.asyncio
    async def test_future_expiry(self, api_keys, user_actor):
        expires_at = FIXED_NOW + timedelta(days=30)

        created = await create(api_keys, user_actor, expires_at=expires_at)

        assert created.api_key.expires_at == expires_at

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "expires_at",
        [FIXED_NOW, FIXED_NOW - timedelta(days=1), FIXED_NOW.replace(tzinfo=None) + timedelta(days=1)],
    )
    async def test_invalid_expiry(self, api_keys, user_actor, expires_at):
        result = await api_keys.authorize_and_create(
            user_actor, CreateApiKey(expires_at=expires_at)
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.field == "expires_at"

    @pytest.mark.asyncio
    async def test_for_another_user_requires_admin(
        self, api_keys, user_actor, other_actor, admin_actor
    ):
        denied = await api_keys.authorize_and_create(
            user_actor, CreateApiKey(owner_id=other_actor.id)
        )
        allowed = await create(api_keys, admin_actor, owner_id=other_actor.id)

        assert isinstance(denied, Failure)
        assert isinstance(denied.error, AuthorizationError)
        assert allowed.api_key.owner_id == other_actor.id


class TestUpdateApiKey:
    @pytest.mark.asyncio
    async def test_deactivate_and_relabel(self, api_keys, user_actor):
        created = await create(api_keys, user_actor, labels={"a": "1"})

        result = await api_keys.authorize_and_update(
            user_actor,
            UpdateApiKey(
                api_key_id=created.api_key.id,
                replace_labels={"b": "2"},
                status=ApiKeyStatus.INACTIVE,
            ),
        )

        assert isinstance(result, Success)
        assert result.value.status is ApiKeyStatus.INACTIVE
        assert result.value.labels == {"b": "2"}
        assert result.value.key_hash == created.api_key.key_hash

    @pytest.mark.asyncio
    async def test_other_user_denied(self, api_keys, user_actor, other_actor):
        created = await create(api_keys, user_actor)

        result = await api_keys.authorize_and_update(
            other_actor, UpdateApiKey(api_key_id=created.api_key.id, merge_labels={})
        )

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthorizationError)


class TestDeleteAndListApiKeys:
    @pytest.mark.asyncio
    async def test_delete(self, api_keys, user_actor):
        created = await create(api_keys, user_actor)

        assert await api_keys.authorize_and_delete(user_actor, created.api_key.id) == Success(
            value=None
        )
        after = await api_keys.authorize_and_get(user_actor, created.api_key.id)
        assert isinstance(after, Failure)
        assert isinstance(after.error, NotFoundError)

    @pytest.mark.asyncio
    async def test_list_by_status(self, api_keys, user_actor):
        active = await create(api_keys, user_actor)
        inactive = await create(api_keys, user_actor)
        await api_keys.authorize_and_update(
            user_actor,
            UpdateApiKey(api_key_id=inactive.api_key.id, status=ApiKeyStatus.INACTIVE),
        )

        result = await api_keys.authorize_and_list(
            user_actor, ListResources(filters={"status": "active"})
        )

        assert isinstance(result, Success)
        assert [k.id for k in result.value.items] == [active.api_key.id]

    @pytest.mark.asyncio
    async def test_name_pattern_rejected(self, api_keys, user_actor):
        result = await api_keys.authorize_and_list(
            user_actor, ListResources(name_pattern="gm_*")
        )

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.FILTER_INVALID
