"""Tests for tenantry/application/services/ownership_resolver.py."""

import pytest

from tenantry.application.services import OwnershipResolver
from tenantry.core.enums import ErrorCode
from tenantry.core.errors import AuthorizationError, ValidationError
from tenantry.core.result import Failure, Success
from tenantry.domain.entities import Actor
from tenantry.domain.enums import Action, PermissionVariant, ResourceType
from tenantry.domain.roles import PermissionSetRole
from tenantry.domain.value_objects import Permission
from tests.conftest import new_id


@pytest.fixture
def resolver() -> OwnershipResolver:
    return OwnershipResolver()


class TestDefaultOwner:
    @pytest.mark.parametrize("requested", [None, ""])
    def test_absent_owner_resolves_to_actor(self, resolver, user_actor, requested):
        result = resolver.resolve(user_actor, ResourceType.SPACE, requested)

        assert result == Success(value=user_actor.id)

    def test_own_id_needs_no_elevated_permission(self, resolver, user_actor):
        result = resolver.resolve(user_actor, ResourceType.SPACE, str(user_actor.id))

        assert result == Success(value=user_actor.id)


class TestOnBehalfOf:
    def test_user_cannot_create_for_someone_else(self, resolver, user_actor):
        result = resolver.resolve(user_actor, ResourceType.SPACE, new_id())

        assert isinstance(result, Failure)
        assert isinstance(result.error, AuthorizationError)
        assert result.error.code == ErrorCode.PERMISSION_DENIED
        assert result.error.required_permission == "create_space_any"

    def test_admin_may_create_for_someone_else(self, resolver, admin_actor):
        target = new_id()

        result = resolver.resolve(admin_actor, ResourceType.APIKEY, target)

        assert result == Success(value=target)

    def test_create_any_is_enough(self, resolver):
        actor = Actor(
            id=new_id(),
            role=PermissionSetRole(
                name="provisioner",
                permissions=frozenset(
                    {
                        Permission.of(
                            ResourceType.SPACE, Action.CREATE, PermissionVariant.ANY
                        )
                    }
                ),
            ),
        )
        target = new_id()

        assert resolver.resolve(actor, ResourceType.SPACE, target) == Success(
            value=target
        )

    def test_manage_is_enough(self, resolver):
        actor = Actor(
            id=new_id(),
            role=PermissionSetRole(
                name="space-admin",
                permissions=frozenset({Permission.manage(ResourceType.SPACE)}),
            ),
        )
        target = new_id()

        assert resolver.resolve(actor, ResourceType.SPACE, target) == Success(
            value=target
        )


class TestMalformedOwner:
    def test_validation_precedes_permission(self, resolver, user_actor):
        result = resolver.resolve(user_actor, ResourceType.SPACE, "bogus")

        assert isinstance(result, Failure)
        assert isinstance(result.error, ValidationError)
        assert result.error.message == "Invalid owner_id"
