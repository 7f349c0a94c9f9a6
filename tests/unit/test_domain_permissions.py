"""Tests for permission triples and roles.

Covers:
- Permission construction rules and string form
- PermissionSetRole membership, with MANAGE implying every action
- UnrestrictedRole and CompositeRole
- resolve_roles for known, unknown, empty and multiple names
"""

import pytest

from tenantry.core.enums import ErrorCode
from tenantry.core.result import Failure, Success
from tenantry.domain.enums import Action, PermissionVariant, ResourceType
from tenantry.domain.roles import (
    ADMIN_ROLE,
    NO_ROLE,
    ROOT_ROLE,
    USER_ROLE,
    CompositeRole,
    PermissionSetRole,
    resolve_roles,
)
from tenantry.domain.value_objects import Permission


def own(resource_type: ResourceType, action: Action) -> Permission:
    return Permission.of(resource_type, action, PermissionVariant.OWN)


def any_owner(resource_type: ResourceType, action: Action) -> Permission:
    return Permission.of(resource_type, action, PermissionVariant.ANY)


class TestPermission:
    def test_manage_with_action_rejected(self):
        with pytest.raises(ValueError, match="MANAGE"):
            Permission(
                resource_type=ResourceType.SPACE,
                variant=PermissionVariant.MANAGE,
                action=Action.READ,
            )

    def test_own_without_action_rejected(self):
        with pytest.raises(ValueError):
            Permission(resource_type=ResourceType.SPACE, variant=PermissionVariant.OWN)

    def test_string_form(self):
        assert str(own(ResourceType.SPACE, Action.UPDATE)) == "update_space_own"
        assert str(any_owner(ResourceType.APIKEY, Action.LIST)) == "list_apikey_any"
        assert str(Permission.manage(ResourceType.EMBEDDER)) == "manage_embedder"

    def test_permissions_are_hashable_values(self):
        assert own(ResourceType.SPACE, Action.READ) == own(ResourceType.SPACE, Action.READ)
        assert len({own(ResourceType.SPACE, Action.READ)} | {own(ResourceType.SPACE, Action.READ)}) == 1


class TestPermissionSetRole:
    def test_membership(self):
        role = PermissionSetRole(
            name="reader", permissions=frozenset({own(ResourceType.SPACE, Action.READ)})
        )

        assert role.has_permission(own(ResourceType.SPACE, Action.READ))
        assert not role.has_permission(own(ResourceType.SPACE, Action.UPDATE))
        assert not role.has_permission(any_owner(ResourceType.SPACE, Action.READ))

    def test_manage_implies_every_triple_of_its_type(self):
        role = PermissionSetRole(
            name="space-admin",
            permissions=frozenset({Permission.manage(ResourceType.SPACE)}),
        )

        assert role.has_permission(any_owner(ResourceType.SPACE, Action.DELETE))
        assert role.has_permission(own(ResourceType.SPACE, Action.CREATE))
        assert not role.has_permission(own(ResourceType.APIKEY, Action.CREATE))

    def test_no_role_grants_nothing(self):
        assert not NO_ROLE.has_permission(own(ResourceType.USER, Action.READ))


class TestStandardRoles:
    def test_user_role_owns_spaces_and_keys(self):
        for resource_type in (ResourceType.SPACE, ResourceType.APIKEY):
            for action in Action:
                assert USER_ROLE.has_permission(own(resource_type, action))
                assert not USER_ROLE.has_permission(any_owner(resource_type, action))

    def test_user_role_reads_any_embedder_but_cannot_write(self):
        assert USER_ROLE.has_permission(any_owner(ResourceType.EMBEDDER, Action.READ))
        assert USER_ROLE.has_permission(any_owner(ResourceType.EMBEDDER, Action.LIST))
        assert not USER_ROLE.has_permission(own(ResourceType.EMBEDDER, Action.CREATE))
        assert not USER_ROLE.has_permission(Permission.manage(ResourceType.EMBEDDER))

    def test_root_and_admin_are_unrestricted(self):
        for role in (ROOT_ROLE, ADMIN_ROLE):
            assert role.has_permission(Permission.manage(ResourceType.USER))
            assert role.has_permission(any_owner(ResourceType.SPACE, Action.DELETE))


class TestResolveRoles:
    def test_single_name(self):
        result = resolve_roles(["user"])

        assert result == Success(value=USER_ROLE)

    def test_names_are_case_insensitive(self):
        result = resolve_roles([" Admin "])

        assert result == Success(value=ADMIN_ROLE)

    def test_empty_grants_nothing(self):
        result = resolve_roles([])

        assert isinstance(result, Success)
        assert result.value is NO_ROLE

    def test_several_names_compose(self):
        result = resolve_roles(["user", "admin", "user"])

        assert isinstance(result, Success)
        assert isinstance(result.value, CompositeRole)
        assert result.value.name == "user+admin"
        assert result.value.has_permission(Permission.manage(ResourceType.EMBEDDER))

    def test_unknown_name_fails(self):
        result = resolve_roles(["user", "superhero"])

        assert isinstance(result, Failure)
        assert result.error.code == ErrorCode.ROLE_UNKNOWN
        assert "superhero" in result.error.message
