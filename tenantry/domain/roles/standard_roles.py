"""Built-in roles and role-name resolution.

Permissions by Role:
    ROOT, ADMIN:
        - everything
    USER:
        - read own user
        - create/read/update/delete/list own spaces
        - create/read/update/delete/list own API keys
        - read/list any embedder

Usage:
    from tenantry.domain.roles import resolve_roles

    match resolve_roles(["user"]):
        case Success(value=role):
            actor = Actor(id=user_id, role=role)
"""

from collections.abc import Iterable

from tenantry.core.enums import ErrorCode
from tenantry.core.errors import ValidationError
from tenantry.core.result import Failure, Result, Success
from tenantry.domain.enums import Action, PermissionVariant, ResourceType, UserRole
from tenantry.domain.roles.role import (
    NO_ROLE,
    CompositeRole,
    PermissionSetRole,
    Role,
    UnrestrictedRole,
)
from tenantry.domain.value_objects.permission import Permission

_OWNED_ACTIONS = (
    Action.CREATE,
    Action.READ,
    Action.UPDATE,
    Action.DELETE,
    Action.LIST,
)


def _own(resource_type: ResourceType, actions: Iterable[Action]) -> set[Permission]:
    return {
        Permission.of(resource_type, action, PermissionVariant.OWN) for action in actions
    }


def _any(resource_type: ResourceType, actions: Iterable[Action]) -> set[Permission]:
    return {
        Permission.of(resource_type, action, PermissionVariant.ANY) for action in actions
    }


ROOT_ROLE = UnrestrictedRole(name=UserRole.ROOT.value, description="Superuser")
ADMIN_ROLE = UnrestrictedRole(name=UserRole.ADMIN.value, description="Administrator")
USER_ROLE = PermissionSetRole(
    name=UserRole.USER.value,
    description="Standard user: own resources, read-only embedders",
    permissions=frozenset(
        _own(ResourceType.USER, [Action.READ])
        | _own(ResourceType.SPACE, _OWNED_ACTIONS)
        | _own(ResourceType.APIKEY, _OWNED_ACTIONS)
        | _any(ResourceType.EMBEDDER, [Action.READ, Action.LIST])
    ),
)

STANDARD_ROLES: dict[UserRole, Role] = {
    UserRole.ROOT: ROOT_ROLE,
    UserRole.ADMIN: ADMIN_ROLE,
    UserRole.USER: USER_ROLE,
}


def resolve_roles(names: Iterable[str]) -> Result[Role, ValidationError]:
    """Build an actor's role from stored role names.

    Args:
        names: Role names (case-insensitive). Duplicates are ignored.

    Returns:
        Success with a single role (or a composite of several), Success with
        a role granting nothing when no names are given, Failure with
        ValidationError on an unknown name.
    """
    roles: list[Role] = []
    for raw in names:
        try:
            role_name = UserRole(raw.strip().lower())
        except ValueError:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.ROLE_UNKNOWN,
                    message=f"Unknown role: {raw}",
                    field="roles",
                )
            )
        role = STANDARD_ROLES[role_name]
        if role not in roles:
            roles.append(role)

    if not roles:
        return Success(value=NO_ROLE)
    if len(roles) == 1:
        return Success(value=roles[0])
    return Success(value=CompositeRole.of(roles))
