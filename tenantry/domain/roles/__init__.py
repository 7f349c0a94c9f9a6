"""Roles: capability checks over permission triples."""

from tenantry.domain.roles.role import (
    NO_ROLE,
    CompositeRole,
    PermissionSetRole,
    Role,
    UnrestrictedRole,
)
from tenantry.domain.roles.standard_roles import (
    ADMIN_ROLE,
    ROOT_ROLE,
    STANDARD_ROLES,
    USER_ROLE,
    resolve_roles,
)

__all__ = [
    "ADMIN_ROLE",
    "CompositeRole",
    "NO_ROLE",
    "PermissionSetRole",
    "ROOT_ROLE",
    "Role",
    "STANDARD_ROLES",
    "USER_ROLE",
    "UnrestrictedRole",
    "resolve_roles",
]
