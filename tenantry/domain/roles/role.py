"""Role implementations.

A role answers one question: does it grant a permission? Roles never raise;
absence of a permission is ``False``.

Three shapes cover every role the system needs:

- PermissionSetRole: a closed set of permission triples (membership check,
  with MANAGE for a resource type implying every triple of that type)
- UnrestrictedRole: grants everything (root and admin accounts)
- CompositeRole: union of other roles
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from tenantry.domain.value_objects.permission import Permission


class Role(Protocol):
    """Capability check consumed by the authorization guard."""

    @property
    def name(self) -> str: ...

    def has_permission(self, permission: Permission) -> bool: ...


@dataclass(frozen=True, slots=True)
class PermissionSetRole:
    """Role backed by a fixed set of permissions."""

    name: str
    permissions: frozenset[Permission] = field(default_factory=frozenset)
    description: str = ""

    def has_permission(self, permission: Permission) -> bool:
        if permission in self.permissions:
            return True
        return Permission.manage(permission.resource_type) in self.permissions


@dataclass(frozen=True, slots=True)
class UnrestrictedRole:
    """Role granting every permission."""

    name: str
    description: str = ""

    def has_permission(self, permission: Permission) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class CompositeRole:
    """Union of several roles."""

    roles: tuple[Role, ...]

    @classmethod
    def of(cls, roles: Iterable[Role]) -> "CompositeRole":
        return cls(roles=tuple(roles))

    @property
    def name(self) -> str:
        return "+".join(role.name for role in self.roles)

    def has_permission(self, permission: Permission) -> bool:
        return any(role.has_permission(permission) for role in self.roles)


NO_ROLE = PermissionSetRole(name="none", description="Grants nothing")
