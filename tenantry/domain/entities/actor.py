"""Actor: an authenticated identity with a role.

Actors are produced upstream (API key or session authentication) and handed
to every service entry point. A missing actor (None) means the caller is
unauthenticated.
"""

from dataclasses import dataclass
from uuid import UUID

from tenantry.domain.roles.role import Role
from tenantry.domain.value_objects.permission import Permission


@dataclass(frozen=True, slots=True, kw_only=True)
class Actor:
    """Authenticated identity.

    Attributes:
        id: User id of the actor.
        role: Role granting the actor's permissions.
        email: Email of the actor, if known.
    """

    id: UUID
    role: Role
    email: str | None = None

    def has_permission(self, permission: Permission) -> bool:
        return self.role.has_permission(permission)

    def is_owner(self, owner_id: UUID | None) -> bool:
        return owner_id is not None and owner_id == self.id
