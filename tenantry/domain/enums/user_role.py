"""Built-in role names.

    ROOT, ADMIN: every permission on every resource type
    USER: own user profile, own spaces and API keys, read-only embedders

Role names are what the store persists for a user; they are turned into a
``Role`` value with ``tenantry.domain.roles.resolve_roles``.
"""

from enum import Enum


class UserRole(str, Enum):
    """Built-in role names."""

    ROOT = "root"
    ADMIN = "admin"
    USER = "user"

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings."""
        return [role.value for role in cls]
