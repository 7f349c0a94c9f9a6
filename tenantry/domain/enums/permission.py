"""Permission components.

A permission is a ``(resource_type, action, variant)`` triple. The variant
scopes the action:

    OWN: only on resources the actor owns
    ANY: on resources owned by anyone
    MANAGE: every action and variant on the resource type

Usage:
    from tenantry.domain.enums import Action, PermissionVariant, ResourceType
    from tenantry.domain.value_objects import Permission

    Permission(
        resource_type=ResourceType.SPACE,
        action=Action.UPDATE,
        variant=PermissionVariant.OWN,
    )
"""

from enum import Enum


class ResourceType(str, Enum):
    """Resource types protected by authorization."""

    USER = "user"
    """User accounts. A user owns itself."""

    SPACE = "space"
    """Spaces holding embedded content."""

    APIKEY = "apikey"
    """API keys (opaque bearer credentials)."""

    EMBEDDER = "embedder"
    """Embedding model endpoints."""

    @classmethod
    def values(cls) -> list[str]:
        """Get all resource type values as strings."""
        return [resource_type.value for resource_type in cls]


class Action(str, Enum):
    """Actions that can be performed on a resource."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"
    LIST = "list"

    @classmethod
    def values(cls) -> list[str]:
        """Get all action values as strings."""
        return [action.value for action in cls]


class PermissionVariant(str, Enum):
    """Scope over which an action is authorized."""

    OWN = "own"
    ANY = "any"
    MANAGE = "manage"
