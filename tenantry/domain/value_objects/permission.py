"""Permission value object.

A permission triple identifies what an actor may do:

    Permission.of(ResourceType.SPACE, Action.UPDATE, PermissionVariant.OWN)
    Permission.manage(ResourceType.EMBEDDER)

MANAGE permissions carry no action: they cover every action and every
variant on their resource type.
"""

from dataclasses import dataclass

from tenantry.domain.enums import Action, PermissionVariant, ResourceType


@dataclass(frozen=True, slots=True, kw_only=True)
class Permission:
    """Immutable ``(resource_type, action, variant)`` triple.

    Attributes:
        resource_type: Resource type the permission applies to.
        variant: OWN, ANY or MANAGE.
        action: Action covered. None for MANAGE.

    Raises:
        ValueError: If a MANAGE permission names an action, or an OWN/ANY
            permission does not.
    """

    resource_type: ResourceType
    variant: PermissionVariant
    action: Action | None = None

    def __post_init__(self) -> None:
        if self.variant is PermissionVariant.MANAGE and self.action is not None:
            raise ValueError("MANAGE permissions apply to every action")
        if self.variant is not PermissionVariant.MANAGE and self.action is None:
            raise ValueError(f"{self.variant.value} permissions require an action")

    @classmethod
    def of(
        cls,
        resource_type: ResourceType,
        action: Action,
        variant: PermissionVariant,
    ) -> "Permission":
        """Build an OWN or ANY permission."""
        return cls(resource_type=resource_type, action=action, variant=variant)

    @classmethod
    def manage(cls, resource_type: ResourceType) -> "Permission":
        """Build the MANAGE permission for a resource type."""
        return cls(resource_type=resource_type, variant=PermissionVariant.MANAGE)

    def __str__(self) -> str:
        if self.action is None:
            return f"{self.variant.value}_{self.resource_type.value}"
        return f"{self.action.value}_{self.resource_type.value}_{self.variant.value}"
