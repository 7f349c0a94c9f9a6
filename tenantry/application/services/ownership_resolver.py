"""Ownership resolution for create operations.

Decides who will own a resource an actor is about to create:

    1. No owner requested (None or empty): the actor
    2. The actor's own id requested: the actor, no elevated permission
    3. Another owner requested: requires ANY or MANAGE for ``create`` on the
       resource type, otherwise PermissionDenied

A malformed owner id fails with a ValidationError before any permission is
evaluated.

Usage:
    resolver = OwnershipResolver()
    match resolver.resolve(actor, ResourceType.SPACE, request.owner_id):
        case Success(value=owner_id):
            ...
"""

from typing import Any
from uuid import UUID

from tenantry.core.enums import ErrorCode
from tenantry.core.errors import AuthorizationError, DomainError
from tenantry.core.result import Failure, Result, Success
from tenantry.core.validation import parse_optional_identifier
from tenantry.domain.entities import Actor
from tenantry.domain.enums import Action, PermissionVariant, ResourceType
from tenantry.domain.value_objects import Permission


class OwnershipResolver:
    """Resolves the intended owner of a new resource."""

    def resolve(
        self,
        actor: Actor,
        resource_type: ResourceType,
        requested_owner_id: Any = None,
    ) -> Result[UUID, DomainError]:
        """Resolve the owner for a create request.

        Args:
            actor: Authenticated actor creating the resource.
            resource_type: Type of the resource being created.
            requested_owner_id: Owner explicitly asked for (UUID, string or
                16 bytes), or None.

        Returns:
            Success(UUID): The owner to assign.
            Failure(ValidationError): Malformed owner id.
            Failure(AuthorizationError): Creating for another owner without
                ANY or MANAGE.
        """
        parsed = parse_optional_identifier(requested_owner_id, "owner_id")
        if isinstance(parsed, Failure):
            return parsed

        owner_id = parsed.value
        if owner_id is None or owner_id == actor.id:
            return Success(value=actor.id)

        on_behalf = Permission.of(resource_type, Action.CREATE, PermissionVariant.ANY)
        if actor.has_permission(on_behalf) or actor.has_permission(
            Permission.manage(resource_type)
        ):
            return Success(value=owner_id)

        return Failure(
            error=AuthorizationError(
                code=ErrorCode.PERMISSION_DENIED,
                message=f"Permission denied to create {resource_type.value} for another owner",
                required_permission=str(on_behalf),
            )
        )
