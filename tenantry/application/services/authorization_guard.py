"""Authorization guard.

The single decision point for every resource operation. The decision order
is fixed and short-circuits:

    1. No actor                   -> Unauthenticated
    2. MANAGE on the resource type -> allow (ownership ignored)
    3. Actor owns the target       -> allow iff OWN or ANY for the action
    4. Actor does not own it       -> allow iff ANY for the action

For list operations there is no single target. ``visibility()`` instead
produces the predicate the query engine applies:

    ANY or MANAGE for list -> unrestricted (an explicit owner filter still
                              narrows the result)
    OWN only               -> restricted to the actor's resources; an explicit
                              owner filter naming someone else is denied

No decision is cached: roles and owners are re-read on every call.

Usage:
    guard = AuthorizationGuard(ownership_resolver=OwnershipResolver(), logger=logger)

    match guard.authorize(actor, Action.UPDATE, ResourceType.SPACE, space.owner_id):
        case Success(value=grant):
            ...
        case Failure(error=error):
            return Failure(error=error)
"""

from dataclasses import dataclass
from typing import Any
from uuid import UUID

from tenantry.application.services.ownership_resolver import OwnershipResolver
from tenantry.core.enums import ErrorCode
from tenantry.core.errors import AuthenticationError, AuthorizationError, DomainError
from tenantry.core.result import Failure, Result, Success
from tenantry.domain.entities import Actor
from tenantry.domain.enums import Action, PermissionVariant, ResourceType
from tenantry.domain.protocols import LoggerProtocol
from tenantry.domain.value_objects import Permission, VisibilityPredicate


@dataclass(frozen=True, slots=True, kw_only=True)
class Grant:
    """Successful authorization decision.

    Attributes:
        actor: Actor that was authorized.
        action: Authorized action.
        resource_type: Resource type acted on.
        variant: Permission variant that satisfied the check.
    """

    actor: Actor
    action: Action
    resource_type: ResourceType
    variant: PermissionVariant


class AuthorizationGuard:
    """Ownership-aware permission checks shared by every resource type."""

    def __init__(
        self,
        *,
        ownership_resolver: OwnershipResolver,
        logger: LoggerProtocol,
    ) -> None:
        self._ownership_resolver = ownership_resolver
        self._logger = logger

    @staticmethod
    def is_owner(actor: Actor, owner_id: UUID | None) -> bool:
        """Whether ``actor`` owns a resource owned by ``owner_id``."""
        return actor.is_owner(owner_id)

    def authorize(
        self,
        actor: Actor | None,
        action: Action,
        resource_type: ResourceType,
        owner_id: UUID | None,
    ) -> Result[Grant, DomainError]:
        """Decide whether ``actor`` may perform ``action`` on a target.

        Args:
            actor: Authenticated actor, or None.
            action: Action requested.
            resource_type: Type of the target resource.
            owner_id: Owner of the target (loaded resource, or resolved
                owner for creates).

        Returns:
            Success(Grant) when allowed, otherwise Failure with
            AuthenticationError or AuthorizationError.
        """
        if actor is None:
            return self._unauthenticated(action, resource_type)

        if actor.has_permission(Permission.manage(resource_type)):
            return self._allow(actor, action, resource_type, PermissionVariant.MANAGE)

        own = Permission.of(resource_type, action, PermissionVariant.OWN)
        any_owner = Permission.of(resource_type, action, PermissionVariant.ANY)

        if actor.is_owner(owner_id):
            if actor.has_permission(own):
                return self._allow(actor, action, resource_type, PermissionVariant.OWN)
            if actor.has_permission(any_owner):
                return self._allow(actor, action, resource_type, PermissionVariant.ANY)
            return self._deny(actor, action, resource_type, own)

        if actor.has_permission(any_owner):
            return self._allow(actor, action, resource_type, PermissionVariant.ANY)
        return self._deny(actor, action, resource_type, any_owner)

    def authorize_create(
        self,
        actor: Actor | None,
        resource_type: ResourceType,
        requested_owner_id: Any = None,
    ) -> Result[UUID, DomainError]:
        """Resolve the owner of a new resource and authorize its creation.

        Returns:
            Success(UUID): Owner to assign.
            Failure: Unauthenticated, malformed owner id, or denied.
        """
        if actor is None:
            return self._unauthenticated(Action.CREATE, resource_type)

        resolved = self._ownership_resolver.resolve(
            actor, resource_type, requested_owner_id
        )
        if isinstance(resolved, Failure):
            self._logger.info(
                "authorization_denied",
                actor_id=str(actor.id),
                action=Action.CREATE.value,
                resource_type=resource_type.value,
                reason=resolved.error.code.value,
            )
            return resolved

        decision = self.authorize(actor, Action.CREATE, resource_type, resolved.value)
        if isinstance(decision, Failure):
            return decision
        return Success(value=resolved.value)

    def visibility(
        self,
        actor: Actor | None,
        resource_type: ResourceType,
        requested_owner_id: UUID | None = None,
        include_public: bool = False,
    ) -> Result[VisibilityPredicate, DomainError]:
        """Derive the list visibility predicate for ``actor``.

        Args:
            actor: Authenticated actor, or None.
            resource_type: Type being listed.
            requested_owner_id: Owner filter chosen by the caller, if any.
            include_public: Whether OWN-only actors also see public rows.

        Returns:
            Success(VisibilityPredicate), or Failure when unauthenticated or
            denied.
        """
        if actor is None:
            return self._unauthenticated(Action.LIST, resource_type)

        any_owner = Permission.of(resource_type, Action.LIST, PermissionVariant.ANY)
        if actor.has_permission(Permission.manage(resource_type)) or actor.has_permission(
            any_owner
        ):
            self._log_allowed(actor, Action.LIST, resource_type, PermissionVariant.ANY)
            return Success(value=VisibilityPredicate.unrestricted())

        own = Permission.of(resource_type, Action.LIST, PermissionVariant.OWN)
        if not actor.has_permission(own):
            return self._deny(actor, Action.LIST, resource_type, own)

        if requested_owner_id is not None and requested_owner_id != actor.id:
            return self._deny(actor, Action.LIST, resource_type, any_owner)

        self._log_allowed(actor, Action.LIST, resource_type, PermissionVariant.OWN)
        return Success(
            value=VisibilityPredicate.owner_restricted(
                actor.id, allow_public=include_public
            )
        )

    def _allow(
        self,
        actor: Actor,
        action: Action,
        resource_type: ResourceType,
        variant: PermissionVariant,
    ) -> Success[Grant]:
        self._log_allowed(actor, action, resource_type, variant)
        return Success(
            value=Grant(
                actor=actor,
                action=action,
                resource_type=resource_type,
                variant=variant,
            )
        )

    def _log_allowed(
        self,
        actor: Actor,
        action: Action,
        resource_type: ResourceType,
        variant: PermissionVariant,
    ) -> None:
        self._logger.debug(
            "authorization_granted",
            actor_id=str(actor.id),
            action=action.value,
            resource_type=resource_type.value,
            variant=variant.value,
        )

    def _deny(
        self,
        actor: Actor,
        action: Action,
        resource_type: ResourceType,
        required: Permission,
    ) -> Failure[DomainError]:
        self._logger.info(
            "authorization_denied",
            actor_id=str(actor.id),
            action=action.value,
            resource_type=resource_type.value,
            required_permission=str(required),
        )
        return Failure(
            error=AuthorizationError(
                code=ErrorCode.PERMISSION_DENIED,
                message=f"Permission denied to {action.value} {resource_type.value}",
                required_permission=str(required),
            )
        )

    def _unauthenticated(
        self, action: Action, resource_type: ResourceType
    ) -> Failure[DomainError]:
        self._logger.info(
            "authorization_unauthenticated",
            action=action.value,
            resource_type=resource_type.value,
        )
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.ACTOR_NOT_AUTHENTICATED,
                message="Authentication required",
            )
        )
