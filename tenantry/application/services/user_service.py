"""User service.

User lookups check permission before touching the store: a user owns
itself, so the target's owner is known from the request alone.

Lookup rules:
    - user_id given: that user (wins over email)
    - email given: the user with that email
    - neither: the actor
"""

from typing import Any

from tenantry.application.services.resource_service import ResourceService
from tenantry.core.enums import ErrorCode
from tenantry.core.errors import DomainError, NotFoundError
from tenantry.core.result import Failure, Result, Success
from tenantry.core.validation import parse_optional_identifier
from tenantry.domain.entities import Actor, User
from tenantry.domain.enums import Action, ResourceType


class UserService(ResourceService[User]):
    """Authorized reads of users."""

    resource_type = ResourceType.USER
    entity_type = User
    id_field = "user_id"

    async def authorize_and_get(
        self,
        actor: Actor | None,
        resource_id: Any = None,
        *,
        email: str | None = None,
    ) -> Result[User, DomainError]:
        """Return a user the actor may read.

        Args:
            actor: Authenticated actor, or None.
            resource_id: User id to look up.
            email: Email to look up when no id is given.

        Returns:
            Success(User), or Failure with AuthenticationError,
            ValidationError, AuthorizationError, NotFoundError or
            InternalError.
        """
        return await self._run("get", self._get_user(actor, resource_id, email))

    async def _get_user(
        self, actor: Actor | None, user_id: Any, email: str | None
    ) -> Result[User, DomainError]:
        if actor is None:
            return self._unauthenticated()

        parsed = parse_optional_identifier(user_id, self.id_field)
        if isinstance(parsed, Failure):
            return parsed

        email = (email or "").strip() or None
        if parsed.value is None and email is not None:
            return await self._get_by_email(actor, email)

        target_id = parsed.value or actor.id
        decision = self._guard.authorize(actor, Action.READ, self.resource_type, target_id)
        if isinstance(decision, Failure):
            return decision

        user = await self._store.load_by_id(self.resource_type, target_id)
        if not isinstance(user, User):
            return self._not_found(target_id)
        return Success(value=user)

    async def _get_by_email(self, actor: Actor, email: str) -> Result[User, DomainError]:
        is_self = actor.email is not None and actor.email == email
        decision = self._guard.authorize(
            actor,
            Action.READ,
            self.resource_type,
            actor.id if is_self else None,
        )
        if isinstance(decision, Failure):
            return decision

        matches = await self._store.load_by_attributes(self.resource_type, email=email)
        user = next((u for u in matches if isinstance(u, User)), None)
        if user is None:
            return Failure(
                error=NotFoundError(
                    code=ErrorCode.RESOURCE_NOT_FOUND,
                    message="User not found",
                    resource_type=self.resource_type.value,
                    resource_id=email,
                )
            )

        # Decide again against the user actually found.
        decision = self._guard.authorize(actor, Action.READ, self.resource_type, user.id)
        if isinstance(decision, Failure):
            return decision
        return Success(value=user)
