"""Space service.

Entry points for creating, reading, updating, deleting and listing spaces.

Business Rules:
    - Space names are unique per owner (renames are re-checked)
    - The embedder defaults to the configured one and never changes
    - Creator and updater are always the acting user
"""

from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from tenantry.application.commands import CreateSpace, UpdateSpace
from tenantry.application.services.authorization_guard import AuthorizationGuard
from tenantry.application.services.label_merger import (
    label_strategy_from_request,
    merge_labels,
)
from tenantry.application.services.query_engine import QueryEngine
from tenantry.application.services.resource_service import ResourceService
from tenantry.core.enums import ErrorCode
from tenantry.core.errors import DomainError, ValidationError
from tenantry.core.result import Failure, Result, Success
from tenantry.core.validation import (
    parse_optional_identifier,
    validate_labels,
    validate_not_empty,
)
from tenantry.domain.entities import Actor, Space
from tenantry.domain.enums import Action, ResourceType
from tenantry.domain.protocols import Clock, LoggerProtocol, ResourceStore


class SpaceService(ResourceService[Space]):
    """Authorized operations on spaces."""

    resource_type = ResourceType.SPACE
    entity_type = Space
    id_field = "space_id"

    def __init__(
        self,
        *,
        store: ResourceStore,
        guard: AuthorizationGuard,
        query_engine: QueryEngine,
        clock: Clock,
        logger: LoggerProtocol,
        default_embedder_id: UUID | None = None,
    ) -> None:
        super().__init__(
            store=store,
            guard=guard,
            query_engine=query_engine,
            clock=clock,
            logger=logger,
        )
        self._default_embedder_id = default_embedder_id

    async def authorize_and_create(
        self, actor: Actor | None, command: CreateSpace
    ) -> Result[Space, DomainError]:
        """Create a space.

        Returns:
            Success(Space), or Failure with AuthenticationError,
            ValidationError (malformed ids, blank name, no embedder),
            AuthorizationError, ConflictError (duplicate name for the owner)
            or InternalError.
        """
        return await self._run("create", self._create(actor, command))

    async def authorize_and_update(
        self, actor: Actor | None, command: UpdateSpace
    ) -> Result[Space, DomainError]:
        """Update a space's name, labels or public flag."""
        return await self._run("update", self._update(actor, command))

    async def authorize_and_delete(
        self, actor: Actor | None, space_id: Any
    ) -> Result[None, DomainError]:
        """Delete a space."""
        return await self._run("delete", self._delete(actor, space_id))

    async def _create(
        self, actor: Actor | None, command: CreateSpace
    ) -> Result[Space, DomainError]:
        if actor is None:
            return self._unauthenticated()

        owner = self._guard.authorize_create(actor, self.resource_type, command.owner_id)
        if isinstance(owner, Failure):
            return owner

        name = validate_not_empty(command.name, "name")
        if isinstance(name, Failure):
            return name

        labels = validate_labels(command.labels, "labels")
        if isinstance(labels, Failure):
            return labels

        embedder = parse_optional_identifier(command.embedder_id, "embedder_id")
        if isinstance(embedder, Failure):
            return embedder
        embedder_id = embedder.value or self._default_embedder_id
        if embedder_id is None:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="embedder_id is required (no default embedder configured)",
                    field="embedder_id",
                )
            )

        if await self._name_taken(owner.value, name.value):
            return self._conflict(
                f"A space named '{name.value}' already exists for this owner", "name"
            )

        now = self._clock.now()
        space = Space(
            id=uuid7(),
            owner_id=owner.value,
            name=name.value,
            embedder_id=embedder_id,
            public_read=command.public_read,
            labels=labels.value,
            created_at=now,
            updated_at=now,
            created_by_id=actor.id,
            updated_by_id=actor.id,
        )
        saved = await self._save(space)
        if isinstance(saved, Success):
            self._logger.info(
                "space_created",
                space_id=str(space.id),
                owner_id=str(space.owner_id),
                actor_id=str(actor.id),
            )
        return saved

    async def _update(
        self, actor: Actor | None, command: UpdateSpace
    ) -> Result[Space, DomainError]:
        if actor is None:
            return self._unauthenticated()

        strategy = label_strategy_from_request(
            replace=command.replace_labels, merge=command.merge_labels
        )
        if isinstance(strategy, Failure):
            return strategy

        new_name = None
        if command.name is not None:
            name = validate_not_empty(command.name, "name")
            if isinstance(name, Failure):
                return name
            new_name = name.value

        loaded = await self._load_authorized(actor, Action.UPDATE, command.space_id)
        if isinstance(loaded, Failure):
            return loaded
        space = loaded.value

        if new_name is not None and new_name != space.name:
            if await self._name_taken(space.owner_id, new_name, exclude=space.id):
                return self._conflict(
                    f"A space named '{new_name}' already exists for this owner", "name"
                )
            space.name = new_name

        space.labels = merge_labels(space.labels, strategy.value)
        if command.public_read is not None:
            space.public_read = command.public_read
        space.touch(actor.id, self._clock.now())

        saved = await self._save(space)
        if isinstance(saved, Success):
            self._logger.info(
                "space_updated", space_id=str(space.id), actor_id=str(actor.id)
            )
        return saved

    async def _name_taken(
        self, owner_id: UUID, name: str, exclude: UUID | None = None
    ) -> bool:
        existing = await self._store.load_by_attributes(
            self.resource_type, owner_id=owner_id, name=name
        )
        return any(space.id != exclude for space in existing)
