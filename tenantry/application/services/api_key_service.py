"""API key service.

The raw key exists only in the creation result. Stored keys carry the
display prefix and the SHA3-256 hash of the key.
"""

from dataclasses import dataclass, field
from typing import Any

from uuid_extensions import uuid7

from tenantry.application.commands import CreateApiKey, UpdateApiKey
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
from tenantry.core.validation import validate_labels
from tenantry.domain.entities import Actor, ApiKey
from tenantry.domain.enums import Action, ApiKeyStatus, ResourceType
from tenantry.domain.protocols import Clock, LoggerProtocol, ResourceStore
from tenantry.infrastructure.security.secret_codec import SecretCodec


@dataclass(frozen=True, slots=True, kw_only=True)
class CreatedApiKey:
    """Creation result.

    Attributes:
        api_key: Stored key record.
        raw_secret: Full key, shown to the caller once.
    """

    api_key: ApiKey
    raw_secret: str = field(repr=False)


class ApiKeyService(ResourceService[ApiKey]):
    """Authorized operations on API keys."""

    resource_type = ResourceType.APIKEY
    entity_type = ApiKey
    id_field = "api_key_id"

    def __init__(
        self,
        *,
        store: ResourceStore,
        guard: AuthorizationGuard,
        query_engine: QueryEngine,
        clock: Clock,
        logger: LoggerProtocol,
        codec: SecretCodec,
    ) -> None:
        super().__init__(
            store=store,
            guard=guard,
            query_engine=query_engine,
            clock=clock,
            logger=logger,
        )
        self._codec = codec

    async def authorize_and_create(
        self, actor: Actor | None, command: CreateApiKey
    ) -> Result[CreatedApiKey, DomainError]:
        """Create an API key.

        Returns:
            Success(CreatedApiKey) holding the raw key, or Failure with
            AuthenticationError, ValidationError, AuthorizationError or
            InternalError.
        """
        return await self._run("create", self._create(actor, command))

    async def authorize_and_update(
        self, actor: Actor | None, command: UpdateApiKey
    ) -> Result[ApiKey, DomainError]:
        """Update an API key's labels or status."""
        return await self._run("update", self._update(actor, command))

    async def authorize_and_delete(
        self, actor: Actor | None, api_key_id: Any
    ) -> Result[None, DomainError]:
        """Delete (revoke) an API key."""
        return await self._run("delete", self._delete(actor, api_key_id))

    async def _create(
        self, actor: Actor | None, command: CreateApiKey
    ) -> Result[CreatedApiKey, DomainError]:
        if actor is None:
            return self._unauthenticated()

        owner = self._guard.authorize_create(actor, self.resource_type, command.owner_id)
        if isinstance(owner, Failure):
            return owner

        labels = validate_labels(command.labels, "labels")
        if isinstance(labels, Failure):
            return labels

        now = self._clock.now()
        if command.expires_at is not None and (
            command.expires_at.tzinfo is None or command.expires_at <= now
        ):
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message="expires_at must be a timezone-aware time in the future",
                    field="expires_at",
                )
            )

        credential = self._codec.generate()
        api_key = ApiKey(
            id=uuid7(),
            owner_id=owner.value,
            key_prefix=credential.display_prefix,
            key_hash=credential.secret_hash,
            status=ApiKeyStatus.ACTIVE,
            expires_at=command.expires_at,
            labels=labels.value,
            created_at=now,
            updated_at=now,
            created_by_id=actor.id,
            updated_by_id=actor.id,
        )
        saved = await self._save(api_key)
        if isinstance(saved, Failure):
            return saved

        self._logger.info(
            "apikey_created",
            api_key_id=str(api_key.id),
            key_prefix=api_key.key_prefix,
            owner_id=str(api_key.owner_id),
            actor_id=str(actor.id),
        )
        return Success(
            value=CreatedApiKey(api_key=api_key, raw_secret=credential.raw_secret)
        )

    async def _update(
        self, actor: Actor | None, command: UpdateApiKey
    ) -> Result[ApiKey, DomainError]:
        if actor is None:
            return self._unauthenticated()

        strategy = label_strategy_from_request(
            replace=command.replace_labels, merge=command.merge_labels
        )
        if isinstance(strategy, Failure):
            return strategy

        loaded = await self._load_authorized(actor, Action.UPDATE, command.api_key_id)
        if isinstance(loaded, Failure):
            return loaded
        api_key = loaded.value

        api_key.labels = merge_labels(api_key.labels, strategy.value)
        if command.status is not None:
            api_key.status = command.status
        api_key.touch(actor.id, self._clock.now())

        saved = await self._save(api_key)
        if isinstance(saved, Success):
            self._logger.info(
                "apikey_updated",
                api_key_id=str(api_key.id),
                status=api_key.status.value,
                actor_id=str(actor.id),
            )
        return saved
