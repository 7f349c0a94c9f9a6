"""Embedder service.

Business Rules:
    - endpoint_url + api_path + model_identifier is unique across embedders
    - dimensionality and max_sequence_length must be positive
    - credentials are required and never logged
    - MANAGE on embedders bypasses ownership checks
"""

from collections.abc import Sequence
from typing import Any
from uuid import UUID

from uuid_extensions import uuid7

from tenantry.application.commands import CreateEmbedder, UpdateEmbedder
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
    validate_labels,
    validate_not_empty,
    validate_positive,
)
from tenantry.domain.entities import DEFAULT_API_PATH, Actor, Embedder
from tenantry.domain.enums import (
    Action,
    EmbedderProviderType,
    Modality,
    ResourceType,
)
from tenantry.domain.protocols import Clock, LoggerProtocol, ResourceStore

CONNECTION_FIELDS = "endpoint_url,api_path,model_identifier"


class EmbedderService(ResourceService[Embedder]):
    """Authorized operations on embedders."""

    resource_type = ResourceType.EMBEDDER
    entity_type = Embedder
    id_field = "embedder_id"

    def __init__(
        self,
        *,
        store: ResourceStore,
        guard: AuthorizationGuard,
        query_engine: QueryEngine,
        clock: Clock,
        logger: LoggerProtocol,
        default_api_path: str = DEFAULT_API_PATH,
    ) -> None:
        super().__init__(
            store=store,
            guard=guard,
            query_engine=query_engine,
            clock=clock,
            logger=logger,
        )
        self._default_api_path = default_api_path

    async def authorize_and_create(
        self, actor: Actor | None, command: CreateEmbedder
    ) -> Result[Embedder, DomainError]:
        """Register an embedder.

        Returns:
            Success(Embedder), or Failure with AuthenticationError,
            ValidationError, AuthorizationError, ConflictError (connection
            details already registered) or InternalError.
        """
        return await self._run("create", self._create(actor, command))

    async def authorize_and_update(
        self, actor: Actor | None, command: UpdateEmbedder
    ) -> Result[Embedder, DomainError]:
        return await self._run("update", self._update(actor, command))

    async def authorize_and_delete(
        self, actor: Actor | None, embedder_id: Any
    ) -> Result[None, DomainError]:
        return await self._run("delete", self._delete(actor, embedder_id))

    async def _create(
        self, actor: Actor | None, command: CreateEmbedder
    ) -> Result[Embedder, DomainError]:
        if actor is None:
            return self._unauthenticated()

        owner = self._guard.authorize_create(actor, self.resource_type, command.owner_id)
        if isinstance(owner, Failure):
            return owner

        required: dict[str, str] = {}
        for field_name in (
            "display_name",
            "endpoint_url",
            "model_identifier",
            "credentials",
        ):
            checked = validate_not_empty(getattr(command, field_name), field_name)
            if isinstance(checked, Failure):
                return checked
            required[field_name] = checked.value

        dimensionality = validate_positive(command.dimensionality, "dimensionality")
        if isinstance(dimensionality, Failure):
            return dimensionality

        if command.max_sequence_length is not None:
            max_length = validate_positive(
                command.max_sequence_length, "max_sequence_length"
            )
            if isinstance(max_length, Failure):
                return max_length

        labels = validate_labels(command.labels, "labels")
        if isinstance(labels, Failure):
            return labels

        try:
            provider_type = EmbedderProviderType(command.provider_type)
        except ValueError:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=f"Unsupported provider type: {command.provider_type}",
                    field="provider_type",
                )
            )

        modalities = _modalities(command.supported_modalities or [Modality.TEXT])
        if isinstance(modalities, Failure):
            return modalities

        api_path = (command.api_path or "").strip() or self._default_api_path
        endpoint_url = required["endpoint_url"].rstrip("/")

        if await self._connection_taken(
            endpoint_url, api_path, required["model_identifier"]
        ):
            return self._conflict(
                "An embedder with this endpoint, path and model already exists",
                CONNECTION_FIELDS,
            )

        now = self._clock.now()
        embedder = Embedder(
            id=uuid7(),
            owner_id=owner.value,
            display_name=required["display_name"],
            description=command.description,
            provider_type=provider_type,
            endpoint_url=endpoint_url,
            api_path=api_path,
            model_identifier=required["model_identifier"],
            dimensionality=dimensionality.value,
            max_sequence_length=command.max_sequence_length,
            supported_modalities=modalities.value,
            credentials=required["credentials"],
            labels=labels.value,
            version=command.version,
            monitoring_endpoint=command.monitoring_endpoint,
            created_at=now,
            updated_at=now,
            created_by_id=actor.id,
            updated_by_id=actor.id,
        )
        saved = await self._save(embedder)
        if isinstance(saved, Success):
            self._logger.info(
                "embedder_created",
                embedder_id=str(embedder.id),
                provider_type=embedder.provider_type.value,
                model_identifier=embedder.model_identifier,
                actor_id=str(actor.id),
            )
        return saved

    async def _update(
        self, actor: Actor | None, command: UpdateEmbedder
    ) -> Result[Embedder, DomainError]:
        if actor is None:
            return self._unauthenticated()

        strategy = label_strategy_from_request(
            replace=command.replace_labels, merge=command.merge_labels
        )
        if isinstance(strategy, Failure):
            return strategy

        changes: dict[str, Any] = {}
        for field_name in (
            "display_name",
            "endpoint_url",
            "api_path",
            "model_identifier",
            "credentials",
        ):
            value = getattr(command, field_name)
            if value is None:
                continue
            checked = validate_not_empty(value, field_name)
            if isinstance(checked, Failure):
                return checked
            changes[field_name] = checked.value
        if "endpoint_url" in changes:
            changes["endpoint_url"] = changes["endpoint_url"].rstrip("/")

        for field_name in ("dimensionality", "max_sequence_length"):
            value = getattr(command, field_name)
            if value is None:
                continue
            checked = validate_positive(value, field_name)
            if isinstance(checked, Failure):
                return checked
            changes[field_name] = checked.value

        if command.supported_modalities is not None:
            modalities = _modalities(command.supported_modalities)
            if isinstance(modalities, Failure):
                return modalities
            changes["supported_modalities"] = modalities.value

        for field_name in ("description", "version", "monitoring_endpoint"):
            value = getattr(command, field_name)
            if value is not None:
                changes[field_name] = value

        loaded = await self._load_authorized(actor, Action.UPDATE, command.embedder_id)
        if isinstance(loaded, Failure):
            return loaded
        embedder = loaded.value

        connection_key = (
            changes.get("endpoint_url", embedder.endpoint_url),
            changes.get("api_path", embedder.api_path),
            changes.get("model_identifier", embedder.model_identifier),
        )
        if connection_key != embedder.connection_key and await self._connection_taken(
            *connection_key, exclude=embedder.id
        ):
            return self._conflict(
                "An embedder with this endpoint, path and model already exists",
                CONNECTION_FIELDS,
            )

        for field_name, value in changes.items():
            setattr(embedder, field_name, value)
        embedder.labels = merge_labels(embedder.labels, strategy.value)
        embedder.touch(actor.id, self._clock.now())

        saved = await self._save(embedder)
        if isinstance(saved, Success):
            self._logger.info(
                "embedder_updated",
                embedder_id=str(embedder.id),
                changed_fields=sorted(f for f in changes if f != "credentials"),
                actor_id=str(actor.id),
            )
        return saved

    async def _connection_taken(
        self,
        endpoint_url: str,
        api_path: str,
        model_identifier: str,
        exclude: UUID | None = None,
    ) -> bool:
        existing = await self._store.load_by_attributes(
            self.resource_type,
            endpoint_url=endpoint_url,
            api_path=api_path,
            model_identifier=model_identifier,
        )
        return any(embedder.id != exclude for embedder in existing)


def _modalities(values: Sequence[Any]) -> Result[list[Modality], ValidationError]:
    """Parse modalities, dropping duplicates and keeping order."""
    parsed: list[Modality] = []
    for value in values:
        try:
            modality = Modality(value)
        except ValueError:
            return Failure(
                error=ValidationError(
                    code=ErrorCode.VALIDATION_FAILED,
                    message=f"Unsupported modality: {value}",
                    field="supported_modalities",
                )
            )
        if modality not in parsed:
            parsed.append(modality)
    if not parsed:
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message="At least one modality is required",
                field="supported_modalities",
            )
        )
    return Success(value=parsed)
