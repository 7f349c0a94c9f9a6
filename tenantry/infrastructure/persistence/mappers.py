"""Entity <-> model mapping.

One mapper per resource type. Enums are stored as their string values;
timestamps read back without a zone (SQLite) are treated as UTC.
"""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from tenantry.domain.entities import ApiKey, Embedder, Resource, Space, User
from tenantry.domain.enums import (
    ApiKeyStatus,
    EmbedderProviderType,
    Modality,
    ResourceType,
)
from tenantry.infrastructure.persistence.base import ResourceModel
from tenantry.infrastructure.persistence.models import (
    ApiKeyModel,
    EmbedderModel,
    SpaceModel,
    UserModel,
)

SHARED_COLUMNS = (
    "id",
    "owner_id",
    "created_at",
    "updated_at",
    "created_by_id",
    "updated_by_id",
)


def as_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=UTC)


def column_value(value: Any) -> Any:
    """Convert a domain value into its column representation."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, list):
        return [column_value(item) for item in value]
    if isinstance(value, dict):
        return dict(value)
    return value


@dataclass(frozen=True, slots=True)
class ResourceMapper:
    """Maps one resource type between entity and model.

    Attributes:
        model: SQLAlchemy model class.
        columns: Type-specific columns copied to and from the entity.
        to_domain: Builds the entity from a model instance.
    """

    model: type[ResourceModel]
    columns: tuple[str, ...]
    to_domain: Callable[[Any], Resource]

    def values(self, resource: Resource) -> dict[str, Any]:
        """Column values for ``resource``."""
        values = {name: getattr(resource, name) for name in SHARED_COLUMNS}
        values["labels"] = dict(resource.labels)
        for name in self.columns:
            values[name] = column_value(getattr(resource, name))
        return values


def _shared(model: ResourceModel) -> dict[str, Any]:
    return {
        "id": model.id,
        "owner_id": model.owner_id,
        "labels": dict(model.labels or {}),
        "created_at": as_utc(model.created_at),
        "updated_at": as_utc(model.updated_at),
        "created_by_id": model.created_by_id,
        "updated_by_id": model.updated_by_id,
    }


def _user(model: UserModel) -> User:
    return User(
        **_shared(model),
        email=model.email,
        username=model.username,
        display_name=model.display_name,
        roles=list(model.roles or []),
    )


def _space(model: SpaceModel) -> Space:
    return Space(
        **_shared(model),
        name=model.name,
        embedder_id=model.embedder_id,
        public_read=model.public_read,
    )


def _api_key(model: ApiKeyModel) -> ApiKey:
    return ApiKey(
        **_shared(model),
        key_prefix=model.key_prefix,
        key_hash=model.key_hash,
        status=ApiKeyStatus(model.status),
        expires_at=as_utc(model.expires_at),
        last_used_at=as_utc(model.last_used_at),
    )


def _embedder(model: EmbedderModel) -> Embedder:
    return Embedder(
        **_shared(model),
        display_name=model.display_name,
        description=model.description,
        provider_type=EmbedderProviderType(model.provider_type),
        endpoint_url=model.endpoint_url,
        api_path=model.api_path,
        model_identifier=model.model_identifier,
        dimensionality=model.dimensionality,
        max_sequence_length=model.max_sequence_length,
        supported_modalities=[Modality(m) for m in model.supported_modalities or []],
        credentials=model.credentials,
        version=model.version,
        monitoring_endpoint=model.monitoring_endpoint,
    )


MAPPERS: dict[ResourceType, ResourceMapper] = {
    ResourceType.USER: ResourceMapper(
        model=UserModel,
        columns=("email", "username", "display_name", "roles"),
        to_domain=_user,
    ),
    ResourceType.SPACE: ResourceMapper(
        model=SpaceModel,
        columns=("name", "embedder_id", "public_read"),
        to_domain=_space,
    ),
    ResourceType.APIKEY: ResourceMapper(
        model=ApiKeyModel,
        columns=("key_prefix", "key_hash", "status", "expires_at", "last_used_at"),
        to_domain=_api_key,
    ),
    ResourceType.EMBEDDER: ResourceMapper(
        model=EmbedderModel,
        columns=(
            "display_name",
            "description",
            "provider_type",
            "endpoint_url",
            "api_path",
            "model_identifier",
            "dimensionality",
            "max_sequence_length",
            "supported_modalities",
            "credentials",
            "version",
            "monitoring_endpoint",
        ),
        to_domain=_embedder,
    ),
}
