"""Base resource entity.

Every resource has one owner, a label map and audit fields. ``owner_id`` is
set at creation and never changes.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar
from uuid import UUID

from tenantry.domain.enums import ResourceType


@dataclass(kw_only=True)
class Resource:
    """Fields shared by every resource type.

    Attributes:
        id: Resource identifier.
        owner_id: Owning user id.
        labels: User-defined string metadata, keys unique.
        created_at: Creation timestamp (UTC).
        updated_at: Last modification timestamp (UTC).
        created_by_id: Actor that created the resource.
        updated_by_id: Actor that last modified the resource.
    """

    RESOURCE_TYPE: ClassVar[ResourceType]

    id: UUID
    owner_id: UUID
    created_at: datetime
    updated_at: datetime
    labels: dict[str, str] = field(default_factory=dict)
    created_by_id: UUID | None = None
    updated_by_id: UUID | None = None

    def __post_init__(self) -> None:
        for key, value in self.labels.items():
            if not isinstance(key, str) or not key or not isinstance(value, str):
                raise ValueError(f"Invalid label {key!r}={value!r}")

    @property
    def resource_type(self) -> ResourceType:
        return self.RESOURCE_TYPE

    @property
    def is_public(self) -> bool:
        """Whether actors restricted to their own resources may still see it."""
        return False

    def touch(self, actor_id: UUID, now: datetime) -> None:
        """Record a modification by ``actor_id`` at ``now``."""
        self.updated_by_id = actor_id
        self.updated_at = now
