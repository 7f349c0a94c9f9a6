"""API key entity.

Only the display prefix and the hash of the key are stored; the raw key is
shown once at creation.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

from tenantry.domain.entities.resource import Resource
from tenantry.domain.enums import ApiKeyStatus, ResourceType


@dataclass(kw_only=True)
class ApiKey(Resource):
    """API key owned by a user.

    Attributes:
        key_prefix: Leading characters of the raw key.
        key_hash: Hex digest of the raw key.
        status: ACTIVE keys authenticate, INACTIVE keys do not.
        expires_at: Optional expiry (UTC).
        last_used_at: Last successful authentication (UTC).
    """

    RESOURCE_TYPE: ClassVar[ResourceType] = ResourceType.APIKEY

    key_prefix: str
    key_hash: str
    status: ApiKeyStatus = ApiKeyStatus.ACTIVE
    expires_at: datetime | None = None
    last_used_at: datetime | None = None

    def __post_init__(self) -> None:
        super().__post_init__()
        if not self.key_hash:
            raise ValueError("API key hash cannot be empty")

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at is not None and self.expires_at <= now

    def is_usable(self, now: datetime) -> bool:
        """Whether the key may authenticate at ``now``."""
        return self.status is ApiKeyStatus.ACTIVE and not self.is_expired(now)

    def record_use(self, now: datetime) -> None:
        self.last_used_at = now
