"""API key commands."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from tenantry.domain.enums import ApiKeyStatus


@dataclass(frozen=True, kw_only=True)
class CreateApiKey:
    """Create an API key.

    Attributes:
        owner_id: User the key authenticates as; defaults to the actor.
        labels: Initial labels.
        expires_at: Optional expiry, must be in the future.
    """

    owner_id: Any = None
    labels: Mapping[str, str] = field(default_factory=dict)
    expires_at: datetime | None = None


@dataclass(frozen=True, kw_only=True)
class UpdateApiKey:
    """Update an API key's labels or status."""

    api_key_id: Any
    replace_labels: Mapping[str, str] | None = None
    merge_labels: Mapping[str, str] | None = None
    status: ApiKeyStatus | None = None
