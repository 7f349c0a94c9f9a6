"""Domain entities."""

from tenantry.domain.entities.actor import Actor
from tenantry.domain.entities.api_key import ApiKey
from tenantry.domain.entities.embedder import DEFAULT_API_PATH, Embedder
from tenantry.domain.entities.resource import Resource
from tenantry.domain.entities.space import Space
from tenantry.domain.entities.user import User

__all__ = [
    "Actor",
    "ApiKey",
    "DEFAULT_API_PATH",
    "Embedder",
    "Resource",
    "Space",
    "User",
]
