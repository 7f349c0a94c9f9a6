"""Database models."""

from tenantry.infrastructure.persistence.models.api_key import ApiKeyModel
from tenantry.infrastructure.persistence.models.embedder import EmbedderModel
from tenantry.infrastructure.persistence.models.space import SpaceModel
from tenantry.infrastructure.persistence.models.user import UserModel

__all__ = ["ApiKeyModel", "EmbedderModel", "SpaceModel", "UserModel"]
