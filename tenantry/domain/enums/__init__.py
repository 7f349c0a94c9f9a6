"""Domain enums.

Available Enums:
    - ResourceType, Action, PermissionVariant: permission triples
    - UserRole: built-in role names
    - ApiKeyStatus, EmbedderProviderType, Modality: resource fields
"""

from tenantry.domain.enums.permission import Action, PermissionVariant, ResourceType
from tenantry.domain.enums.resource_status import (
    ApiKeyStatus,
    EmbedderProviderType,
    Modality,
)
from tenantry.domain.enums.user_role import UserRole

__all__ = [
    "Action",
    "ApiKeyStatus",
    "EmbedderProviderType",
    "Modality",
    "PermissionVariant",
    "ResourceType",
    "UserRole",
]
