"""Application services."""

from tenantry.application.services.api_key_service import (
    ApiKeyService,
    CreatedApiKey,
)
from tenantry.application.services.authorization_guard import (
    AuthorizationGuard,
    Grant,
)
from tenantry.application.services.embedder_service import EmbedderService
from tenantry.application.services.label_merger import (
    label_strategy_from_request,
    merge_labels,
)
from tenantry.application.services.ownership_resolver import OwnershipResolver
from tenantry.application.services.page_token import (
    decode_page_token,
    encode_page_token,
)
from tenantry.application.services.query_engine import QueryEngine
from tenantry.application.services.resource_service import ListPage, ResourceService
from tenantry.application.services.space_service import SpaceService
from tenantry.application.services.system_service import (
    SystemInitResult,
    SystemService,
)
from tenantry.application.services.user_service import UserService

__all__ = [
    "ApiKeyService",
    "AuthorizationGuard",
    "CreatedApiKey",
    "EmbedderService",
    "Grant",
    "ListPage",
    "OwnershipResolver",
    "QueryEngine",
    "ResourceService",
    "SpaceService",
    "SystemInitResult",
    "SystemService",
    "UserService",
    "decode_page_token",
    "encode_page_token",
    "label_strategy_from_request",
    "merge_labels",
]
