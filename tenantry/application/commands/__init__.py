"""Write-side requests for resource services."""

from tenantry.application.commands.api_key_commands import CreateApiKey, UpdateApiKey
from tenantry.application.commands.embedder_commands import (
    CreateEmbedder,
    UpdateEmbedder,
)
from tenantry.application.commands.space_commands import CreateSpace, UpdateSpace

__all__ = [
    "CreateApiKey",
    "CreateEmbedder",
    "CreateSpace",
    "UpdateApiKey",
    "UpdateEmbedder",
    "UpdateSpace",
]
