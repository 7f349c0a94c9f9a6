"""Domain protocols (ports)."""

from tenantry.domain.protocols.actor_resolver import ActorResolver
from tenantry.domain.protocols.logger_protocol import LoggerProtocol
from tenantry.domain.protocols.resource_store import (
    ResourceConflictError,
    ResourceStore,
    ResourceStoreError,
)
from tenantry.domain.protocols.system_protocols import Clock, RandomSource

__all__ = [
    "ActorResolver",
    "Clock",
    "LoggerProtocol",
    "RandomSource",
    "ResourceConflictError",
    "ResourceStore",
    "ResourceStoreError",
]
