"""Persistence adapters for the ResourceStore port."""

from tenantry.infrastructure.persistence.database import Database
from tenantry.infrastructure.persistence.in_memory_resource_store import (
    InMemoryResourceStore,
)
from tenantry.infrastructure.persistence.sql_resource_store import (
    SqlAlchemyResourceStore,
)

__all__ = ["Database", "InMemoryResourceStore", "SqlAlchemyResourceStore"]
