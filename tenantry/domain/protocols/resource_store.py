"""ResourceStore protocol for resource persistence.

Port (interface) for hexagonal architecture. The core hands the store fully
validated query plans; the store is responsible for executing them
efficiently.

This is a Protocol (not ABC) for structural typing. Implementations don't
need to inherit from it.

Failures of the backing store surface as ``ResourceStoreError``; services
convert them into ``InternalError`` results.
"""

from typing import Any, Protocol
from uuid import UUID

from tenantry.domain.entities.resource import Resource
from tenantry.domain.enums import ResourceType
from tenantry.domain.value_objects.query import QueryPlan


class ResourceStoreError(Exception):
    """The backing store failed to complete an operation."""


class ResourceConflictError(ResourceStoreError):
    """A write violated a uniqueness constraint enforced by the store."""


class ResourceStore(Protocol):
    """Resource store protocol (port).

    Methods:
        load_by_id: Retrieve one resource
        load_by_owner: Retrieve every resource of a type owned by a user
        load_by_attributes: Retrieve resources matching exact field values
        load_by_filter: Execute a query plan
        upsert: Create or update a resource
        delete: Remove a resource
    """

    async def load_by_id(
        self, resource_type: ResourceType, resource_id: UUID
    ) -> Resource | None:
        """Find a resource by id.

        Returns:
            The resource, or None when absent.

        Raises:
            ResourceStoreError: Store failure.
        """
        ...

    async def load_by_owner(
        self, resource_type: ResourceType, owner_id: UUID
    ) -> list[Resource]: ...

    async def load_by_attributes(
        self, resource_type: ResourceType, **attributes: Any
    ) -> list[Resource]:
        """Find resources whose fields equal every given value.

        Used for uniqueness checks (name per owner, email, embedder
        connection details).
        """
        ...

    async def load_by_filter(
        self, resource_type: ResourceType, plan: QueryPlan
    ) -> tuple[list[Resource], int]:
        """Execute a query plan.

        Returns:
            The page of resources and the total count before pagination.
        """
        ...

    async def upsert(self, resource_type: ResourceType, resource: Resource) -> int:
        """Create or update a resource.

        Returns:
            Rows affected.
        """
        ...

    async def delete(self, resource_type: ResourceType, resource_id: UUID) -> int:
        """Delete a resource.

        Returns:
            Rows affected (0 when the resource was already gone).
        """
        ...
