"""InMemoryResourceStore - dict-backed implementation of ResourceStore.

Used by tests and single-process tooling. Entities are deep-copied on the
way in and out, so callers never share state with the store. Unique keys
mirror the database constraints, including NULLs never colliding.
"""

from collections import defaultdict
from collections.abc import Callable
from copy import deepcopy
from typing import Any
from uuid import UUID

from tenantry.application.services.query_engine import QueryEngine
from tenantry.domain.entities import Resource
from tenantry.domain.enums import ResourceType
from tenantry.domain.protocols import ResourceConflictError
from tenantry.domain.value_objects import QueryPlan

type UniqueKey = Callable[[Any], tuple[Any, ...]]

UNIQUE_KEYS: dict[ResourceType, tuple[UniqueKey, ...]] = {
    ResourceType.USER: (
        lambda user: ("email", user.email),
        lambda user: ("username", user.username),
    ),
    ResourceType.SPACE: (lambda space: (space.owner_id, space.name),),
    ResourceType.APIKEY: (lambda api_key: (api_key.key_hash,),),
    ResourceType.EMBEDDER: (lambda embedder: embedder.connection_key,),
}


class InMemoryResourceStore:
    """In-memory implementation of the ResourceStore protocol.

    This class does NOT inherit from the protocol (structural typing).
    """

    def __init__(self) -> None:
        self._resources: dict[ResourceType, dict[UUID, Resource]] = defaultdict(dict)
        self._engine = QueryEngine()

    async def load_by_id(
        self, resource_type: ResourceType, resource_id: UUID
    ) -> Resource | None:
        resource = self._resources[resource_type].get(resource_id)
        return deepcopy(resource) if resource is not None else None

    async def load_by_owner(
        self, resource_type: ResourceType, owner_id: UUID
    ) -> list[Resource]:
        matches = [
            r for r in self._resources[resource_type].values() if r.owner_id == owner_id
        ]
        matches.sort(key=lambda r: (r.created_at, r.id), reverse=True)
        return deepcopy(matches)

    async def load_by_attributes(
        self, resource_type: ResourceType, **attributes: Any
    ) -> list[Resource]:
        return deepcopy(
            [
                r
                for r in self._resources[resource_type].values()
                if all(getattr(r, name) == value for name, value in attributes.items())
            ]
        )

    async def load_by_filter(
        self, resource_type: ResourceType, plan: QueryPlan
    ) -> tuple[list[Resource], int]:
        result = self._engine.execute(plan, self._resources[resource_type].values())
        return deepcopy(list(result.items)), result.total_count

    async def upsert(self, resource_type: ResourceType, resource: Resource) -> int:
        """Create or update a resource.

        Raises:
            ResourceConflictError: Another resource holds one of its unique keys.
        """
        for unique_key in UNIQUE_KEYS[resource_type]:
            key = unique_key(resource)
            if None in key:
                continue
            for other in self._resources[resource_type].values():
                if other.id != resource.id and unique_key(other) == key:
                    raise ResourceConflictError(
                        f"Unique constraint violated for {resource_type.value}"
                    )
        self._resources[resource_type][resource.id] = deepcopy(resource)
        return 1

    async def delete(self, resource_type: ResourceType, resource_id: UUID) -> int:
        removed = self._resources[resource_type].pop(resource_id, None)
        return 0 if removed is None else 1
