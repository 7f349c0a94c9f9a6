"""Shared plumbing for per-resource services.

Every id-addressed operation runs in the same order:

    1. Unauthenticated check
    2. Identifier format (ValidationError)
    3. Load (NotFoundError)
    4. Authorization guard against the loaded owner (AuthorizationError)
    5. Mutation and persistence

Existence is confirmed before permission, so an actor without access can
tell a missing resource from one it may not touch.

Store failures (``ResourceStoreError``) are logged with their cause and
returned as a generic ``InternalError``.
"""

from collections.abc import Awaitable, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, Generic, TypeVar
from uuid import UUID

from tenantry.application.queries import ListResources
from tenantry.application.services.authorization_guard import AuthorizationGuard
from tenantry.application.services.page_token import (
    decode_page_token,
    encode_page_token,
)
from tenantry.application.services.query_engine import QueryEngine
from tenantry.core.enums import ErrorCode
from tenantry.core.errors import (
    AuthenticationError,
    ConflictError,
    DomainError,
    InternalError,
    NotFoundError,
)
from tenantry.core.result import Failure, Result, Success
from tenantry.core.validation import parse_identifier, parse_optional_identifier
from tenantry.domain.entities import Actor, Resource
from tenantry.domain.enums import Action, ResourceType
from tenantry.domain.protocols import (
    Clock,
    LoggerProtocol,
    ResourceConflictError,
    ResourceStore,
    ResourceStoreError,
)
from tenantry.domain.value_objects import QueryResult, QuerySpec

R = TypeVar("R", bound=Resource)
T = TypeVar("T")


@dataclass(frozen=True, slots=True, kw_only=True)
class ListPage(Generic[R]):
    """One page of a listing.

    Attributes:
        items: Resources on this page.
        total_count: Matching resources across all pages.
        next_page_token: Token for the next page, None on the last page.
    """

    items: Sequence[R]
    total_count: int
    next_page_token: str | None = None


class ResourceService(Generic[R]):
    """Get and list for one resource type.

    Subclasses set ``resource_type``, ``entity_type`` and ``id_field`` and add
    create, update and delete entry points (``_delete`` does the work).
    """

    resource_type: ClassVar[ResourceType]
    entity_type: ClassVar[type[Resource]]
    id_field: ClassVar[str]

    def __init__(
        self,
        *,
        store: ResourceStore,
        guard: AuthorizationGuard,
        query_engine: QueryEngine,
        clock: Clock,
        logger: LoggerProtocol,
    ) -> None:
        self._store = store
        self._guard = guard
        self._query_engine = query_engine
        self._clock = clock
        self._logger = logger.bind(resource_type=self.resource_type.value)

    async def authorize_and_get(
        self, actor: Actor | None, resource_id: Any
    ) -> Result[R, DomainError]:
        """Return a resource the actor may read."""
        return await self._run(
            "get", self._load_authorized(actor, Action.READ, resource_id)
        )

    async def authorize_and_list(
        self, actor: Actor | None, query: ListResources
    ) -> Result[ListPage[R], DomainError]:
        """List resources visible to the actor."""
        return await self._run("list", self._list(actor, query))

    async def _run(
        self, operation: str, work: Awaitable[Result[T, DomainError]]
    ) -> Result[T, DomainError]:
        try:
            return await work
        except ResourceConflictError as e:
            # A concurrent writer won the uniqueness race.
            self._logger.warning(
                "resource_store_conflict", error_message=str(e), operation=operation
            )
            return self._conflict(
                f"{self.entity_type.__name__} conflicts with an existing one", "unique"
            )
        except ResourceStoreError as e:
            self._logger.error("resource_store_failed", error=e, operation=operation)
            return Failure(
                error=InternalError(
                    code=ErrorCode.STORE_OPERATION_FAILED,
                    message=f"Failed to {operation} {self.resource_type.value}",
                )
            )

    async def _load_authorized(
        self, actor: Actor | None, action: Action, resource_id: Any
    ) -> Result[R, DomainError]:
        if actor is None:
            return self._unauthenticated()

        parsed = parse_identifier(resource_id, self.id_field)
        if isinstance(parsed, Failure):
            return parsed

        resource = await self._store.load_by_id(self.resource_type, parsed.value)
        if resource is None:
            return self._not_found(parsed.value)

        decision = self._guard.authorize(
            actor, action, self.resource_type, resource.owner_id
        )
        if isinstance(decision, Failure):
            return decision
        return Success(value=resource)  # type: ignore[arg-type]

    async def _delete(
        self, actor: Actor | None, resource_id: Any
    ) -> Result[None, DomainError]:
        loaded = await self._load_authorized(actor, Action.DELETE, resource_id)
        if isinstance(loaded, Failure):
            return loaded

        resource = loaded.value
        rows = await self._store.delete(self.resource_type, resource.id)
        if rows == 0:
            # Removed concurrently between load and delete.
            return self._not_found(resource.id)

        self._logger.info(
            f"{self.resource_type.value}_deleted",
            resource_id=str(resource.id),
            actor_id=str(actor.id) if actor else None,
        )
        return Success(value=None)

    async def _save(self, resource: R) -> Result[R, DomainError]:
        rows = await self._store.upsert(self.resource_type, resource)
        if rows == 0:
            return self._not_found(resource.id)
        return Success(value=resource)

    def _conflict(self, message: str, conflicting_field: str) -> Failure[DomainError]:
        return Failure(
            error=ConflictError(
                code=ErrorCode.RESOURCE_ALREADY_EXISTS,
                message=message,
                resource_type=self.resource_type.value,
                conflicting_field=conflicting_field,
            )
        )

    async def _list(
        self, actor: Actor | None, query: ListResources
    ) -> Result[ListPage[R], DomainError]:
        if actor is None:
            return self._unauthenticated()

        if query.page_token:
            decoded = decode_page_token(query.page_token, actor.id)
            if isinstance(decoded, Failure):
                return decoded
            spec = decoded.value
        else:
            owner = parse_optional_identifier(query.owner_id, "owner_id")
            if isinstance(owner, Failure):
                return owner
            spec = QuerySpec(
                owner_filter=owner.value,
                label_selectors=dict(query.label_selectors),
                name_pattern=query.name_pattern,
                attribute_filters=dict(query.filters),
                sort_by=query.sort_by,
                sort_ascending=query.sort_ascending,
                offset=query.offset,
                limit=query.limit,
                include_public=query.include_public,
            )

        visibility = self._guard.visibility(
            actor, self.resource_type, spec.owner_filter, spec.include_public
        )
        if isinstance(visibility, Failure):
            return visibility

        plan = self._query_engine.build(spec, visibility.value, self.resource_type)
        if isinstance(plan, Failure):
            return plan

        items, total_count = await self._store.load_by_filter(
            self.resource_type, plan.value
        )
        result: QueryResult[R] = QueryResult(items=items, total_count=total_count)  # type: ignore[arg-type]
        next_offset = result.next_offset(plan.value.offset, plan.value.limit)
        next_page_token = None
        if next_offset is not None:
            next_page_token = encode_page_token(
                actor.id, spec, offset=next_offset, limit=plan.value.limit
            )

        return Success(
            value=ListPage(
                items=result.items,
                total_count=result.total_count,
                next_page_token=next_page_token,
            )
        )

    def _not_found(self, resource_id: UUID) -> Failure[DomainError]:
        return Failure(
            error=NotFoundError(
                code=ErrorCode.RESOURCE_NOT_FOUND,
                message=f"{self.entity_type.__name__} not found",
                resource_type=self.resource_type.value,
                resource_id=str(resource_id),
            )
        )

    @staticmethod
    def _unauthenticated() -> Failure[DomainError]:
        return Failure(
            error=AuthenticationError(
                code=ErrorCode.ACTOR_NOT_AUTHENTICATED,
                message="Authentication required",
            )
        )
