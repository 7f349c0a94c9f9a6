"""SqlAlchemyResourceStore - SQLAlchemy implementation of ResourceStore.

Adapter for hexagonal architecture. Translates query plans into SELECT
statements:

    - owner filter and attribute filters: equality predicates
    - name pattern: ILIKE with the glob translated to a LIKE pattern and an
      explicit ESCAPE character
    - label selectors: one JSON path equality per selector
    - visibility: owner predicate, OR'ed with public_read when allowed
    - total count: COUNT(*) over the filtered statement as a subquery
    - ordering: allowlisted column, then id, same direction

Writes are flushed, not committed; the session owner (``Database.get_session``)
commits or rolls back the unit of work.
"""

from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, or_, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tenantry.domain.entities import Resource
from tenantry.domain.enums import ResourceType
from tenantry.domain.protocols import ResourceConflictError, ResourceStoreError
from tenantry.domain.value_objects import LIKE_ESCAPE, QueryPlan
from tenantry.infrastructure.persistence.mappers import MAPPERS, column_value


class SqlAlchemyResourceStore:
    """SQLAlchemy implementation of the ResourceStore protocol.

    This class does NOT inherit from the protocol (structural typing).

    Attributes:
        session: SQLAlchemy async session for database operations.

    Example:
        >>> async with database.get_session() as session:
        ...     store = SqlAlchemyResourceStore(session)
        ...     space = await store.load_by_id(ResourceType.SPACE, space_id)
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def load_by_id(
        self, resource_type: ResourceType, resource_id: UUID
    ) -> Resource | None:
        mapper = MAPPERS[resource_type]
        stmt = select(mapper.model).where(mapper.model.id == resource_id)
        model = await self._scalar_one_or_none(stmt)
        if model is None:
            return None
        return mapper.to_domain(model)

    async def load_by_owner(
        self, resource_type: ResourceType, owner_id: UUID
    ) -> list[Resource]:
        mapper = MAPPERS[resource_type]
        stmt = (
            select(mapper.model)
            .where(mapper.model.owner_id == owner_id)
            .order_by(mapper.model.created_at.desc(), mapper.model.id.desc())
        )
        return [mapper.to_domain(model) for model in await self._scalars(stmt)]

    async def load_by_attributes(
        self, resource_type: ResourceType, **attributes: Any
    ) -> list[Resource]:
        mapper = MAPPERS[resource_type]
        stmt = select(mapper.model).where(
            *(
                getattr(mapper.model, name) == column_value(value)
                for name, value in attributes.items()
            )
        )
        return [mapper.to_domain(model) for model in await self._scalars(stmt)]

    async def load_by_filter(
        self, resource_type: ResourceType, plan: QueryPlan
    ) -> tuple[list[Resource], int]:
        """Execute a query plan.

        Returns:
            The page of resources and the pre-pagination total.

        Raises:
            ResourceStoreError: Database failure.
        """
        mapper = MAPPERS[resource_type]
        model = mapper.model
        stmt = select(model)

        if plan.owner_filter is not None:
            stmt = stmt.where(model.owner_id == plan.owner_filter)

        for name, value in plan.attribute_filters.items():
            stmt = stmt.where(getattr(model, name) == value)

        if plan.name_field is not None and plan.like_pattern is not None:
            stmt = stmt.where(
                getattr(model, plan.name_field).ilike(
                    plan.like_pattern, escape=LIKE_ESCAPE
                )
            )

        for key, value in plan.label_selectors.items():
            stmt = stmt.where(model.labels[key].as_string() == value)

        visibility = plan.visibility
        if not visibility.is_unrestricted:
            visible = model.owner_id == visibility.restricted_to
            if visibility.allow_public and hasattr(model, "public_read"):
                visible = or_(visible, model.public_read.is_(True))
            stmt = stmt.where(visible)

        count_stmt = select(func.count()).select_from(stmt.subquery())

        column = getattr(model, plan.sort_field)
        if plan.sort_ascending:
            stmt = stmt.order_by(column.asc().nulls_last(), model.id.asc())
        else:
            stmt = stmt.order_by(column.desc().nulls_first(), model.id.desc())
        stmt = stmt.offset(plan.offset).limit(plan.limit)

        try:
            total_count = (await self.session.execute(count_stmt)).scalar_one()
            models = (await self.session.execute(stmt)).scalars().all()
        except SQLAlchemyError as e:
            raise ResourceStoreError(f"Failed to list {resource_type.value}") from e
        return [mapper.to_domain(m) for m in models], total_count

    async def upsert(self, resource_type: ResourceType, resource: Resource) -> int:
        """Create or update a resource.

        Returns:
            Rows affected (always 1 on success).

        Raises:
            ResourceConflictError: A unique constraint was violated.
            ResourceStoreError: Other database failure.
        """
        mapper = MAPPERS[resource_type]
        values = mapper.values(resource)
        try:
            existing = await self.session.get(mapper.model, resource.id)
            if existing is None:
                self.session.add(mapper.model(**values))
            else:
                for name, value in values.items():
                    setattr(existing, name, value)
            await self.session.flush()
        except IntegrityError as e:
            await self.session.rollback()
            raise ResourceConflictError(
                f"Unique constraint violated for {resource_type.value}"
            ) from e
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise ResourceStoreError(f"Failed to save {resource_type.value}") from e
        return 1

    async def delete(self, resource_type: ResourceType, resource_id: UUID) -> int:
        """Hard delete a resource.

        Returns:
            Rows affected (0 when already gone).
        """
        model = MAPPERS[resource_type].model
        try:
            result = await self.session.execute(
                delete(model).where(model.id == resource_id)
            )
            await self.session.flush()
        except SQLAlchemyError as e:
            await self.session.rollback()
            raise ResourceStoreError(f"Failed to delete {resource_type.value}") from e
        return result.rowcount

    async def _scalar_one_or_none(self, stmt: Any) -> Any:
        try:
            return (await self.session.execute(stmt)).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise ResourceStoreError("Failed to load resource") from e

    async def _scalars(self, stmt: Any) -> list[Any]:
        try:
            return list((await self.session.execute(stmt)).scalars().all())
        except SQLAlchemyError as e:
            raise ResourceStoreError("Failed to load resources") from e
