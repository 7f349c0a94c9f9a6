"""Query engine for filtered, sorted, paginated listings.

``build`` validates a caller's QuerySpec into a QueryPlan:

    - offset must be >= 0
    - limit defaults to the configured page size and is clamped into
      [min_page_size, max_page_size]
    - sort_by is resolved through the resource type's allowlist (aliases
      included); a missing or unknown field falls back to creation time,
      descending
    - name patterns and attribute filters must target fields the resource
      type exposes

``execute`` evaluates a plan over an in-memory collection in a fixed order:

    1. owner filter (exact)
    2. attribute filters (exact)
    3. name glob (case-insensitive; ``*`` and ``?`` are the only wildcards)
    4. label selectors (every selector must match exactly)
    5. visibility predicate
    6. total count
    7. sort by the resolved field, then by id in the same direction
    8. offset and limit

SQL-backed stores translate the same plan into a statement instead.
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, TypeVar

from tenantry.core.config import Settings
from tenantry.core.enums import ErrorCode
from tenantry.core.errors import ValidationError
from tenantry.core.result import Failure, Result, Success
from tenantry.domain.entities import Resource
from tenantry.domain.enums import ResourceType
from tenantry.domain.value_objects import (
    QueryPlan,
    QueryResult,
    QuerySpec,
    VisibilityPredicate,
)

R = TypeVar("R", bound=Resource)

DEFAULT_SORT_FIELD = "created_at"


@dataclass(frozen=True, slots=True, kw_only=True)
class QueryFields:
    """Fields of a resource type the query engine may touch.

    Attributes:
        sort_fields: External sort name to canonical field.
        name_field: Field matched by name patterns, if any.
        filter_fields: Fields usable as exact attribute filters.
    """

    sort_fields: Mapping[str, str]
    name_field: str | None = None
    filter_fields: frozenset[str] = field(default_factory=frozenset)


QUERY_FIELDS: dict[ResourceType, QueryFields] = {
    ResourceType.SPACE: QueryFields(
        sort_fields={
            "name": "name",
            "created_at": "created_at",
            "created_time": "created_at",
            "updated_at": "updated_at",
            "updated_time": "updated_at",
            "embedder_id": "embedder_id",
            "public_read": "public_read",
        },
        name_field="name",
        filter_fields=frozenset({"public_read"}),
    ),
    ResourceType.APIKEY: QueryFields(
        sort_fields={
            "created_at": "created_at",
            "created_time": "created_at",
            "updated_at": "updated_at",
            "updated_time": "updated_at",
            "status": "status",
            "expires_at": "expires_at",
            "last_used_at": "last_used_at",
        },
        filter_fields=frozenset({"status"}),
    ),
    ResourceType.EMBEDDER: QueryFields(
        sort_fields={
            "display_name": "display_name",
            "name": "display_name",
            "created_at": "created_at",
            "created_time": "created_at",
            "updated_at": "updated_at",
            "updated_time": "updated_at",
            "provider_type": "provider_type",
            "model_identifier": "model_identifier",
        },
        name_field="display_name",
        filter_fields=frozenset({"provider_type", "model_identifier"}),
    ),
    ResourceType.USER: QueryFields(
        sort_fields={
            "email": "email",
            "username": "username",
            "display_name": "display_name",
            "created_at": "created_at",
            "created_time": "created_at",
            "updated_at": "updated_at",
        },
        name_field="email",
    ),
}


def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """Compile a glob into a case-insensitive, fully anchored regex."""
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


def comparable(value: Any) -> Any:
    """Normalize a field value for comparison (enums compare by value)."""
    if isinstance(value, Enum):
        return value.value
    return value


class QueryEngine:
    """Builds and evaluates list query plans.

    Args:
        default_page_size: Limit used when the query gives none.
        min_page_size: Smallest allowed limit.
        max_page_size: Largest allowed limit.
    """

    def __init__(
        self,
        *,
        default_page_size: int = 50,
        min_page_size: int = 1,
        max_page_size: int = 1000,
    ) -> None:
        self._default_page_size = default_page_size
        self._min_page_size = min_page_size
        self._max_page_size = max_page_size

    @classmethod
    def from_settings(cls, settings: Settings) -> "QueryEngine":
        return cls(
            default_page_size=settings.default_page_size,
            min_page_size=settings.min_page_size,
            max_page_size=settings.max_page_size,
        )

    def build(
        self,
        spec: QuerySpec,
        visibility: VisibilityPredicate,
        resource_type: ResourceType,
    ) -> Result[QueryPlan, ValidationError]:
        """Validate ``spec`` into an executable plan.

        Args:
            spec: Caller's query.
            visibility: Predicate from the authorization guard.
            resource_type: Collection queried.

        Returns:
            Success(QueryPlan), or Failure(ValidationError) for a negative
            offset, a name pattern on a type without a name field, an
            unsupported attribute filter or a malformed label selector.
        """
        fields = QUERY_FIELDS[resource_type]

        if spec.offset < 0:
            return self._invalid("offset must not be negative", "offset")

        name_pattern = spec.name_pattern or None
        if name_pattern is not None and fields.name_field is None:
            return self._invalid(
                f"{resource_type.value} does not support name filtering",
                "name_pattern",
            )

        unsupported = sorted(set(spec.attribute_filters) - fields.filter_fields)
        if unsupported:
            return self._invalid(
                f"Unsupported filter for {resource_type.value}: {', '.join(unsupported)}",
                "filters",
            )

        for key, value in spec.label_selectors.items():
            if not isinstance(key, str) or not key or not isinstance(value, str):
                return self._invalid("Label selectors must map keys to values", "labels")

        sort_field = None
        if spec.sort_by:
            sort_field = fields.sort_fields.get(spec.sort_by.strip().lower())
        if sort_field is None:
            sort_field, sort_ascending = DEFAULT_SORT_FIELD, False
        else:
            sort_ascending = spec.sort_ascending

        return Success(
            value=QueryPlan(
                resource_type=resource_type,
                visibility=visibility,
                sort_field=sort_field,
                sort_ascending=sort_ascending,
                offset=spec.offset,
                limit=self.clamp_limit(spec.limit),
                owner_filter=spec.owner_filter,
                name_field=fields.name_field if name_pattern else None,
                name_pattern=name_pattern,
                label_selectors=dict(spec.label_selectors),
                attribute_filters={
                    key: comparable(value) for key, value in spec.attribute_filters.items()
                },
            )
        )

    def clamp_limit(self, limit: int | None) -> int:
        if limit is None:
            return self._default_page_size
        return max(self._min_page_size, min(limit, self._max_page_size))

    def execute(self, plan: QueryPlan, collection: Iterable[R]) -> QueryResult[R]:
        """Evaluate ``plan`` over ``collection``."""
        rows = list(collection)

        if plan.owner_filter is not None:
            rows = [row for row in rows if row.owner_id == plan.owner_filter]

        for field_name, expected in plan.attribute_filters.items():
            rows = [
                row for row in rows if comparable(getattr(row, field_name)) == expected
            ]

        if plan.name_pattern is not None and plan.name_field is not None:
            regex = glob_to_regex(plan.name_pattern)
            rows = [
                row
                for row in rows
                if regex.fullmatch(getattr(row, plan.name_field) or "") is not None
            ]

        for key, expected in plan.label_selectors.items():
            rows = [row for row in rows if row.labels.get(key) == expected]

        if not plan.visibility.is_unrestricted:
            rows = [
                row for row in rows if plan.visibility.permits(row.owner_id, row.is_public)
            ]

        total_count = len(rows)

        # None sorts after values ascending and before them descending.
        rows.sort(
            key=lambda row: (
                getattr(row, plan.sort_field) is None,
                comparable(getattr(row, plan.sort_field)),
                row.id,
            ),
            reverse=not plan.sort_ascending,
        )

        page = rows[plan.offset : plan.offset + plan.limit]
        return QueryResult(items=page, total_count=total_count)

    @staticmethod
    def _invalid(message: str, field_name: str) -> Failure[ValidationError]:
        return Failure(
            error=ValidationError(
                code=ErrorCode.FILTER_INVALID,
                message=message,
                field=field_name,
            )
        )
