"""Query value objects.

QuerySpec is what a caller asks for. QueryPlan is the validated, normalized
form the query engine hands to a resource store: every field in it is safe
to translate into storage predicates (sort field resolved through an
allowlist, limit clamped, name pattern kept as a glob to be escaped by the
executor).

QueryResult carries a page of items plus the pre-pagination total.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar
from uuid import UUID

from tenantry.domain.enums import ResourceType

T = TypeVar("T")

LIKE_ESCAPE = "\\"


@dataclass(frozen=True, slots=True, kw_only=True)
class QuerySpec:
    """Caller's list request.

    Attributes:
        owner_filter: Only resources owned by this id.
        label_selectors: Exact key/value matches, all must hold.
        name_pattern: Case-insensitive glob (``*`` any run, ``?`` one char).
        attribute_filters: Exact matches on resource-specific fields
            (e.g. ``provider_type`` for embedders, ``status`` for API keys).
        sort_by: External sort field name; unknown names fall back to the
            default ordering.
        sort_ascending: Sort direction for a recognized sort field.
        offset: Number of items to skip.
        limit: Page size; None means the configured default.
        include_public: Also show publicly readable resources to actors
            restricted to their own resources.
    """

    owner_filter: UUID | None = None
    label_selectors: Mapping[str, str] = field(default_factory=dict)
    name_pattern: str | None = None
    attribute_filters: Mapping[str, Any] = field(default_factory=dict)
    sort_by: str | None = None
    sort_ascending: bool = False
    offset: int = 0
    limit: int | None = None
    include_public: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class VisibilityPredicate:
    """Which rows an actor may see in a list.

    Attributes:
        restricted_to: Owner id rows must match, or None when unrestricted.
        allow_public: Also admit rows with ``public_read`` set.
    """

    restricted_to: UUID | None = None
    allow_public: bool = False

    @classmethod
    def unrestricted(cls) -> "VisibilityPredicate":
        return cls()

    @classmethod
    def owner_restricted(
        cls, actor_id: UUID, *, allow_public: bool = False
    ) -> "VisibilityPredicate":
        return cls(restricted_to=actor_id, allow_public=allow_public)

    @property
    def is_unrestricted(self) -> bool:
        return self.restricted_to is None

    def permits(self, owner_id: UUID, public_read: bool = False) -> bool:
        """Whether a row with this owner and public flag is visible."""
        if self.restricted_to is None:
            return True
        if owner_id == self.restricted_to:
            return True
        return self.allow_public and public_read


@dataclass(frozen=True, slots=True, kw_only=True)
class QueryPlan:
    """Validated query ready for execution.

    Attributes:
        resource_type: Collection to query.
        owner_filter: Exact owner match, if any.
        name_field: Field the name pattern applies to.
        name_pattern: Raw glob, if any.
        label_selectors: Exact label matches (AND).
        attribute_filters: Exact field matches (AND).
        visibility: Visibility predicate from the authorization guard.
        sort_field: Canonical field name from the resource's allowlist.
        sort_ascending: Direction for both the sort field and the id
            tie-breaker.
        offset: Items to skip (>= 0).
        limit: Page size (within configured bounds).
    """

    resource_type: ResourceType
    visibility: VisibilityPredicate
    sort_field: str
    sort_ascending: bool
    offset: int
    limit: int
    owner_filter: UUID | None = None
    name_field: str | None = None
    name_pattern: str | None = None
    label_selectors: Mapping[str, str] = field(default_factory=dict)
    attribute_filters: Mapping[str, Any] = field(default_factory=dict)

    @property
    def like_pattern(self) -> str | None:
        """Name pattern as a SQL LIKE pattern using ``LIKE_ESCAPE``."""
        if self.name_pattern is None:
            return None
        return glob_to_like(self.name_pattern)


@dataclass(frozen=True, slots=True, kw_only=True)
class QueryResult(Generic[T]):
    """One page of a list query.

    Attributes:
        items: Page items in order.
        total_count: Matching items before pagination.
    """

    items: Sequence[T]
    total_count: int

    def has_more(self, offset: int, limit: int) -> bool:
        """True iff items remain after the page read at ``offset`` with ``limit``."""
        if limit <= 0 or not self.items:
            return False
        return offset + len(self.items) < self.total_count

    def next_offset(self, offset: int, limit: int) -> int | None:
        """Offset of the next page, or None when this page is the last."""
        if not self.has_more(offset, limit):
            return None
        return offset + min(limit, len(self.items))


def glob_to_like(pattern: str) -> str:
    """Translate a glob into a LIKE pattern.

    Backslash, ``%`` and ``_`` are escaped with ``LIKE_ESCAPE``; ``*`` becomes
    ``%`` and ``?`` becomes ``_``.
    """
    translated: list[str] = []
    for char in pattern:
        if char in (LIKE_ESCAPE, "%", "_"):
            translated.append(LIKE_ESCAPE + char)
        elif char == "*":
            translated.append("%")
        elif char == "?":
            translated.append("_")
        else:
            translated.append(char)
    return "".join(translated)
