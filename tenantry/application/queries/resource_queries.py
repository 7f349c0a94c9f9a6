"""Queries shared by resource services."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, kw_only=True)
class ListResources:
    """List resources of one type.

    When ``page_token`` is given it carries every other parameter of the
    first request and the fields below are ignored.

    Attributes:
        owner_id: Only resources of this owner.
        label_selectors: Exact label matches (AND).
        name_pattern: Case-insensitive glob on the resource's name field.
        filters: Exact matches on resource-specific fields.
        sort_by: Sort field; unknown names fall back to newest first.
        sort_ascending: Sort direction.
        offset: Items to skip.
        limit: Page size; None for the default.
        include_public: Include public resources for OWN-only actors.
        page_token: Continuation token from a previous page.
    """

    owner_id: Any = None
    label_selectors: Mapping[str, str] = field(default_factory=dict)
    name_pattern: str | None = None
    filters: Mapping[str, Any] = field(default_factory=dict)
    sort_by: str | None = None
    sort_ascending: bool = False
    offset: int = 0
    limit: int | None = None
    include_public: bool = False
    page_token: str | None = None

