"""Opaque pagination tokens.

A token is the URL-safe base64 encoding (unpadded) of a JSON document
holding every parameter of the originating list request plus the next
offset. Tokens are bound to the actor that requested them; presenting a
token minted for someone else is rejected like a corrupted one.
"""

import base64
import binascii
from enum import Enum
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from tenantry.core.enums import ErrorCode
from tenantry.core.errors import ValidationError
from tenantry.core.result import Failure, Result, Success
from tenantry.domain.value_objects import QuerySpec

INVALID_TOKEN_MESSAGE = "Invalid pagination token"


class PageToken(BaseModel):
    """Serialized continuation state of a list request."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    requestor_id: UUID
    offset: int = Field(ge=0)
    limit: int = Field(ge=1)
    owner_filter: UUID | None = None
    label_selectors: dict[str, str] = Field(default_factory=dict)
    name_pattern: str | None = None
    attribute_filters: dict[str, str | bool | int] = Field(default_factory=dict)
    sort_by: str | None = None
    sort_ascending: bool = False
    include_public: bool = False


def encode_page_token(
    requestor_id: UUID, spec: QuerySpec, *, offset: int, limit: int
) -> str:
    """Encode the token for the page starting at ``offset``."""
    token = PageToken(
        requestor_id=requestor_id,
        offset=offset,
        limit=limit,
        owner_filter=spec.owner_filter,
        label_selectors=dict(spec.label_selectors),
        name_pattern=spec.name_pattern,
        attribute_filters={
            key: _plain(value) for key, value in spec.attribute_filters.items()
        },
        sort_by=spec.sort_by,
        sort_ascending=spec.sort_ascending,
        include_public=spec.include_public,
    )
    raw = base64.urlsafe_b64encode(token.model_dump_json().encode("utf-8"))
    return raw.decode("ascii").rstrip("=")


def decode_page_token(
    token: str, requestor_id: UUID
) -> Result[QuerySpec, ValidationError]:
    """Decode a token back into the query it continues.

    Returns:
        Success(QuerySpec), or Failure(ValidationError) when the token is
        malformed or belongs to another requestor.
    """
    try:
        padded = token + "=" * (-len(token) % 4)
        payload = base64.urlsafe_b64decode(padded.encode("ascii"))
        decoded = PageToken.model_validate_json(payload)
    except (binascii.Error, ValueError):
        # pydantic.ValidationError and UnicodeError are ValueErrors.
        return _invalid_token()

    if decoded.requestor_id != requestor_id:
        return _invalid_token()

    return Success(
        value=QuerySpec(
            owner_filter=decoded.owner_filter,
            label_selectors=decoded.label_selectors,
            name_pattern=decoded.name_pattern,
            attribute_filters=decoded.attribute_filters,
            sort_by=decoded.sort_by,
            sort_ascending=decoded.sort_ascending,
            offset=decoded.offset,
            limit=decoded.limit,
            include_public=decoded.include_public,
        )
    )


def _plain(value: Any) -> str | bool | int:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (bool, int, str)):
        return value
    return str(value)


def _invalid_token() -> Failure[ValidationError]:
    return Failure(
        error=ValidationError(
            code=ErrorCode.PAGE_TOKEN_INVALID,
            message=INVALID_TOKEN_MESSAGE,
            field="page_token",
        )
    )
