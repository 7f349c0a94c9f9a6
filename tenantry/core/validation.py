"""Input validation helpers.

All functions return Result types so callers can short-circuit with
``Failure`` before touching the store or evaluating permissions.

Usage:
    from tenantry.core.validation import parse_identifier

    match parse_identifier(request.space_id, "space_id"):
        case Success(value=space_id):
            ...
        case Failure(error=error):
            return Failure(error=error)
"""

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from tenantry.core.enums import ErrorCode
from tenantry.core.errors import ValidationError
from tenantry.core.result import Failure, Result, Success


def parse_identifier(value: Any, field_name: str) -> Result[UUID, ValidationError]:
    """Parse a resource identifier.

    Accepts a UUID, its canonical string form, or its 16-byte big-endian form.

    Args:
        value: Raw identifier.
        field_name: Name of the field, reported on failure.

    Returns:
        Success with the UUID, Failure with ValidationError otherwise.
    """
    if isinstance(value, UUID):
        return Success(value=value)
    try:
        if isinstance(value, (bytes, bytearray)):
            return Success(value=UUID(bytes=bytes(value)))
        if isinstance(value, str):
            return Success(value=UUID(value.strip()))
    except ValueError:
        pass
    return Failure(
        error=ValidationError(
            code=ErrorCode.IDENTIFIER_INVALID,
            message=f"Invalid {field_name}",
            field=field_name,
        )
    )


def parse_optional_identifier(
    value: Any, field_name: str
) -> Result[UUID | None, ValidationError]:
    """Parse an identifier that may be absent.

    ``None``, empty strings and empty byte strings are treated as absent.
    """
    if value is None or (isinstance(value, (str, bytes, bytearray)) and not value):
        return Success(value=None)
    return parse_identifier(value, field_name)


def validate_not_empty(value: Any, field_name: str) -> Result[Any, ValidationError]:
    """Validate that a value is present and, for strings, not blank.

    Args:
        value: Value to validate.
        field_name: Name of the field being validated.

    Returns:
        Success with the value (strings stripped), Failure otherwise.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"{field_name} is required",
                field=field_name,
            )
        )
    if isinstance(value, str):
        return Success(value=value.strip())
    return Success(value=value)


def validate_positive(value: int, field_name: str) -> Result[int, ValidationError]:
    """Validate that an integer is strictly positive."""
    if value <= 0:
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"{field_name} must be positive",
                field=field_name,
            )
        )
    return Success(value=value)


def validate_labels(labels: Any, field_name: str) -> Result[dict[str, str], ValidationError]:
    """Validate a label map: string keys (non-blank) to string values."""
    if not isinstance(labels, Mapping) or not all(
        isinstance(k, str) and k.strip() and isinstance(v, str)
        for k, v in labels.items()
    ):
        return Failure(
            error=ValidationError(
                code=ErrorCode.VALIDATION_FAILED,
                message=f"{field_name} must map non-empty string keys to string values",
                field=field_name,
            )
        )
    return Success(value=dict(labels))
