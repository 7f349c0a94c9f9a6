"""Error classes shared by every resource type.

Error Types:
- AuthenticationError: no actor resolved (Unauthenticated)
- ValidationError: malformed or conflicting input (InvalidArgument)
- AuthorizationError: guard denial (PermissionDenied)
- NotFoundError: resource absent (NotFound)
- ConflictError: uniqueness violation (AlreadyExists)
- InternalError: store failure (Internal)

Usage:
    from tenantry.core.errors import ValidationError
    from tenantry.core.enums import ErrorCode

    return Failure(error=ValidationError(
        code=ErrorCode.IDENTIFIER_INVALID,
        message="Invalid space_id",
        field="space_id",
    ))
"""

from dataclasses import dataclass

from tenantry.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthenticationError(DomainError):
    """No authenticated actor."""

    pass


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class AuthorizationError(DomainError):
    """Authorization failure.

    Attributes:
        required_permission: Permission that was required, rendered as
            ``action_resource_variant``.
    """

    required_permission: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (space, apikey, ...).
        resource_id: Identifier that was looked up.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Uniqueness violation.

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field carrying the duplicate value.
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class InternalError(DomainError):
    """Store or infrastructure failure.

    The message is generic; the underlying cause is logged, never returned.
    """

    pass
