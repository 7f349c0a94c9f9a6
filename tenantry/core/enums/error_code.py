"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.

Every code belongs to exactly one error kind (see ``ErrorCode.kind``) which
transport adapters map to protocol status codes:

- unauthenticated: no actor was resolved
- invalid_argument: malformed identifier, conflicting input, bad filter value
- permission_denied: the authorization guard denied the action
- not_found: the resource is absent
- already_exists: a uniqueness rule was violated
- internal: the resource store failed
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Authentication errors
    ACTOR_NOT_AUTHENTICATED = "actor_not_authenticated"

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    IDENTIFIER_INVALID = "identifier_invalid"
    LABEL_STRATEGY_CONFLICT = "label_strategy_conflict"
    FILTER_INVALID = "filter_invalid"
    PAGE_TOKEN_INVALID = "page_token_invalid"
    ROLE_UNKNOWN = "role_unknown"
    SECRET_FORMAT_INVALID = "secret_format_invalid"

    # Authorization errors
    PERMISSION_DENIED = "permission_denied"

    # Resource errors
    RESOURCE_NOT_FOUND = "resource_not_found"

    # Conflict errors
    RESOURCE_ALREADY_EXISTS = "resource_already_exists"

    # Store failures
    STORE_OPERATION_FAILED = "store_operation_failed"

    @property
    def kind(self) -> str:
        """Error kind used by transport adapters."""
        return _KINDS[self]


_KINDS: dict[ErrorCode, str] = {
    ErrorCode.ACTOR_NOT_AUTHENTICATED: "unauthenticated",
    ErrorCode.VALIDATION_FAILED: "invalid_argument",
    ErrorCode.IDENTIFIER_INVALID: "invalid_argument",
    ErrorCode.LABEL_STRATEGY_CONFLICT: "invalid_argument",
    ErrorCode.FILTER_INVALID: "invalid_argument",
    ErrorCode.PAGE_TOKEN_INVALID: "invalid_argument",
    ErrorCode.ROLE_UNKNOWN: "invalid_argument",
    ErrorCode.SECRET_FORMAT_INVALID: "invalid_argument",
    ErrorCode.PERMISSION_DENIED: "permission_denied",
    ErrorCode.RESOURCE_NOT_FOUND: "not_found",
    ErrorCode.RESOURCE_ALREADY_EXISTS: "already_exists",
    ErrorCode.STORE_OPERATION_FAILED: "internal",
}
