"""Core errors package.

Usage:
    from tenantry.core.errors import DomainError, ValidationError, NotFoundError
"""

from tenantry.core.errors.common_errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    InternalError,
    NotFoundError,
    ValidationError,
)
from tenantry.core.errors.domain_error import DomainError

__all__ = [
    "DomainError",
    "AuthenticationError",
    "ValidationError",
    "AuthorizationError",
    "NotFoundError",
    "ConflictError",
    "InternalError",
]
