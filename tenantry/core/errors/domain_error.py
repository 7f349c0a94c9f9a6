"""Base domain error.

DomainError is the base class for every expected failure. Errors flow through
the system as data inside ``Failure``, they are never raised.

Usage:
    from tenantry.core.errors import DomainError

    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        pass
"""

from dataclasses import dataclass

from tenantry.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code.
        message: Human-readable error message, safe to return to callers.
        details: Optional context for debugging.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None

    @property
    def kind(self) -> str:
        """Error kind (unauthenticated, not_found, ...)."""
        return self.code.kind

    def __str__(self) -> str:
        return f"{self.code.value}: {self.message}"
