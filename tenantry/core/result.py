"""Result types for railway-oriented programming.

Operations that can fail for expected business reasons (missing resource,
denied permission, malformed input) return a Result instead of raising.
Exceptions are reserved for programmer errors and store faults.

Usage:
    def parse_limit(raw: int) -> Result[int, ValidationError]:
        if raw < 0:
            return Failure(error=ValidationError(...))
        return Success(value=raw)

    match parse_limit(10):
        case Success(value=limit):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: The error describing the failure.
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
